"""
Form parsing shared by the HTML and JSON submission endpoints
"""
from typing import Optional

from fastapi import Form

from civic_reports.schemas import ReportSubmission


def _coordinate(value: Optional[str], limit: float) -> Optional[float]:
    try:
        number = float(value) if value not in (None, "") else None
    except ValueError:
        return None
    if number is None or not -limit <= number <= limit:
        return None
    return number


async def report_submission_form(
    title: str = Form(""),
    description: str = Form(""),
    include_location: bool = Form(False),
    latitude: Optional[str] = Form(None),
    longitude: Optional[str] = Form(None),
    reporter_name: Optional[str] = Form(None),
    reporter_email: Optional[str] = Form(None),
    reporter_phone: Optional[str] = Form(None),
    captcha_token: str = Form(""),
    captcha_answer: str = Form(""),
) -> ReportSubmission:
    """Build a ReportSubmission from multipart form fields.

    Unparseable or out-of-range coordinates are treated as missing.
    """
    return ReportSubmission(
        title=title[:200],
        description=description[:5000],
        include_location=include_location,
        latitude=_coordinate(latitude, 90),
        longitude=_coordinate(longitude, 180),
        reporter_name=(reporter_name or "")[:255] or None,
        reporter_email=(reporter_email or "")[:255] or None,
        reporter_phone=(reporter_phone or "")[:50] or None,
        captcha_token=captcha_token,
        captcha_answer=captcha_answer,
    )

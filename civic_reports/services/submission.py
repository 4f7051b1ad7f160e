"""
Anonymous report submission: validation, anti-spam check, location,
photo and insert, in that order.
"""
import logging
from typing import Optional

from fastapi import BackgroundTasks, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from civic_reports.models.report import Report
from civic_reports.neighborhoods import resolve_neighborhood
from civic_reports.schemas import ReportSubmission
from civic_reports.services.captcha import verify_challenge
from civic_reports.services.notification_service import notify_new_report
from civic_reports.services.report_service import ReportService
from civic_reports.services.storage_service import PhotoRejected, PhotoStorage

logger = logging.getLogger(__name__)


class SubmissionRejected(ValueError):
    """A submission failed validation. ``key`` is the translation key of the message."""

    def __init__(self, key: str, detail: Optional[str] = None):
        super().__init__(detail or key)
        self.key = key


def _clean(value: Optional[str]) -> Optional[str]:
    value = (value or "").strip()
    return value or None


def validate_submission(submission: ReportSubmission) -> None:
    """Reject empty fields and a wrong captcha answer before any side effect"""
    if not submission.title.strip() or not submission.description.strip():
        raise SubmissionRejected("error.required", "Title and description are required")

    if not verify_challenge(submission.captcha_token, submission.captcha_answer):
        raise SubmissionRejected("error.captcha", "Wrong captcha answer")

    if submission.include_location and (submission.latitude is None or submission.longitude is None):
        raise SubmissionRejected("error.location", "Location enabled without coordinates")


async def submit_report(
    db: AsyncSession,
    submission: ReportSubmission,
    photo: Optional[UploadFile] = None,
    background_tasks: Optional[BackgroundTasks] = None,
    storage: Optional[PhotoStorage] = None,
) -> Report:
    """Validate and store a citizen report.

    The admin notification is scheduled on ``background_tasks`` so it runs
    after the response is sent. Without it no notification is sent.
    """
    validate_submission(submission)

    latitude = longitude = neighborhood = None
    if submission.include_location:
        latitude = submission.latitude
        longitude = submission.longitude
        neighborhood = resolve_neighborhood(latitude, longitude)

    storage = storage or PhotoStorage()
    try:
        async with storage.staged_upload(photo) as photo_url:
            report = await ReportService(db).create_report(
                title=submission.title.strip(),
                description=submission.description.strip(),
                photo_url=photo_url,
                latitude=latitude,
                longitude=longitude,
                neighborhood=neighborhood,
                reporter_name=_clean(submission.reporter_name),
                reporter_email=_clean(submission.reporter_email),
                reporter_phone=_clean(submission.reporter_phone),
            )
    except PhotoRejected as e:
        raise SubmissionRejected("error.photo", str(e)) from e

    if background_tasks is not None:
        background_tasks.add_task(notify_new_report, report.id)

    return report

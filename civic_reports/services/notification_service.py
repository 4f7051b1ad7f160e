"""
Notification Service - emails every admin when a new report arrives.

Sending happens in a background task after the citizen already has their
tracking code, so every failure here is logged and swallowed.
"""
import asyncio
import html
import logging
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import List, Optional, Tuple

import aiosmtplib
import requests
from sqlalchemy import select

from civic_reports.config import get_settings
from civic_reports.database import async_session_factory
from civic_reports.models.admin import Admin
from civic_reports.models.report import Report

logger = logging.getLogger(__name__)

RESEND_TIMEOUT = 10


class NotificationError(Exception):
    """The email provider refused or failed to send a message"""


def build_notification(report: Report, base_url: str) -> Tuple[str, str, str]:
    """Return subject, HTML body and plain-text body for a new report"""
    subject = f"Raport i Ri: {report.title} [{report.tracking_code}]"
    location = "E përfshirë" if report.has_location else "Jo e përfshirë"
    dashboard_url = f"{base_url.rstrip('/')}/login"

    details = [
        ("Titulli", report.title),
        ("Përshkrimi", report.description),
    ]
    if report.neighborhood:
        details.append(("Lagja", report.neighborhood))
    if report.reporter_name:
        details.append(("Raportuar nga", report.reporter_name))
    details.append(("Vendndodhja", location))

    rows = "".join(
        f'<div class="detail"><div class="label">{html.escape(label)}</div>'
        f'<div class="value">{html.escape(value)}</div></div>'
        for label, value in details
    )
    body_html = f"""<!DOCTYPE html>
<html>
  <body style="font-family: sans-serif; background: #0a0a0f; color: #ffffff; padding: 20px;">
    <div style="max-width: 600px; margin: 0 auto;">
      <h2>CODE4COMMUNITY</h2>
      <p style="color: #888;">Raport i Ri</p>
      <div style="font-family: monospace; font-size: 24px; color: #6366f1;">{html.escape(report.tracking_code)}</div>
      {rows}
      <p><a href="{html.escape(dashboard_url)}">Shiko në Dashboard</a></p>
      <p style="color: #666; font-size: 12px;">Code4Community - Elbasan<br>Platformë për raportimin e problemeve qytetare</p>
    </div>
  </body>
</html>"""

    body_text = "\n".join(
        [f"Raport i Ri [{report.tracking_code}]"]
        + [f"{label}: {value}" for label, value in details]
        + [f"Dashboard: {dashboard_url}"]
    )
    return subject, body_html, body_text


async def send_via_resend(recipients: List[str], subject: str, body_html: str) -> dict:
    """POST the message to the Resend API"""
    settings = get_settings()
    payload = {
        "from": f"{settings.from_name} <{settings.from_email}>",
        "to": recipients,
        "subject": subject,
        "html": body_html,
    }
    headers = {"Authorization": f"Bearer {settings.resend_api_key}"}

    response = await asyncio.get_event_loop().run_in_executor(
        None,
        lambda: requests.post(settings.resend_api_url, json=payload, headers=headers, timeout=RESEND_TIMEOUT),
    )
    if not response.ok:
        raise NotificationError(f"Resend returned {response.status_code}: {response.text[:200]}")
    return response.json()


async def send_via_smtp(recipients: List[str], subject: str, body_html: str, body_text: str) -> None:
    """Send the message through the configured SMTP server"""
    settings = get_settings()
    msg = MIMEMultipart("alternative")
    msg["Subject"] = subject
    msg["From"] = f"{settings.from_name} <{settings.from_email}>"
    msg["To"] = ", ".join(recipients)
    msg.attach(MIMEText(body_text, "plain", "utf-8"))
    msg.attach(MIMEText(body_html, "html", "utf-8"))

    await aiosmtplib.send(
        msg,
        hostname=settings.smtp_host,
        port=settings.smtp_port,
        username=settings.smtp_user or None,
        password=settings.smtp_password or None,
        use_tls=settings.smtp_use_tls,
        timeout=settings.smtp_timeout,
    )


def _provider_configured() -> Optional[str]:
    settings = get_settings()
    if settings.email_provider == "smtp":
        return "smtp" if settings.smtp_host and settings.smtp_user else None
    return "resend" if settings.resend_api_key else None


async def notify_new_report(report_id: int) -> bool:
    """Email all admins about a report. Returns whether a message was sent."""
    provider = _provider_configured()
    if not provider:
        logger.warning("Email provider not configured - skipping notification for report %s", report_id)
        return False

    try:
        async with async_session_factory() as db:
            report = (await db.execute(select(Report).where(Report.id == report_id))).scalar_one_or_none()
            if not report:
                logger.warning("Report %s vanished before notification", report_id)
                return False
            recipients = list((await db.execute(select(Admin.email).order_by(Admin.id))).scalars().all())

        if not recipients:
            logger.info("No admins to notify for report %s", report.tracking_code)
            return False

        subject, body_html, body_text = build_notification(report, get_settings().public_base_url)
        if provider == "smtp":
            await send_via_smtp(recipients, subject, body_html, body_text)
        else:
            await send_via_resend(recipients, subject, body_html)

        logger.info("Notified %d admins about report %s", len(recipients), report.tracking_code)
        return True
    except Exception as e:
        logger.error("Failed to send notification for report %s: %s", report_id, str(e))
        return False

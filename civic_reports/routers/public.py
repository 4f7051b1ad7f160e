"""
Public pages: home, report form, tracking, statistics and preferences.
These routes are accessible without authentication.
"""
import logging
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, File, Form, Query, Request, UploadFile
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from civic_reports.database import get_db
from civic_reports.devices import device_messages
from civic_reports.i18n import translate
from civic_reports.models.report import ReportStatus
from civic_reports.neighborhoods import MAP_CENTER, NEIGHBORHOODS
from civic_reports.preferences import PreferenceStore, get_preferences
from civic_reports.routers.forms import report_submission_form
from civic_reports.schemas import ReportSubmission
from civic_reports.services.captcha import generate_challenge
from civic_reports.services.report_service import ReportService, normalize_tracking_code
from civic_reports.services.stats_service import compute_statistics
from civic_reports.services.submission import SubmissionRejected, submit_report
from civic_reports.templating import flash, render

router = APIRouter(tags=["public"])
logger = logging.getLogger(__name__)

RECENT_REPORTS = 20
HOME_RECENT_REPORTS = 6


def _report_form_context(store: PreferenceStore, form_data: Optional[dict] = None, error: Optional[str] = None) -> dict:
    return {
        "captcha": generate_challenge(),
        "neighborhoods": NEIGHBORHOODS,
        "map_center": MAP_CENTER,
        "device_messages": device_messages(store.state.language),
        "form_data": form_data or {},
        "error": error,
    }


@router.get("/", response_class=HTMLResponse)
async def home(request: Request, db: AsyncSession = Depends(get_db)):
    """Landing page with headline numbers and the latest reports."""
    reports = await ReportService(db).list_public_reports()
    stats = compute_statistics(reports)
    return render(request, "index.html", {
        "stats": stats,
        "recent_reports": reports[:HOME_RECENT_REPORTS],
        "list_limit": HOME_RECENT_REPORTS,
    })


@router.get("/report", response_class=HTMLResponse)
async def report_form(request: Request, store: PreferenceStore = Depends(get_preferences)):
    """Display the public report form."""
    return render(request, "report_form.html", _report_form_context(store))


@router.post("/report", response_class=HTMLResponse)
async def submit_report_form(
    request: Request,
    background_tasks: BackgroundTasks,
    submission: ReportSubmission = Depends(report_submission_form),
    photo: Optional[UploadFile] = File(None),
    store: PreferenceStore = Depends(get_preferences),
    db: AsyncSession = Depends(get_db),
):
    """Process the report form submission."""
    form_data = submission.model_dump(exclude={"captcha_token", "captcha_answer"})
    try:
        report = await submit_report(db, submission, photo, background_tasks)
    except SubmissionRejected as e:
        logger.info("Report form rejected: %s", e.key)
        return render(request, "report_form.html", _report_form_context(store, form_data, e.key))
    except (SQLAlchemyError, OSError) as e:
        logger.error("Error processing report form: %s", str(e))
        return render(request, "report_form.html", _report_form_context(store, form_data, "error.submit"))

    return render(request, "report_success.html", {"report": report})


@router.get("/track", response_class=HTMLResponse)
async def track(
    request: Request,
    code: Optional[str] = Query(None),
    store: PreferenceStore = Depends(get_preferences),
    db: AsyncSession = Depends(get_db),
):
    """Look up a report by tracking code and list recent reports."""
    service = ReportService(db)
    searched = normalize_tracking_code(code)
    report = await service.get_public_report_by_code(searched) if searched else None
    feedback = store.get_feedback(report.id) if report else None

    return render(request, "track.html", {
        "code": searched,
        "report": report,
        "not_found": bool(searched) and report is None,
        "feedback": feedback,
        "recent_reports": await service.list_public_reports(limit=RECENT_REPORTS),
    })


@router.post("/track/feedback")
async def submit_feedback(
    request: Request,
    code: str = Form(...),
    rating: str = Form(""),
    comment: str = Form(""),
    store: PreferenceStore = Depends(get_preferences),
    db: AsyncSession = Depends(get_db),
):
    """Store a rating for a resolved report. A second rating is ignored."""
    code = normalize_tracking_code(code)
    report = await ReportService(db).get_public_report_by_code(code)
    redirect = RedirectResponse(url=f"/track?code={code}", status_code=303)
    if not report or report.status != ReportStatus.RESOLVED:
        return redirect

    try:
        stars = int(rating)
    except ValueError:
        stars = 0
    if not 1 <= stars <= 5:
        flash(request, "error.rating", "error")
        return redirect

    _, created = store.record_feedback(report.id, report.tracking_code, stars, comment)
    if created:
        flash(request, "feedback.thanks")
        logger.info("Feedback %d/5 recorded for report %s", stars, report.tracking_code)
    return redirect


@router.get("/stats", response_class=HTMLResponse)
async def stats_page(
    request: Request,
    store: PreferenceStore = Depends(get_preferences),
    db: AsyncSession = Depends(get_db),
):
    """Public statistics."""
    reports = await ReportService(db).list_public_reports()
    stats = compute_statistics(
        reports,
        store.ratings(),
        no_neighborhood_label=translate("stats.no_neighborhood", store.state.language),
    )
    return render(request, "stats.html", {"stats": stats})


@router.get("/privacy", response_class=HTMLResponse)
async def privacy(request: Request):
    return render(request, "privacy.html")


@router.post("/preferences")
async def update_preferences(
    theme: Optional[str] = Form(None),
    language: Optional[str] = Form(None),
    high_contrast: Optional[bool] = Form(None),
    font_step: Optional[int] = Form(None),
    consent: Optional[str] = Form(None),
    next: str = Form("/"),
    store: PreferenceStore = Depends(get_preferences),
):
    """Change theme, language, accessibility or cookie consent, then go back."""
    changes = {}
    if theme in ("dark", "light"):
        changes["theme"] = theme
    if language:
        changes["language"] = language
    if high_contrast is not None:
        changes["high_contrast"] = high_contrast

    try:
        if changes:
            store.dispatch(**changes)
        if font_step == 0:
            store.dispatch(font_size=100)
        elif font_step:
            store.adjust_font_size(1 if font_step > 0 else -1)
        if consent in ("all", "essential"):
            store.give_consent(consent)
    except ValueError as e:
        logger.info("Ignoring invalid preference update: %s", str(e))

    # Only same-site relative targets
    target = next if next.startswith("/") and not next.startswith("//") else "/"
    return RedirectResponse(url=target, status_code=303)

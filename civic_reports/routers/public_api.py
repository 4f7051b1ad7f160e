"""
Public JSON API: submission, tracking, statistics, export and live updates
"""
import asyncio
import json
import logging
from typing import List, Literal, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, File, HTTPException, Query, Request, UploadFile
from fastapi.responses import Response, StreamingResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from civic_reports.database import get_db
from civic_reports.i18n import translate
from civic_reports.preferences import PreferenceStore, get_preferences
from civic_reports.routers.forms import report_submission_form
from civic_reports.schemas import (
    CaptchaChallenge,
    PublicReport,
    ReportSubmission,
    StatisticsResponse,
    SubmissionResponse,
)
from civic_reports.services.captcha import generate_challenge
from civic_reports.services.export_service import build_csv_export, build_json_export, export_filename
from civic_reports.services.realtime import broker
from civic_reports.services.report_service import ReportService
from civic_reports.services.stats_service import compute_statistics
from civic_reports.services.submission import SubmissionRejected, submit_report

router = APIRouter()
logger = logging.getLogger(__name__)

KEEPALIVE_SECONDS = 15


@router.get("/captcha", response_model=CaptchaChallenge)
async def get_captcha():
    """Issue a fresh arithmetic challenge"""
    return generate_challenge()


@router.post("/reports", response_model=SubmissionResponse, status_code=201)
async def create_report(
    background_tasks: BackgroundTasks,
    submission: ReportSubmission = Depends(report_submission_form),
    photo: Optional[UploadFile] = File(None),
    store: PreferenceStore = Depends(get_preferences),
    db: AsyncSession = Depends(get_db),
):
    """Submit a report anonymously"""
    try:
        report = await submit_report(db, submission, photo, background_tasks)
    except SubmissionRejected as e:
        raise HTTPException(status_code=400, detail=translate(e.key, store.state.language))
    except (SQLAlchemyError, OSError) as e:
        logger.error("Error creating report: %s", str(e))
        raise HTTPException(status_code=500, detail=translate("error.submit", store.state.language))

    return SubmissionResponse(tracking_code=report.tracking_code, status=report.status)


@router.get("/reports", response_model=List[PublicReport])
async def list_reports(
    limit: Optional[int] = Query(None, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
):
    """Public-safe reports, newest first"""
    return await ReportService(db).list_public_reports(limit=limit)


@router.get("/reports/stream")
async def stream_reports(request: Request):
    """Server-Sent Events with every report insert, update and delete"""

    async def event_stream():
        async with broker.subscribe() as queue:
            yield ": connected\n\n"
            while not await request.is_disconnected():
                try:
                    event = await asyncio.wait_for(queue.get(), timeout=KEEPALIVE_SECONDS)
                except asyncio.TimeoutError:
                    yield ": keep-alive\n\n"
                    continue
                yield event.to_sse()

    return StreamingResponse(
        event_stream(),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )


@router.get("/reports/{tracking_code}", response_model=PublicReport)
async def get_report(tracking_code: str, db: AsyncSession = Depends(get_db)):
    """Look up a report by tracking code (any letter case)"""
    report = await ReportService(db).get_public_report_by_code(tracking_code)
    if not report:
        raise HTTPException(status_code=404, detail="Report not found")
    return report


@router.get("/reports/{tracking_code}/export")
async def export_report(
    tracking_code: str,
    format: Literal["json", "csv"] = Query("json"),
    db: AsyncSession = Depends(get_db),
):
    """Download the public data of a report as JSON or CSV"""
    report = await ReportService(db).get_public_report_by_code(tracking_code)
    if not report:
        raise HTTPException(status_code=404, detail="Report not found")

    if format == "csv":
        content = build_csv_export(report)
        media_type = "text/csv; charset=utf-8"
    else:
        content = json.dumps(build_json_export(report), ensure_ascii=False, indent=2)
        media_type = "application/json"

    return Response(
        content=content.encode("utf-8"),
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{export_filename(report, format)}"'},
    )


@router.get("/stats", response_model=StatisticsResponse)
async def get_stats(
    store: PreferenceStore = Depends(get_preferences),
    db: AsyncSession = Depends(get_db),
):
    """Aggregate statistics over public reports"""
    reports = await ReportService(db).list_public_reports()
    return compute_statistics(
        reports,
        store.ratings(),
        no_neighborhood_label=translate("stats.no_neighborhood", store.state.language),
    )

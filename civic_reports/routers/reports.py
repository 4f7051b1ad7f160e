"""
Reports API Router (admin only)
"""
import math
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from civic_reports.database import get_db
from civic_reports.models.admin import Admin
from civic_reports.models.report import ReportStatus
from civic_reports.schemas import (
    ChangeStatusRequest,
    CostEstimateResponse,
    EventResponse,
    ReportListResponse,
    ReportResponse,
    ReportUpdate,
)
from civic_reports.services.auth_service import get_current_admin
from civic_reports.services.report_service import ReportService, ResolutionNoteRequired
from civic_reports.services.stats_service import estimate_repair_costs

router = APIRouter(dependencies=[Depends(get_current_admin)])


@router.get("", response_model=ReportListResponse)
async def list_reports(
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=100),
    status: Optional[ReportStatus] = None,
    search: Optional[str] = None,
    has_photo: bool = False,
    has_location: bool = False,
    db: AsyncSession = Depends(get_db),
):
    """List reports with pagination and filters"""
    reports, total = await ReportService(db).list_reports(
        status=status,
        search=search,
        has_photo=has_photo,
        has_location=has_location,
        page=page,
        size=size,
    )
    return ReportListResponse(
        items=[ReportResponse.model_validate(r) for r in reports],
        total=total,
        page=page,
        size=size,
        pages=math.ceil(total / size) if total else 0,
    )


@router.get("/costs", response_model=CostEstimateResponse)
async def get_cost_estimate(db: AsyncSession = Depends(get_db)):
    """Estimated repair costs of unresolved reports"""
    reports = await ReportService(db).list_public_reports()
    return estimate_repair_costs(reports)


@router.get("/{report_id}", response_model=ReportResponse)
async def get_report(report_id: int, db: AsyncSession = Depends(get_db)):
    """Get a report with reporter contact fields"""
    report = await ReportService(db).get_report(report_id)
    if not report:
        raise HTTPException(status_code=404, detail="Report not found")
    return report


@router.patch("/{report_id}", response_model=ReportResponse)
async def update_report(
    report_id: int,
    data: ReportUpdate,
    admin: Admin = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    """Update a report"""
    try:
        report = await ReportService(db).update_report(report_id, data, actor=admin.email)
    except ResolutionNoteRequired as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not report:
        raise HTTPException(status_code=404, detail="Report not found")
    return report


@router.post("/{report_id}/status", response_model=ReportResponse)
async def change_status(
    report_id: int,
    data: ChangeStatusRequest,
    admin: Admin = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    """Change report status. Resolving requires a note."""
    try:
        report = await ReportService(db).change_status(report_id, data.status, data.note, actor=admin.email)
    except ResolutionNoteRequired as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not report:
        raise HTTPException(status_code=404, detail="Report not found")
    return report


@router.delete("/{report_id}", status_code=204)
async def delete_report(
    report_id: int,
    admin: Admin = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    """Delete a report"""
    deleted = await ReportService(db).delete_report(report_id, actor=admin.email)
    if not deleted:
        raise HTTPException(status_code=404, detail="Report not found")


@router.get("/{report_id}/events", response_model=List[EventResponse])
async def list_report_events(report_id: int, db: AsyncSession = Depends(get_db)):
    """Audit history of a report"""
    service = ReportService(db)
    if not await service.get_report(report_id):
        raise HTTPException(status_code=404, detail="Report not found")
    return await service.list_events(report_id)

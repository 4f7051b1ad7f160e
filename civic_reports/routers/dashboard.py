"""Dashboard router for the admin sign-in and HTML views."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Form, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from civic_reports.database import get_db
from civic_reports.models.admin import Admin
from civic_reports.models.report import ReportStatus
from civic_reports.neighborhoods import MAP_CENTER
from civic_reports.schemas import AdminCreate, AdminUpdate
from civic_reports.services.admin_service import AdminManagementError, AdminService
from civic_reports.services.auth_service import (
    authenticate,
    get_optional_admin,
    require_admin_page,
    sign_in,
    sign_out,
)
from civic_reports.services.report_service import ReportService, ResolutionNoteRequired
from civic_reports.services.stats_service import compute_statistics, estimate_repair_costs
from civic_reports.templating import flash, render

router = APIRouter(tags=["dashboard"])
logger = logging.getLogger(__name__)

TABS = ("reports", "map", "finance", "admins")


# ============ SIGN-IN ROUTES ============

@router.get("/login", response_class=HTMLResponse)
async def login_page(request: Request, admin: Optional[Admin] = Depends(get_optional_admin)):
    """Sign-in form. Already signed-in admins go straight to the dashboard."""
    if admin:
        return RedirectResponse(url="/admin", status_code=303)
    return render(request, "login.html")


@router.post("/login", response_class=HTMLResponse)
async def login_submit(
    request: Request,
    email: str = Form(""),
    password: str = Form(""),
    db: AsyncSession = Depends(get_db),
):
    """Check credentials and start an admin session."""
    admin = await authenticate(db, email, password)
    if not admin:
        return render(request, "login.html", {"error": "error.login", "email": email}, status_code=401)

    sign_in(request, admin)
    flash(request, "admin.welcome")
    return RedirectResponse(url="/admin", status_code=303)


@router.post("/logout")
async def logout(request: Request):
    sign_out(request)
    return RedirectResponse(url="/", status_code=303)


# ============ DASHBOARD ROUTES ============

@router.get("/admin", response_class=HTMLResponse)
async def dashboard_home(
    request: Request,
    tab: str = Query("reports"),
    status: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    has_photo: bool = Query(False),
    has_location: bool = Query(False),
    admin: Admin = Depends(require_admin_page),
    db: AsyncSession = Depends(get_db),
):
    """Main dashboard: statistics, filtered reports, map, costs and admins."""
    service = ReportService(db)

    status_filter = None
    if status:
        try:
            status_filter = ReportStatus(status)
        except ValueError:
            pass

    reports, total = await service.list_reports(
        status=status_filter,
        search=search,
        has_photo=has_photo,
        has_location=has_location,
    )
    all_reports = await service.list_public_reports()

    if tab not in TABS or (tab == "admins" and not admin.is_super_admin):
        tab = "reports"

    admins = await AdminService(db).list_admins() if admin.is_super_admin else []

    return render(request, "admin_dashboard.html", {
        "admin": admin,
        "tab": tab,
        "reports": reports,
        "total": total,
        "stats": compute_statistics(all_reports),
        "costs": estimate_repair_costs(all_reports),
        "located_reports": [r for r in all_reports if r.has_location],
        "map_center": MAP_CENTER,
        "admins": admins,
        "filters": {
            "status": status,
            "search": search,
            "has_photo": has_photo,
            "has_location": has_location,
        },
    })


@router.get("/admin/reports/{report_id}", response_class=HTMLResponse)
async def report_detail(
    request: Request,
    report_id: int,
    admin: Admin = Depends(require_admin_page),
    db: AsyncSession = Depends(get_db),
):
    """Report detail with contact fields and history."""
    service = ReportService(db)
    report = await service.get_report(report_id)
    if not report:
        return RedirectResponse(url="/admin", status_code=303)

    return render(request, "admin_report_detail.html", {
        "admin": admin,
        "report": report,
        "events": await service.list_events(report_id),
    })


@router.post("/admin/reports/{report_id}/status")
async def update_report_status(
    request: Request,
    report_id: int,
    status: str = Form(...),
    note: str = Form(""),
    admin: Admin = Depends(require_admin_page),
    db: AsyncSession = Depends(get_db),
):
    """Change report status. Resolving needs a note."""
    try:
        report = await ReportService(db).change_status(report_id, ReportStatus(status), note, actor=admin.email)
        if report:
            flash(request, "status.updated")
    except ResolutionNoteRequired:
        flash(request, "error.note_required", "error")
    except ValueError:
        flash(request, "error.generic", "error")
    except SQLAlchemyError as e:
        logger.error("Error changing status of report %s: %s", report_id, str(e))
        flash(request, "error.generic", "error")

    return RedirectResponse(url=f"/admin/reports/{report_id}", status_code=303)


@router.post("/admin/reports/{report_id}/delete")
async def delete_report(
    request: Request,
    report_id: int,
    admin: Admin = Depends(require_admin_page),
    db: AsyncSession = Depends(get_db),
):
    try:
        if await ReportService(db).delete_report(report_id, actor=admin.email):
            flash(request, "admin.report_deleted")
    except SQLAlchemyError as e:
        logger.error("Error deleting report %s: %s", report_id, str(e))
        flash(request, "error.generic", "error")
    return RedirectResponse(url="/admin", status_code=303)


# ============ ADMINS ROUTES ============

@router.post("/admin/admins")
async def create_admin(
    request: Request,
    email: str = Form(""),
    full_name: str = Form(""),
    password: str = Form(""),
    is_super_admin: bool = Form(False),
    admin: Admin = Depends(require_admin_page),
    db: AsyncSession = Depends(get_db),
):
    """Create an admin (super admins only)."""
    if not admin.is_super_admin:
        flash(request, "error.forbidden", "error")
        return RedirectResponse(url="/admin", status_code=303)

    try:
        data = AdminCreate(email=email, full_name=full_name, password=password, is_super_admin=is_super_admin)
        await AdminService(db).create_admin(data, created_by=admin)
        flash(request, "admin.added")
    except ValidationError:
        flash(request, "error.admin_invalid", "error")
    except AdminManagementError:
        flash(request, "error.admin_exists", "error")
    except SQLAlchemyError as e:
        logger.error("Error creating admin %s: %s", email, str(e))
        flash(request, "error.generic", "error")

    return RedirectResponse(url="/admin?tab=admins", status_code=303)


@router.post("/admin/admins/{admin_id}/update")
async def update_admin(
    request: Request,
    admin_id: int,
    full_name: str = Form(""),
    is_super_admin: bool = Form(False),
    admin: Admin = Depends(require_admin_page),
    db: AsyncSession = Depends(get_db),
):
    if not admin.is_super_admin:
        flash(request, "error.forbidden", "error")
        return RedirectResponse(url="/admin", status_code=303)

    try:
        data = AdminUpdate(full_name=full_name.strip() or None, is_super_admin=is_super_admin)
        if await AdminService(db).update_admin(admin_id, data):
            flash(request, "admin.updated")
    except SQLAlchemyError as e:
        logger.error("Error updating admin %s: %s", admin_id, str(e))
        flash(request, "error.generic", "error")

    return RedirectResponse(url="/admin?tab=admins", status_code=303)


@router.post("/admin/admins/{admin_id}/delete")
async def delete_admin(
    request: Request,
    admin_id: int,
    admin: Admin = Depends(require_admin_page),
    db: AsyncSession = Depends(get_db),
):
    if not admin.is_super_admin:
        flash(request, "error.forbidden", "error")
        return RedirectResponse(url="/admin", status_code=303)

    try:
        if await AdminService(db).delete_admin(admin_id, admin):
            flash(request, "admin.removed")
    except AdminManagementError:
        flash(request, "error.self_delete", "error")
    except SQLAlchemyError as e:
        logger.error("Error deleting admin %s: %s", admin_id, str(e))
        flash(request, "error.generic", "error")

    return RedirectResponse(url="/admin?tab=admins", status_code=303)

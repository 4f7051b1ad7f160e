"""
Admins API Router (super admin only)
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from civic_reports.database import get_db
from civic_reports.models.admin import Admin
from civic_reports.schemas import AdminCreate, AdminResponse, AdminUpdate
from civic_reports.services.admin_service import AdminManagementError, AdminService
from civic_reports.services.auth_service import require_super_admin

router = APIRouter()


@router.get("", response_model=List[AdminResponse])
async def list_admins(
    _: Admin = Depends(require_super_admin),
    db: AsyncSession = Depends(get_db),
):
    """List all admins"""
    return await AdminService(db).list_admins()


@router.post("", response_model=AdminResponse, status_code=201)
async def create_admin(
    data: AdminCreate,
    actor: Admin = Depends(require_super_admin),
    db: AsyncSession = Depends(get_db),
):
    """Create a new admin"""
    try:
        return await AdminService(db).create_admin(data, created_by=actor)
    except AdminManagementError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/{admin_id}", response_model=AdminResponse)
async def update_admin(
    admin_id: int,
    data: AdminUpdate,
    _: Admin = Depends(require_super_admin),
    db: AsyncSession = Depends(get_db),
):
    """Update an admin's name or super admin flag"""
    admin = await AdminService(db).update_admin(admin_id, data)
    if not admin:
        raise HTTPException(status_code=404, detail="Admin not found")
    return admin


@router.delete("/{admin_id}", status_code=204)
async def delete_admin(
    admin_id: int,
    actor: Admin = Depends(require_super_admin),
    db: AsyncSession = Depends(get_db),
):
    """Delete an admin. Admins cannot delete themselves."""
    try:
        deleted = await AdminService(db).delete_admin(admin_id, actor)
    except AdminManagementError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not deleted:
        raise HTTPException(status_code=404, detail="Admin not found")

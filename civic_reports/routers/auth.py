"""
Auth API Router
"""
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from civic_reports.database import get_db
from civic_reports.models.admin import Admin
from civic_reports.schemas import AdminResponse, LoginRequest
from civic_reports.services.auth_service import authenticate, get_current_admin, sign_in, sign_out

router = APIRouter()


@router.post("/login", response_model=AdminResponse)
async def login(data: LoginRequest, request: Request, db: AsyncSession = Depends(get_db)):
    """Sign in with email and password"""
    admin = await authenticate(db, data.email, data.password)
    if not admin:
        raise HTTPException(status_code=401, detail="Invalid email or password")
    sign_in(request, admin)
    return admin


@router.post("/logout", status_code=204)
async def logout(request: Request):
    """Sign out and clear the session"""
    sign_out(request)


@router.get("/me", response_model=AdminResponse)
async def me(admin: Admin = Depends(get_current_admin)):
    """The signed-in admin"""
    return admin

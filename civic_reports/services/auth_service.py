"""
Admin authentication: password hashing, sign-in and request dependencies.

The signed-in admin id lives in the Starlette session cookie.
"""
import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from werkzeug.security import check_password_hash, generate_password_hash

from civic_reports.database import get_db
from civic_reports.models.admin import Admin

logger = logging.getLogger(__name__)

SESSION_KEY = "admin_id"
PASSWORD_HASH_METHOD = "pbkdf2:sha256"


class LoginRequired(Exception):
    """Raised by HTML views when nobody is signed in; handled with a redirect to /login"""


def hash_password(password: str) -> str:
    return generate_password_hash(password, method=PASSWORD_HASH_METHOD, salt_length=16)


def verify_password(password: str, password_hash: Optional[str]) -> bool:
    if not password_hash:
        return False
    try:
        return check_password_hash(password_hash, password)
    except ValueError:
        # Unknown hash method
        return False


async def authenticate(db: AsyncSession, email: str, password: str) -> Optional[Admin]:
    """Return the admin matching the credentials, or None"""
    email = (email or "").strip().lower()
    result = await db.execute(select(Admin).where(Admin.email == email))
    admin = result.scalar_one_or_none()
    if not admin or not verify_password(password or "", admin.password_hash):
        logger.warning("Failed sign-in for %s", email)
        return None
    logger.info("Admin %s signed in", admin.email)
    return admin


def sign_in(request: Request, admin: Admin) -> None:
    request.session.clear()
    request.session[SESSION_KEY] = admin.id


def sign_out(request: Request) -> None:
    request.session.clear()


async def get_optional_admin(request: Request, db: AsyncSession = Depends(get_db)) -> Optional[Admin]:
    """The signed-in admin, or None. A stale session is cleared."""
    admin_id = request.session.get(SESSION_KEY)
    if admin_id is None:
        return None
    result = await db.execute(select(Admin).where(Admin.id == admin_id))
    admin = result.scalar_one_or_none()
    if admin is None:
        request.session.clear()
    return admin


async def get_current_admin(admin: Optional[Admin] = Depends(get_optional_admin)) -> Admin:
    if admin is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return admin


async def require_super_admin(admin: Admin = Depends(get_current_admin)) -> Admin:
    if not admin.is_super_admin:
        raise HTTPException(status_code=403, detail="Super admin required")
    return admin


async def require_admin_page(admin: Optional[Admin] = Depends(get_optional_admin)) -> Admin:
    """HTML variant of get_current_admin that redirects instead of returning 401"""
    if admin is None:
        raise LoginRequired()
    return admin

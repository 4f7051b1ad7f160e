"""
Admin Service - management of admin accounts
"""
import logging
from typing import Optional, Sequence

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from civic_reports.config import get_settings
from civic_reports.models.admin import Admin
from civic_reports.schemas import AdminCreate, AdminUpdate
from civic_reports.services.auth_service import hash_password

logger = logging.getLogger(__name__)


class AdminManagementError(ValueError):
    """Admin account operation not allowed"""


class AdminService:
    """Service for admin account operations"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_admins(self) -> Sequence[Admin]:
        result = await self.db.execute(select(Admin).order_by(Admin.created_at.desc(), Admin.id.desc()))
        return result.scalars().all()

    async def get_admin(self, admin_id: int) -> Optional[Admin]:
        result = await self.db.execute(select(Admin).where(Admin.id == admin_id))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[Admin]:
        result = await self.db.execute(select(Admin).where(Admin.email == email.strip().lower()))
        return result.scalar_one_or_none()

    async def create_admin(self, data: AdminCreate, created_by: Optional[Admin] = None) -> Admin:
        """Create an admin with an initial password"""
        email = data.email.strip().lower()
        if await self.get_by_email(email):
            raise AdminManagementError(f"Admin {email} already exists")

        admin = Admin(
            email=email,
            full_name=(data.full_name or "").strip() or None,
            is_super_admin=data.is_super_admin,
            password_hash=hash_password(data.password),
            created_by=created_by.id if created_by else None,
        )
        self.db.add(admin)
        await self.db.commit()
        await self.db.refresh(admin)

        logger.info(
            "Created admin %s (super=%s) by %s",
            admin.email, admin.is_super_admin, created_by.email if created_by else "SYSTEM",
        )
        return admin

    async def update_admin(self, admin_id: int, data: AdminUpdate) -> Optional[Admin]:
        admin = await self.get_admin(admin_id)
        if not admin:
            return None

        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(admin, key, value)

        await self.db.commit()
        await self.db.refresh(admin)
        logger.info("Updated admin %s", admin.email)
        return admin

    async def delete_admin(self, admin_id: int, actor: Admin) -> bool:
        """Delete an admin. Nobody can delete their own account."""
        if admin_id == actor.id:
            raise AdminManagementError("You cannot delete your own account")

        admin = await self.get_admin(admin_id)
        if not admin:
            return False

        await self.db.execute(
            update(Admin).where(Admin.created_by == admin_id).values(created_by=None)
        )
        await self.db.delete(admin)
        await self.db.commit()

        logger.info("Admin %s deleted by %s", admin.email, actor.email)
        return True

    async def ensure_bootstrap_admin(self) -> Optional[Admin]:
        """Create the configured super admin when no admin exists yet"""
        settings = get_settings()
        if not settings.bootstrap_admin_email or not settings.bootstrap_admin_password:
            return None

        count = await self.db.scalar(select(func.count(Admin.id)))
        if count:
            return None

        admin = await self.create_admin(AdminCreate(
            email=settings.bootstrap_admin_email,
            full_name=settings.bootstrap_admin_name,
            is_super_admin=True,
            password=settings.bootstrap_admin_password,
        ))
        logger.info("Bootstrap super admin %s created", admin.email)
        return admin

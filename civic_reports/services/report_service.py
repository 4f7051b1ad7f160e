"""
Report Service - Business logic for report management
"""
import logging
import secrets
import string
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from civic_reports.models.event import ReportEvent
from civic_reports.models.report import Report, ReportStatus
from civic_reports.schemas import PublicReport, ReportUpdate
from civic_reports.services.realtime import ChangeBroker, ChangeEvent, ChangeKind, broker

logger = logging.getLogger(__name__)

TRACKING_CODE_LENGTH = 8
TRACKING_CODE_ALPHABET = string.ascii_uppercase + string.digits

# Columns readable by anonymous visitors. Reporter contact fields are
# deliberately absent.
PUBLIC_COLUMNS = tuple(
    getattr(Report, name) for name in PublicReport.model_fields
)


class ResolutionNoteRequired(ValueError):
    """A report cannot be resolved without describing what was done"""


def normalize_tracking_code(code: Optional[str]) -> str:
    return (code or "").strip().upper()


def to_public(report: Report) -> PublicReport:
    return PublicReport.model_validate(report)


class ReportService:
    """Service for report operations"""

    def __init__(self, db: AsyncSession, change_broker: Optional[ChangeBroker] = None):
        self.db = db
        self.broker = change_broker or broker

    def _generate_tracking_code(self) -> str:
        """Generate a code like 7GQ2XK4M"""
        return "".join(secrets.choice(TRACKING_CODE_ALPHABET) for _ in range(TRACKING_CODE_LENGTH))

    async def _unique_tracking_code(self) -> str:
        while True:
            tracking_code = self._generate_tracking_code()
            existing = await self.db.execute(
                select(Report.id).where(Report.tracking_code == tracking_code)
            )
            if existing.scalar_one_or_none() is None:
                return tracking_code

    async def create_report(
        self,
        title: str,
        description: str,
        photo_url: Optional[str] = None,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        neighborhood: Optional[str] = None,
        reporter_name: Optional[str] = None,
        reporter_email: Optional[str] = None,
        reporter_phone: Optional[str] = None,
    ) -> Report:
        """Insert a new report with a unique tracking code"""
        tracking_code = await self._unique_tracking_code()
        has_location = latitude is not None and longitude is not None

        report = Report(
            tracking_code=tracking_code,
            title=title,
            description=description,
            photo_url=photo_url,
            has_location=has_location,
            latitude=latitude if has_location else None,
            longitude=longitude if has_location else None,
            neighborhood=neighborhood if has_location else None,
            reporter_name=reporter_name,
            reporter_email=reporter_email,
            reporter_phone=reporter_phone,
            status=ReportStatus.NEW,
        )
        self.db.add(report)
        await self.db.flush()

        self._add_event(
            report.id,
            "REPORT_CREATED",
            f"Report {tracking_code} created",
            {"has_location": has_location, "has_photo": photo_url is not None},
        )
        await self.db.commit()
        await self.db.refresh(report)

        logger.info("Created report %s", tracking_code)
        self._publish(ChangeKind.INSERT, report)
        return report

    # ============ Public read path ============

    async def list_public_reports(self, limit: Optional[int] = None) -> List[PublicReport]:
        """Public-safe records, newest first"""
        query = select(*PUBLIC_COLUMNS).order_by(Report.created_at.desc(), Report.id.desc())
        if limit:
            query = query.limit(limit)
        result = await self.db.execute(query)
        return [PublicReport.model_validate(row) for row in result.all()]

    async def get_public_report_by_code(self, tracking_code: str) -> Optional[PublicReport]:
        """Look up a public-safe record by tracking code, in any letter case"""
        code = normalize_tracking_code(tracking_code)
        if not code:
            return None
        result = await self.db.execute(
            select(*PUBLIC_COLUMNS).where(Report.tracking_code == code)
        )
        row = result.one_or_none()
        return PublicReport.model_validate(row) if row else None

    # ============ Privileged read path ============

    async def get_report(self, report_id: int) -> Optional[Report]:
        result = await self.db.execute(select(Report).where(Report.id == report_id))
        return result.scalar_one_or_none()

    async def list_reports(
        self,
        status: Optional[ReportStatus] = None,
        search: Optional[str] = None,
        has_photo: bool = False,
        has_location: bool = False,
        page: int = 1,
        size: Optional[int] = None,
    ) -> Tuple[Sequence[Report], int]:
        """Filtered reports for the dashboard and the admin API"""
        query = select(Report)

        if status:
            query = query.where(Report.status == status)
        if search:
            search_filter = f"%{search.strip()}%"
            query = query.where(
                or_(
                    Report.title.ilike(search_filter),
                    Report.tracking_code.ilike(search_filter),
                )
            )
        if has_photo:
            query = query.where(Report.photo_url.isnot(None))
        if has_location:
            query = query.where(Report.has_location.is_(True))

        count_query = select(func.count()).select_from(query.subquery())
        total = await self.db.scalar(count_query) or 0

        query = query.order_by(Report.created_at.desc(), Report.id.desc())
        if size:
            query = query.offset((page - 1) * size).limit(size)

        result = await self.db.execute(query)
        return result.scalars().all(), total

    async def list_events(self, report_id: int) -> Sequence[ReportEvent]:
        result = await self.db.execute(
            select(ReportEvent)
            .where(ReportEvent.report_id == report_id)
            .order_by(ReportEvent.created_at.desc(), ReportEvent.id.desc())
        )
        return result.scalars().all()

    # ============ Admin mutations ============

    async def change_status(
        self,
        report_id: int,
        new_status: ReportStatus,
        note: Optional[str] = None,
        actor: Optional[str] = None,
    ) -> Optional[Report]:
        """Change the status of a report.

        Resolving needs a note describing the work, either given now or
        already stored on the report.
        """
        report = await self.get_report(report_id)
        if not report:
            return None

        note = (note or "").strip() or None
        if new_status == ReportStatus.RESOLVED and not (note or report.admin_note):
            raise ResolutionNoteRequired(f"Report {report.tracking_code} needs a note to be resolved")

        old_status = report.status
        report.status = new_status
        if note:
            report.admin_note = note

        self._add_event(
            report.id,
            "STATUS_CHANGED",
            f"Status changed from {old_status.value} to {new_status.value}",
            {"from": old_status.value, "to": new_status.value, "note": note},
            actor,
        )
        await self.db.commit()
        await self.db.refresh(report)

        logger.info(
            "Report %s status %s -> %s by %s",
            report.tracking_code, old_status.value, new_status.value, actor or "SYSTEM",
        )
        self._publish(ChangeKind.UPDATE, report)
        return report

    async def update_report(
        self,
        report_id: int,
        data: ReportUpdate,
        actor: Optional[str] = None,
    ) -> Optional[Report]:
        """Update editable report fields.

        A resolved report keeps its note; clearing it raises
        ``ResolutionNoteRequired``.
        """
        report = await self.get_report(report_id)
        if not report:
            return None

        updates = data.model_dump(exclude_unset=True)
        if report.status == ReportStatus.RESOLVED and "admin_note" in updates and not updates["admin_note"]:
            raise ResolutionNoteRequired(f"Report {report.tracking_code} is resolved and needs a note")

        changes = {}
        for key, value in updates.items():
            old_value = getattr(report, key)
            if old_value != value:
                changes[key] = {"from": old_value, "to": value}
                setattr(report, key, value)

        if changes:
            self._add_event(
                report.id,
                "REPORT_UPDATED",
                f"Report updated: {', '.join(changes.keys())}",
                changes,
                actor,
            )
            await self.db.commit()
            await self.db.refresh(report)
            self._publish(ChangeKind.UPDATE, report)

        return report

    async def delete_report(self, report_id: int, actor: Optional[str] = None) -> bool:
        """Delete a report together with its audit trail"""
        report = await self.get_report(report_id)
        if not report:
            return False

        tracking_code = report.tracking_code
        await self.db.execute(delete(ReportEvent).where(ReportEvent.report_id == report_id))
        await self.db.delete(report)
        await self.db.commit()

        logger.info("Report %s deleted by %s", tracking_code, actor or "SYSTEM")
        self.broker.publish(ChangeEvent(kind=ChangeKind.DELETE, report_id=report_id))
        return True

    # ============ Helpers ============

    def _publish(self, kind: ChangeKind, report: Report) -> None:
        self.broker.publish(ChangeEvent(kind=kind, report_id=report.id, report=to_public(report)))

    def _add_event(
        self,
        report_id: int,
        event_type: str,
        description: str,
        payload: dict,
        created_by: Optional[str] = None,
    ) -> ReportEvent:
        """Queue an audit event in the current transaction"""
        event = ReportEvent(
            report_id=report_id,
            event_type=event_type,
            description=description,
            payload=payload,
            created_by=created_by or "SYSTEM",
        )
        self.db.add(event)
        return event

"""
Tests for the single-report data export
"""
from datetime import datetime, timezone

from civic_reports.models.report import ReportStatus
from civic_reports.schemas import PublicReport
from civic_reports.services.export_service import (
    GDPR_NOTICE,
    build_csv_export,
    build_json_export,
    export_filename,
)

CREATED = datetime(2026, 5, 1, 9, 30, tzinfo=timezone.utc)


def make_report(**overrides) -> PublicReport:
    fields = dict(
        id=12,
        tracking_code="AB12CD34",
        title="Rrugë, e dëmtuar",
        description="Shtresa e asfaltit mungon",
        photo_url="/uploads/x.jpg",
        has_location=False,
        latitude=None,
        longitude=None,
        neighborhood=None,
        status=ReportStatus.IN_PROGRESS,
        admin_note="Në punim",
        created_at=CREATED,
        updated_at=CREATED,
    )
    fields.update(overrides)
    return PublicReport(**fields)


def test_filename():
    assert export_filename(make_report(), "csv") == "raport-AB12CD34.csv"


def test_json_export_fields():
    now = datetime(2026, 5, 2, tzinfo=timezone.utc)
    data = build_json_export(make_report(), now=now)

    assert data["export_date"] == now.isoformat()
    assert data["gdpr_notice"] == GDPR_NOTICE
    assert set(data["report"]) == {
        "id", "tracking_code", "title", "description", "status", "neighborhood", "created_at", "updated_at",
    }
    assert data["report"]["status"] == "in_progress"


def test_csv_export_quoting():
    text = build_csv_export(make_report(description='Thonë "shpejt"'))
    lines = text.lstrip("\ufeff").split("\n")
    assert len(lines) == 2
    assert lines[0] == '"ID","Kodi","Titulli","Përshkrimi","Statusi","Lagja","Krijuar","Përditësuar"'
    assert lines[1].startswith('12,"AB12CD34","Rrugë, e dëmtuar","Thonë ""shpejt""","in_progress","",')


def test_csv_export_starts_with_bom():
    assert build_csv_export(make_report()).startswith("\ufeff")

"""
Data export of a single public report (GDPR access request)
"""
import csv
import io
from datetime import datetime, timezone
from typing import Optional

from civic_reports.schemas import PublicReport

GDPR_NOTICE = "Ky eksport përmban vetëm të dhënat publike të raportit tuaj sipas GDPR."
CSV_HEADERS = ["ID", "Kodi", "Titulli", "Përshkrimi", "Statusi", "Lagja", "Krijuar", "Përditësuar"]
EXPORTED_FIELDS = (
    "id", "tracking_code", "title", "description", "status", "neighborhood", "created_at", "updated_at",
)
BOM = "\ufeff"


def export_filename(report: PublicReport, extension: str) -> str:
    return f"raport-{report.tracking_code}.{extension}"


def build_json_export(report: PublicReport, now: Optional[datetime] = None) -> dict:
    now = now or datetime.now(timezone.utc)
    return {
        "export_date": now.isoformat(),
        "gdpr_notice": GDPR_NOTICE,
        "report": report.model_dump(mode="json", include=set(EXPORTED_FIELDS)),
    }


def build_csv_export(report: PublicReport) -> str:
    """Header row plus one data row. Every text field is quoted, numbers are not."""
    data = report.model_dump(mode="json")
    output = io.StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    writer.writerow([
        data["id"],
        data["tracking_code"],
        data["title"],
        data["description"],
        data["status"],
        data["neighborhood"] or "",
        data["created_at"],
        data["updated_at"],
    ])
    return BOM + output.getvalue().rstrip("\n")

"""
Database models
"""
from civic_reports.models.report import Report, ReportStatus
from civic_reports.models.admin import Admin
from civic_reports.models.event import ReportEvent

__all__ = [
    "Report",
    "ReportStatus",
    "Admin",
    "ReportEvent",
]

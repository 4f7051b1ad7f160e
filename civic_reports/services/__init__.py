"""
Services package
"""
from civic_reports.services.admin_service import AdminService
from civic_reports.services.report_service import ReportService

__all__ = ["ReportService", "AdminService"]

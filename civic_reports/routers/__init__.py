"""
API Routers package
"""
from civic_reports.routers import admins, auth, dashboard, public, public_api, reports

__all__ = ["public", "public_api", "auth", "reports", "admins", "dashboard"]

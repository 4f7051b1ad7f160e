"""
Shared Jinja2 environment for the HTML views
"""
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.templating import Jinja2Templates

from civic_reports.config import get_settings
from civic_reports.i18n import LANGUAGES, translate
from civic_reports.models.report import ReportStatus
from civic_reports.preferences import get_preferences
from civic_reports.services.auth_service import SESSION_KEY

BASE_DIR = Path(__file__).resolve().parent
FLASH_KEY = "flash"

templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))


def _session(request: Request) -> dict:
    return request.session if "session" in request.scope else {}


def flash(request: Request, key: str, level: str = "success") -> None:
    """Queue a translated message for the next rendered page"""
    if "session" in request.scope:
        request.session[FLASH_KEY] = {"key": key, "level": level}


def pop_flash(request: Request) -> Optional[Dict[str, str]]:
    if "session" not in request.scope:
        return None
    return request.session.pop(FLASH_KEY, None)


def render(
    request: Request,
    name: str,
    context: Optional[Dict[str, Any]] = None,
    status_code: int = 200,
):
    """Render a page with preferences, translations and flash messages"""
    store = get_preferences(request)
    language = store.state.language

    def t(key: str) -> str:
        return translate(key, language)

    page_context = {
        "app_name": get_settings().app_name,
        "prefs": store.state,
        "lang": language,
        "languages": LANGUAGES,
        "t": t,
        "statuses": list(ReportStatus),
        "flash": pop_flash(request),
        "signed_in": SESSION_KEY in _session(request),
    }
    page_context.update(context or {})
    return templates.TemplateResponse(request, name, page_context, status_code=status_code)

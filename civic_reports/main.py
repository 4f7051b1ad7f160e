"""
Code4Community Elbasan - Main FastAPI Application
"""
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware

from civic_reports.config import get_settings
from civic_reports.database import async_session_factory, close_db, init_db
from civic_reports.preferences import PreferencesMiddleware
from civic_reports.routers import admins, auth, dashboard, public, public_api, reports
from civic_reports.services.admin_service import AdminService
from civic_reports.services.auth_service import LoginRequired
from civic_reports.services.storage_service import PUBLIC_PREFIX
from civic_reports.templating import BASE_DIR, render

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    # Startup
    logger.info("Starting %s", settings.app_name)
    await init_db()

    async with async_session_factory() as db:
        await AdminService(db).ensure_bootstrap_admin()

    if not settings.resend_api_key and settings.email_provider == "resend":
        logger.warning("RESEND_API_KEY not configured - admin notifications disabled")

    yield

    # Shutdown
    logger.info("Shutting down %s", settings.app_name)
    await close_db()


app = FastAPI(
    title=settings.app_name,
    description="Platformë për raportimin e problemeve qytetare",
    version="1.0.0",
    lifespan=lifespan,
)

# Middleware, outermost last
app.add_middleware(PreferencesMiddleware)
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.secret_key,
    session_cookie="admin_session",
    max_age=settings.session_max_age,
    same_site="lax",
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Uploaded photos and page assets
uploads_dir = Path(settings.uploads_path)
uploads_dir.mkdir(parents=True, exist_ok=True)
app.mount(PUBLIC_PREFIX, StaticFiles(directory=str(uploads_dir)), name="uploads")
app.mount("/static", StaticFiles(directory=str(BASE_DIR / "static")), name="static")

# Include routers
app.include_router(public_api.router, prefix="/api/public", tags=["Public"])
app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
app.include_router(reports.router, prefix="/api/reports", tags=["Reports"])
app.include_router(admins.router, prefix="/api/admins", tags=["Admins"])
app.include_router(dashboard.router)
app.include_router(public.router)


@app.exception_handler(LoginRequired)
async def login_required_handler(request: Request, exc: LoginRequired):
    return RedirectResponse(url="/login", status_code=303)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Not-found page for browsers, JSON everywhere else"""
    if exc.status_code == 404 and not request.url.path.startswith("/api"):
        return render(request, "not_found.html", {"path": request.url.path}, status_code=404)
    return JSONResponse(
        {"detail": exc.detail},
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}

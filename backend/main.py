from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from pathlib import Path
import time
import os
import logging
from dotenv import load_dotenv

load_dotenv(dotenv_path=Path(__file__).parent / ".env", override=False)

from workfriar.logging_config import setup_logging, get_log_files_info

setup_logging()
logger = logging.getLogger(__name__)

from workfriar.dependencies import require_admin
from workfriar.exceptions import DomainError
from workfriar.schemas.common import envelope

# Every model module must be imported before the first query so string
# relationship targets resolve.
from workfriar.models import user, project, category, timesheet, subscription, notification, project_status_report  # noqa: F401

app = FastAPI(
    title="Workfriar Admin API",
    description="Timesheets, approvals, projects and reporting",
    version="1.0.0",
    docs_url="/api/documentation",
    openapi_url="/api/openapi.json",
    redoc_url=None,
)

CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",")

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in CORS_ORIGINS],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Request logging ---

http_logger = logging.getLogger("workfriar.http")


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    http_logger.info(f"{request.method} {request.url.path} {response.status_code} {elapsed_ms:.1f}ms")
    return response


# --- Error envelope ---

@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    return JSONResponse(status_code=exc.status_code, content=envelope(exc.errors or [], exc.message, status=False))


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=envelope([], str(exc.detail), status=False),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    return JSONResponse(status_code=422, content=envelope([], message, status=False))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content=envelope([], "Internal server error", status=False))


# --- Routers ---

from workfriar.routers.auth import router as auth_router
from workfriar.routers.approvals import router as approvals_router
from workfriar.routers.timesheets import router as timesheets_router
from workfriar.routers.users import router as users_router
from workfriar.routers.roles import router as roles_router
from workfriar.routers.categories import router as categories_router
from workfriar.routers.subscriptions import router as subscriptions_router
from workfriar.routers.project_teams import router as project_teams_router
from workfriar.routers.reports import router as reports_router
from workfriar.routers.projects import router as projects_router
from workfriar.routers.project_status_reports import router as status_reports_router

for r in (
    auth_router,
    approvals_router,
    timesheets_router,
    users_router,
    roles_router,
    categories_router,
    subscriptions_router,
    project_teams_router,
    reports_router,
    projects_router,
    status_reports_router,
):
    app.include_router(r, prefix="/api")


@app.get("/")
def root():
    return {"status": "ok", "docs": "/api/documentation"}


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/api/admin/logs")
def log_files(admin=Depends(require_admin)):
    return envelope(get_log_files_info(), "Log files")

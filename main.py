import os
import sys
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# Ensure local imports resolve
sys.path.append(os.path.dirname(__file__))

# Core
from core.config import settings
from core.config_validator import validate_config_on_startup
from core.errors import AuthorizationError, PortalError, StoreError
from core.logging_config import logger

# -------------------------------------------------
# Routers
# -------------------------------------------------
from routers.auth import router as auth_router
from routers.dashboard import router as dashboard_router
from routers.stats import router as stats_router

from routers.announcements import router as announcements_router
from routers.permissions import router as permissions_router
from routers.receipts import router as receipts_router
from routers.timetables import router as timetables_router
from routers.classes import router as classes_router
from routers.documents import router as documents_router
from routers.students import router as students_router

from routers.health import router as health_router


# -------------------------------------------------
# Create the Application
# -------------------------------------------------
def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="1.0.0",
        description="Ecole Portal API: multi-school dashboards on Supabase",
    )

    # -------------------------------------------------
    # CORS
    # -------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -------------------------------------------------
    # Startup
    # -------------------------------------------------
    @app.on_event("startup")
    async def on_startup():
        logger.info("🚀 Starting Ecole Portal API")
        validate_config_on_startup()

        if settings.ENABLE_SCHEDULER:
            from core.scheduler import start_scheduler
            app.state.scheduler = start_scheduler()

    @app.on_event("shutdown")
    async def on_shutdown():
        scheduler = getattr(app.state, "scheduler", None)
        if scheduler is not None:
            scheduler.shutdown(wait=False)

    # -------------------------------------------------
    # Error handling
    # -------------------------------------------------
    @app.exception_handler(PortalError)
    async def handle_portal_error(request: Request, exc: PortalError):
        if isinstance(exc, (AuthorizationError, StoreError)):
            logger.warning(
                f"{type(exc).__name__} at {request.method} {request.url.path}: {exc.message}"
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.public_detail, "error": type(exc).__name__},
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (401, 403, 500):
            logger.warning(
                f"HTTP {exc.status_code} at {request.url}: {exc.detail}"
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unhandled(request: Request, exc: Exception):
        logger.error("Unhandled error at %s", request.url, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )

    # -------------------------------------------------
    # Register Routers
    # -------------------------------------------------

    # Auth + shell
    app.include_router(auth_router)
    app.include_router(dashboard_router)
    app.include_router(stats_router)

    # Panels
    app.include_router(announcements_router)
    app.include_router(permissions_router)
    app.include_router(receipts_router)
    app.include_router(timetables_router)
    app.include_router(classes_router)
    app.include_router(documents_router)
    app.include_router(students_router)

    # Health
    app.include_router(health_router)

    return app


# Create the global FastAPI instance
app = create_app()

"""
Timetable API - FastAPI Application Entry Point.

Feature-based modular architecture:
  Each feature in timetable_api/features/ has its own router, service, and schemas.
  Adding a new feature = adding a new folder, no existing code changes needed.
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from timetable_api.config import get_settings
from timetable_api.core.exceptions import AppBaseError, app_error_to_response
from timetable_api.core.logging_config import setup_logging

# ── Feature Routers ──────────────────────────────────────
from timetable_api.features.calendar.router import router as calendar_router
from timetable_api.features.courses.router import router as courses_router
from timetable_api.features.entities.router import router as entities_router
from timetable_api.features.schedules.router import router as schedules_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle: startup & shutdown."""
    settings = get_settings()
    logger.info(f"🚀 {settings.APP_NAME} v{settings.APP_VERSION} starting...")
    logger.info(f"🔗 Supabase: {settings.SUPABASE_URL[:40]}...")
    yield
    logger.info("👋 Shutting down...")


def register_error_handlers(app: FastAPI) -> None:
    """Every error leaves as {"message": ...}."""

    @app.exception_handler(AppBaseError)
    async def handle_app_error(request: Request, exc: AppBaseError):
        return app_error_to_response(exc)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        if errors:
            first = errors[0]
            # loc is (source, field, ...), e.g. ("body", "duration")
            field = ".".join(str(part) for part in first.get("loc", ())[1:])
            message = f"Invalid {field}: {first.get('msg')}." if field else "Invalid request."
        else:
            message = "Invalid request."
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": message},
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Something went wrong."},
        )


def create_app() -> FastAPI:
    """Application factory."""
    settings = get_settings()
    setup_logging("DEBUG" if settings.DEBUG else settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="School timetable data: schedules, rosters and weekly calendar events",
        lifespan=lifespan,
    )

    # ── CORS ─────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # ── Register Feature Routers ─────────────────────────
    app.include_router(schedules_router, prefix="/api/schedules", tags=["Schedules"])
    app.include_router(courses_router, prefix="/api/courses", tags=["Courses"])
    app.include_router(entities_router, prefix="/api/entities", tags=["Entities"])
    app.include_router(calendar_router, prefix="/api", tags=["Calendar"])

    # ── Health Check ─────────────────────────────────────
    @app.get("/api/health", tags=["System"], response_class=PlainTextResponse)
    async def health_check():
        return "OK"

    return app


app = create_app()


def run() -> None:
    """Console entry point (`timetable-api`): serve the app with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "timetable_api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import async_sessionmaker
from starlette.exceptions import HTTPException as StarletteHTTPException

from .container import Container
from .db import AsyncSessionLocal, init_db
from .errors import AppError, UnexpectedError, ValidationError, error_response
from .routes_campaigns import router as campaigns_router
from .routes_dashboard import router as dashboard_router
from .routes_dashboard_campaign_info import router as campaign_info_router
from .routes_dashboard_campaign_summary import router as campaign_summary_router
from .routes_dashboard_owners import router as owners_router
from .routes_dashboard_review import router as review_router
from .routes_dashboard_socials import router as socials_router
from .routes_dashboard_submission import router as submission_router
from .services.notify import Notifier
from .settings import Settings, get_settings

logger = logging.getLogger("campaign_dashboard")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(
    settings: Settings | None = None,
    session_factory: async_sessionmaker | None = None,
    notifier: Notifier | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title=settings.app_name)
    app.state.settings = settings
    app.state.session_factory = session_factory or AsyncSessionLocal
    app.state.container = Container.build(settings, app.state.session_factory, notifier)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return error_response(exc)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        error = AppError(str(exc.detail), code=f"HTTP_{exc.status_code}")
        error.status_code = exc.status_code
        return error_response(error)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}" for err in exc.errors()
        )
        return error_response(ValidationError(problems or "Invalid request", details=exc.errors()))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url)
        return error_response(UnexpectedError(str(exc) or type(exc).__name__))

    @app.get("/ping")
    async def ping():
        return {"status": "ok"}

    app.include_router(socials_router)
    app.include_router(campaign_info_router)
    app.include_router(campaign_summary_router)
    app.include_router(owners_router)
    app.include_router(submission_router)
    app.include_router(review_router)
    app.include_router(campaigns_router)
    app.include_router(dashboard_router)

    @app.on_event("startup")
    async def startup_event():
        """Create missing tables on app startup."""
        if settings.auto_create_schema and session_factory is None:
            await init_db()
        logger.info(f"{settings.app_name} started ({settings.environment})")

    return app


app = create_app()

import logging

from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from company_invites.api import api_router
from company_invites.api.invites import CORS_HEADERS
from company_invites.config import settings
from company_invites.core.errors import InviteServiceError
from company_invites.logging_config import setup_logging
from company_invites.schemas.invite import ErrorResponse

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    # Configure logging first
    setup_logging(app_env=settings.app_env, log_level=settings.log_level)

    # Initialize Sentry if DSN is configured
    if settings.sentry_dsn:
        try:
            import sentry_sdk
            from sentry_sdk.integrations.fastapi import FastApiIntegration

            sentry_sdk.init(
                dsn=settings.sentry_dsn,
                environment=settings.app_env,
                integrations=[FastApiIntegration()],
                traces_sample_rate=0.1 if settings.is_production else 1.0,
                send_default_pii=False,
            )
            logger.info("Sentry initialized")
        except ImportError:
            logger.warning("sentry-sdk not installed, skipping Sentry initialization")

    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        docs_url=None if settings.is_production else "/docs",
        redoc_url=None if settings.is_production else "/redoc",
    )

    app.include_router(api_router)

    @app.exception_handler(InviteServiceError)
    async def invite_error_handler(request: Request, exc: InviteServiceError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        else:
            logger.warning(
                f"{request.method} {request.url.path} rejected ({exc.status_code}): {exc.message}"
            )
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(error=exc.message).model_dump(),
            headers=CORS_HEADERS,
        )

    @app.exception_handler(StarletteHTTPException)
    async def routing_exception_handler(request: Request, exc: StarletteHTTPException):
        # Methods outside the routed set are rejected by the router itself
        if exc.status_code != status.HTTP_405_METHOD_NOT_ALLOWED:
            return await http_exception_handler(request, exc)
        logger.warning(f"{request.method} {request.url.path} rejected (405): method not routed")
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(error="Method not allowed").model_dump(),
            headers={**(exc.headers or {}), **CORS_HEADERS},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled exception on {request.method} {request.url.path}: {exc}", exc_info=True
        )
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(error="Internal server error").model_dump(),
            headers=CORS_HEADERS,
        )

    @app.get("/health")
    async def health_check():
        return {"status": "healthy", "app": settings.app_name, "version": "0.1.0"}

    logger.info(f"{settings.app_name} started (env={settings.app_env})")
    return app


app = create_app()

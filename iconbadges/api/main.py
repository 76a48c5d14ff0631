"""FastAPI application factory."""
from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from iconbadges.api import schemas
from iconbadges.api.routers import badges, icons
from iconbadges.core.database import init_database
from iconbadges.core.errors import IconBadgeError, ValidationError
from iconbadges.core.logging import get_logger, setup_logging
from iconbadges.core.observability import configure_observability
from iconbadges.core.settings import get_settings
from iconbadges.services.icons import icon_body

logger = get_logger(__name__)


def _icon_badge_error_handler(request: Request, exc: IconBadgeError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.warning("request_failed", path=request.url.path, status=exc.status_code, error=exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Unparseable submission bodies get the same envelope as missing fields.
    if request.url.path.rstrip("/") == "/icons":
        error = ValidationError(body=icon_body(None, None, None))
        return JSONResponse(status_code=error.status_code, content=error.to_payload())
    return await request_validation_exception_handler(request, exc)


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.log_level)
    init_database()

    app = FastAPI(title=settings.app_name, version="1.0.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(IconBadgeError, _icon_badge_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)

    configure_observability(app)

    @app.get("/healthz", tags=["monitoring"], response_model=schemas.HealthResponse)
    def healthcheck() -> dict[str, str]:  # pragma: no cover - simple endpoint
        return {"status": "ok"}

    app.include_router(icons.router)
    # Catch-all badge routes must come after every other route.
    app.include_router(badges.router)

    return app


__all__ = ["create_app"]

"""FastAPI application factory."""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tinylink.common.logging_config import get_logger
from tinylink.errors import TinyLinkError
from .api import api_router, health_router
from .web import web_router
from .middleware.logging import LoggingMiddleware
from .templating import render


def _error_body(exc: TinyLinkError) -> dict:
    body = {"error": exc.code, "detail": str(exc)}
    short_code = getattr(exc, "short_code", None)
    if short_code is not None:
        body["short_code"] = short_code
    attempts = getattr(exc, "attempts", None)
    if attempts is not None:
        body["attempts"] = attempts
    return body


def create_app(
    registry,
    config,
    logger: Optional[logging.Logger] = None,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        registry: LinkRegistry (embedded) or RemoteLinkRegistry (frontend mode).
            May be None when the lifespan handler sets it on app.state.
        config: Configuration instance; config.mode selects the routers
        logger: Optional logger for request logging

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="TinyLink",
        description="URL shortener with click tracking",
        version=config.app_version,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    # Store instances in app state for access in routes
    app.state.registry = registry
    app.state.config = config

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["*"],
    )
    web_logger = logger.getChild("web") if logger else get_logger("web")
    app.add_middleware(LoggingMiddleware, logger=web_logger)

    @app.exception_handler(TinyLinkError)
    async def tinylink_error_handler(request: Request, exc: TinyLinkError):
        """Translate registry errors into JSON for the API and pages for the dashboard."""
        if exc.status_code >= 500:
            web_logger.error(
                f"{request.method} {request.url.path} failed: {exc}"
            )
        if request.url.path.startswith("/api/") or config.mode == "api":
            return JSONResponse(status_code=exc.status_code, content=_error_body(exc))
        return render(request, "error.html", status_code=exc.status_code, error=str(exc))

    app.include_router(health_router, tags=["Health"])

    if config.mode in ("combined", "api"):
        app.include_router(api_router, prefix="/api", tags=["API"])

    if config.mode in ("combined", "frontend"):
        # Catch-all /{short_code} route, registered last
        app.include_router(web_router, tags=["Web"])

    return app

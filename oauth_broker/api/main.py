"""
Main FastAPI application for the Git OAuth Broker.

Only two routes exist: GET /auth and GET /callback. Everything else,
including the OpenAPI docs, answers 404.
"""

import logging
from typing import Optional

from fastapi import FastAPI

from oauth_broker.api.middleware import logging as log_middleware
from oauth_broker.api.middleware import request_id
from oauth_broker.api.middleware.error_handling import add_exception_handlers
from oauth_broker.auth.routes import router as auth_router
from oauth_broker.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Settings to use; loaded from the environment if omitted

    Returns:
        Configured FastAPI app
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings

    # Order matters - last added = first executed
    app.add_middleware(log_middleware.LoggingMiddleware)
    app.add_middleware(request_id.RequestIDMiddleware)

    add_exception_handlers(app)

    app.include_router(auth_router)

    configured = [p.value for p in settings.configured_providers]
    if configured:
        logger.info(f"Configured providers: {', '.join(configured)}")
    elif settings.is_production:
        logger.warning("No OAuth providers configured! Set GITHUB_* or GITLAB_* variables.")
    else:
        logger.info("No OAuth providers configured")

    if not settings.allowed_domains:
        logger.info("ALLOWED_DOMAINS not set - any calling domain is accepted")

    return app

"""
FastAPI dependencies.

Settings are built once at startup and stored on the application; the
HTTP client for token exchange is opened per request.
"""
from typing import AsyncIterator

import httpx
from fastapi import Request

from oauth_broker.settings import Settings


def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    return request.app.state.settings


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """
    Yield an HTTP client for the provider token endpoint.

    Uses httpx default timeouts; closed when the request completes.
    """
    async with httpx.AsyncClient() as client:
        yield client

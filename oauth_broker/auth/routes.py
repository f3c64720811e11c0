"""
Authentication routes.

GET /auth      - step 1, redirect to the provider with a CSRF cookie
GET /callback  - step 2, exchange the code and render the relay page

Every failure is answered with a relay page so the popup can report it
to the opener window.
"""
import logging
from typing import Optional

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse
from starlette.responses import Response

from oauth_broker.api.dependencies import get_app_settings, get_http_client
from oauth_broker.auth import csrf
from oauth_broker.auth.errors import AuthFlowError
from oauth_broker.auth.relay import render_relay_page
from oauth_broker.auth.service import AuthFlowService
from oauth_broker.settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["authentication"])


def get_request_origin(request: Request) -> str:
    """Scheme and host the broker was reached at, e.g. https://auth.example.com."""
    return f"{request.url.scheme}://{request.url.netloc}"


@router.get("/auth")
async def auth(
    request: Request,
    provider: Optional[str] = None,
    domain: Optional[str] = None,
    settings: Settings = Depends(get_app_settings),
) -> Response:
    """
    Initiate OAuth authorization.

    Args:
        provider: Git backend ('github', 'gitlab')
        domain: Domain of the calling editor, checked against ALLOWED_DOMAINS

    Returns:
        302 redirect to the provider with the CSRF cookie set,
        or a relay page carrying the error
    """
    service = AuthFlowService(settings)

    try:
        redirect = service.begin(provider, domain, get_request_origin(request))
    except AuthFlowError as e:
        logger.warning(f"Authorization rejected ({e.__class__.__name__}) for provider {e.provider}")
        return render_relay_page(provider=e.provider, error=e.message)

    response = RedirectResponse(url=redirect.url, status_code=302)
    csrf.set_csrf_cookie(response, redirect.csrf)
    return response


@router.get("/callback")
async def callback(
    request: Request,
    code: Optional[str] = None,
    state: Optional[str] = None,
    settings: Settings = Depends(get_app_settings),
    http_client: httpx.AsyncClient = Depends(get_http_client),
) -> Response:
    """
    OAuth callback - exchange the code for an access token.

    Always answers 200 with the relay page, never a redirect, so the
    popup can run the relay script.
    """
    service = AuthFlowService(settings, http_client)

    try:
        outcome = await service.complete(
            cookie_header=request.headers.get("cookie"),
            code=code,
            state=state,
            origin=get_request_origin(request),
        )
    except AuthFlowError as e:
        logger.warning(f"Callback rejected ({e.__class__.__name__}) for provider {e.provider}")
        return render_relay_page(provider=e.provider, error=e.message)

    return render_relay_page(
        provider=outcome.provider.value,
        token=outcome.access_token,
        error=outcome.error,
    )

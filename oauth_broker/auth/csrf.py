"""
CSRF state for the authorization flow.

The state never lives on the server. It is issued with the redirect,
kept by the browser in a short-lived HttpOnly cookie, and compared with
the `state` query parameter when the provider redirects back.
"""
import re
import secrets
from typing import Optional

from starlette.responses import Response

from oauth_broker.auth.models import CsrfToken

CSRF_COOKIE_NAME = "csrf-token"
CSRF_COOKIE_MAX_AGE = 600  # 10 minutes

_COOKIE_PATTERN = re.compile(r"\bcsrf-token=([a-z-]+?)_([0-9a-f]{32})\b")


def issue(provider: str) -> CsrfToken:
    """
    Generate a fresh CSRF token bound to a provider.

    Args:
        provider: Provider identifier, e.g. 'github'

    Returns:
        CsrfToken with 128 random bits as 32 lowercase hex characters
    """
    return CsrfToken(provider=provider, state=secrets.token_hex(16))


def extract(cookie_header: Optional[str]) -> Optional[CsrfToken]:
    """
    Find the CSRF token in a raw Cookie header.

    Returns None if the cookie is absent or malformed. The provider is
    not checked against the supported set here.
    """
    if not cookie_header:
        return None

    match = _COOKIE_PATTERN.search(cookie_header)
    if not match:
        return None

    provider, state = match.groups()
    return CsrfToken(provider=provider, state=state)


def verify(token: Optional[CsrfToken], returned_state: Optional[str]) -> bool:
    """True iff both are present and the states are exactly equal."""
    if token is None or not token.state or not returned_state:
        return False
    # compare_digest rejects non-ASCII str, and state comes from the query
    return secrets.compare_digest(token.state.encode(), returned_state.encode())


def set_csrf_cookie(response: Response, token: CsrfToken) -> None:
    """
    Attach the CSRF cookie to a response.

    SECURITY: HttpOnly keeps it from page scripts, Secure keeps it off
    plaintext transport, SameSite=Lax still sends it on the top-level
    redirect back from the provider.
    """
    response.set_cookie(
        key=CSRF_COOKIE_NAME,
        value=token.cookie_value,
        max_age=CSRF_COOKIE_MAX_AGE,
        path="/",
        secure=True,
        httponly=True,
        samesite="lax",
    )

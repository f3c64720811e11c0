"""
Relay page returned to the OAuth popup.

The page hands the outcome to the window that opened the popup using a
two-phase postMessage handshake:

1. On load it posts `authorizing:<provider>` to the opener at any origin.
2. The opener echoes the same string back.
3. The page replies with `authorization:<provider>:<state>:<json>` to the
   origin that echoed, and only to that origin.
"""
import json
from pathlib import Path
from typing import Optional

from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from markupsafe import Markup

from oauth_broker.auth.errors import UNKNOWN_PROVIDER

RELAY_CONTENT_TYPE = "text/html;charset=UTF-8"

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))

_JS_STRING_ESCAPES = {
    "\\": "\\\\",
    "'": "\\'",
    "\n": "\\n",
    "\r": "\\r",
    "<": "\\u003C",
    ">": "\\u003E",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def js_string(value: str) -> Markup:
    """Escape text for a single-quoted JavaScript string inside <script>."""
    escaped = "".join(_JS_STRING_ESCAPES.get(ch, ch) for ch in str(value))
    return Markup(escaped)


templates.env.filters["js_string"] = js_string


def handshake_message(provider: str) -> str:
    return f"authorizing:{provider}"


def authorization_message(
    provider: str,
    token: Optional[str] = None,
    error: Optional[str] = None,
) -> str:
    """
    Build the payload delivered to the opener.

    Content is {provider, error} when error is set, otherwise
    {provider, token}; an absent token is left out. Non-ASCII text,
    lone surrogates included, is written as \\u escapes.
    """
    if error:
        state = "error"
        content = {"provider": provider, "error": error}
    else:
        state = "success"
        content = {"provider": provider}
        if token is not None:
            content["token"] = token

    payload = json.dumps(content, separators=(",", ":"))
    return f"authorization:{provider}:{state}:{payload}"


def render_relay_page(
    provider: Optional[str] = None,
    token: Optional[str] = None,
    error: Optional[str] = None,
) -> HTMLResponse:
    """
    Render the relay page.

    Args:
        provider: Provider name, 'unknown' if not determined
        token: Access token on success
        error: Error message on failure

    Returns:
        200 HTMLResponse with the relay script
    """
    provider = provider or UNKNOWN_PROVIDER
    html = templates.get_template("relay.html").render(
        handshake=handshake_message(provider),
        message=authorization_message(provider, token=token, error=error),
    )
    return HTMLResponse(
        content=html,
        status_code=200,
        headers={"Content-Type": RELAY_CONTENT_TYPE},
    )

"""
HTTP Basic access gate for the administration area.

Every request whose path starts with ``/admin`` must carry an
``Authorization: Basic`` header whose decoded ``user:password`` pair
matches ``ADMIN_USERNAME`` and ``ADMIN_PASSWORD``.  Otherwise the gate
answers ``401`` with a ``WWW-Authenticate`` challenge so the browser
prompts for credentials.  No session or cookie is issued: the browser
resends the header on every request.  Any other path bypasses the
check entirely.

The gate is binary.  There are no roles and no per-action checks; the
action layer assumes the gate already ran.
"""

import base64
import binascii
import hmac
import logging
from typing import Optional, Tuple

from fastapi import Request, status
from fastapi.responses import PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from .config import Settings


logger = logging.getLogger(__name__)

ADMIN_PREFIX = "/admin"
AUTH_REQUIRED_MESSAGE = "Autenticación requerida"


def parse_basic_credentials(header: Optional[str]) -> Optional[Tuple[str, str]]:
    """Decode an ``Authorization: Basic`` header value.

    Returns ``(username, password)`` or ``None`` when the header is
    missing, uses another scheme or is not valid base64.  The password
    may itself contain colons; only the first colon separates the pair.
    """
    if not header:
        return None
    scheme, _, encoded = header.partition(" ")
    if scheme.lower() != "basic" or not encoded:
        return None
    try:
        decoded = base64.b64decode(encoded.strip(), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None
    username, sep, password = decoded.partition(":")
    if not sep:
        return None
    return username, password


def credentials_match(settings: Settings, username: str, password: str) -> bool:
    """Compare against the configured pair in constant time.

    An unconfigured pair never matches, so a deployment without
    ``ADMIN_USERNAME``/``ADMIN_PASSWORD`` keeps ``/admin`` closed.
    """
    if not settings.admin_username or not settings.admin_password:
        return False
    user_ok = hmac.compare_digest(username.encode("utf-8"), settings.admin_username.encode("utf-8"))
    pass_ok = hmac.compare_digest(password.encode("utf-8"), settings.admin_password.encode("utf-8"))
    return user_ok and pass_ok


def auth_required_response(settings: Settings) -> Response:
    return PlainTextResponse(
        AUTH_REQUIRED_MESSAGE,
        status_code=status.HTTP_401_UNAUTHORIZED,
        headers={"WWW-Authenticate": f'Basic realm="{settings.admin_realm}"'},
    )


class AdminGateMiddleware(BaseHTTPMiddleware):
    """Reject unauthenticated requests under ``/admin``."""

    def __init__(self, app, settings: Settings) -> None:
        super().__init__(app)
        self.settings = settings

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if not request.url.path.startswith(ADMIN_PREFIX):
            return await call_next(request)
        credentials = parse_basic_credentials(request.headers.get("authorization"))
        if credentials and credentials_match(self.settings, *credentials):
            return await call_next(request)
        logger.info("Rejected unauthenticated request to %s", request.url.path)
        return auth_required_response(self.settings)

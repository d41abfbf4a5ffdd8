"""
Shared‑secret authentication for mutating endpoints.

Clients prove they may change the catalogue by sending the configured
API key in the ``x-api-key`` header.  There are no sessions, roles or
expiry: one secret, one trust level.  ``require_api_key`` is used as a
FastAPI dependency, e.g. ``Depends(require_api_key)``.
"""

import hmac
import logging
from typing import Optional

from fastapi import Header, Request

from .errors import AuthenticationInvalid, AuthenticationMissing

logger = logging.getLogger(__name__)

API_KEY_HEADER = "x-api-key"


def check_api_key(provided: Optional[str], expected: str) -> None:
    """Raise unless ``provided`` equals ``expected``.

    A missing or empty header raises ``AuthenticationMissing``; a wrong value
    raises ``AuthenticationInvalid``.
    """
    if not provided:
        raise AuthenticationMissing()
    if not hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8")):
        logger.warning("Rejected request with an invalid API key")
        raise AuthenticationInvalid()


def require_api_key(
    request: Request,
    x_api_key: Optional[str] = Header(None, alias=API_KEY_HEADER),
) -> None:
    """Dependency that enforces the API key configured on the application."""
    check_api_key(x_api_key, request.app.state.settings.api_key)

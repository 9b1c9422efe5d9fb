# HTTP-only session cookie helpers for FastAPI/Starlette responses.
#
# The cookie value is the signed string produced by SessionTokenCodec, so the
# browser carries the session id and its day window without any server-side
# store.

from __future__ import annotations

import logging

from fastapi import Request, Response

from sessionsign.config import Settings
from sessionsign.security.session_cookies import SessionPayload, SessionTokenCodec

logger = logging.getLogger(__name__)

__all__ = [
    "set_session_cookie",
    "set_signed_cookie",
    "clear_session_cookie",
    "read_session_cookie",
]


def set_session_cookie(
    response: Response, session_id: str, codec: SessionTokenCodec, settings: Settings
) -> str:
    """Sign *session_id* and attach it to *response*. Returns the cookie value."""
    _, signed = codec.issue(session_id)
    set_signed_cookie(response, signed, settings)
    return signed


def set_signed_cookie(response: Response, signed: str, settings: Settings) -> None:
    """Attach an already signed session string to *response*."""
    response.set_cookie(
        key=settings.cookie_name,
        value=signed,
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.cookie_samesite,
        path="/",
        max_age=settings.cookie_max_age_days * 24 * 3600,
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(key=settings.cookie_name, path="/")


def read_session_cookie(
    request: Request, codec: SessionTokenCodec, settings: Settings
) -> SessionPayload | None:
    """Return the verified session payload from the request cookie, or None."""
    cookie = request.cookies.get(settings.cookie_name)
    if not cookie:
        return None

    payload = codec.verify_signed_string_for_session(
        cookie, max_age_days=settings.max_token_age_days
    )
    if payload is None:
        client_ip = request.client.host if request.client else "unknown"
        logger.info("Invalid session cookie from %s", client_ip)
    return payload

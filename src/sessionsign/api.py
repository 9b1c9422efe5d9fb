# Session cookie router — issue, inspect, and clear signed session cookies.

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from sessionsign.config import Settings
from sessionsign.cookies import clear_session_cookie, read_session_cookie, set_signed_cookie
from sessionsign.security.session_cookies import SessionTokenCodec

logger = logging.getLogger(__name__)

__all__ = ["SessionCreateRequest", "SessionInfoResponse", "build_router"]


class SessionCreateRequest(BaseModel):
    """Cookie issue request."""

    session_id: str = Field(..., min_length=1, description="Session identifier to sign")


class SessionInfoResponse(BaseModel):
    """Verified session cookie contents."""

    session_id: str
    timestep: int


def build_router(codec: SessionTokenCodec, settings: Settings) -> APIRouter:
    router = APIRouter(tags=["Session"])

    @router.post("/auth/session", response_model=SessionInfoResponse)
    async def create_session(body: SessionCreateRequest):
        """Set an HTTP-only cookie carrying the signed session id."""
        # Report the id as stored: padded ids are stripped, long ones truncated.
        payload, signed = codec.issue(body.session_id)
        response = JSONResponse(
            content=SessionInfoResponse(
                session_id=payload.session_id, timestep=payload.timestep
            ).model_dump()
        )
        set_signed_cookie(response, signed, settings)
        logger.info("Issued session cookie (timestep=%d)", payload.timestep)
        return response

    @router.get("/auth/session", response_model=SessionInfoResponse)
    async def get_session(request: Request):
        """Return the session carried by the request cookie."""
        payload = read_session_cookie(request, codec, settings)
        if payload is None:
            raise HTTPException(status_code=401, detail="Invalid or missing session cookie")
        return SessionInfoResponse(session_id=payload.session_id, timestep=payload.timestep)

    @router.post("/auth/logout")
    async def logout():
        """Clear the session cookie."""
        response = JSONResponse(content={"ok": True})
        clear_session_cookie(response, settings)
        return response

    return router

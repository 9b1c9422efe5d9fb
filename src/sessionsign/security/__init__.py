"""Constant-time hex codec, HMAC signing, and signed session payloads."""

from sessionsign.security import hex
from sessionsign.security.clock import Clock, FixedClock, OverridableClock, SystemClock
from sessionsign.security.crypto_util import CryptoUtil
from sessionsign.security.session_cookies import (
    SessionPayload,
    SessionTokenCodec,
    create_signed_string_for_session,
    get_cookie_timestep,
)

__all__ = [
    "hex",
    "Clock",
    "FixedClock",
    "OverridableClock",
    "SystemClock",
    "CryptoUtil",
    "SessionPayload",
    "SessionTokenCodec",
    "create_signed_string_for_session",
    "get_cookie_timestep",
]

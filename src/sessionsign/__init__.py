"""sessionsign — tamper-evident session identifiers for cookies.

Signed strings have the form ``{hex_hmac}-{base64_payload}``; session
payloads are a fixed 22-byte layout carrying the session id and a day
counter. See :mod:`sessionsign.security` for the primitives.
"""

from sessionsign.errors import (
    HexDecodeError,
    MalformedPayloadError,
    SecretTooShortError,
    SessionSignError,
)
from sessionsign.security import (
    CryptoUtil,
    SessionPayload,
    SessionTokenCodec,
    create_signed_string_for_session,
    get_cookie_timestep,
)

__all__ = [
    "CryptoUtil",
    "SessionPayload",
    "SessionTokenCodec",
    "create_signed_string_for_session",
    "get_cookie_timestep",
    "SessionSignError",
    "SecretTooShortError",
    "HexDecodeError",
    "MalformedPayloadError",
]

# Exception types raised by sessionsign.
#
# Signature verification never raises; it returns None. These exceptions
# cover configuration mistakes and malformed input handed to the codecs.

from __future__ import annotations

__all__ = [
    "SessionSignError",
    "SecretTooShortError",
    "HexDecodeError",
    "MalformedPayloadError",
]


class SessionSignError(Exception):
    """Base class for all sessionsign errors."""


class SecretTooShortError(SessionSignError, ValueError):
    """The signature secret is shorter than the required minimum."""

    def __init__(self, message: str = "SIGNATURE_SECRET is too short, aborting."):
        super().__init__(message)


class HexDecodeError(SessionSignError, ValueError):
    """Input to the hex decoder is not valid hexadecimal."""


class MalformedPayloadError(SessionSignError, ValueError):
    """A session payload does not have the expected layout."""

"""Signed session cookies with a coarse day-granular time window.

Payload layout (22 bytes, signed with :class:`CryptoUtil`)::

    [1 byte version=1][20 bytes session id, space padded][1 byte timestep]

The session id is UTF-8 encoded first and then padded with ``0x20`` or cut
to 20 bytes, the same as PHP's ``pack('CA20C', ...)``. Cutting happens on
the encoded bytes, so a multi-byte character at the boundary may be split.

The timestep is ``floor(unix_seconds / 86400) & 0xFF``: a day counter that
wraps every 256 days.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sessionsign.errors import MalformedPayloadError
from sessionsign.security.clock import Clock, OverridableClock, SystemClock
from sessionsign.security.crypto_util import CryptoUtil

logger = logging.getLogger(__name__)

__all__ = [
    "PAYLOAD_VERSION",
    "SESSION_ID_LENGTH",
    "PAYLOAD_LENGTH",
    "TIMESTEP_WINDOW",
    "SessionPayload",
    "SessionTokenCodec",
    "pad_session_id",
    "get_cookie_timestep",
    "create_signed_string_for_session",
]

PAYLOAD_VERSION = 1
SESSION_ID_LENGTH = 20
PAYLOAD_LENGTH = 1 + SESSION_ID_LENGTH + 1
TIMESTEP_WINDOW = 24 * 3600


def pad_session_id(session_id: str) -> bytes:
    """Encode *session_id* as UTF-8 and space-pad or truncate it to 20 bytes."""
    raw = session_id.encode("utf-8")
    if len(raw) < SESSION_ID_LENGTH:
        return raw + b"\x20" * (SESSION_ID_LENGTH - len(raw))
    return raw[:SESSION_ID_LENGTH]


def get_cookie_timestep(clock: Clock | None = None) -> int:
    """Return the current day counter (0-255) from *clock* or the real time."""
    now = (clock or SystemClock()).now()
    return int(now // TIMESTEP_WINDOW) & 0xFF


@dataclass(frozen=True)
class SessionPayload:
    """The decoded contents of a signed session cookie."""

    session_id_bytes: bytes
    timestep: int
    version: int = PAYLOAD_VERSION

    def __post_init__(self):
        if len(self.session_id_bytes) != SESSION_ID_LENGTH:
            raise MalformedPayloadError(
                f"Expected {SESSION_ID_LENGTH} session id bytes, got {len(self.session_id_bytes)}"
            )
        if not 0 <= self.version <= 0xFF:
            raise MalformedPayloadError(f"Version out of byte range: {self.version}")
        if not 0 <= self.timestep <= 0xFF:
            raise MalformedPayloadError(f"Timestep out of byte range: {self.timestep}")

    @property
    def session_id(self) -> str:
        # Padding is stripped; a character split by truncation is replaced.
        return self.session_id_bytes.rstrip(b"\x20").decode("utf-8", errors="replace")

    def pack(self) -> bytes:
        return (
            bytes([self.version])
            + self.session_id_bytes
            + bytes([self.timestep])
        )

    @classmethod
    def for_session(cls, session_id: str, timestep: int) -> SessionPayload:
        return cls(session_id_bytes=pad_session_id(session_id), timestep=timestep & 0xFF)

    @classmethod
    def unpack(cls, data: bytes) -> SessionPayload:
        """Parse a 22-byte payload.

        Raises:
            MalformedPayloadError: wrong length or unknown version byte.
        """
        if len(data) != PAYLOAD_LENGTH:
            raise MalformedPayloadError(
                f"Expected {PAYLOAD_LENGTH} payload bytes, got {len(data)}"
            )
        if data[0] != PAYLOAD_VERSION:
            raise MalformedPayloadError(f"Unsupported payload version: {data[0]}")
        return cls(
            session_id_bytes=bytes(data[1 : 1 + SESSION_ID_LENGTH]),
            timestep=data[-1],
            version=data[0],
        )


class SessionTokenCodec:
    """Builds and checks signed session strings.

    Parameters
    ----------
    secret : str | bytes
        Signature secret, at least 15 characters.
    clock : Clock, optional
        Time source for the timestep. Defaults to the real clock.
    """

    def __init__(self, secret: str | bytes, clock: Clock | None = None):
        self.crypto = CryptoUtil(secret)
        self.clock: Clock = clock or SystemClock()

    @classmethod
    def for_testing(cls, secret: str | bytes, timestamp: float) -> SessionTokenCodec:
        """Codec whose clock is pinned to *timestamp* (an :class:`OverridableClock`)."""
        return cls(secret, clock=OverridableClock(timestamp))

    def get_cookie_timestep(self) -> int:
        return get_cookie_timestep(self.clock)

    def issue(self, session_id: str) -> tuple[SessionPayload, str]:
        """Build the payload for *session_id* and sign it.

        The clock is read once, so the returned payload is exactly what the
        signed string carries.
        """
        payload = SessionPayload.for_session(session_id, self.get_cookie_timestep())
        return payload, self.crypto.create_signed_string(payload.pack())

    def create_signed_string_for_session(self, session_id: str) -> str:
        """Sign the packed payload for *session_id* at the current timestep."""
        return self.issue(session_id)[1]

    def verify_signed_string_for_session(
        self, signed_string: str, max_age_days: int | None = None
    ) -> SessionPayload | None:
        """Verify *signed_string* and unpack its session payload.

        Returns ``None`` when the signature is invalid, the payload layout is
        wrong, or (with *max_age_days*) the timestep is older than allowed.
        Age is measured modulo 256, so tokens more than 255 days old cannot be
        told apart from fresh ones.
        """
        value = self.crypto.verify_signed_string(signed_string)
        if value is None:
            return None

        try:
            payload = SessionPayload.unpack(value)
        except MalformedPayloadError as e:
            logger.debug("Rejected session payload: %s", e)
            return None

        if max_age_days is not None:
            age = (self.get_cookie_timestep() - payload.timestep) & 0xFF
            if age > max_age_days:
                logger.debug("Rejected session payload: %d days old", age)
                return None

        return payload


def create_signed_string_for_session(
    session_id: str, secret: str | bytes, clock: Clock | None = None
) -> str:
    """Create a signed string for *session_id* using *secret*."""
    return SessionTokenCodec(secret, clock=clock).create_signed_string_for_session(session_id)

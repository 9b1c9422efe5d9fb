"""HMAC-SHA256 signatures for opaque byte values.

Signed string format: ``{hex_hmac}-{base64_value}``

The hex part is the 64-character lowercase HMAC-SHA256 of the raw value,
keyed with the signature secret. The value travels alongside it in standard
base64 (``+/=`` alphabet), so a verifier needs nothing but the secret.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import logging

from sessionsign.errors import HexDecodeError, SecretTooShortError
from sessionsign.security import hex as hex_codec

logger = logging.getLogger(__name__)

__all__ = ["CryptoUtil", "MIN_SECRET_LENGTH"]

MIN_SECRET_LENGTH = 15


class CryptoUtil:
    """Creates and verifies signed strings with a shared secret.

    Instances hold nothing but the secret and are safe to share between
    threads.
    """

    def __init__(self, signature_secret: str | bytes):
        if len(signature_secret) < MIN_SECRET_LENGTH:
            raise SecretTooShortError()
        self._signature_secret = signature_secret

    def _key(self) -> bytes:
        secret = self._signature_secret
        return secret.encode("utf-8") if isinstance(secret, str) else bytes(secret)

    def get_signature(self, value: bytes) -> str:
        """Sign *value* and return the HMAC-SHA256 as a lowercase hex string.

        Raises:
            SecretTooShortError: if the secret no longer meets the minimum length.
        """
        if len(self._signature_secret) < MIN_SECRET_LENGTH:
            raise SecretTooShortError()

        return hmac.new(self._key(), bytes(value), hashlib.sha256).hexdigest()

    def create_signed_string(self, value: bytes) -> str:
        """Return ``signature-base64(value)`` for *value*."""
        encoded = base64.b64encode(bytes(value)).decode("ascii")
        return f"{self.get_signature(value)}-{encoded}"

    def verify_signed_string(self, signed_string: str) -> bytes | None:
        """Extract the value from a string made by :meth:`create_signed_string`.

        Returns the decoded value if the signature is valid, otherwise ``None``.

        The result MUST be checked with ``is not None``. A valid value can be
        empty (``b""``), which is falsy; treating it like a rejection, or a
        rejection like a value, is an authentication bug.
        """
        parts = signed_string.split("-", 1)
        if len(parts) != 2:
            logger.debug("Rejected signed string: missing separator")
            return None
        signature, value_b64 = parts

        try:
            value = base64.b64decode(value_b64, validate=True)
        except (binascii.Error, ValueError):
            logger.debug("Rejected signed string: value is not valid base64")
            return None

        try:
            claimed = hex_codec.decode(signature, strict_padding=True)
        except HexDecodeError:
            logger.debug("Rejected signed string: signature is not valid hex")
            return None

        expected = hex_codec.decode(self.get_signature(value))
        if not hmac.compare_digest(claimed, expected):
            logger.debug("Rejected signed string: signature mismatch")
            return None

        return value

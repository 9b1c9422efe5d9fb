"""sessionsign command line: sign and verify session cookies by hand.

Examples:
  sessionsign sign your-session-id
  sessionsign verify "$(sessionsign sign your-session-id)"
  sessionsign timestep --timestamp 1700000000
"""

from __future__ import annotations

import argparse
import logging
import sys
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version

from sessionsign.config import get_settings
from sessionsign.errors import MalformedPayloadError, SecretTooShortError
from sessionsign.logging_setup import setup_logging
from sessionsign.security import hex as hex_codec
from sessionsign.security.clock import Clock, FixedClock, SystemClock
from sessionsign.security.session_cookies import (
    SessionPayload,
    SessionTokenCodec,
    get_cookie_timestep,
)

logger = logging.getLogger(__name__)


def _package_version() -> str:
    try:
        return get_version("sessionsign")
    except PackageNotFoundError:
        return "unknown"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sessionsign",
        description="Create and verify HMAC-signed session cookie values",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split("Examples:", 1)[1] if __doc__ else None,
    )
    parser.add_argument(
        "--secret",
        help="Signature secret (default: SESSIONSIGN_SIGNATURE_SECRET)",
    )
    parser.add_argument(
        "--timestamp",
        type=float,
        help="Pin the clock to this Unix timestamp instead of the current time",
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    parser.add_argument("--version", "-v", action="version", version=f"%(prog)s {_package_version()}")

    sub = parser.add_subparsers(dest="command", required=True)
    sign = sub.add_parser("sign", help="Print the signed string for a session id")
    sign.add_argument("session_id")
    verify = sub.add_parser(
        "verify",
        help="Verify a signed string (exit 1: bad signature, 3: not a session payload)",
    )
    verify.add_argument("signed_string")
    sub.add_parser("timestep", help="Print the current cookie timestep")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = _build_parser().parse_args(argv)
    setup_logging(level=args.log_level)

    clock: Clock = FixedClock(args.timestamp) if args.timestamp is not None else SystemClock()

    if args.command == "timestep":
        print(get_cookie_timestep(clock))
        return 0

    secret = args.secret if args.secret is not None else get_settings().signature_secret
    try:
        codec = SessionTokenCodec(secret, clock=clock)
    except SecretTooShortError as e:
        logger.error("%s", e)
        return 2

    if args.command == "sign":
        print(codec.create_signed_string_for_session(args.session_id))
        return 0

    value = codec.crypto.verify_signed_string(args.signed_string)
    if value is None:
        print("Invalid signature!", file=sys.stderr)
        return 1

    try:
        payload = SessionPayload.unpack(value)
    except MalformedPayloadError as e:
        print(f"Valid signature, but not a session payload: {e}", file=sys.stderr)
        print(f"value: {hex_codec.encode(value)}")
        return 3

    print(f"session_id: {payload.session_id}")
    print(f"timestep:   {payload.timestep}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Hexadecimal encoding and decoding without cache-timing leaks.

Both directions compute every character with branch-free integer
arithmetic instead of table lookups, so run time and memory access do not
depend on the value of the data being converted. Keep it that way: a lookup
table or an ``if n < 10`` here reintroduces the side channel.
"""

from __future__ import annotations

from sessionsign.errors import HexDecodeError

__all__ = ["encode", "decode"]


def encode(bin_string: bytes | bytearray | memoryview) -> str:
    """Convert raw bytes into a lowercase hexadecimal string."""
    out = bytearray()
    for c in bytes(bin_string):
        b = c >> 4
        c_low = c & 0xF
        out.append(87 + b + (((b - 10) >> 8) & ~38))
        out.append(87 + c_low + (((c_low - 10) >> 8) & ~38))
    return out.decode("ascii")


def decode(encoded_string: str | bytes, strict_padding: bool = False) -> bytes:
    """Convert a hexadecimal string into raw bytes.

    Upper- and lowercase digits are accepted. An odd-length input raises
    :class:`HexDecodeError` when *strict_padding* is true; otherwise it is
    left-padded with a single ``'0'``.

    Raises:
        HexDecodeError: on any non-hex character, or odd length in strict mode.
    """
    if isinstance(encoded_string, str):
        try:
            raw = encoded_string.encode("ascii")
        except UnicodeEncodeError:
            raise HexDecodeError("Expected hexadecimal character") from None
    else:
        raw = bytes(encoded_string)

    if len(raw) % 2 != 0:
        if strict_padding:
            raise HexDecodeError("Expected an even number of hexadecimal characters")
        raw = b"0" + raw

    out = bytearray()
    c_acc = 0
    state = 0
    for c in raw:
        c_num = c ^ 48  # '0'
        c_num0 = (c_num - 10) >> 8
        c_alpha = (c & ~32) - 55
        c_alpha0 = ((c_alpha - 10) ^ (c_alpha - 16)) >> 8

        if (c_num0 | c_alpha0) == 0:
            raise HexDecodeError("Expected hexadecimal character")

        c_val = (c_num0 & c_num) | (c_alpha & c_alpha0)
        if state == 0:
            c_acc = c_val << 4
        else:
            out.append(c_acc | c_val)
        state ^= 1

    return bytes(out)

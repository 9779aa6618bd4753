# ookdecode/common/hexstr.py
from __future__ import annotations

import string

from ookdecode.core.errors import HexFormatError

_HEX_DIGITS = frozenset(string.hexdigits)


def parse_hex(text: str) -> bytes:
    """
    Convert a captured packet ("45 00 3f d1 ..." or "0x45003fd1...") to bytes.
    Whitespace is ignored.
    """
    s = "".join(str(text).split())
    if s[:2].lower() == "0x":
        s = s[2:]

    if not s:
        raise HexFormatError("Empty packet", hint="Expected pairs of hex digits, e.g. de7044af0a81cc")
    if len(s) % 2:
        raise HexFormatError(
            f"Odd number of hex digits ({len(s)})",
            details={"text": text},
        )
    bad = sorted({c for c in s if c not in _HEX_DIGITS})
    if bad:
        raise HexFormatError(
            f"Invalid hex characters: {''.join(bad)!r}",
            details={"text": text},
        )
    return bytes.fromhex(s)


def to_hex(buf: bytes) -> str:
    return bytes(buf).hex()

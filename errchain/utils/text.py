# errchain/utils/text.py
"""
Text helpers for bounded message storage.

Byte strings are carried as str using the surrogateescape convention
(as os.fsdecode does), so undecodable bytes survive a round trip:
- to_text() decodes them to lone surrogates U+DC80..U+DCFF
- to_utf8() turns those surrogates back into the original bytes
"""

from __future__ import annotations

from typing import Union


def to_text(s: Union[str, bytes]) -> str:
    """Decode bytes as UTF-8 (invalid bytes escaped); pass str through."""
    if isinstance(s, (bytes, bytearray)):
        return bytes(s).decode("utf-8", errors="surrogateescape")
    return s


def to_utf8(s: str) -> bytes:
    """
    Encode text as UTF-8, restoring escaped bytes.

    Lone surrogates outside the escape range are encoded as-is
    (surrogatepass) rather than rejected.
    """
    try:
        return s.encode("utf-8", errors="surrogateescape")
    except UnicodeEncodeError:
        return s.encode("utf-8", errors="surrogatepass")


def _utf8_width(ch: str) -> int:
    # Must agree with to_utf8()
    o = ord(ch)
    if o < 0x80:
        return 1
    if o < 0x800:
        return 2
    if 0xDC80 <= o <= 0xDCFF:
        return 1  # escaped raw byte
    if o < 0x10000:
        return 3
    return 4


def truncate_utf8(s: str, maxlen: int) -> str:
    """
    Bound ``s`` so that its UTF-8 encoding plus a terminator fits in ``maxlen`` bytes.

    The result is always a prefix of ``s``; a multi-byte character
    straddling the bound is dropped entirely.
    """
    limit = maxlen - 1
    if len(s) <= limit // 4:
        # Cannot exceed the limit even if every character takes four bytes
        return s

    used = 0
    # Every character takes at least one byte, so only the first `limit` matter
    for i, ch in enumerate(s[: limit + 1]):
        used += _utf8_width(ch)
        if used > limit:
            return s[:i]
    return s

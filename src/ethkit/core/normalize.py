"""Input normalisation: classify a raw string as hex or UTF-8 text.

Every function in this module is a **pure** transformation — no I/O,
no side effects, fully deterministic.

Auto-detection tries hex first.  A string made only of hex digits is
therefore always hashed as bytes, even when the user meant the literal
text: ``"123"`` becomes ``0x0123``, never the ASCII bytes of ``"123"``.
Downstream scripts rely on this precedence, so it is kept as is.
"""

from __future__ import annotations

import re

from ethkit.core.models import NormalizedPayload, PayloadKind
from ethkit.exceptions import ConflictingModeError, InvalidHexError

_HEX_PATTERN = re.compile(r"(0x)?([0-9A-Fa-f]*)")


def parse_hex(raw: str) -> bytes | None:
    """Decode *raw* as optionally ``0x``-prefixed hex.

    Odd-length input is left-padded with a single ``0`` nibble.  Returns
    ``None`` when *raw* is not hex at all.
    """
    match = _HEX_PATTERN.fullmatch(raw)
    if match is None:
        return None
    digits = match.group(2)
    if len(digits) % 2:
        digits = "0" + digits
    return bytes.fromhex(digits)


def encode_text(raw: str) -> bytes:
    """UTF-8 encode *raw*, passing undecodable argv bytes through."""
    return raw.encode("utf-8", errors="surrogateescape")


def normalize(
    raw: str,
    *,
    hex: bool = False,
    utf8: bool = False,
) -> NormalizedPayload:
    """Convert *raw* into a tagged byte payload.

    Parameters
    ----------
    raw:
        The string exactly as it arrived on the command line.
    hex:
        Force the hex interpretation.
    utf8:
        Force the UTF-8 interpretation.

    Raises
    ------
    ConflictingModeError
        When both *hex* and *utf8* are set.
    InvalidHexError
        When *hex* is set and *raw* is not a hex string.
    """
    if hex and utf8:
        raise ConflictingModeError(
            "cannot use --hex and --utf8 together",
            hint="Pick one interpretation, or neither to auto-detect.",
        )

    if utf8:
        return NormalizedPayload(data=encode_text(raw), kind=PayloadKind.UTF8)

    data = parse_hex(raw)
    if data is not None:
        return NormalizedPayload(data=data, kind=PayloadKind.HEX)

    if hex:
        raise InvalidHexError(f"invalid hex data: {raw!r}")

    return NormalizedPayload(data=encode_text(raw), kind=PayloadKind.UTF8)

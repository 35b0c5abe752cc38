"""Domain models for ethkit.

Value objects are **frozen** dataclasses with no behaviour beyond data
access.  :class:`ParsedOptions` is the one deliberate exception: its
``args`` list is consumed front-first by the command resolver.
"""

from __future__ import annotations

import enum
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any


# ---------------------------------------------------------------------------
# Normalised input
# ---------------------------------------------------------------------------

class PayloadKind(str, enum.Enum):
    """Which interpretation produced a :class:`NormalizedPayload`."""

    HEX = "hex"
    UTF8 = "utf8"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class NormalizedPayload:
    """A raw command-line string converted to bytes.

    When ``kind`` is :attr:`PayloadKind.HEX` the bytes came from a hex
    string that was padded to an even number of digits.
    """

    data: bytes
    kind: PayloadKind

    @property
    def display(self) -> str:
        """Human-readable form used in command output."""
        if self.kind is PayloadKind.HEX:
            return "0x" + self.data.hex()
        return self.data.decode("utf-8", errors="replace")


# ---------------------------------------------------------------------------
# Parsed command line
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class ParsedOptions:
    """Flags and positional arguments produced by the option parser.

    ``provider`` and ``accounts`` are borrowed from whoever built them;
    they are never copied.
    """

    options: Mapping[str, Any]
    """Flag name → value (``hex``, ``utf8``, ``sandbox``, ``rpc`` …)."""

    args: list[str] = field(default_factory=list)
    """Positional arguments, consumed front-first."""

    provider: Any = None
    """Live JSON-RPC provider, or ``None`` before a session needs one."""

    accounts: Sequence[Any] = ()
    """Signing accounts loaded from ``--account``."""

    def flag(self, name: str) -> bool:
        return bool(self.options.get(name, False))


Runnable = Callable[[], int]
"""A deferred, zero-argument unit of work returning an exit code."""


# ---------------------------------------------------------------------------
# Sandbox session environment
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class SessionContext:
    """Chain objects bound into an interactive session."""

    label: str
    """Prompt label: ``sandbox``, ``testnet`` or ``mainnet``."""

    web3: Any
    """An ``AsyncWeb3`` instance wired to :attr:`provider`."""

    provider: Any
    accounts: tuple[Any, ...]

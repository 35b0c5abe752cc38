"""Infrastructure: thin wrappers over the hashing and encoding libraries.

Keccak-256, hex and address helpers come from eth-utils, ENS name-hashing
from the ``ens`` package shipped with web3, contract address derivation
from ``rlp``.  Library exceptions that describe a user mistake are
re-raised as :class:`~ethkit.exceptions.EthkitError` subclasses.

Rules
-----
* No imports from ``cli``.
* No user-facing output.
"""

from __future__ import annotations

import hashlib
import secrets
from decimal import Decimal

import rlp
from ens import ENS
from ens.exceptions import InvalidName
from eth_utils import from_wei, keccak, to_bytes, to_checksum_address, to_hex, to_int, to_wei

from ethkit.exceptions import InvalidNameError, InvalidUtf8Error

SELECTOR_SIZE: int = 4
"""Bytes of the signature hash that select a contract function."""


# ---------------------------------------------------------------------------
# Hashing
# ---------------------------------------------------------------------------

def keccak256(data: bytes) -> str:
    """Keccak-256 of *data* as ``0x``-prefixed hex."""
    return to_hex(keccak(data))


def sha256(data: bytes) -> str:
    """SHA2-256 of *data* as ``0x``-prefixed hex."""
    return "0x" + hashlib.sha256(data).hexdigest()


def namehash(name: str) -> str:
    """ENS name-hash of *name* as ``0x``-prefixed hex."""
    try:
        return to_hex(ENS.namehash(name))
    except InvalidName as exc:
        raise InvalidNameError(f"invalid ENS name: {name!r}", hint=str(exc)) from exc


def selector(canonical: str) -> str:
    """First four bytes of the Keccak-256 of a canonical signature."""
    return to_hex(keccak(text=canonical)[:SELECTOR_SIZE])


def identifier(text: str) -> str:
    """Keccak-256 of the UTF-8 bytes of *text* (event topics, ids)."""
    return to_hex(keccak(text=text))


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------

def hexlify(data: bytes | int | str) -> str:
    """``0x``-prefixed hex for bytes, integers or ``0x`` strings."""
    if isinstance(data, str):
        return to_hex(hexstr=data)
    return to_hex(data)


def to_utf8_bytes(text: str) -> bytes:
    return text.encode("utf-8")


def to_utf8_string(data: bytes | str) -> str:
    """Decode *data* (bytes or a ``0x`` hex string) as UTF-8."""
    raw = to_bytes(hexstr=data) if isinstance(data, str) else bytes(data)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidUtf8Error(
            f"invalid UTF-8 data: {to_hex(raw)}",
            hint=f"{exc.reason} at byte {exc.start}",
        ) from exc


def random_bytes(length: int) -> bytes:
    return secrets.token_bytes(length)


# ---------------------------------------------------------------------------
# Numbers and addresses
# ---------------------------------------------------------------------------

def big_number(value: int | str | bytes) -> int:
    """Coerce decimal strings, hex strings or bytes to an integer."""
    if isinstance(value, str):
        if value.lower().startswith(("0x", "-0x")):
            return to_int(hexstr=value)
        return int(value)
    return to_int(value)


def format_ether(wei: int) -> str:
    """Format a wei amount as a decimal ether string."""
    ether = from_wei(wei, "ether")
    text = format(Decimal(ether).normalize(), "f")
    return text if "." in text else text + ".0"


def parse_ether(ether: str | int | Decimal) -> int:
    """Parse a decimal ether amount into wei."""
    return to_wei(Decimal(str(ether)), "ether")


def get_address(address: str) -> str:
    """EIP-55 checksum form of *address*."""
    return to_checksum_address(address)


def get_contract_address(sender: str, nonce: int) -> str:
    """Address of the contract created by *sender* at *nonce*."""
    encoded = rlp.encode([to_bytes(hexstr=sender), nonce])
    return to_checksum_address(keccak(encoded)[12:])

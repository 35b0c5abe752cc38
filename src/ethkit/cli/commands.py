"""Command resolution: sub-command name + arguments → runnable.

:func:`resolve` validates everything it can *before* returning, so a
command that fails to resolve never has partial side effects.  The
returned runnable prints exactly one line (or starts the sandbox) and
returns an exit code.
"""

from __future__ import annotations

import functools
import os
from collections.abc import Callable

from ethkit.cli import exit_codes
from ethkit.cli.console import console
from ethkit.core.models import ParsedOptions, Runnable
from ethkit.core.normalize import normalize, parse_hex
from ethkit.core.signature import canonical_signature
from ethkit.exceptions import MissingArgumentError, UnexpectedArgumentError, UnknownCommandError
from ethkit.infra import primitives


# ---------------------------------------------------------------------------
# Argument helpers
# ---------------------------------------------------------------------------

def _take(parsed: ParsedOptions, command: str, metavar: str) -> str:
    """Pop the next positional argument or fail with a usage error."""
    if not parsed.args:
        raise MissingArgumentError(f"{command} requires {metavar}")
    return parsed.args.pop(0)


def _finish(parsed: ParsedOptions, command: str) -> None:
    if parsed.args:
        extra = " ".join(parsed.args)
        raise UnexpectedArgumentError(f"unexpected argument(s) for {command}: {extra}")


def _emit(line: str) -> int:
    console.echo(line)
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Resolvers
# ---------------------------------------------------------------------------

def _digest_command(
    label: str,
    digest: Callable[[bytes], str],
) -> Callable[[str, ParsedOptions], Runnable]:
    def resolver(command: str, parsed: ParsedOptions) -> Runnable:
        raw = _take(parsed, command, "DATA")
        _finish(parsed, command)
        payload = normalize(raw, hex=parsed.flag("hex"), utf8=parsed.flag("utf8"))
        line = f"{label}({payload.kind}:{payload.display}) = {digest(payload.data)}"
        return functools.partial(_emit, line)

    return resolver


def _namehash(command: str, parsed: ParsedOptions) -> Runnable:
    name = _take(parsed, command, "NAME")
    _finish(parsed, command)

    def run() -> int:
        return _emit(f"NAMEHASH({name}) = {primitives.namehash(name)}")

    return run


def _sighash(command: str, parsed: ParsedOptions) -> Runnable:
    signature = canonical_signature(_take(parsed, command, "SIGNATURE"))
    _finish(parsed, command)
    return functools.partial(_emit, primitives.selector(signature))


def _utf8_bytes(command: str, parsed: ParsedOptions) -> Runnable:
    text = _take(parsed, command, "TEXT")
    _finish(parsed, command)
    return functools.partial(_emit, primitives.hexlify(text.encode("utf-8", errors="surrogateescape")))


def _utf8_string(command: str, parsed: ParsedOptions) -> Runnable:
    raw = _take(parsed, command, "DATA")
    _finish(parsed, command)
    # Not hex: decode the argument's raw bytes as the shell delivered them.
    data = parse_hex(raw)
    if data is None:
        data = os.fsencode(raw)

    def run() -> int:
        return _emit(primitives.to_utf8_string(data))

    return run


def _sandbox(command: str, parsed: ParsedOptions) -> Runnable:
    _finish(parsed, command)
    from ethkit.cli.sandbox import run_sandbox

    return functools.partial(run_sandbox, parsed)


COMMANDS: dict[str, Callable[[str, ParsedOptions], Runnable]] = {
    "keccak": _digest_command("KECCACK256", primitives.keccak256),
    "sha256": _digest_command("SHA2-256", primitives.sha256),
    "namehash": _namehash,
    "sighash": _sighash,
    "utf8-bytes": _utf8_bytes,
    "utf8-string": _utf8_string,
    "sandbox": _sandbox,
}
"""Recognised command names, in the order shown by ``--help``."""


def resolve(name: str, parsed: ParsedOptions) -> Runnable:
    """Map *name* and the remaining ``parsed.args`` to a runnable.

    Raises
    ------
    UnknownCommandError
        When *name* is not a recognised command.
    MissingArgumentError, UnexpectedArgumentError
        When the argument count does not match the command.
    ConflictingModeError, InvalidHexError, InvalidSignatureError
        When the argument itself is malformed.
    """
    resolver = COMMANDS.get(name)
    if resolver is None:
        raise UnknownCommandError(f"unknown command: {name}")
    return resolver(name, parsed)

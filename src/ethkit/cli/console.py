"""CLI console helpers with optional Rich support.

Diagnostics (errors, usage, hints) are rendered on stderr through Rich
when it is importable.  Command *results* are written to stdout as plain
text via :meth:`_ConsoleProxy.echo` so they stay pipe-friendly and are
never mangled by markup parsing.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``--help``, ``--version``) remain
functional even when Rich is not installed.
"""

from __future__ import annotations

import sys
import traceback
from typing import Any

from ethkit.exceptions import EthkitError


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` class or raise ``EthkitError``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise EthkitError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Console


def get_rich_console() -> Any:
    """Create a Rich console instance targeting stderr."""
    console_class = _load_rich_console_class()
    return console_class(stderr=True)


class _ConsoleProxy:
    """Minimal ``print``-compatible proxy with Rich fallback."""

    def print(self, *objects: object, markup: bool = True) -> None:
        """Render with Rich when available, else plain stderr print."""
        try:
            rich_console = get_rich_console()
        except EthkitError:
            print(*objects, file=sys.stderr)
            return
        rich_console.print(*objects, markup=markup)

    def print_exception(self) -> None:
        """Render the exception currently being handled, in full."""
        try:
            rich_console = get_rich_console()
        except EthkitError:
            traceback.print_exc(file=sys.stderr)
            return
        rich_console.print_exception()

    def echo(self, text: str = "") -> None:
        """Write one plain line of command output to stdout."""
        sys.stdout.write(text + "\n")
        sys.stdout.flush()


console = _ConsoleProxy()


def escape(text: str) -> str:
    """Escape Rich markup in *text*; identity when Rich is missing."""
    try:
        from rich.markup import escape as rich_escape
    except ModuleNotFoundError:
        return text
    return rich_escape(text)

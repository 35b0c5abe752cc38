"""CLI application entry point and command routing for ethkit.

This module is the **sole error boundary** for the entire application.
It catches :class:`~ethkit.exceptions.EthkitError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering either a short message or a
full traceback and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — options come from
  :mod:`ethkit.cli.options`, commands from :mod:`ethkit.cli.commands`.
* Errors raised while the command line is being interpreted are
  preceded by the usage text; errors raised while a command runs are not.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import logging
import sys

from ethkit.cli import exit_codes
from ethkit.cli.console import console, escape
from ethkit.cli.options import DEFAULT_COMMAND, format_usage, parse_options
from ethkit.exceptions import EthkitError, UsageError
from ethkit.version import __version__


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

def _configure_logging(verbose: bool) -> None:
    """Route log records to stderr, through Rich when it is installed."""
    level = logging.DEBUG if verbose else logging.WARNING
    try:
        from rich.logging import RichHandler
    except ModuleNotFoundError:
        logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
        return
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(show_path=False, rich_tracebacks=True)],
    )


# ---------------------------------------------------------------------------
# Usage rendering
# ---------------------------------------------------------------------------

def _render_usage(exc: Exception) -> None:
    """Print the usage text; to stdout for ``--help``, else stderr."""
    if not isinstance(exc, UsageError) or exc.message:
        console.print(format_usage(), markup=False)
    else:
        console.echo(format_usage())


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the ethkit CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.

    Raises
    ------
    EthkitError
        Message-only errors, after the usage text has been printed when
        the command line itself was at fault.  ``--help`` raises a
        :class:`UsageError` with an empty message.  Other exceptions
        raised at that stage also get the usage text, then propagate to
        the diagnostic handler in :func:`cli`.
    """
    try:
        parsed = parse_options(argv)
        _configure_logging(parsed.flag("verbose"))

        if parsed.flag("help"):
            raise UsageError()

        if parsed.flag("version"):
            console.echo(f"ethkit {__version__}")
            return exit_codes.SUCCESS

        from ethkit.cli.commands import resolve

        name = parsed.args.pop(0) if parsed.args else DEFAULT_COMMAND
        runnable = resolve(name, parsed)
    except Exception as exc:
        _render_usage(exc)
        raise

    return runnable()


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    Message-only errors print just their message; anything else prints a
    full traceback.  Both are bracketed by blank lines.
    """
    try:
        code = main()
        sys.exit(code)
    except EthkitError as exc:
        if not exc.message:
            sys.exit(exit_codes.SUCCESS)
        console.print()
        console.print(f"[bold red]Error:[/bold red] {escape(exc.message)}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")
        console.print()
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception:  # noqa: BLE001
        console.print()
        console.print_exception()
        console.print()
        sys.exit(exit_codes.UNEXPECTED_ERROR)

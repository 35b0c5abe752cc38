"""``ethkit sandbox`` — interactive Python shell bound to a chain.

The shell is a :class:`code.InteractiveConsole` with three additions:

* **Awaitable results.**  Chain calls made through ``AsyncWeb3`` return
  coroutines.  When an evaluated expression yields an awaitable it is run
  on a background :class:`~ethkit.infra.chain.EventLoopThread` and the
  console waits for it.  If it has not settled after
  :data:`PENDING_ECHO_DELAY` seconds the pending future is echoed once,
  and the eventual value is then framed with ``Resolved:`` or
  ``Rejected:``.  Results that settle sooner are shown without framing.
* **Result slot.**  The most recent result (pending, resolved or the
  rejection) is stored under ``_`` in the session namespace.  There is no
  history; each evaluation overwrites it.
* **Meta-commands.**  ``.ls``, ``.cat`` and ``.help`` are handled before
  compilation.  They discard any buffered partial input first, so the
  next prompt always starts a fresh statement.
"""

from __future__ import annotations

import code
import concurrent.futures
import inspect
import os
import sys
import threading
import traceback
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from ethkit.cli import exit_codes
from ethkit.cli.console import console
from ethkit.core.models import ParsedOptions, SessionContext
from ethkit.core.protocols import ContextBuilder, LoopRunner
from ethkit.version import __version__

PENDING_ECHO_DELAY: float = 0.5
"""Seconds before a still-pending result is echoed."""

RESULT_SLOT: str = "_"
"""Namespace name holding the most recent result."""

_PROMPTS = ("ps1", "ps2")


def is_pending(value: object) -> bool:
    """Whether *value* must be awaited before it can be displayed."""
    return inspect.isawaitable(value) or isinstance(value, concurrent.futures.Future)


# ---------------------------------------------------------------------------
# Pending echo timer
# ---------------------------------------------------------------------------

class PendingEcho:
    """One-shot, cancellable timer that echoes a still-pending result.

    :meth:`disarm` may be called any number of times and from any thread;
    the echo is written at most once, and never after a disarm.
    """

    def __init__(
        self,
        pending: object,
        write: Callable[[str], None],
        delay: float = PENDING_ECHO_DELAY,
    ) -> None:
        self._pending = pending
        self._write = write
        self._lock = threading.Lock()
        self._armed = False
        self._timer = threading.Timer(delay, self._fire)
        self._timer.daemon = True
        self.fired = False

    def arm(self) -> None:
        with self._lock:
            self._armed = True
        self._timer.start()

    def _fire(self) -> None:
        with self._lock:
            if not self._armed:
                return
            self._armed = False
            self.fired = True
            self._write(repr(self._pending))

    def disarm(self) -> bool:
        """Stop the timer; return whether the echo was written."""
        with self._lock:
            self._armed = False
        self._timer.cancel()
        return self.fired


# ---------------------------------------------------------------------------
# Console
# ---------------------------------------------------------------------------

class SandboxConsole(code.InteractiveConsole):
    """Interactive console that awaits awaitable results.

    Parameters
    ----------
    namespace:
        Session bindings; becomes the console's globals.
    runner:
        Loop runner used to await pending results.
    echo_delay:
        Override of :data:`PENDING_ECHO_DELAY` (tests only).
    """

    def __init__(
        self,
        namespace: dict[str, Any],
        runner: LoopRunner,
        *,
        echo_delay: float = PENDING_ECHO_DELAY,
    ) -> None:
        super().__init__(locals=namespace, filename="<sandbox>")
        self._runner = runner
        self._echo_delay = echo_delay
        self._results: list[object] = []
        self.meta_commands: dict[str, tuple[Callable[[str], None], str]] = {
            "ls": (self._ls, "list directory entries (default: .)"),
            "cat": (self._cat, "print the contents of a file"),
            "help": (self._help, "show these commands"),
        }

    # -- output -------------------------------------------------------------

    def write_out(self, text: str) -> None:
        sys.stdout.write(text + "\n")
        sys.stdout.flush()

    def _display(self, value: object) -> None:
        self.locals[RESULT_SLOT] = value
        self.write_out(repr(value))

    def _display_error(self, exc: BaseException) -> None:
        self.locals[RESULT_SLOT] = exc
        self.write("".join(traceback.format_exception_only(type(exc), exc)))

    # -- evaluation ---------------------------------------------------------

    def _capture(self, value: object) -> None:
        if value is not None:
            self._results.append(value)

    def runcode(self, code_obj: Any) -> None:
        """Execute *code_obj*, then display what it produced.

        Expression values are captured via ``sys.displayhook`` instead of
        being printed directly, so awaitables can be settled first.
        """
        self._results = []
        previous_hook = sys.displayhook
        sys.displayhook = self._capture
        try:
            super().runcode(code_obj)
        finally:
            sys.displayhook = previous_hook

        results, self._results = self._results, []
        for value in results:
            if is_pending(value):
                self._settle(value)
            else:
                self._display(value)

    def _settle(self, pending: object) -> None:
        """Wait for *pending*, framing the outcome if it was slow."""
        self.locals[RESULT_SLOT] = pending
        future = self._runner.submit(pending)  # type: ignore[arg-type]
        echo = PendingEcho(future, self.write_out, self._echo_delay)
        echo.arm()
        try:
            value = future.result()
        except Exception as exc:  # noqa: BLE001
            if echo.disarm():
                self.write_out("Rejected:")
            self._display_error(exc)
            return
        except BaseException:
            echo.disarm()
            raise
        if echo.disarm():
            self.write_out("Resolved:")
        self._display(value)

    # -- meta-commands ------------------------------------------------------

    def push(self, line: str, *args: Any, **kwargs: Any) -> bool:
        stripped = line.strip()
        if stripped.startswith("."):
            name, _, argument = stripped[1:].partition(" ")
            entry = self.meta_commands.get(name)
            if entry is not None:
                self.resetbuffer()
                handler = entry[0]
                handler(argument.strip())
                return False
        return super().push(line, *args, **kwargs)

    def _ls(self, argument: str) -> None:
        path = argument or "."
        try:
            entries = sorted(os.listdir(path))
        except OSError as exc:
            self.write(f"{exc}\n")
            return
        for entry in entries:
            self.write_out(f"  {entry}")

    def _cat(self, argument: str) -> None:
        if not argument:
            return
        try:
            data = Path(argument).read_bytes()
        except OSError as exc:
            self.write(f"{exc}\n")
            return
        binary = getattr(sys.stdout, "buffer", None)
        if binary is None:
            sys.stdout.write(data.decode("utf-8", errors="replace"))
            sys.stdout.flush()
            return
        sys.stdout.flush()
        binary.write(data)
        binary.flush()

    def _help(self, argument: str) -> None:
        for name, (_, description) in self.meta_commands.items():
            self.write_out(f"  .{name:<6} {description}")


# ---------------------------------------------------------------------------
# Session namespace
# ---------------------------------------------------------------------------

def build_namespace(context: SessionContext) -> dict[str, Any]:
    """Bindings available at the sandbox prompt."""
    import eth_abi
    import eth_utils
    import web3
    from eth_account import Account
    from web3.contract import AsyncContract

    from ethkit.infra import primitives

    return {
        "__name__": "__sandbox__",
        "w3": context.web3,
        "provider": context.provider,
        "accounts": list(context.accounts),
        "web3": web3,
        "providers": web3.providers,
        "utils": eth_utils,
        "Contract": AsyncContract,
        "abi": eth_abi,
        "Wallet": Account,
        "big_number": primitives.big_number,
        "format_ether": primitives.format_ether,
        "get_address": primitives.get_address,
        "get_contract_address": primitives.get_contract_address,
        "hexlify": primitives.hexlify,
        "id": primitives.identifier,
        "keccak256": primitives.keccak256,
        "namehash": primitives.namehash,
        "parse_ether": primitives.parse_ether,
        "random_bytes": primitives.random_bytes,
        "sha256": primitives.sha256,
        "to_utf8_bytes": primitives.to_utf8_bytes,
        "to_utf8_string": primitives.to_utf8_string,
    }


def _banner(context: SessionContext, namespace: Mapping[str, Any]) -> str:
    names = ", ".join(sorted(name for name in namespace if not name.startswith("_")))
    return (
        f"ethkit {__version__} sandbox ({context.label}, {len(context.accounts)} accounts)\n"
        f"Bound names: {names}\n"
        "Awaitable results are awaited for you. Type .help for shell commands."
    )


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_sandbox(
    parsed: ParsedOptions,
    builder: ContextBuilder | None = None,
) -> int:
    """Run an interactive session until end of input.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` once the console exits.
    """
    from ethkit.infra.chain import EventLoopThread, Web3ContextBuilder, disconnect_provider

    builder = builder or Web3ContextBuilder()
    with EventLoopThread() as runner:
        if parsed.flag("sandbox"):
            context = builder.build_sandbox(runner)
        else:
            context = builder.build_live(parsed.provider, parsed.accounts, runner)

        namespace = build_namespace(context)
        session = SandboxConsole(namespace, runner)

        saved_prompts = {name: getattr(sys, name) for name in _PROMPTS if hasattr(sys, name)}
        sys.ps1, sys.ps2 = f"{context.label}> ", "... "
        try:
            session.interact(banner=_banner(context, namespace), exitmsg="")
        except SystemExit:
            # exit() / quit() end the session like end of input.
            pass
        finally:
            for name in _PROMPTS:
                if name in saved_prompts:
                    setattr(sys, name, saved_prompts[name])
                else:
                    delattr(sys, name)
            disconnect_provider(context.provider, runner)

    console.echo()
    return exit_codes.SUCCESS

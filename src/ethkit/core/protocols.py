"""Protocols (interfaces) consumed by the core and CLI layers.

These define the contracts that infrastructure adapters must satisfy.
Callers depend ONLY on these protocols — never on concrete
implementations — so tests can substitute plain fakes.
"""

from __future__ import annotations

from collections.abc import Awaitable, Sequence
from concurrent.futures import Future
from typing import Any, Protocol, TypeVar

from ethkit.core.models import SessionContext

T = TypeVar("T")


class LoopRunner(Protocol):
    """Something that can run awaitables on an event loop it owns."""

    def submit(self, awaitable: Awaitable[T] | Future[T]) -> Future[T]:
        """Schedule *awaitable* and return a thread-safe future for it."""
        ...  # pragma: no cover


class ContextBuilder(Protocol):
    """Contract for building the chain objects a sandbox session uses.

    Implementations must map connection failures to
    :class:`~ethkit.exceptions.ProviderConnectionError`.
    """

    def build_sandbox(self, runner: LoopRunner) -> SessionContext:
        """Create an ephemeral in-memory chain with pre-funded accounts."""
        ...  # pragma: no cover

    def build_live(
        self,
        provider: Any,
        accounts: Sequence[Any],
        runner: LoopRunner,
    ) -> SessionContext:
        """Wrap an externally supplied provider and accounts."""
        ...  # pragma: no cover

"""Infrastructure: chain contexts for the sandbox shell.

Two flavours are supported:

* an **ephemeral** in-memory chain (eth-tester + py-evm behind
  ``AsyncEthereumTesterProvider``) with pre-funded accounts, and
* a **live** JSON-RPC endpoint reached through ``AsyncHTTPProvider``.

Both hand back an ``AsyncWeb3`` instance, so every chain call typed into
the shell returns a coroutine that the shell runs on
:class:`EventLoopThread`.

Rules
-----
* No imports from ``cli``.
* No user-facing output — only module logging.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Awaitable, Sequence
from concurrent.futures import Future
from typing import Any, TypeVar

from eth_account import Account
from web3 import AsyncHTTPProvider, AsyncWeb3
from web3.exceptions import Web3Exception

from ethkit.core.models import SessionContext
from ethkit.core.protocols import LoopRunner
from ethkit.exceptions import InvalidAccountError, ProviderConnectionError

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAINNET_CHAIN_ID: int = 1


# ---------------------------------------------------------------------------
# Event loop
# ---------------------------------------------------------------------------

async def _resolve(awaitable: Awaitable[T]) -> T:
    return await awaitable


class EventLoopThread:
    """An asyncio event loop running forever in a daemon thread.

    The interactive console blocks in its own thread while awaitables it
    submits run here, so one loop (and one set of HTTP sessions) serves
    the whole session.
    """

    def __init__(self, name: str = "ethkit-loop") -> None:
        self._loop = asyncio.new_event_loop()
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)

    def __enter__(self) -> EventLoopThread:
        return self.start()

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop

    def start(self) -> EventLoopThread:
        self._thread.start()
        logger.debug("event loop thread %s started", self._thread.name)
        return self

    def _run(self) -> None:
        asyncio.set_event_loop(self._loop)
        self._loop.run_forever()

    def submit(self, awaitable: Awaitable[T] | Future[T]) -> Future[T]:
        """Schedule *awaitable* on the loop; thread-safe."""
        if isinstance(awaitable, Future):
            return awaitable
        return asyncio.run_coroutine_threadsafe(_resolve(awaitable), self._loop)

    def run(self, awaitable: Awaitable[T]) -> T:
        """Block the calling thread until *awaitable* settles."""
        return self.submit(awaitable).result()

    def stop(self) -> None:
        if self._loop.is_closed():
            return
        if self._thread.is_alive():
            self._loop.call_soon_threadsafe(self._loop.stop)
            self._thread.join()
        self._loop.close()
        logger.debug("event loop thread %s stopped", self._thread.name)


# ---------------------------------------------------------------------------
# Provider and account construction (used by the option parser)
# ---------------------------------------------------------------------------

def http_provider(url: str) -> AsyncHTTPProvider:
    """Create a live provider; no request is made until first use."""
    logger.debug("using JSON-RPC endpoint %s", url)
    return AsyncHTTPProvider(url)


def disconnect_provider(provider: Any, runner: LoopRunner) -> None:
    """Close the HTTP session of a live provider on the loop that opened it.

    Must run before the loop thread stops.  Anything that is not an
    ``AsyncHTTPProvider`` holds no session and is left alone.
    """
    if not isinstance(provider, AsyncHTTPProvider):
        return
    runner.submit(provider.disconnect()).result()
    logger.debug("disconnected from %s", provider.endpoint_uri)


def load_accounts(private_keys: Sequence[str]) -> tuple[Any, ...]:
    """Build signing accounts from hex private keys.

    Raises
    ------
    InvalidAccountError
        When a key is not a valid secp256k1 private key.
    """
    accounts = []
    for index, key in enumerate(private_keys):
        try:
            accounts.append(Account.from_key(key))
        except Exception as exc:  # noqa: BLE001
            raise InvalidAccountError(
                f"invalid private key for --account #{index + 1}",
                hint="Expected 32 bytes of hex, optionally 0x-prefixed.",
            ) from exc
    return tuple(accounts)


# ---------------------------------------------------------------------------
# Session contexts
# ---------------------------------------------------------------------------

class Web3ContextBuilder:
    """Builds :class:`SessionContext` records on top of ``AsyncWeb3``."""

    def build_sandbox(self, runner: LoopRunner) -> SessionContext:
        # Imported lazily: eth-tester and py-evm are only needed here.
        from web3.providers.eth_tester import AsyncEthereumTesterProvider

        provider = AsyncEthereumTesterProvider()
        w3 = AsyncWeb3(provider)
        accounts = runner.submit(w3.eth.accounts).result()
        logger.debug("sandbox chain ready with %d funded accounts", len(accounts))
        return SessionContext(
            label="sandbox",
            web3=w3,
            provider=provider,
            accounts=tuple(accounts),
        )

    def build_live(
        self,
        provider: Any,
        accounts: Sequence[Any],
        runner: LoopRunner,
    ) -> SessionContext:
        w3 = AsyncWeb3(provider)
        try:
            chain_id = runner.submit(w3.eth.chain_id).result()
        except (OSError, asyncio.TimeoutError, Web3Exception) as exc:
            endpoint = getattr(provider, "endpoint_uri", provider)
            raise ProviderConnectionError(
                f"could not reach JSON-RPC endpoint {endpoint}",
                hint="Pass --rpc URL, set ETHKIT_RPC_URL, or use --sandbox.",
            ) from exc
        label = "mainnet" if chain_id == MAINNET_CHAIN_ID else "testnet"
        logger.debug("connected to chain id %s (%s)", chain_id, label)
        return SessionContext(
            label=label,
            web3=w3,
            provider=provider,
            accounts=tuple(accounts),
        )

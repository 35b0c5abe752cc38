"""Infrastructure layer — external library integration.

This layer wraps all interaction with web3.py, eth-utils, ens and the
event loop.  Raw third-party exceptions that describe a user mistake are
caught here and re-raised as an :class:`~ethkit.exceptions.EthkitError`
subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the CLI layer.
"""

from ethkit.infra.chain import EventLoopThread, Web3ContextBuilder, http_provider, load_accounts

__all__: list[str] = [
    "EventLoopThread",
    "Web3ContextBuilder",
    "http_provider",
    "load_accounts",
]

"""ethkit — Ethereum hashing helpers and an interactive sandbox shell.

Built on web3.py and the eth-utils family with a strict layered
architecture.
"""

from ethkit.version import __version__

__all__: list[str] = ["__version__"]

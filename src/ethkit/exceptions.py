"""Custom exception hierarchy for ethkit.

Every exception defined here is *message-only*: the CLI error boundary
renders its message (plus usage text and an optional hint) and never a
stack trace.  Anything that is **not** an :class:`EthkitError` is treated
as an internal failure and rendered with a full traceback.

Raw third-party exceptions (eth-utils, ens, web3) must be caught in the
infrastructure layer and re-raised as a typed subclass defined here when
they describe a user mistake.

Hierarchy
---------
EthkitError
├── UsageError
│   ├── UnknownCommandError
│   ├── MissingArgumentError
│   └── UnexpectedArgumentError
├── ConflictingModeError
├── InvalidHexError
├── InvalidUtf8Error
├── InvalidSignatureError
├── InvalidNameError
├── InvalidAccountError
└── ProviderConnectionError
"""

from __future__ import annotations


class EthkitError(Exception):
    """Base exception for all user-facing ethkit errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str = "", *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""

    @property
    def message(self) -> str:
        return str(self)


# --- Command line ----------------------------------------------------------

class UsageError(EthkitError):
    """Raised when the command line cannot be honoured.

    An empty message means "just show the usage text" (``--help``).
    """


class UnknownCommandError(UsageError):
    """Raised when the requested sub-command does not exist."""


class MissingArgumentError(UsageError):
    """Raised when a sub-command is missing a positional argument."""


class UnexpectedArgumentError(UsageError):
    """Raised when a sub-command is given more arguments than it takes."""


# --- Input normalisation ---------------------------------------------------

class ConflictingModeError(EthkitError):
    """Raised when both ``--hex`` and ``--utf8`` are requested."""


class InvalidHexError(EthkitError):
    """Raised when input forced to hex is not a hex string."""


class InvalidUtf8Error(EthkitError):
    """Raised when a byte payload is not valid UTF-8."""


# --- Hashing helpers -------------------------------------------------------

class InvalidSignatureError(EthkitError):
    """Raised when a function signature is not ``name(type, ...)``."""


class InvalidNameError(EthkitError):
    """Raised when an ENS name cannot be normalised."""


# --- Chain access ----------------------------------------------------------

class InvalidAccountError(EthkitError):
    """Raised when an ``--account`` private key cannot be loaded."""


class ProviderConnectionError(EthkitError):
    """Raised when the configured JSON-RPC endpoint cannot be reached."""

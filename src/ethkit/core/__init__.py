"""Core layer — pure input handling and data models.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
* All functions must be fully typed and deterministic.
"""

from ethkit.core.models import NormalizedPayload, ParsedOptions, PayloadKind, Runnable, SessionContext
from ethkit.core.normalize import normalize, parse_hex
from ethkit.core.protocols import ContextBuilder, LoopRunner
from ethkit.core.signature import canonical_signature

__all__: list[str] = [
    "ContextBuilder",
    "LoopRunner",
    "NormalizedPayload",
    "ParsedOptions",
    "PayloadKind",
    "Runnable",
    "SessionContext",
    "canonical_signature",
    "normalize",
    "parse_hex",
]

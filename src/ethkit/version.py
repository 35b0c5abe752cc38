"""Single source of truth for the ethkit version string."""

from __future__ import annotations

__version__: str = "0.4.0"

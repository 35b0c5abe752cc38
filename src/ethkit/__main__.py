"""Allow ``python -m ethkit`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m ethkit`` behaves identically to the ``ethkit``
console script.
"""

from __future__ import annotations

from ethkit.cli.app import cli

if __name__ == "__main__":
    cli()

"""CLI layer — argument parsing, command dispatch, the sandbox shell and
the error boundary.

This package is the outermost layer of the application.  It may import
from ``core`` and ``infra``, but no other layer may import from ``cli``.
"""

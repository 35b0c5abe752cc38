"""Shared pytest fixtures and configuration for the ethkit test suite.

Guidelines
----------
* No internet access in any test.
* Live JSON-RPC providers must be faked at the loop-runner boundary.
* Core tests must be pure — no side effects.
* Tests must not depend on OS state beyond ``tmp_path``.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from ethkit.infra.chain import EventLoopThread


@pytest.fixture
def loop_thread() -> Iterator[EventLoopThread]:
    """A running event loop thread, stopped after the test."""
    with EventLoopThread(name="ethkit-test-loop") as runner:
        yield runner

"""Regression tests for the optional Rich dependency.

Bootstrap commands (``--help``, ``--version``) and plain hashing commands
must keep working, and errors must still render, when Rich cannot be
imported.
"""

from __future__ import annotations

import sys

import pytest

from ethkit.cli import exit_codes
from ethkit.cli.app import cli, main
from ethkit.exceptions import UsageError


def _hide_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "rich", None)
    monkeypatch.setitem(sys.modules, "rich.console", None)
    monkeypatch.setitem(sys.modules, "rich.logging", None)
    monkeypatch.setitem(sys.modules, "rich.markup", None)


def test_help_works_without_rich(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    _hide_rich(monkeypatch)

    with pytest.raises(UsageError):
        main(["--help"])
    assert "commands:" in capsys.readouterr().out


def test_version_works_without_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)

    assert main(["--version"]) == exit_codes.SUCCESS


def test_hashing_works_without_rich(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    _hide_rich(monkeypatch)

    assert main(["utf8-bytes", "hi"]) == exit_codes.SUCCESS
    assert capsys.readouterr().out == "0x6869\n"


def test_errors_render_plain_without_rich(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
) -> None:
    _hide_rich(monkeypatch)
    monkeypatch.setattr(sys, "argv", ["ethkit", "frobnicate"])

    with pytest.raises(SystemExit) as exc_info:
        cli()
    assert exc_info.value.code == exit_codes.GENERAL_ERROR
    err = capsys.readouterr().err
    assert "unknown command: frobnicate" in err
    assert "commands:" in err

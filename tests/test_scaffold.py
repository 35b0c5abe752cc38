"""Smoke tests — verify scaffold wiring and the top-level driver.

These tests prove that:
* The CLI entry point is importable and callable.
* The exception hierarchy is correctly structured.
* Version is accessible.
* Exit codes are defined.
* ``main`` routes commands and ``cli`` renders errors once.
"""

from __future__ import annotations

import sys

import pytest

from ethkit import __version__
from ethkit.cli import app as app_module
from ethkit.cli import exit_codes
from ethkit.cli.app import cli, main
from ethkit.exceptions import (
    ConflictingModeError,
    EthkitError,
    InvalidAccountError,
    InvalidHexError,
    InvalidNameError,
    InvalidSignatureError,
    InvalidUtf8Error,
    MissingArgumentError,
    ProviderConnectionError,
    UnexpectedArgumentError,
    UnknownCommandError,
    UsageError,
)


# ---------------------------------------------------------------------------
# Version
# ---------------------------------------------------------------------------

class TestVersion:
    def test_version_is_string(self) -> None:
        assert isinstance(__version__, str)

    def test_version_is_semver_like(self) -> None:
        parts = __version__.split(".")
        assert len(parts) == 3
        assert all(part.isdigit() for part in parts)


# ---------------------------------------------------------------------------
# Exception hierarchy
# ---------------------------------------------------------------------------

class TestExceptions:
    @pytest.mark.parametrize(
        "exc_class",
        [
            UsageError,
            ConflictingModeError,
            InvalidHexError,
            InvalidUtf8Error,
            InvalidSignatureError,
            InvalidNameError,
            InvalidAccountError,
            ProviderConnectionError,
        ],
    )
    def test_all_exceptions_inherit_from_base(
        self, exc_class: type[EthkitError]
    ) -> None:
        assert issubclass(exc_class, EthkitError)

    @pytest.mark.parametrize(
        "exc_class", [UnknownCommandError, MissingArgumentError, UnexpectedArgumentError],
    )
    def test_command_line_errors_are_usage_errors(
        self, exc_class: type[EthkitError]
    ) -> None:
        assert issubclass(exc_class, UsageError)

    def test_hint_is_stored(self) -> None:
        err = EthkitError("boom", hint="try this")
        assert str(err) == "boom"
        assert err.message == "boom"
        assert err.hint == "try this"

    def test_empty_message_allowed(self) -> None:
        assert UsageError().message == ""


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

class TestExitCodes:
    def test_success_is_zero(self) -> None:
        assert exit_codes.SUCCESS == 0

    def test_general_error_is_one(self) -> None:
        assert exit_codes.GENERAL_ERROR == 1

    def test_keyboard_interrupt_is_130(self) -> None:
        assert exit_codes.KEYBOARD_INTERRUPT == 130

    def test_unexpected_error_is_two(self) -> None:
        assert exit_codes.UNEXPECTED_ERROR == 2


# ---------------------------------------------------------------------------
# main
# ---------------------------------------------------------------------------

class TestMain:
    def test_version_flag(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--version"]) == exit_codes.SUCCESS
        assert capsys.readouterr().out == f"ethkit {__version__}\n"

    def test_help_flag_takes_usage_path(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(UsageError) as exc_info:
            main(["--help"])
        assert exc_info.value.message == ""
        assert "commands:" in capsys.readouterr().out

    def test_help_wins_over_command(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(UsageError):
            main(["keccak", "00", "--help"])
        assert "KECCACK256" not in capsys.readouterr().out

    def test_runs_command(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["sighash", "transfer(address to, uint256 amount)"]) == exit_codes.SUCCESS
        assert capsys.readouterr().out == "0xa9059cbb\n"

    def test_unknown_command_prints_usage(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(UnknownCommandError):
            main(["frobnicate"])
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "commands:" in captured.err

    def test_no_command_defaults_to_sandbox(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from ethkit.cli import sandbox

        monkeypatch.setattr(sandbox, "run_sandbox", lambda parsed: exit_codes.SUCCESS)
        assert main([]) == exit_codes.SUCCESS

    def test_internal_error_during_resolution_prints_usage(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
    ) -> None:
        from ethkit.cli import commands

        def broken(name: str, parsed: object) -> None:
            raise RuntimeError("resolver exploded")

        monkeypatch.setattr(commands, "resolve", broken)
        with pytest.raises(RuntimeError, match="resolver exploded"):
            main(["keccak", "00"])
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "commands:" in captured.err

    def test_runtime_error_skips_usage(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(InvalidUtf8Error):
            main(["utf8-string", "0xff"])
        assert "commands:" not in capsys.readouterr().err


# ---------------------------------------------------------------------------
# cli error boundary
# ---------------------------------------------------------------------------

def _run_cli(monkeypatch: pytest.MonkeyPatch, *argv: str) -> int:
    monkeypatch.setattr(sys, "argv", ["ethkit", *argv])
    with pytest.raises(SystemExit) as exc_info:
        cli()
    return exc_info.value.code  # type: ignore[return-value]


class TestCliBoundary:
    def test_success(self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
        assert _run_cli(monkeypatch, "utf8-bytes", "hi") == exit_codes.SUCCESS
        assert capsys.readouterr().out == "0x6869\n"

    def test_help_exits_zero(self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
        assert _run_cli(monkeypatch, "--help") == exit_codes.SUCCESS
        assert "Error" not in capsys.readouterr().err

    def test_message_only_error(self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
        code = _run_cli(monkeypatch, "keccak", "00", "--hex", "--utf8")
        assert code == exit_codes.GENERAL_ERROR
        err = capsys.readouterr().err
        assert "Error:" in err
        assert "cannot use --hex and --utf8 together" in err
        assert "Traceback" not in err

    def test_markup_in_message_is_escaped(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = _run_cli(monkeypatch, "sighash", "[bold]x")
        assert code == exit_codes.GENERAL_ERROR
        assert "[bold]x" in capsys.readouterr().err

    def test_internal_error_prints_traceback(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
    ) -> None:
        def explode(argv: list[str] | None = None) -> int:
            raise RuntimeError("library exploded")

        monkeypatch.setattr(app_module, "main", explode)
        assert _run_cli(monkeypatch) == exit_codes.UNEXPECTED_ERROR
        err = capsys.readouterr().err
        assert "RuntimeError" in err
        assert "library exploded" in err
        assert "explode" in err

    def test_keyboard_interrupt(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def interrupt(argv: list[str] | None = None) -> int:
            raise KeyboardInterrupt

        monkeypatch.setattr(app_module, "main", interrupt)
        assert _run_cli(monkeypatch) == exit_codes.KEYBOARD_INTERRUPT

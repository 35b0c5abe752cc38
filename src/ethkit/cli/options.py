"""Command-line option parsing for ethkit.

Turns ``argv`` into a :class:`~ethkit.core.models.ParsedOptions`.  Any
problem with the flags themselves is raised as a message-only
:class:`~ethkit.exceptions.UsageError` instead of argparse's default
``SystemExit(2)``, so the CLI error boundary renders it like every other
user mistake.

Configuration precedence: explicit flags, then environment variables,
then built-in defaults.
"""

from __future__ import annotations

import argparse
import os
from typing import NoReturn

from ethkit.core.models import ParsedOptions
from ethkit.exceptions import UsageError

RPC_URL_ENV: str = "ETHKIT_RPC_URL"
"""Environment variable supplying the default ``--rpc`` endpoint."""

DEFAULT_RPC_URL: str = "http://127.0.0.1:8545"

DEFAULT_COMMAND: str = "sandbox"

COMMAND_SUMMARY: str = """\
commands:
  keccak DATA [--hex | --utf8]   Keccak-256 of DATA
  sha256 DATA [--hex | --utf8]   SHA2-256 of DATA
  namehash NAME                  ENS name-hash of NAME
  sighash SIGNATURE              4-byte selector, e.g. "transfer(address to, uint256 amount)"
  utf8-bytes TEXT                hex of the UTF-8 bytes of TEXT
  utf8-string DATA               decode hex (or raw) DATA as UTF-8
  sandbox [--sandbox]            interactive shell (default)

DATA is treated as hex when it looks like hex, otherwise as UTF-8 text;
use --hex or --utf8 to force one interpretation."""


class _ArgumentParser(argparse.ArgumentParser):
    """``ArgumentParser`` that raises instead of exiting."""

    def error(self, message: str) -> NoReturn:
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    Sub-commands are plain positionals: the first one names the command
    and the rest are its arguments.  ``--help`` and ``--version`` are
    ordinary flags so the driver decides how to honour them.
    """
    parser = _ArgumentParser(
        prog="ethkit",
        description="Ethereum hashing helpers and an interactive sandbox shell.",
        epilog=COMMAND_SUMMARY,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )
    parser.add_argument("args", nargs="*", metavar="ARG", help="command name followed by its arguments")

    data = parser.add_argument_group("data options (keccak, sha256)")
    data.add_argument("--hex", action="store_true", help="treat DATA as hex")
    data.add_argument("--utf8", action="store_true", help="treat DATA as UTF-8 text")

    chain = parser.add_argument_group("sandbox options")
    chain.add_argument(
        "--sandbox",
        action="store_true",
        help="use an ephemeral in-memory chain with funded accounts",
    )
    chain.add_argument(
        "--rpc",
        metavar="URL",
        default=os.environ.get(RPC_URL_ENV, DEFAULT_RPC_URL),
        help=f"JSON-RPC endpoint (default: ${RPC_URL_ENV} or {DEFAULT_RPC_URL})",
    )
    chain.add_argument(
        "--account",
        metavar="KEY",
        action="append",
        default=[],
        dest="accounts",
        help="private key to load as a signing account (repeatable)",
    )

    general = parser.add_argument_group("general options")
    general.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    general.add_argument("-h", "--help", action="store_true", help="show this help and exit")
    general.add_argument("-V", "--version", action="store_true", help="show the version and exit")
    return parser


def parse_options(argv: list[str] | None = None) -> ParsedOptions:
    """Parse *argv* (``sys.argv[1:]`` when ``None``).

    Chain objects are only built when the command will start a live
    sandbox session, so hashing commands never touch a provider.

    Raises
    ------
    UsageError
        For unknown or malformed flags.
    InvalidAccountError
        When an ``--account`` key is not a valid private key.
    """
    parser = build_parser()
    namespace = parser.parse_intermixed_args(argv)
    options = vars(namespace)
    args: list[str] = options.pop("args")
    private_keys: list[str] = options.pop("accounts")

    parsed = ParsedOptions(options=options, args=args)

    command = args[0] if args else DEFAULT_COMMAND
    wants_live_chain = command == DEFAULT_COMMAND and not options["sandbox"]
    if wants_live_chain and not (options["help"] or options["version"]):
        from ethkit.infra.chain import http_provider, load_accounts

        parsed.provider = http_provider(options["rpc"])
        parsed.accounts = load_accounts(private_keys)
    return parsed


def format_usage() -> str:
    """Full usage text, including the command summary."""
    return build_parser().format_help()

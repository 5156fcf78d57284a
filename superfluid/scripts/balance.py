#!/usr/bin/env python3
"""Superfluid Super Token Balance Resolver: real-time balances from the Super API."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

# Local imports for script execution (python3 scripts/balance.py ...)
SCRIPT_DIR = Path(__file__).resolve().parent
if str(SCRIPT_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPT_DIR))

from balance_engine import build_balance_report, fetch_balance_snapshot, select_token  # noqa: E402
from cli_common import ResolverArgumentParser, main_for, open_store  # noqa: E402
from quantity import parse_chain_id  # noqa: E402
from settings import Settings  # noqa: E402
from token_registry import load_tokens  # noqa: E402

EPILOG = """\
Examples:
  python3 scripts/balance.py balance 8453 USDCx 0xYourAddress
  python3 scripts/balance.py balance 10 0x1efF3Dd78F4A14aBfa9Fa66579bD3Ce9E1B30529 0xYourAddress"""


def cmd_balance(args: argparse.Namespace, settings: Settings) -> Any:
    chain_id = parse_chain_id(args.chain_id)
    tokens = load_tokens(settings.tokenlist_url, open_store(settings))
    token_address, token_meta = select_token(tokens, chain_id, args.token)
    snapshot = fetch_balance_snapshot(settings.api_url, chain_id, token_address, args.account)
    return build_balance_report(snapshot, token_meta, settings)


def build_parser() -> argparse.ArgumentParser:
    parser = ResolverArgumentParser(prog="balance.py", description=__doc__, epilog=EPILOG)
    sub = parser.add_subparsers(dest="command", required=True, metavar="<command>")

    balance_parser = sub.add_parser("balance", help="Get real-time Super Token balance")
    balance_parser.add_argument("chain_id", metavar="chain-id")
    balance_parser.add_argument("token", metavar="token-symbol-or-address")
    balance_parser.add_argument("account")
    balance_parser.set_defaults(func=cmd_balance)

    return parser


def main(argv: list[str] | None = None) -> int:
    return main_for(build_parser(), argv)


if __name__ == "__main__":
    raise SystemExit(main())

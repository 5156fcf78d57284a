#!/usr/bin/env python3
"""Superfluid Token List Resolver: the extended token list from the CDN, cached for offline use."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

# Local imports for script execution (python3 scripts/tokenlist.py ...)
SCRIPT_DIR = Path(__file__).resolve().parent
if str(SCRIPT_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPT_DIR))

from cli_common import ResolverArgumentParser, main_for, open_store  # noqa: E402
from quantity import parse_chain_id  # noqa: E402
from settings import Settings  # noqa: E402
from token_registry import (  # noqa: E402
    KIND_SUPER,
    KIND_UNDERLYING,
    by_address,
    by_chain,
    by_symbol,
    load_tokens,
    resolve_super_token,
    token_stats,
)

EPILOG = """\
Examples:
  python3 scripts/tokenlist.py by-address 0x4ac8bD1bDaE47beeF2D1c6Aa62229509b962Aa0d
  python3 scripts/tokenlist.py by-chain 10 --super
  python3 scripts/tokenlist.py by-symbol USDCx --chain-id 10
  python3 scripts/tokenlist.py super-token 10 USDCx
  python3 scripts/tokenlist.py stats"""


def _load_tokens(settings: Settings) -> list[dict[str, Any]]:
    return load_tokens(settings.tokenlist_url, open_store(settings))


def cmd_by_address(args: argparse.Namespace, settings: Settings) -> Any:
    return by_address(_load_tokens(settings), args.address)


def cmd_by_chain(args: argparse.Namespace, settings: Settings) -> Any:
    chain_id = parse_chain_id(args.chain_id)
    kind = KIND_SUPER if args.super else KIND_UNDERLYING if args.underlying else None
    return by_chain(_load_tokens(settings), chain_id, kind)


def cmd_by_symbol(args: argparse.Namespace, settings: Settings) -> Any:
    chain_id = parse_chain_id(args.chain_id) if args.chain_id is not None else None
    return by_symbol(_load_tokens(settings), args.symbol, chain_id)


def cmd_super_token(args: argparse.Namespace, settings: Settings) -> Any:
    chain_id = parse_chain_id(args.chain_id)
    return resolve_super_token(_load_tokens(settings), chain_id, args.query)


def cmd_stats(args: argparse.Namespace, settings: Settings) -> Any:
    return token_stats(_load_tokens(settings))


def build_parser() -> argparse.ArgumentParser:
    parser = ResolverArgumentParser(prog="tokenlist.py", description=__doc__, epilog=EPILOG)
    sub = parser.add_subparsers(dest="command", required=True, metavar="<command>")

    address_parser = sub.add_parser("by-address", help="Find token(s) by contract address")
    address_parser.add_argument("address")
    address_parser.set_defaults(func=cmd_by_address)

    chain_parser = sub.add_parser("by-chain", help="List tokens on a network")
    chain_parser.add_argument("chain_id", metavar="chain-id")
    kind = chain_parser.add_mutually_exclusive_group()
    kind.add_argument("--super", action="store_true", help="only Super Tokens")
    kind.add_argument("--underlying", action="store_true", help="only underlying tokens")
    chain_parser.set_defaults(func=cmd_by_chain)

    symbol_parser = sub.add_parser("by-symbol", help="Find token(s) by symbol")
    symbol_parser.add_argument("symbol")
    symbol_parser.add_argument("--chain-id", dest="chain_id", help="restrict to one chain")
    symbol_parser.set_defaults(func=cmd_by_symbol)

    super_parser = sub.add_parser("super-token", help="Find a Super Token and its underlying")
    super_parser.add_argument("chain_id", metavar="chain-id")
    super_parser.add_argument("query", metavar="symbol-or-address")
    super_parser.set_defaults(func=cmd_super_token)

    stats_parser = sub.add_parser("stats", help="Summary stats of the token list")
    stats_parser.set_defaults(func=cmd_stats)

    return parser


def main(argv: list[str] | None = None) -> int:
    return main_for(build_parser(), argv)


if __name__ == "__main__":
    raise SystemExit(main())

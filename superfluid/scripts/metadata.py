#!/usr/bin/env python3
"""Superfluid Protocol Metadata Resolver: network metadata from the CDN, cached for offline use."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

# Local imports for script execution (python3 scripts/metadata.py ...)
SCRIPT_DIR = Path(__file__).resolve().parent
if str(SCRIPT_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPT_DIR))

from cli_common import ResolverArgumentParser, main_for, open_store  # noqa: E402
from network_registry import (  # noqa: E402
    automation_view,
    contract_view,
    contracts_view,
    filter_networks,
    network_summary,
    networks_source,
    resolve_network,
    subgraph_view,
)
from remote_fetch import resolve_source  # noqa: E402
from settings import Settings  # noqa: E402

EPILOG = """\
Examples:
  python3 scripts/metadata.py networks --mainnets
  python3 scripts/metadata.py contracts 10
  python3 scripts/metadata.py contract optimism-mainnet host
  python3 scripts/metadata.py automation base-mainnet"""


def _load_networks(settings: Settings) -> list[dict[str, Any]]:
    return resolve_source(networks_source(settings.metadata_url), store=open_store(settings))


def _require_network(args: argparse.Namespace, settings: Settings) -> dict[str, Any]:
    return resolve_network(_load_networks(settings), args.network)


def cmd_networks(args: argparse.Namespace, settings: Settings) -> Any:
    networks = filter_networks(_load_networks(settings), mainnets=args.mainnets, testnets=args.testnets)
    return [network_summary(n) for n in networks]


def cmd_network(args: argparse.Namespace, settings: Settings) -> Any:
    return _require_network(args, settings)


def cmd_contracts(args: argparse.Namespace, settings: Settings) -> Any:
    return contracts_view(_require_network(args, settings))


def cmd_contract(args: argparse.Namespace, settings: Settings) -> Any:
    return contract_view(_require_network(args, settings), args.key)


def cmd_subgraph(args: argparse.Namespace, settings: Settings) -> Any:
    return subgraph_view(_require_network(args, settings))


def cmd_automation(args: argparse.Namespace, settings: Settings) -> Any:
    return automation_view(_require_network(args, settings))


def build_parser() -> argparse.ArgumentParser:
    parser = ResolverArgumentParser(prog="metadata.py", description=__doc__, epilog=EPILOG)
    sub = parser.add_subparsers(dest="command", required=True, metavar="<command>")

    networks_parser = sub.add_parser("networks", help="List all networks (summary)")
    which = networks_parser.add_mutually_exclusive_group()
    which.add_argument("--mainnets", action="store_true", help="only mainnets")
    which.add_argument("--testnets", action="store_true", help="only testnets")
    networks_parser.set_defaults(func=cmd_networks)

    single = [
        ("network", "Full metadata for a network", cmd_network),
        ("contracts", "All contract addresses", cmd_contracts),
        ("subgraph", "Subgraph endpoint info", cmd_subgraph),
        ("automation", "Automation contracts + subgraphs", cmd_automation),
    ]
    for name, help_text, func in single:
        p = sub.add_parser(name, help=help_text)
        p.add_argument("network", help="chain id or network name")
        p.set_defaults(func=func)

    contract_parser = sub.add_parser("contract", help="Single contract address")
    contract_parser.add_argument("network", help="chain id or network name")
    contract_parser.add_argument("key", help="contractsV1 key, e.g. host, cfaV1, nativeTokenWrapper")
    contract_parser.set_defaults(func=cmd_contract)

    return parser


def main(argv: list[str] | None = None) -> int:
    return main_for(build_parser(), argv)


if __name__ == "__main__":
    raise SystemExit(main())

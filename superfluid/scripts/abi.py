#!/usr/bin/env python3
"""Superfluid ABI Resolver: JSON ABIs from the @sfpro/sdk CDN modules, cached for offline use."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

# Local imports for script execution (python3 scripts/abi.py ...)
SCRIPT_DIR = Path(__file__).resolve().parent
if str(SCRIPT_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPT_DIR))

from abi_registry import (  # noqa: E402
    ABI_MAP,
    abi_module_source,
    find_fragments,
    get_abi,
    list_contracts,
    resolve_contract,
    sdk_import_path,
)
from cli_common import ResolverArgumentParser, main_for, open_store  # noqa: E402
from remote_fetch import resolve_source  # noqa: E402
from settings import Settings  # noqa: E402

EPILOG = f"""\
Commands:
  <contract>               Full JSON ABI for a contract
  <contract> <function>    Single function/event/error fragment by name
  list                     List all available contracts with SDK import info

Contracts:
  {", ".join(ABI_MAP)}

Aliases:
  cfa, gda, ida, host, pool, token, factory, toga, autowrap, vesting, liquidator, ...

Examples:
  python3 scripts/abi.py CFAv1Forwarder
  python3 scripts/abi.py cfa
  python3 scripts/abi.py SuperToken transfer
  python3 scripts/abi.py list"""


def cmd_abi(args: argparse.Namespace, settings: Settings) -> Any:
    if args.contract.lower() == "list" and args.fragment is None:
        return list_contracts()

    name = resolve_contract(args.contract)
    entry = ABI_MAP[name]
    source = abi_module_source(entry.module, settings.abi_cdn_base)
    exports = resolve_source(source, store=open_store(settings))
    abi = get_abi(exports, name)

    if args.fragment:
        return find_fragments(abi, args.fragment, contract=name)
    return {
        "contract": name,
        "sdkImport": sdk_import_path(entry.module),
        "sdkExport": entry.export,
        "abi": abi,
    }


def build_parser() -> argparse.ArgumentParser:
    parser = ResolverArgumentParser(prog="abi.py", description=__doc__, epilog=EPILOG)
    parser.add_argument("contract", help='contract name, alias, or "list"')
    parser.add_argument("fragment", nargs="?", help="function/event/error name (case-insensitive)")
    parser.set_defaults(func=cmd_abi)
    return parser


def main(argv: list[str] | None = None) -> int:
    return main_for(build_parser(), argv)


if __name__ == "__main__":
    raise SystemExit(main())

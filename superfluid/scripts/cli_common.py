"""Argument parsing, JSON output and diagnostics shared by the resolver CLIs."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Callable, NoReturn, Sequence

from cache_store import CacheStore
from error_map import ResolverError
from settings import Settings, load_settings

CommandFn = Callable[[argparse.Namespace, Settings], Any]
HELP_WORDS = {"help", "-h", "--help"}


class ResolverArgumentParser(argparse.ArgumentParser):
    """Help goes to stderr; usage errors exit 1 instead of argparse's 2."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("formatter_class", argparse.RawDescriptionHelpFormatter)
        super().__init__(*args, **kwargs)

    def print_help(self, file: Any = None) -> None:
        super().print_help(file or sys.stderr)

    def error(self, message: str) -> NoReturn:
        self.print_help(sys.stderr)
        self.exit(1, f"\nError: {message}\n")


def json_dump(payload: Any) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False)


def emit_json(payload: Any) -> None:
    print(json_dump(payload))


def report_error(err: ResolverError) -> None:
    for line in err.as_lines():
        print(line, file=sys.stderr)


def open_store(settings: Settings) -> CacheStore:
    return CacheStore(settings.cache_dir)


def run_command(func: CommandFn, args: argparse.Namespace) -> int:
    try:
        settings = load_settings()
        payload = func(args, settings)
    except ResolverError as err:
        report_error(err)
        return 1
    emit_json(payload)
    return 0


def main_for(parser: argparse.ArgumentParser, argv: Sequence[str] | None = None) -> int:
    raw = list(sys.argv[1:] if argv is None else argv)
    if not raw or raw[0] in HELP_WORDS:
        parser.print_help(sys.stderr)
        return 0
    args = parser.parse_args(raw)
    return run_command(args.func, args)

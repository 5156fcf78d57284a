"""Shared parsers for chain ids and integer wire values."""

from __future__ import annotations

import re
from typing import Any

from error_map import MalformedInput

SIGNED_INT_RE = re.compile(r"^-?[0-9]+$")


def parse_chain_id(raw: Any) -> int:
    value = str(raw).strip()
    if not (value.isascii() and value.isdigit()):
        raise MalformedInput(f'chain-id must be a number, got "{raw}"')
    return int(value, 10)


def try_parse_chain_id(raw: str) -> int | None:
    value = raw.strip()
    if value.isascii() and value.isdigit():
        return int(value, 10)
    return None


def parse_signed_int(raw: Any, *, field: str = "value") -> int:
    if isinstance(raw, bool):
        raise MalformedInput(f"{field} cannot be boolean")
    if isinstance(raw, int):
        return raw
    value = str(raw).strip()
    if not SIGNED_INT_RE.fullmatch(value):
        raise MalformedInput(f'{field} must be a decimal integer string, got "{raw}"')
    return int(value, 10)


def parse_nonnegative_int(raw: Any, *, field: str = "value") -> int:
    out = parse_signed_int(raw, field=field)
    if out < 0:
        raise MalformedInput(f"{field} must be non-negative")
    return out

"""Super API balance lookup and report assembly."""

from __future__ import annotations

import json
import urllib.parse
from typing import Any

from error_map import UpstreamHttpError
from formatters import format_amount, format_flow_rate, format_timestamp
from http_transport import Fetcher, HttpStatusError, TransportError, http_get
from settings import Settings
from token_registry import find_token, resolve_token, super_token_info


def balance_url(api_url: str, chain_id: int, token: str, account: str) -> str:
    query = urllib.parse.urlencode({"chain": str(chain_id), "token": token, "account": account})
    return f"{api_url}?{query}"


def fetch_balance_snapshot(
    api_url: str,
    chain_id: int,
    token: str,
    account: str,
    *,
    fetch: Fetcher = http_get,
) -> dict[str, Any]:
    url = balance_url(api_url, chain_id, token, account)
    try:
        payload = fetch(url)
    except HttpStatusError as err:
        suffix = f" - {err.body}" if err.body else ""
        raise UpstreamHttpError(f"Super API returned HTTP {err.status}{suffix}", details=[f"URL: {url}"]) from err
    except TransportError as err:
        raise UpstreamHttpError(f"Super API request failed: {err}", details=[f"URL: {url}"]) from err

    try:
        snapshot = json.loads(payload.decode("utf-8"))
    except ValueError as err:
        raise UpstreamHttpError(f"Super API returned a non-JSON response: {err}", details=[f"URL: {url}"]) from err
    if not isinstance(snapshot, dict):
        raise UpstreamHttpError("Super API response must be a JSON object", details=[f"URL: {url}"])
    return snapshot


def select_token(tokens: list[dict[str, Any]], chain_id: int, query: str) -> tuple[str, dict[str, Any] | None]:
    """Map the token argument to (address for the API, token-list record if known)."""
    if query.startswith("0x"):
        return query, find_token(tokens, chain_id, query, super_only=True)
    token = resolve_token(tokens, chain_id, query, super_only=True)
    return token["address"], token


def build_balance_report(
    snapshot: dict[str, Any],
    token_meta: dict[str, Any] | None,
    settings: Settings,
) -> dict[str, Any]:
    display = settings.display_decimals
    decimals = settings.default_decimals
    if token_meta is not None and isinstance(token_meta.get("decimals"), int):
        decimals = token_meta["decimals"]

    super_token: dict[str, Any] = {"address": snapshot.get("token")}
    if token_meta is not None:
        super_token.update(
            {
                "symbol": token_meta.get("symbol"),
                "name": token_meta.get("name"),
                "decimals": token_meta.get("decimals"),
            }
        )
        info = super_token_info(token_meta)
        if info:
            super_token["type"] = info.get("type")

    underlying = snapshot.get("underlyingToken")
    underlying_report: dict[str, Any] | None = None
    if underlying:
        underlying_decimals = underlying.get("decimals")
        underlying_report = {"address": underlying.get("address")}
        if underlying_decimals is not None:
            underlying_report["decimals"] = underlying_decimals
        underlying_report["balance"] = format_amount(
            underlying.get("balance"),
            underlying_decimals if isinstance(underlying_decimals, int) else settings.default_decimals,
            display_decimals=display,
        )

    return {
        "chain": snapshot.get("chain"),
        "account": snapshot.get("account"),
        "superToken": super_token,
        "balance": {
            "connected": format_amount(snapshot.get("connectedBalance"), decimals, display_decimals=display),
            "unconnected": format_amount(snapshot.get("unconnectedBalance"), decimals, display_decimals=display),
        },
        "netFlow": format_flow_rate(snapshot.get("connectedNetFlow"), decimals, display_decimals=display),
        "timestamp": format_timestamp(snapshot.get("timestamp")),
        "maybeCriticalAt": format_timestamp(snapshot.get("maybeCriticalAt")),
        "underlyingToken": underlying_report,
    }

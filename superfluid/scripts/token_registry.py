"""Token lookup over the Superfluid extended token list."""

from __future__ import annotations

from typing import Any

from cache_store import CacheStore
from error_map import MalformedInput, UnknownToken
from remote_fetch import DataSource, resolve_source

SUPER_TOKEN_TAG = "supertoken"
UNDERLYING_TAG = "underlying"
NOT_IN_LIST_NOTE = "Not in token list"

KIND_SUPER = "super"
KIND_UNDERLYING = "underlying"


def _require_token_list(value: Any) -> None:
    if not isinstance(value, dict) or not isinstance(value.get("tokens"), list):
        raise ValueError('token list must be a JSON object with a "tokens" array')


def tokenlist_source(url: str) -> DataSource:
    return DataSource(
        name="token list",
        url=url,
        cache_key="tokenlist.json",
        validate=_require_token_list,
    )


def load_tokens(url: str, store: CacheStore) -> list[dict[str, Any]]:
    return resolve_source(tokenlist_source(url), store=store)["tokens"]


def _lower(value: Any) -> str:
    return value.lower() if isinstance(value, str) else ""


def is_super_token(token: dict[str, Any]) -> bool:
    return SUPER_TOKEN_TAG in (token.get("tags") or [])


def is_underlying(token: dict[str, Any]) -> bool:
    return UNDERLYING_TAG in (token.get("tags") or [])


def super_token_info(token: dict[str, Any]) -> dict[str, Any] | None:
    extensions = token.get("extensions") or {}
    info = extensions.get("superTokenInfo")
    return info if isinstance(info, dict) else None


def token_summary(token: dict[str, Any]) -> dict[str, Any]:
    out = {
        "chainId": token.get("chainId"),
        "address": token.get("address"),
        "name": token.get("name"),
        "symbol": token.get("symbol"),
        "decimals": token.get("decimals"),
        "tags": token.get("tags") or [],
    }
    info = super_token_info(token)
    if info:
        out["superTokenInfo"] = info
    return out


def tokens_on_chain(
    tokens: list[dict[str, Any]],
    chain_id: int,
    kind: str | None = None,
) -> list[dict[str, Any]]:
    out = [t for t in tokens if t.get("chainId") == chain_id]
    if kind == KIND_SUPER:
        out = [t for t in out if is_super_token(t)]
    elif kind == KIND_UNDERLYING:
        out = [t for t in out if is_underlying(t)]
    elif kind is not None:
        raise MalformedInput(f"unknown token filter: {kind}")
    return out


def find_token(
    tokens: list[dict[str, Any]],
    chain_id: int,
    query: str,
    *,
    super_only: bool = False,
) -> dict[str, Any] | None:
    """Address match wins over symbol match within the chain subset."""
    candidates = tokens_on_chain(tokens, chain_id, KIND_SUPER if super_only else None)
    wanted = query.strip().lower()
    by_address = next((t for t in candidates if _lower(t.get("address")) == wanted), None)
    if by_address is not None:
        return by_address
    return next((t for t in candidates if _lower(t.get("symbol")) == wanted), None)


def resolve_token(
    tokens: list[dict[str, Any]],
    chain_id: int,
    query: str,
    *,
    super_only: bool = False,
) -> dict[str, Any]:
    token = find_token(tokens, chain_id, query, super_only=super_only)
    if token is None:
        label = "Super Token" if super_only else "token"
        raise UnknownToken(
            f'No {label} found on chain {chain_id} matching "{query}"',
            hint=f'Use "tokenlist.py by-chain {chain_id}{" --super" if super_only else ""}" to see available tokens.',
        )
    return token


def resolve_super_token(tokens: list[dict[str, Any]], chain_id: int, query: str) -> dict[str, Any]:
    super_token = resolve_token(tokens, chain_id, query, super_only=True)
    result: dict[str, Any] = {"superToken": token_summary(super_token), "underlying": None}

    info = super_token_info(super_token) or {}
    underlying_address = info.get("underlyingTokenAddress")
    if underlying_address:
        wanted = _lower(underlying_address)
        underlying = next(
            (t for t in tokens_on_chain(tokens, chain_id) if _lower(t.get("address")) == wanted),
            None,
        )
        result["underlying"] = (
            token_summary(underlying)
            if underlying is not None
            else {"address": underlying_address, "note": NOT_IN_LIST_NOTE}
        )
    return result


def by_address(tokens: list[dict[str, Any]], address: str) -> list[dict[str, Any]]:
    wanted = address.strip().lower()
    matches = [token_summary(t) for t in tokens if _lower(t.get("address")) == wanted]
    if not matches:
        raise UnknownToken(f"No token found with address {address}")
    return matches


def by_chain(tokens: list[dict[str, Any]], chain_id: int, kind: str | None = None) -> list[dict[str, Any]]:
    matches = tokens_on_chain(tokens, chain_id, kind)
    if not matches:
        suffix = f" with filter --{kind}" if kind else ""
        raise UnknownToken(f"No tokens found on chain {chain_id}{suffix}")
    return [token_summary(t) for t in matches]


def by_symbol(tokens: list[dict[str, Any]], symbol: str, chain_id: int | None = None) -> list[dict[str, Any]]:
    wanted = symbol.strip().lower()
    matches = [t for t in tokens if _lower(t.get("symbol")) == wanted]
    if chain_id is not None:
        matches = [t for t in matches if t.get("chainId") == chain_id]
    if not matches:
        raise UnknownToken(f'No token found with symbol "{symbol}"')
    return [token_summary(t) for t in matches]


def token_stats(tokens: list[dict[str, Any]]) -> dict[str, Any]:
    chain_ids = sorted({t.get("chainId") for t in tokens if isinstance(t.get("chainId"), int)})
    chains = []
    for chain_id in chain_ids:
        on_chain = tokens_on_chain(tokens, chain_id)
        chains.append(
            {
                "chainId": chain_id,
                "total": len(on_chain),
                "superTokens": sum(1 for t in on_chain if is_super_token(t)),
                "underlying": sum(1 for t in on_chain if is_underlying(t)),
            }
        )
    return {
        "totalTokens": len(tokens),
        "superTokens": sum(1 for t in tokens if is_super_token(t)),
        "underlyingTokens": sum(1 for t in tokens if is_underlying(t)),
        "chains": chains,
    }

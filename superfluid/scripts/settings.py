"""Environment-driven configuration for the resolver scripts."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from quantity import parse_nonnegative_int

SCRIPT_DIR = Path(__file__).resolve().parent

DEFAULT_CACHE_DIR = SCRIPT_DIR / ".cache"
DEFAULT_ABI_CDN_BASE = "https://cdn.jsdelivr.net/npm/@sfpro/sdk/dist/abi"
DEFAULT_METADATA_URL = "https://cdn.jsdelivr.net/npm/@superfluid-finance/metadata/networks.json"
DEFAULT_TOKENLIST_URL = (
    "https://cdn.jsdelivr.net/npm/@superfluid-finance/tokenlist/dist/superfluid.extended.tokenlist.json"
)
DEFAULT_API_URL = "https://superapi.kazpi.com/super-token-balance"
DEFAULT_DECIMALS = 18
DEFAULT_DISPLAY_DECIMALS = 8

ENV_CACHE_DIR = "SUPERFLUID_CACHE_DIR"
ENV_ABI_CDN_BASE = "SUPERFLUID_ABI_CDN_BASE"
ENV_METADATA_URL = "SUPERFLUID_METADATA_URL"
ENV_TOKENLIST_URL = "SUPERFLUID_TOKENLIST_URL"
ENV_API_URL = "SUPERFLUID_API_URL"
ENV_DEFAULT_DECIMALS = "SUPERFLUID_DEFAULT_DECIMALS"
ENV_DISPLAY_DECIMALS = "SUPERFLUID_DISPLAY_DECIMALS"

ENV_KEYS = (
    ENV_CACHE_DIR,
    ENV_ABI_CDN_BASE,
    ENV_METADATA_URL,
    ENV_TOKENLIST_URL,
    ENV_API_URL,
    ENV_DEFAULT_DECIMALS,
    ENV_DISPLAY_DECIMALS,
)


@dataclass(frozen=True)
class Settings:
    cache_dir: Path = DEFAULT_CACHE_DIR
    abi_cdn_base: str = DEFAULT_ABI_CDN_BASE
    metadata_url: str = DEFAULT_METADATA_URL
    tokenlist_url: str = DEFAULT_TOKENLIST_URL
    api_url: str = DEFAULT_API_URL
    default_decimals: int = DEFAULT_DECIMALS
    display_decimals: int = DEFAULT_DISPLAY_DECIMALS


def _env_str(env: Mapping[str, str], key: str, default: str) -> str:
    value = env.get(key, "").strip()
    return value or default


def _env_int(env: Mapping[str, str], key: str, default: int) -> int:
    value = env.get(key, "").strip()
    if not value:
        return default
    return parse_nonnegative_int(value, field=key)


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    env = os.environ if environ is None else environ
    cache_dir = env.get(ENV_CACHE_DIR, "").strip()
    return Settings(
        cache_dir=Path(cache_dir).expanduser() if cache_dir else DEFAULT_CACHE_DIR,
        abi_cdn_base=_env_str(env, ENV_ABI_CDN_BASE, DEFAULT_ABI_CDN_BASE).rstrip("/"),
        metadata_url=_env_str(env, ENV_METADATA_URL, DEFAULT_METADATA_URL),
        tokenlist_url=_env_str(env, ENV_TOKENLIST_URL, DEFAULT_TOKENLIST_URL),
        api_url=_env_str(env, ENV_API_URL, DEFAULT_API_URL),
        default_decimals=_env_int(env, ENV_DEFAULT_DECIMALS, DEFAULT_DECIMALS),
        display_decimals=_env_int(env, ENV_DISPLAY_DECIMALS, DEFAULT_DISPLAY_DECIMALS),
    )

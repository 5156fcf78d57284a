"""Fetch a remote data source, falling back to the last cached copy.

Module payloads are never executed: ``module_loader`` parses them in memory and
is the single point to swap for another loader. Parsing happens before the
payload is persisted, so only decodable payloads reach the cache.
"""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from typing import Any, Callable

from cache_store import CacheMiss, CacheStore
from error_map import FetchFailure
from http_transport import FetchError, Fetcher, http_get
from module_loader import load_module_bytes

MODE_JSON = "json"
MODE_MODULE = "module"

Validator = Callable[[Any], None]


@dataclass(frozen=True)
class DataSource:
    name: str
    url: str
    cache_key: str
    mode: str = MODE_JSON
    validate: Validator | None = None

    def decode(self, payload: bytes) -> Any:
        if self.mode == MODE_MODULE:
            value = load_module_bytes(payload)
        elif self.mode == MODE_JSON:
            value = json.loads(payload.decode("utf-8"))
        else:
            raise ValueError(f"unknown data source mode: {self.mode}")
        if self.validate is not None:
            self.validate(value)
        return value


def _warn(message: str) -> None:
    print(f"Warning: {message}", file=sys.stderr)


def resolve_source(
    source: DataSource,
    *,
    store: CacheStore,
    fetch: Fetcher = http_get,
) -> Any:
    """Return the freshly fetched dataset, or the cached one if the fetch fails.

    Raises ``FetchFailure`` only when neither the network nor the cache can
    produce a decodable payload.
    """
    try:
        payload = fetch(source.url)
        value = source.decode(payload)
    except (FetchError, ValueError) as err:
        fetch_error = err
    else:
        store.write(source.cache_key, payload)
        return value

    try:
        value = source.decode(store.read(source.cache_key))
    except (CacheMiss, ValueError):
        raise FetchFailure(
            f"Could not fetch {source.name} from CDN and no local cache found.",
            details=[f"CDN URL: {source.url}", f"Fetch error: {fetch_error}"],
        ) from fetch_error

    _warn(f"fetch of {source.name} failed ({fetch_error}); using cached copy at {store.path_for(source.cache_key)}")
    return value

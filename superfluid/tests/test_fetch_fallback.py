from __future__ import annotations

import json

import pytest

from cache_store import CacheMiss, CacheStore
from error_map import FetchFailure
from http_transport import HttpStatusError, TransportError
from network_registry import networks_source
from remote_fetch import MODE_MODULE, DataSource, resolve_source

from ._superfluid_helpers import MAIN_ABI_MODULE, NETWORKS


def _serving(payload: bytes):
    def fetch(url: str) -> bytes:
        return payload

    return fetch


def _failing(err: Exception):
    def fetch(url: str) -> bytes:
        raise err

    return fetch


def test_successful_fetch_persists_raw_payload(tmp_path):
    store = CacheStore(tmp_path / "cache")
    payload = json.dumps(NETWORKS).encode("utf-8")
    source = networks_source("https://cdn.example/networks.json")

    result = resolve_source(source, store=store, fetch=_serving(payload))

    assert result == NETWORKS
    assert store.read("networks.json") == payload


def test_fetch_failure_falls_back_to_last_cached_payload(tmp_path, capsys):
    store = CacheStore(tmp_path)
    source = networks_source("https://cdn.example/networks.json")
    resolve_source(source, store=store, fetch=_serving(json.dumps(NETWORKS).encode("utf-8")))

    result = resolve_source(source, store=store, fetch=_failing(TransportError("connection refused")))

    assert result == NETWORKS
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "connection refused" in captured.err


def test_http_error_status_is_not_parsed_and_not_cached(tmp_path):
    store = CacheStore(tmp_path)
    source = networks_source("https://cdn.example/networks.json")
    good = json.dumps(NETWORKS).encode("utf-8")
    resolve_source(source, store=store, fetch=_serving(good))

    result = resolve_source(source, store=store, fetch=_failing(HttpStatusError(503, "maintenance")))

    assert result == NETWORKS
    assert store.read("networks.json") == good


def test_unparsable_payload_keeps_previous_cache(tmp_path):
    store = CacheStore(tmp_path)
    source = networks_source("https://cdn.example/networks.json")
    good = json.dumps(NETWORKS).encode("utf-8")
    resolve_source(source, store=store, fetch=_serving(good))

    result = resolve_source(source, store=store, fetch=_serving(b"<html>oops</html>"))

    assert result == NETWORKS
    assert store.read("networks.json") == good


def test_presence_check_failure_triggers_fallback(tmp_path):
    store = CacheStore(tmp_path)
    source = networks_source("https://cdn.example/networks.json")

    with pytest.raises(FetchFailure):
        resolve_source(source, store=store, fetch=_serving(b'{"not": "a list"}'))
    with pytest.raises(CacheMiss):
        store.read("networks.json")


def test_double_failure_raises_fetch_failure_with_locator_and_cause(tmp_path):
    store = CacheStore(tmp_path)
    source = networks_source("https://cdn.example/networks.json")

    with pytest.raises(FetchFailure) as excinfo:
        resolve_source(source, store=store, fetch=_failing(HttpStatusError(404)))

    lines = excinfo.value.as_lines()
    assert lines[0].startswith("Error: Could not fetch network metadata")
    assert "CDN URL: https://cdn.example/networks.json" in lines
    assert "Fetch error: HTTP 404" in lines


def test_corrupt_cache_counts_as_missing(tmp_path):
    store = CacheStore(tmp_path)
    (tmp_path / "networks.json").write_text("{truncated", encoding="utf-8")
    source = networks_source("https://cdn.example/networks.json")

    with pytest.raises(FetchFailure):
        resolve_source(source, store=store, fetch=_failing(TransportError("offline")))


def test_cache_write_failure_does_not_fail_resolution(tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")
    store = CacheStore(blocker / "cache")
    payload = json.dumps(NETWORKS).encode("utf-8")

    result = resolve_source(networks_source("https://cdn.example/n.json"), store=store, fetch=_serving(payload))

    assert result == NETWORKS
    assert store.write("networks.json", payload) is False


def test_module_sources_are_decoded_without_execution(tmp_path):
    store = CacheStore(tmp_path)
    source = DataSource(name="ABI module", url="https://cdn.example/generated.js", cache_key="abi-main.mjs", mode=MODE_MODULE)

    exports = resolve_source(source, store=store, fetch=_serving(MAIN_ABI_MODULE.encode("utf-8")))

    assert set(exports) == {"superTokenAbi", "cfaForwarderAbi"}
    assert (tmp_path / "abi-main.mjs").read_text(encoding="utf-8") == MAIN_ABI_MODULE


def test_cache_store_replaces_entries_atomically(tmp_path):
    store = CacheStore(tmp_path / "nested" / "cache")

    assert store.write("tokenlist.json", b"first") is True
    assert store.write("tokenlist.json", b"second") is True

    assert store.read("tokenlist.json") == b"second"
    assert sorted(p.name for p in (tmp_path / "nested" / "cache").iterdir()) == ["tokenlist.json"]


def test_cache_store_rejects_path_like_keys(tmp_path):
    store = CacheStore(tmp_path)
    with pytest.raises(ValueError):
        store.path_for("../escape.json")

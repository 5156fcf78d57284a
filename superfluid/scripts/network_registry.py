"""Network lookup over the @superfluid-finance/metadata network list."""

from __future__ import annotations

from typing import Any

from error_map import UnknownContractRole, UnknownNetwork
from quantity import try_parse_chain_id
from remote_fetch import DataSource

SUBGRAPH_ENDPOINTS_BASE = "https://subgraph-endpoints.superfluid.dev"
NATIVE_TOKEN_WRAPPER = "nativeTokenWrapper"


def _require_network_list(value: Any) -> None:
    if not isinstance(value, list):
        raise ValueError("network metadata must be a JSON array")


def networks_source(url: str) -> DataSource:
    return DataSource(
        name="network metadata",
        url=url,
        cache_key="networks.json",
        validate=_require_network_list,
    )


def find_network(networks: list[dict[str, Any]], query: str) -> dict[str, Any] | None:
    chain_id = try_parse_chain_id(query)
    if chain_id is not None:
        return next((n for n in networks if n.get("chainId") == chain_id), None)
    lowered = query.strip().lower()
    for network in networks:
        names = (network.get("name"), network.get("shortName"))
        if any(isinstance(name, str) and name.lower() == lowered for name in names):
            return network
    return None


def resolve_network(networks: list[dict[str, Any]], query: str) -> dict[str, Any]:
    network = find_network(networks, query)
    if network is None:
        available = ", ".join(f"{n.get('name')} ({n.get('chainId')})" for n in networks)
        raise UnknownNetwork(f'Network not found for "{query}".', details=[f"Available: {available}"])
    return network


def filter_networks(
    networks: list[dict[str, Any]],
    *,
    mainnets: bool = False,
    testnets: bool = False,
) -> list[dict[str, Any]]:
    if mainnets:
        return [n for n in networks if not n.get("isTestnet")]
    if testnets:
        return [n for n in networks if n.get("isTestnet")]
    return list(networks)


def network_summary(network: dict[str, Any]) -> dict[str, Any]:
    return {
        "name": network.get("name"),
        "chainId": network.get("chainId"),
        "humanReadableName": network.get("humanReadableName"),
        "isTestnet": network.get("isTestnet"),
        "nativeTokenSymbol": network.get("nativeTokenSymbol"),
    }


def contract_address(network: dict[str, Any], key: str) -> str:
    contracts = network.get("contractsV1") or {}
    address = contracts.get(key)
    if not address and key == NATIVE_TOKEN_WRAPPER:
        address = network.get(NATIVE_TOKEN_WRAPPER)
    if not address:
        keys = ", ".join([*contracts.keys(), NATIVE_TOKEN_WRAPPER])
        raise UnknownContractRole(f'Key "{key}" not found. Available: {keys}')
    return address


def contracts_view(network: dict[str, Any]) -> dict[str, Any]:
    return {
        "network": network.get("name"),
        "chainId": network.get("chainId"),
        NATIVE_TOKEN_WRAPPER: network.get(NATIVE_TOKEN_WRAPPER),
        **(network.get("contractsV1") or {}),
    }


def contract_view(network: dict[str, Any], key: str) -> dict[str, Any]:
    return {
        "network": network.get("name"),
        "chainId": network.get("chainId"),
        key: contract_address(network, key),
    }


def subgraph_view(network: dict[str, Any]) -> dict[str, Any]:
    name = network.get("name")
    return {
        "network": name,
        "chainId": network.get("chainId"),
        "protocol": f"{SUBGRAPH_ENDPOINTS_BASE}/{name}/protocol-v1",
        "subgraphV1": network.get("subgraphV1") or None,
    }


def automation_view(network: dict[str, Any]) -> dict[str, Any]:
    name = network.get("name")
    contracts = network.get("contractsV1") or {}
    return {
        "network": name,
        "chainId": network.get("chainId"),
        "vestingScheduler": contracts.get("vestingScheduler") or None,
        "flowScheduler": contracts.get("flowScheduler") or None,
        "autowrap": network.get("autowrap") or None,
        "subgraphs": {
            "vestingScheduler": f"{SUBGRAPH_ENDPOINTS_BASE}/{name}/vesting-scheduler",
            "flowScheduler": f"{SUBGRAPH_ENDPOINTS_BASE}/{name}/flow-scheduler",
            "autoWrap": f"{SUBGRAPH_ENDPOINTS_BASE}/{name}/auto-wrap",
        },
    }

from __future__ import annotations

import pytest

from abi_registry import (
    ABI_MAP,
    abi_module_source,
    find_fragments,
    get_abi,
    list_contracts,
    resolve_contract,
    sdk_import_path,
)
from error_map import (
    MalformedInput,
    MissingExport,
    UnknownContract,
    UnknownContractRole,
    UnknownFragment,
    UnknownNetwork,
    UnknownToken,
)
from module_loader import load_module_exports
from network_registry import (
    automation_view,
    contract_address,
    contracts_view,
    filter_networks,
    resolve_network,
    subgraph_view,
)
from quantity import parse_chain_id, try_parse_chain_id
from settings import load_settings
from token_registry import (
    by_address,
    by_chain,
    by_symbol,
    find_token,
    resolve_super_token,
    resolve_token,
    token_stats,
)

from ._superfluid_helpers import (
    DAIX_OP,
    ETHX_OP,
    MAIN_ABI_MODULE,
    MISSING_UNDERLYING,
    NETWORKS,
    TOKENS,
    USDC_OP,
    USDCX_OP,
)


@pytest.mark.parametrize("query", ["CFA", "cfa", "ConstantFlowAgreementV1", "constantflowagreementv1"])
def test_contract_aliases_resolve_case_insensitively(query):
    assert resolve_contract(query) == "ConstantFlowAgreementV1"


def test_short_aliases_resolve_to_canonical_names():
    assert resolve_contract("vesting") == "VestingSchedulerV3"
    assert resolve_contract("Pool") == "SuperfluidPool"


def test_deny_listed_contract_gets_specific_diagnostic():
    with pytest.raises(UnknownContract) as excinfo:
        resolve_contract("supertokenv1library")
    assert "SuperTokenV1Library is not available in @sfpro/sdk (Solidity library)" in excinfo.value.message
    assert excinfo.value.hint.endswith("references/contracts/SuperTokenV1Library.rich-abi.yaml")


def test_unknown_contract_points_to_list():
    with pytest.raises(UnknownContract) as excinfo:
        resolve_contract("NotAContract")
    assert "list" in excinfo.value.hint


def test_sdk_import_paths_and_sources():
    assert sdk_import_path("main") == "@sfpro/sdk/abi"
    assert sdk_import_path("core") == "@sfpro/sdk/abi/core"
    assert abi_module_source("main", "https://cdn/abi").url == "https://cdn/abi/generated.js"
    core = abi_module_source("core", "https://cdn/abi")
    assert core.url == "https://cdn/abi/core/generated.js"
    assert core.cache_key == "abi-core.mjs"
    assert len(list_contracts()) == len(ABI_MAP)


def test_single_fragment_is_returned_unwrapped():
    abi = get_abi(load_module_exports(MAIN_ABI_MODULE), "SuperToken")
    fragment = find_fragments(abi, "TRANSFER", contract="SuperToken")
    assert isinstance(fragment, dict)
    assert fragment["name"] == "transfer"


def test_overloaded_fragment_returns_all_matches():
    abi = get_abi(load_module_exports(MAIN_ABI_MODULE), "SuperToken")
    fragments = find_fragments(abi, "approve", contract="SuperToken")
    assert isinstance(fragments, list)
    assert [len(f["inputs"]) for f in fragments] == [2, 3]


def test_missing_fragment_reports_distinct_named_entries():
    abi = get_abi(load_module_exports(MAIN_ABI_MODULE), "SuperToken")
    with pytest.raises(UnknownFragment) as excinfo:
        find_fragments(abi, "mint", contract="SuperToken")
    assert "The ABI has 3 named entries." in excinfo.value.hint


def test_missing_export_is_reported():
    with pytest.raises(MissingExport):
        get_abi(load_module_exports(MAIN_ABI_MODULE), "GDAv1Forwarder")


@pytest.mark.parametrize("query", ["10", "optimism-mainnet", "OPTIMISM", "Optimism-Mainnet"])
def test_network_resolves_by_id_name_or_short_name(query):
    assert resolve_network(NETWORKS, query) is NETWORKS[0]


def test_unknown_network_lists_available():
    with pytest.raises(UnknownNetwork) as excinfo:
        resolve_network(NETWORKS, "42")
    assert "Available: optimism-mainnet (10), base-mainnet (8453), eth-sepolia (11155111)" in excinfo.value.details


def test_network_filters():
    assert [n["chainId"] for n in filter_networks(NETWORKS, mainnets=True)] == [10, 8453]
    assert [n["chainId"] for n in filter_networks(NETWORKS, testnets=True)] == [11155111]
    assert len(filter_networks(NETWORKS)) == 3


def test_contract_role_lookup_and_wrapper_fallback():
    optimism = NETWORKS[0]
    assert contract_address(optimism, "host") == "0x567c4B141ED61923967cA25Ef4906C8781069a10"
    assert contract_address(optimism, "nativeTokenWrapper") == ETHX_OP
    with pytest.raises(UnknownContractRole) as excinfo:
        contract_address(optimism, "gdaV1")
    assert "host, cfaV1, vestingScheduler, nativeTokenWrapper" in excinfo.value.message


def test_network_views():
    optimism = NETWORKS[0]
    assert contracts_view(optimism)["cfaV1"] == "0x204C6f131bb7F258b2Ea1593f5309911d8E458eD"
    assert subgraph_view(optimism)["protocol"] == (
        "https://subgraph-endpoints.superfluid.dev/optimism-mainnet/protocol-v1"
    )
    assert subgraph_view(NETWORKS[1])["subgraphV1"] is None
    automation = automation_view(optimism)
    assert automation["flowScheduler"] is None
    assert automation["vestingScheduler"] == "0x65377d4dfE9c01639A41952B5083D58964782892"
    assert automation["subgraphs"]["autoWrap"].endswith("/optimism-mainnet/auto-wrap")


def test_token_address_match_takes_precedence_over_symbol():
    tokens = TOKENS + [
        {"chainId": 10, "address": "0xabc", "symbol": USDCX_OP, "tags": ["supertoken"]},
    ]
    assert find_token(tokens, 10, USDCX_OP.upper().replace("0X", "0x"))["symbol"] == "USDCx"


def test_token_symbol_match_is_scoped_to_chain():
    assert resolve_token(TOKENS, 8453, "usdcx")["address"] == "0xd04383398dd2426297da660f9cca3d439af9ce1b"
    with pytest.raises(UnknownToken):
        resolve_token(TOKENS, 10, "USDC", super_only=True)
    assert resolve_token(TOKENS, 10, "USDC")["address"] == USDC_OP


def test_super_token_with_underlying():
    result = resolve_super_token(TOKENS, 10, "USDCx")
    assert result["superToken"]["address"] == USDCX_OP
    assert result["superToken"]["superTokenInfo"]["type"] == "Wrapper"
    assert result["underlying"]["symbol"] == "USDC"


def test_super_token_with_underlying_outside_list_gets_placeholder():
    result = resolve_super_token(TOKENS, 10, DAIX_OP)
    assert result["underlying"] == {"address": MISSING_UNDERLYING, "note": "Not in token list"}


def test_native_super_token_has_no_underlying():
    assert resolve_super_token(TOKENS, 10, "ethx")["underlying"] is None


def test_token_list_queries():
    assert [t["chainId"] for t in by_address(TOKENS, USDCX_OP.upper().replace("0X", "0x"))] == [10]
    assert [t["symbol"] for t in by_chain(TOKENS, 10, "underlying")] == ["USDC"]
    assert [t["chainId"] for t in by_symbol(TOKENS, "usdcx")] == [10, 8453]
    assert [t["chainId"] for t in by_symbol(TOKENS, "usdcx", 8453)] == [8453]
    with pytest.raises(UnknownToken):
        by_chain(TOKENS, 1)


def test_token_stats():
    stats = token_stats(TOKENS)
    assert stats["totalTokens"] == 5
    assert stats["superTokens"] == 4
    assert stats["underlyingTokens"] == 1
    assert stats["chains"] == [
        {"chainId": 10, "total": 4, "superTokens": 3, "underlying": 1},
        {"chainId": 8453, "total": 1, "superTokens": 1, "underlying": 0},
    ]


def test_chain_id_must_be_numeric():
    assert parse_chain_id(" 10 ") == 10
    with pytest.raises(MalformedInput):
        parse_chain_id("optimism")


@pytest.mark.parametrize("raw", ["²", "١٠", "10²"])
def test_chain_id_rejects_non_ascii_digits(raw):
    with pytest.raises(MalformedInput):
        parse_chain_id(raw)
    assert try_parse_chain_id(raw) is None


def test_non_ascii_digit_network_query_is_unknown():
    with pytest.raises(UnknownNetwork):
        resolve_network(NETWORKS, "²")


def test_settings_from_environment(tmp_path):
    settings = load_settings(
        {
            "SUPERFLUID_CACHE_DIR": str(tmp_path),
            "SUPERFLUID_ABI_CDN_BASE": "http://localhost:1/abi/",
            "SUPERFLUID_DISPLAY_DECIMALS": "4",
        }
    )
    assert settings.cache_dir == tmp_path
    assert settings.abi_cdn_base == "http://localhost:1/abi"
    assert settings.display_decimals == 4
    assert settings.default_decimals == 18
    with pytest.raises(MalformedInput):
        load_settings({"SUPERFLUID_DEFAULT_DECIMALS": "eighteen"})

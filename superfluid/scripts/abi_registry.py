"""Contract name resolution and ABI fragment lookup for the @sfpro/sdk ABI modules."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from error_map import MissingExport, UnknownContract, UnknownFragment
from remote_fetch import MODE_MODULE, DataSource

MAIN_MODULE = "main"
SDK_ABI_IMPORT = "@sfpro/sdk/abi"


@dataclass(frozen=True)
class ContractDescriptor:
    module: str
    export: str


ABI_MAP: dict[str, ContractDescriptor] = {
    # @sfpro/sdk/abi
    "CFAv1Forwarder": ContractDescriptor(MAIN_MODULE, "cfaForwarderAbi"),
    "GDAv1Forwarder": ContractDescriptor(MAIN_MODULE, "gdaForwarderAbi"),
    "SuperfluidPool": ContractDescriptor(MAIN_MODULE, "gdaPoolAbi"),
    "SuperToken": ContractDescriptor(MAIN_MODULE, "superTokenAbi"),
    # @sfpro/sdk/abi/core
    "Superfluid": ContractDescriptor("core", "hostAbi"),
    "ConstantFlowAgreementV1": ContractDescriptor("core", "cfaAbi"),
    "GeneralDistributionAgreementV1": ContractDescriptor("core", "gdaAbi"),
    "InstantDistributionAgreementV1": ContractDescriptor("core", "idaAbi"),
    "SuperTokenFactory": ContractDescriptor("core", "superTokenFactoryAbi"),
    "BatchLiquidator": ContractDescriptor("core", "batchLiquidatorAbi"),
    "TOGA": ContractDescriptor("core", "togaAbi"),
    "Governance": ContractDescriptor("core", "governanceAbi"),
    # @sfpro/sdk/abi/automation
    "AutoWrapManager": ContractDescriptor("automation", "autoWrapManagerAbi"),
    "AutoWrapStrategy": ContractDescriptor("automation", "autoWrapStrategyAbi"),
    "FlowScheduler": ContractDescriptor("automation", "flowSchedulerAbi"),
    "VestingSchedulerV3": ContractDescriptor("automation", "vestingSchedulerV3Abi"),
}

ALIASES: dict[str, str] = {
    "cfaforwarder": "CFAv1Forwarder",
    "gdaforwarder": "GDAv1Forwarder",
    "pool": "SuperfluidPool",
    "gdapool": "SuperfluidPool",
    "supertoken": "SuperToken",
    "token": "SuperToken",
    "host": "Superfluid",
    "cfa": "ConstantFlowAgreementV1",
    "gda": "GeneralDistributionAgreementV1",
    "ida": "InstantDistributionAgreementV1",
    "supertokenfactory": "SuperTokenFactory",
    "factory": "SuperTokenFactory",
    "batchliquidator": "BatchLiquidator",
    "liquidator": "BatchLiquidator",
    "toga": "TOGA",
    "governance": "Governance",
    "autowrapmanager": "AutoWrapManager",
    "autowrap": "AutoWrapManager",
    "autowrapstrategy": "AutoWrapStrategy",
    "flowscheduler": "FlowScheduler",
    "vestingschedulerv3": "VestingSchedulerV3",
    "vestingscheduler": "VestingSchedulerV3",
    "vesting": "VestingSchedulerV3",
}

# Known contracts that the SDK deliberately does not ship an ABI for.
UNSUPPORTED_CONTRACTS: dict[str, str] = {
    "CFASuperAppBase": "abstract base contract",
    "SuperTokenV1Library": "Solidity library",
}


def resolve_contract(query: str) -> str:
    lowered = query.strip().lower()
    for name in ABI_MAP:
        if name.lower() == lowered:
            return name
    if lowered in ALIASES:
        return ALIASES[lowered]

    for name, reason in UNSUPPORTED_CONTRACTS.items():
        if name.lower() == lowered:
            raise UnknownContract(
                f"{name} is not available in @sfpro/sdk ({reason}).",
                hint=f"Refer to the Rich ABI YAML: references/contracts/{name}.rich-abi.yaml",
            )
    raise UnknownContract(
        f'Unknown contract "{query}".',
        hint='Run "abi.py list" to see available contracts.',
    )


def sdk_import_path(module: str) -> str:
    return SDK_ABI_IMPORT if module == MAIN_MODULE else f"{SDK_ABI_IMPORT}/{module}"


def abi_module_source(module: str, cdn_base: str) -> DataSource:
    url = f"{cdn_base}/generated.js" if module == MAIN_MODULE else f"{cdn_base}/{module}/generated.js"
    return DataSource(
        name=f'ABI module "{module}"',
        url=url,
        cache_key=f"abi-{module}.mjs",
        mode=MODE_MODULE,
    )


def list_contracts() -> list[dict[str, str]]:
    return [
        {"contract": name, "sdkImport": sdk_import_path(entry.module), "sdkExport": entry.export}
        for name, entry in ABI_MAP.items()
    ]


def get_abi(exports: dict[str, Any], name: str) -> list[dict[str, Any]]:
    entry = ABI_MAP[name]
    abi = exports.get(entry.export)
    if not isinstance(abi, list):
        raise MissingExport(f'Export "{entry.export}" not found in SDK module "{entry.module}".')
    return abi


def find_fragments(abi: list[dict[str, Any]], fragment: str, *, contract: str) -> dict[str, Any] | list[dict[str, Any]]:
    """Match ABI entries by name; a single match is returned unwrapped."""
    wanted = fragment.lower()
    named_items = [item for item in abi if isinstance(item, dict) and isinstance(item.get("name"), str)]
    matches = [item for item in named_items if item["name"].lower() == wanted]
    if not matches:
        named = {item["name"] for item in named_items if item["name"]}
        raise UnknownFragment(
            f'No ABI entry named "{fragment}" in {contract}.',
            hint=f"Names are case-insensitive. The ABI has {len(named)} named entries.",
        )
    return matches[0] if len(matches) == 1 else matches

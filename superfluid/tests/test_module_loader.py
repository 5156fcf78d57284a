from __future__ import annotations

import pytest

from module_loader import ModuleLoadError, load_module_bytes, load_module_exports

from ._superfluid_helpers import CORE_ABI_MODULE, MAIN_ABI_MODULE


def test_generated_module_exports_are_extracted():
    exports = load_module_exports(MAIN_ABI_MODULE)

    assert list(exports) == ["superTokenAbi", "cfaForwarderAbi"]
    transfer = exports["superTokenAbi"][0]
    assert transfer["name"] == "transfer"
    assert transfer["inputs"][1] == {"name": "amount", "internalType": "uint256", "type": "uint256"}
    assert exports["cfaForwarderAbi"][0]["inputs"][2]["type"] == "int96"


def test_event_flags_and_empty_arrays():
    exports = load_module_exports(CORE_ABI_MODULE)
    event = exports["cfaAbi"][1]
    assert event["anonymous"] is False
    assert event["inputs"][0]["indexed"] is True
    assert exports["cfaAbi"][0]["inputs"] == []


def test_literal_forms():
    text = """
    /* header */
    const hidden = { "quoted": 'it\\'s', n: -1.5e2, big: 10n, hex: 0x1f, none: undefined, };
    export const visible = [`tpl`, "\\u0041", null, true,];
    export { hidden as renamedAbi };
    """
    exports = load_module_exports(text)

    assert exports["visible"] == ["tpl", "A", None, True]
    assert exports["renamedAbi"] == {"quoted": "it's", "n": -150.0, "big": 10, "hex": 31, "none": None}
    assert "hidden" not in exports


def test_non_literal_declarations_are_skipped():
    text = """
    export const helper = createThing({ a: 1 });
    export const abi = [{ type: 'function', name: 'f' }];
    """
    assert load_module_exports(text) == {"abi": [{"type": "function", "name": "f"}]}


def test_json_object_payload_is_accepted():
    assert load_module_exports('{"hostAbi": [{"type": "function", "name": "callAgreement"}]}') == {
        "hostAbi": [{"type": "function", "name": "callAgreement"}]
    }


@pytest.mark.parametrize(
    "text",
    [
        "export default function () {}",
        "export const abi = [`${x}`];",
        "[1, 2, 3]",
    ],
)
def test_modules_without_literal_exports_are_rejected(text):
    with pytest.raises(ModuleLoadError):
        load_module_exports(text)


def test_non_utf8_bytes_are_rejected():
    with pytest.raises(ModuleLoadError):
        load_module_bytes(b"\xff\xfe\x00")

from __future__ import annotations

import pytest

from error_map import MalformedInput
from formatters import format_amount, format_flow_rate, format_timestamp, scale_units


def test_amount_keeps_raw_and_caps_display_at_eight_digits():
    assert format_amount("1000000000000000000", 18) == {
        "wei": "1000000000000000000",
        "formatted": "1.00000000",
    }


def test_amount_uses_token_precision_below_cap():
    assert format_amount("1234567", 6) == {"wei": "1234567", "formatted": "1.234567"}


def test_amount_rounds_half_up_at_display_precision():
    assert format_amount("123456789", 18)["formatted"] == "0.00000000"
    assert format_amount("5000000000", 18)["formatted"] == "0.00000001"
    assert format_amount("4999999999", 18)["formatted"] == "0.00000000"


def test_amount_is_exact_for_large_values():
    raw = "123456789012345678901234567890"
    assert format_amount(raw, 18)["formatted"] == "123456789012.34567890"


def test_amount_preserves_negative_balances():
    assert format_amount("-2500000000000000000", 18)["formatted"] == "-2.50000000"


def test_amount_display_cap_is_configurable():
    assert format_amount("1000000000000000000", 18, display_decimals=2)["formatted"] == "1.00"


def test_amount_absent_is_null_and_garbage_is_rejected():
    assert format_amount(None) is None
    with pytest.raises(MalformedInput):
        format_amount("12abc", 18)


def test_flow_rate_sign_applies_to_both_figures():
    out = format_flow_rate("-500000000000000", 18)
    assert out == {
        "wei_per_second": "-500000000000000",
        "tokens_per_second": "-0.00050000",
        "tokens_per_month": "-1296.0000",
    }


def test_flow_rate_positive_uses_thirty_day_month():
    out = format_flow_rate("385802469135802", 18)
    assert out["tokens_per_second"] == "0.00038580"
    assert out["tokens_per_month"] == "1000.0000"


@pytest.mark.parametrize("raw", [None, "", "0", 0, "-0"])
def test_flow_rate_zero_or_absent_is_null(raw):
    assert format_flow_rate(raw, 18) is None


def test_timestamp_renders_iso_utc_with_milliseconds():
    assert format_timestamp("1700000000") == {"unix": "1700000000", "iso": "2023-11-14T22:13:20.000Z"}
    assert format_timestamp(86400) == {"unix": 86400, "iso": "1970-01-02T00:00:00.000Z"}


@pytest.mark.parametrize("raw", [None, "", 0, "0"])
def test_timestamp_absent_or_zero_is_null(raw):
    assert format_timestamp(raw) is None


def test_scale_units_without_fraction():
    assert scale_units(1500, 3, 0) == "2"
    assert scale_units(42, 0, 0) == "42"


def test_timestamp_past_year_9999_uses_expanded_year():
    assert format_timestamp("253402300799")["iso"] == "9999-12-31T23:59:59.000Z"
    assert format_timestamp("253402300800") == {"unix": "253402300800", "iso": "+010000-01-01T00:00:00.000Z"}
    assert format_timestamp(8_640_000_000_000)["iso"] == "+275760-09-13T00:00:00.000Z"


def test_timestamp_beyond_renderable_range_keeps_raw_value():
    assert format_timestamp("1000000001700000000") == {"unix": "1000000001700000000", "iso": None}

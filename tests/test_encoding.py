"""
tests/test_encoding.py – Canonical query-string encoding.

All tests run offline.  They verify:
  1. Keys are sorted and absent parameters are dropped.
  2. Numbers render positionally without locale or exponent artefacts.
  3. Boolean style is chosen per parameter, not globally.
  4. Strings are percent-encoded; enums encode their wire value.
  5. Non-finite numbers are rejected at the call site.
"""

from __future__ import annotations

import math
from decimal import Decimal

import pytest

from mbx_sdk.encoding import BoolStyle, ParameterSet, encode_params, format_value
from mbx_sdk.types import OrderSide, OrderType


class TestOrdering:
    def test_keys_sorted(self) -> None:
        params = ParameterSet({"symbol": "LTCUSDT", "leverage": 2, "recvWindow": 1234})
        assert params.encode() == "leverage=2&recvWindow=1234&symbol=LTCUSDT"

    def test_insertion_order_irrelevant(self) -> None:
        a = ParameterSet().add("b", 1).add("a", 2).add("c", 3)
        b = ParameterSet().add("c", 3).add("a", 2).add("b", 1)
        assert a.encode() == b.encode() == "a=2&b=1&c=3"

    def test_uppercase_sorts_before_lowercase(self) -> None:
        params = ParameterSet({"b": 1, "B": 2, "a": 3})
        keys = [pair.split("=")[0] for pair in params.encode().split("&")]
        assert keys == sorted(keys)
        assert keys == ["B", "a", "b"]

    def test_empty_set_encodes_empty(self) -> None:
        assert ParameterSet().encode() == ""
        assert encode_params(None) == ""


class TestAbsentParameters:
    def test_none_dropped(self) -> None:
        params = ParameterSet({"symbol": "BTCUSDT", "limit": None, "startTime": None})
        assert params.encode() == "symbol=BTCUSDT"
        assert "limit" not in params

    def test_adding_none_removes_existing(self) -> None:
        params = ParameterSet().add("symbol", "BTCUSDT").add("symbol", None)
        assert len(params) == 0
        assert params.encode() == ""

    def test_mapping_input(self) -> None:
        assert encode_params({"z": None, "y": "1"}) == "y=1"


class TestNumbers:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (10.5, "10.5"),
            (7.4, "7.4"),
            (100.0, "100"),
            (100, "100"),
            (0.0, "0"),
            (-0.0, "0"),
            (1e-7, "0.0000001"),
            (1e20, "100000000000000000000"),
            (0.1 + 0.2, "0.30000000000000004"),
            (Decimal("25000.500"), "25000.5"),
            (-3, "-3"),
        ],
    )
    def test_formatting(self, value: object, expected: str) -> None:
        assert format_value(value) == expected

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf, Decimal("NaN")])
    def test_non_finite_rejected(self, value: object) -> None:
        with pytest.raises(ValueError, match="non-finite"):
            format_value(value)

    def test_unsupported_type(self) -> None:
        with pytest.raises(TypeError):
            format_value(object())


class TestBooleans:
    def test_default_lowercase(self) -> None:
        assert ParameterSet({"dualSidePosition": True}).encode() == "dualSidePosition=true"

    def test_per_parameter_style(self) -> None:
        params = (
            ParameterSet()
            .add("closePosition", True, bool_style=BoolStyle.UPPER)
            .add("dualSidePosition", False)
        )
        assert params.encode() == "closePosition=TRUE&dualSidePosition=false"

    def test_bool_is_not_treated_as_int(self) -> None:
        assert format_value(True) == "true"
        assert format_value(False, BoolStyle.UPPER) == "FALSE"

    def test_style_resets_when_value_replaced(self) -> None:
        params = ParameterSet().add("flag", True, bool_style=BoolStyle.UPPER).add("flag", True)
        assert params.encode() == "flag=true"


class TestStringsAndEnums:
    def test_percent_encoding(self) -> None:
        assert format_value("a b&c=d/é") == "a%20b%26c%3Dd%2F%C3%A9"

    def test_unreserved_kept(self) -> None:
        assert format_value("my-order_1.x~") == "my-order_1.x~"

    def test_enum_value(self) -> None:
        params = ParameterSet({"side": OrderSide.BUY, "type": OrderType.STOP_MARKET})
        assert params.encode() == "side=BUY&type=STOP_MARKET"


class TestCopy:
    def test_copy_is_independent(self) -> None:
        original = ParameterSet({"symbol": "BTCUSDT"})
        clone = original.copy().add("timestamp", 1)
        assert "timestamp" not in original
        assert clone.encode() == "symbol=BTCUSDT&timestamp=1"

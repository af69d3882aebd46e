"""
encoding.py – Canonical query-string encoding.

The exchange verifies signatures over the exact query bytes, so encoding
must be deterministic:

  - keys are sorted lexicographically
  - absent (None) parameters are dropped, never sent empty
  - numbers are written positionally with no trailing zeros (100.0 → "100")
  - booleans follow a per-parameter style: most endpoints expect lowercase
    ``true``; order flags like ``closePosition`` expect ``TRUE``
  - strings are percent-encoded

Usage
-----
    params = ParameterSet()
    params.add("symbol", "SRMUSDT")
    params.add("closePosition", True, bool_style=BoolStyle.UPPER)
    params.add("quantity", None)            # dropped
    params.encode()                         # "closePosition=TRUE&symbol=SRMUSDT"
"""

from __future__ import annotations

import math
from decimal import Decimal
from enum import Enum, unique
from typing import Any, Iterator, Mapping, Optional, Union
from urllib.parse import quote

ParamValue = Union[str, int, float, Decimal, bool, Enum, None]


@unique
class BoolStyle(Enum):
    LOWER = "lower"   # true / false
    UPPER = "upper"   # TRUE / FALSE


def _format_decimal(value: Decimal) -> str:
    if not value.is_finite():
        raise ValueError(f"Cannot encode non-finite number {value!r}")
    text = format(value.normalize(), "f")
    return "0" if text in ("-0", "") else text


def format_value(value: Any, bool_style: BoolStyle = BoolStyle.LOWER) -> str:
    """Render one parameter value exactly as it will appear on the wire."""
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        text = "true" if value else "false"
        return text.upper() if bool_style is BoolStyle.UPPER else text
    if isinstance(value, Enum):
        return format_value(value.value, bool_style)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"Cannot encode non-finite number {value!r}")
        return _format_decimal(Decimal(repr(value)))
    if isinstance(value, Decimal):
        return _format_decimal(value)
    if isinstance(value, str):
        return quote(value, safe="")
    raise TypeError(f"Unsupported parameter type {type(value).__name__}")


class ParameterSet:
    """
    Named request parameters with optional per-parameter boolean style.

    Insertion order is irrelevant; ``encode()`` always sorts by key.
    """

    def __init__(self, values: Optional[Mapping[str, ParamValue]] = None) -> None:
        self._values: dict[str, ParamValue]       = {}
        self._styles: dict[str, BoolStyle]        = {}
        for name, value in (values or {}).items():
            self.add(name, value)

    def add(
        self,
        name: str,
        value: ParamValue,
        *,
        bool_style: Optional[BoolStyle] = None,
    ) -> "ParameterSet":
        """Set a parameter; None removes it.  Returns self for chaining."""
        if value is None:
            self._values.pop(name, None)
            self._styles.pop(name, None)
            return self
        self._values[name] = value
        if bool_style is not None:
            self._styles[name] = bool_style
        else:
            self._styles.pop(name, None)
        return self

    def get(self, name: str) -> ParamValue:
        return self._values.get(name)

    def bool_style(self, name: str) -> BoolStyle:
        return self._styles.get(name, BoolStyle.LOWER)

    def copy(self) -> "ParameterSet":
        clone = ParameterSet()
        clone._values = dict(self._values)
        clone._styles = dict(self._styles)
        return clone

    def keys(self) -> list[str]:
        return sorted(self._values)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __repr__(self) -> str:
        return f"ParameterSet({self._values!r})"

    def encode(self) -> str:
        return "&".join(
            f"{quote(name, safe='')}={format_value(self._values[name], self.bool_style(name))}"
            for name in self.keys()
        )


def encode_params(params: Union[ParameterSet, Mapping[str, ParamValue], None]) -> str:
    """Encode a ParameterSet or plain mapping into a canonical query string."""
    if params is None:
        return ""
    if not isinstance(params, ParameterSet):
        params = ParameterSet(params)
    return params.encode()

"""
Decimal-string codec for u128 amounts.

Amounts cross process/language boundaries as base-10 strings so that no
JSON number precision is lost. Decoding is strict: ASCII digits only, no sign,
no whitespace, no separators, and the value must fit u128.
"""

from __future__ import annotations

from typing import Any

from ..kernels.python.bonding_curve_v1 import U128_MAX

# len(str(U128_MAX)) == 39; allow a few leading zeros before rejecting outright.
_MAX_DECIMAL_LEN = 64


def encode_u128(value: int) -> str:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError("value must be an int")
    if value < 0 or value > U128_MAX:
        raise ValueError(f"value out of u128 range: {value}")
    return str(value)


def decode_u128(value: Any, *, name: str = "value") -> int:
    """Parse an int or base-10 string into a u128 int. Raises ValueError on malformed input."""
    if isinstance(value, bool):
        raise ValueError(f"{name} must be a decimal string or int, got bool")
    if isinstance(value, int):
        n = int(value)
    elif isinstance(value, str):
        if not value or len(value) > _MAX_DECIMAL_LEN:
            raise ValueError(f"Invalid u128 decimal for {name}: {value!r}")
        if not (value.isascii() and value.isdigit()):
            raise ValueError(f"Invalid u128 decimal for {name}: {value!r}")
        n = int(value, 10)
    else:
        raise ValueError(f"{name} must be a decimal string or int, got {type(value).__name__}")
    if n < 0 or n > U128_MAX:
        raise ValueError(f"{name} out of u128 range: {value!r}")
    return n


def decode_u128_list(values: Any, *, name: str = "values") -> list[int]:
    if not isinstance(values, (list, tuple)):
        raise ValueError(f"{name} must be a list")
    return [decode_u128(v, name=f"{name}[{i}]") for i, v in enumerate(values)]

from __future__ import annotations

import pytest

from pbcurve.integration.codec import decode_u128, decode_u128_list, encode_u128
from pbcurve.kernels.python.bonding_curve_v1 import U128_MAX


def test_u128_max_round_trips() -> None:
    text = encode_u128(U128_MAX)
    assert text == "340282366920938463463374607431768211455"
    assert decode_u128(text) == U128_MAX


def test_decode_accepts_ints_and_leading_zeros() -> None:
    assert decode_u128(42) == 42
    assert decode_u128("0042") == 42
    assert decode_u128("0") == 0


@pytest.mark.parametrize(
    "bad",
    ["", "-1", "+1", " 1", "1 ", "1_000", "1e3", "0x10", "١٢", True, None, 1.0, "340282366920938463463374607431768211456"],
)
def test_decode_rejects_malformed(bad) -> None:
    with pytest.raises(ValueError):
        decode_u128(bad, name="amount")


def test_encode_rejects_out_of_range() -> None:
    with pytest.raises(ValueError):
        encode_u128(-1)
    with pytest.raises(ValueError):
        encode_u128(U128_MAX + 1)
    with pytest.raises(TypeError):
        encode_u128(False)


def test_decode_list_reports_index() -> None:
    assert decode_u128_list(["1", 2]) == [1, 2]
    with pytest.raises(ValueError, match=r"mints\[1\]"):
        decode_u128_list(["1", "x"], name="mints")
    with pytest.raises(ValueError, match="must be a list"):
        decode_u128_list("1,2")

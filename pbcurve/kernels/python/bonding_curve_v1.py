"""
Bonding-curve kernel (v1 semantics).

Constant-product curve with a virtual token offset:
- Token-side reserve starts at `y0 = vt + sell_amount` and falls by one per token sold.
- Quote-side reserve `x0` is solved so the price at sell-out hits the target valuation:
      x0 = floor(mc_target_sats * vt^2 / (y0 * total_supply))
- The invariant `k = x0 * y0` is fixed; at any step `x = floor(k / y)`.

All arithmetic is integer-only and bounded to the u128 domain. Every multiply and
add that can leave the domain is checked and raises OverflowError instead of
wrapping. Invalid inputs raise ValueError.

Rounding:
- exact-in (quote in, tokens out): the post-trade token reserve uses floor division,
- exact-out (tokens out, quote in): the post-trade quote reserve uses ceiling division.
The two paths are kept separate so neither direction leaks value to the trader.
"""

from __future__ import annotations

from dataclasses import dataclass


U128_MAX = (1 << 128) - 1


def _require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


def _require_u128(name: str, value: int) -> None:
    _require_int(name, value)
    if value < 0:
        raise ValueError(f"{name} must be non-negative")
    if value > U128_MAX:
        raise OverflowError(f"{name} exceeds u128")


def checked_add(a: int, b: int, *, what: str = "sum") -> int:
    out = a + b
    if out > U128_MAX:
        raise OverflowError(f"{what} overflows u128")
    return out


def checked_mul(a: int, b: int, *, what: str = "product") -> int:
    out = a * b
    if out > U128_MAX:
        raise OverflowError(f"{what} overflows u128")
    return out


def floor_div(numerator: int, denominator: int) -> int:
    if denominator <= 0:
        raise ValueError("denominator must be positive")
    if numerator < 0:
        raise ValueError("numerator must be non-negative")
    return numerator // denominator


def ceil_div(numerator: int, denominator: int) -> int:
    if denominator <= 0:
        raise ValueError("denominator must be positive")
    if numerator < 0:
        raise ValueError("numerator must be non-negative")
    return (numerator + denominator - 1) // denominator


@dataclass(frozen=True)
class DerivedConstants:
    y0: int
    x0: int
    k: int


@dataclass(frozen=True)
class BuyExactInResult:
    tokens_out: int
    quote_in: int
    new_x: int
    new_y: int


@dataclass(frozen=True)
class BuyExactOutResult:
    quote_in: int
    tokens_out: int
    new_x: int
    new_y: int


def derive_constants(
    *,
    total_supply: int,
    sell_amount: int,
    vt: int,
    mc_target_sats: int,
) -> DerivedConstants:
    """
    Solve the curve constants from launch parameters.

    Raises ValueError for zero/inconsistent parameters or an infeasible ratio
    (x0 rounds to zero), OverflowError if any intermediate leaves u128.
    """
    for name, v in (
        ("total_supply", total_supply),
        ("sell_amount", sell_amount),
        ("vt", vt),
        ("mc_target_sats", mc_target_sats),
    ):
        _require_u128(name, v)
        if v == 0:
            raise ValueError(f"{name} must be positive")

    if sell_amount > total_supply:
        raise ValueError(f"sell_amount ({sell_amount}) exceeds total_supply ({total_supply})")

    y0 = checked_add(vt, sell_amount, what="vt + sell_amount")
    vt_sq = checked_mul(vt, vt, what="vt^2")
    numerator = checked_mul(mc_target_sats, vt_sq, what="mc_target_sats * vt^2")
    denominator = checked_mul(y0, total_supply, what="y0 * total_supply")

    x0 = floor_div(numerator, denominator)
    if x0 == 0:
        raise ValueError("x0 rounds to zero (mc_target_sats too small for this supply/vt)")

    k = checked_mul(x0, y0, what="k = x0 * y0")
    return DerivedConstants(y0=y0, x0=x0, k=k)


def reserves_at(*, k: int, y0: int, step: int) -> tuple[int, int]:
    """Return `(x, y)` after `step` tokens have been sold: `y = y0 - step`, `x = floor(k / y)`."""
    _require_u128("step", step)
    if step >= y0:
        raise ValueError(f"step ({step}) would exhaust the token reserve ({y0})")
    y = y0 - step
    return floor_div(k, y), y


def buy_exact_quote_in(*, k: int, x: int, y: int, quote_in: int) -> BuyExactInResult:
    """
    Tokens received for exactly `quote_in` sats.

        x' = x + quote_in
        y' = floor(k / x')
        tokens_out = y - y'

    Since `x = floor(k / y)`, any positive `quote_in` yields at least one token.
    """
    _require_u128("quote_in", quote_in)
    if quote_in == 0:
        raise ValueError("quote_in must be positive")
    if y <= 0:
        raise ValueError("cannot buy against an empty token reserve")

    new_x = checked_add(x, quote_in, what="x + quote_in")
    new_y = floor_div(k, new_x)
    if new_y > y:
        raise ValueError("buy would increase the token reserve")
    tokens_out = y - new_y

    return BuyExactInResult(tokens_out=tokens_out, quote_in=quote_in, new_x=new_x, new_y=new_y)


def buy_exact_asset_out(*, k: int, x: int, y: int, asset_out: int) -> BuyExactOutResult:
    """
    Sats required to receive exactly `asset_out` tokens.

        y' = y - asset_out
        x' = ceil(k / y')
        quote_in = x' - x

    Ceiling rounding makes the buyer pay at least enough to move the curve to `y'`.
    """
    _require_u128("asset_out", asset_out)
    if asset_out == 0:
        raise ValueError("asset_out must be positive")
    if asset_out >= y:
        raise ValueError(f"cannot drain full token reserve: asset_out ({asset_out}) >= y ({y})")

    new_y = y - asset_out
    new_x = ceil_div(k, new_y)
    if new_x < x:
        raise ValueError("buy would decrease the quote reserve")
    quote_in = new_x - x

    return BuyExactOutResult(quote_in=quote_in, tokens_out=asset_out, new_x=new_x, new_y=new_y)

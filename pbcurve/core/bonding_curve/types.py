"""Data types for the bonding-curve engine.

All types are frozen dataclasses (immutable).

Units/conventions:
- token amounts (`total_supply`, `sell_amount`, `vt`, `step`, `y`) are atomic token units,
- quote amounts (`mc_target_sats`, `x`, raises, valuations) are sats,
- decimals/scaling are a caller concern and are not modeled here.
"""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction


@dataclass(frozen=True)
class CurveConfig:
    """Launch parameters."""

    total_supply: int
    sell_amount: int
    vt: int
    mc_target_sats: int


@dataclass(frozen=True)
class CurveConstants:
    """Derived once at construction; never recomputed."""

    y0: int
    x0: int
    k: int


@dataclass(frozen=True)
class CurveSnapshot:
    """Reserve state after `step` tokens have been sold."""

    step: int
    x: int
    y: int

    @property
    def price_num(self) -> int:
        return self.x

    @property
    def price_den(self) -> int:
        return self.y

    @property
    def price(self) -> Fraction:
        """Spot price in sats per token unit, exact."""
        return Fraction(self.x, self.y)


@dataclass(frozen=True)
class MintResult:
    """One entry of a simulated mint sequence."""

    start_step: int
    tokens_out: int

"""Invariant checkers for the bonding curve.

Each function returns True when the invariant holds for the curve at a given
snapshot, and `check_all()` returns the list of violated invariant IDs
(empty = all pass).
"""

from __future__ import annotations

from typing import Callable

from .curve import Curve
from .types import CurveSnapshot


def inv_product_floor(curve: Curve, s: CurveSnapshot) -> bool:
    """`x = floor(k / y)`, i.e. `x*y <= k < (x+1)*y`."""
    k = curve.constants.k
    return s.x * s.y <= k < (s.x + 1) * s.y


def inv_y_tracks_step(curve: Curve, s: CurveSnapshot) -> bool:
    return s.y == curve.constants.y0 - s.step


def inv_y_at_least_vt(curve: Curve, s: CurveSnapshot) -> bool:
    return s.y >= curve.config.vt


def inv_x_at_least_x0(curve: Curve, s: CurveSnapshot) -> bool:
    return s.x >= curve.constants.x0


def inv_step_in_window(curve: Curve, s: CurveSnapshot) -> bool:
    return 0 <= s.step <= curve.config.sell_amount


def inv_constants_consistent(curve: Curve, s: CurveSnapshot) -> bool:
    c = curve.constants
    return c.y0 == curve.config.vt + curve.config.sell_amount and c.k == c.x0 * c.y0


INVARIANT_REGISTRY: dict[str, Callable[[Curve, CurveSnapshot], bool]] = {
    "inv_product_floor": inv_product_floor,
    "inv_y_tracks_step": inv_y_tracks_step,
    "inv_y_at_least_vt": inv_y_at_least_vt,
    "inv_x_at_least_x0": inv_x_at_least_x0,
    "inv_step_in_window": inv_step_in_window,
    "inv_constants_consistent": inv_constants_consistent,
}


def check_all(curve: Curve, step: int) -> list[str]:
    """Return list of violated invariant IDs at `step` (empty = all pass)."""
    snap = curve.snapshot(step)
    return [
        inv_id
        for inv_id, check_fn in INVARIANT_REGISTRY.items()
        if not check_fn(curve, snap)
    ]

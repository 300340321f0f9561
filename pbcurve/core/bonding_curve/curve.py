"""Immutable bonding-curve engine.

``Curve`` validates a ``CurveConfig``, derives ``CurveConstants`` once, and then
answers every query as a pure function of ``(constants, step, ...)``:

1. State projection: ``snapshot(step)``.
2. Swaps against the reserves at a step (neither mutates the curve):
   ``asset_out_given_quote_in`` (floor path) and ``quote_in_given_asset_out``
   (ceiling path).
3. Aggregates: total raise, realized final valuation, progress, cumulative cost.
4. ``simulate_mints``: a sequence of buys from step 0, all-or-nothing.

Arithmetic lives in ``pbcurve/kernels/python/bonding_curve_v1.py``; this module
maps kernel failures onto the call-site error classes in ``errors.py``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Iterable

from ...kernels.python import bonding_curve_v1 as kernel
from .errors import (
    CurveAssetOutError,
    CurveCreateError,
    CurveError,
    CurveErrorKind,
    CurveFinalMcError,
    CurveMetricError,
    CurveProgressError,
    CurveQuoteInError,
    CurveSimulateMintsError,
    CurveSnapshotError,
)
from .types import CurveConfig, CurveConstants, CurveSnapshot, MintResult

logger = logging.getLogger(__name__)


def _require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")


def _derive_constants(config: CurveConfig) -> CurveConstants:
    try:
        derived = kernel.derive_constants(
            total_supply=config.total_supply,
            sell_amount=config.sell_amount,
            vt=config.vt,
            mc_target_sats=config.mc_target_sats,
        )
    except OverflowError as exc:
        raise CurveCreateError(CurveErrorKind.OVERFLOW, str(exc)) from exc
    except (TypeError, ValueError) as exc:
        raise CurveCreateError(CurveErrorKind.INVALID_CONFIG, str(exc)) from exc
    return CurveConstants(y0=derived.y0, x0=derived.x0, k=derived.k)


@dataclass(frozen=True)
class Curve:
    """Constant-product sale curve with a virtual token offset.

    Build with ``Curve(config)`` or ``Curve.create(config)``; both raise
    ``CurveCreateError`` on invalid input. ``constants`` is computed in
    ``__post_init__`` and cannot be assigned afterwards.
    """

    config: CurveConfig
    constants: CurveConstants = field(init=False)

    def __post_init__(self) -> None:
        if not isinstance(self.config, CurveConfig):
            raise CurveCreateError(
                CurveErrorKind.INVALID_CONFIG,
                f"config must be a CurveConfig, got {type(self.config).__name__}",
            )
        constants = _derive_constants(self.config)
        object.__setattr__(self, "constants", constants)
        logger.debug(
            "curve created: total_supply=%d sell_amount=%d vt=%d y0=%d x0=%d k=%d",
            self.config.total_supply,
            self.config.sell_amount,
            self.config.vt,
            constants.y0,
            constants.x0,
            constants.k,
        )

    @classmethod
    def create(cls, config: CurveConfig) -> "Curve":
        return cls(config)

    def max_step(self) -> int:
        return self.config.sell_amount

    # -- State projection ----------------------------------------------------

    def _snapshot(self, step: int, error_cls: type[CurveError]) -> CurveSnapshot:
        _require_int("step", step)
        if step < 0 or step > self.config.sell_amount:
            raise error_cls(
                CurveErrorKind.OUT_OF_RANGE,
                f"step {step} outside [0, {self.config.sell_amount}]",
            )
        x, y = kernel.reserves_at(k=self.constants.k, y0=self.constants.y0, step=step)
        return CurveSnapshot(step=step, x=x, y=y)

    def snapshot(self, step: int) -> CurveSnapshot:
        """Reserve pair after `step` tokens have been sold."""
        return self._snapshot(step, CurveSnapshotError)

    def spot_price(self, step: int) -> Fraction:
        return self.snapshot(step).price

    # -- Swaps ---------------------------------------------------------------

    def asset_out_given_quote_in(self, step: int, quote_in: int) -> int:
        """Tokens received for `quote_in` sats at `step` (floor rounding)."""
        snap = self._snapshot(step, CurveAssetOutError)
        _require_int("quote_in", quote_in)
        if quote_in == 0:
            raise CurveAssetOutError(CurveErrorKind.ZERO_INPUT, "quote_in must be positive")

        try:
            res = kernel.buy_exact_quote_in(k=self.constants.k, x=snap.x, y=snap.y, quote_in=quote_in)
        except OverflowError as exc:
            raise CurveAssetOutError(CurveErrorKind.OVERFLOW, str(exc)) from exc
        except ValueError as exc:
            raise CurveAssetOutError(CurveErrorKind.OUT_OF_RANGE, str(exc)) from exc

        if step + res.tokens_out > self.config.sell_amount:
            raise CurveAssetOutError(
                CurveErrorKind.EXCEEDS_POOL,
                f"quote_in {quote_in} at step {step} buys {res.tokens_out} tokens, "
                f"only {self.config.sell_amount - step} remain in the sale",
            )
        return res.tokens_out

    def quote_in_given_asset_out(self, step: int, asset_out: int) -> int:
        """Sats required to receive exactly `asset_out` tokens at `step` (ceiling rounding)."""
        snap = self._snapshot(step, CurveQuoteInError)
        _require_int("asset_out", asset_out)
        if asset_out == 0:
            raise CurveQuoteInError(CurveErrorKind.ZERO_INPUT, "asset_out must be positive")
        if asset_out < 0:
            raise CurveQuoteInError(CurveErrorKind.OUT_OF_RANGE, "asset_out must be non-negative")
        if asset_out >= snap.y or step + asset_out > self.config.sell_amount:
            raise CurveQuoteInError(
                CurveErrorKind.EXCEEDS_POOL,
                f"asset_out {asset_out} at step {step} exceeds the "
                f"{self.config.sell_amount - step} tokens left in the sale",
            )

        try:
            res = kernel.buy_exact_asset_out(k=self.constants.k, x=snap.x, y=snap.y, asset_out=asset_out)
        except OverflowError as exc:
            raise CurveQuoteInError(CurveErrorKind.OVERFLOW, str(exc)) from exc
        except ValueError as exc:
            raise CurveQuoteInError(CurveErrorKind.OUT_OF_RANGE, str(exc)) from exc
        return res.quote_in

    def mint(self, step: int, quote_in: int) -> tuple[int, int]:
        """Buy at `step`; returns `(new_step, tokens_out)`."""
        tokens_out = self.asset_out_given_quote_in(step, quote_in)
        return step + tokens_out, tokens_out

    # -- Aggregates ----------------------------------------------------------

    def total_raise_sats(self) -> int:
        """Sats raised if the whole window sells: `floor(k / vt) - x0`."""
        try:
            x_final = kernel.floor_div(self.constants.k, self.config.vt)
        except ValueError as exc:
            raise CurveFinalMcError(CurveErrorKind.INVALID_CONFIG, str(exc)) from exc
        return x_final - self.constants.x0

    def final_mc_sats(self) -> int:
        """Realized valuation at sell-out: `floor(k * total_supply / vt^2)`.

        Differs from `mc_target_sats` by the floor taken when solving `x0`.
        """
        try:
            vt_sq = kernel.checked_mul(self.config.vt, self.config.vt, what="vt^2")
            # k * total_supply is formed exactly; only the quotient must fit u128.
            value = kernel.floor_div(self.constants.k * self.config.total_supply, vt_sq)
        except OverflowError as exc:
            raise CurveFinalMcError(CurveErrorKind.OVERFLOW, str(exc)) from exc
        except ValueError as exc:
            raise CurveFinalMcError(CurveErrorKind.INVALID_CONFIG, str(exc)) from exc
        if value > kernel.U128_MAX:
            raise CurveFinalMcError(CurveErrorKind.OVERFLOW, "final market cap overflows u128")
        return value

    def valuation_drift_sats(self) -> int:
        return self.config.mc_target_sats - self.final_mc_sats()

    def progress_at_step(self, step: int) -> int:
        """Integer percent of `total_supply` sold at `step` (floor)."""
        return self._progress(step, self.config.total_supply)

    def window_progress_at_step(self, step: int) -> int:
        """Integer percent of the sellable window sold at `step` (floor)."""
        return self._progress(step, self.config.sell_amount)

    def _progress(self, step: int, denominator: int) -> int:
        self._snapshot(step, CurveProgressError)
        try:
            scaled = kernel.checked_mul(step, 100, what="step * 100")
        except OverflowError as exc:
            raise CurveProgressError(CurveErrorKind.OVERFLOW, str(exc)) from exc
        return kernel.floor_div(scaled, denominator)

    def cumulative_quote_to_step(self, step: int) -> int:
        """Sats spent to move the curve from step 0 to `step`."""
        return self._snapshot(step, CurveMetricError).x - self.constants.x0

    # -- Simulation ----------------------------------------------------------

    def simulate_mints(self, quote_in_amounts: Iterable[int]) -> list[MintResult]:
        """Apply buys in order from step 0. Any failing buy aborts the whole run."""
        results: list[MintResult] = []
        step = 0
        for index, quote_in in enumerate(quote_in_amounts):
            try:
                tokens_out = self.asset_out_given_quote_in(step, quote_in)
            except CurveAssetOutError as exc:
                logger.debug("simulate_mints aborted at index %d (start_step=%d): %s", index, step, exc)
                raise CurveSimulateMintsError(
                    exc.kind,
                    f"mint {index} (quote_in={quote_in}, start_step={step}) failed: {exc.message}",
                    index=index,
                ) from exc
            results.append(MintResult(start_step=step, tokens_out=tokens_out))
            step += tokens_out
        return results

"""
Request dispatch for boundary callers.

Every call returns a `BoxedResult` instead of raising: `ok=True` with a value,
or `ok=False` with an `error_type` naming the failing call site and a message.
Integer values are encoded as decimal strings by `to_json_dict()`.

Request shape (all amounts int or decimal string):
    {"op": "snapshot", "step": "0"}
    {"op": "asset_out_given_quote_in", "step": "0", "quote_in": "1000"}
    {"op": "quote_in_given_asset_out", "step": "0", "asset_out": "1000"}
    {"op": "total_raise_sats"}
    {"op": "final_mc_sats"}
    {"op": "progress_at_step", "step": "0"}
    {"op": "cumulative_quote_to_step", "step": "0"}
    {"op": "simulate_mints", "mints": ["100", "200"]}
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Dict

from ..core.bonding_curve import (
    Curve,
    CurveError,
    CurveSnapshot,
    MintResult,
    config_from_dict,
    config_to_dict,
)
from .codec import decode_u128, decode_u128_list, encode_u128

logger = logging.getLogger(__name__)

REQUEST_ERROR = "CurveRequestError"


@dataclass(frozen=True)
class BoxedResult:
    ok: bool
    value: Any = None
    error_type: str | None = None
    error: str | None = None

    def expect(self, message: str) -> Any:
        if not self.ok:
            raise RuntimeError(f"{message}: {self.error_type}: {self.error}")
        return self.value

    def to_json_dict(self) -> Dict[str, Any]:
        if not self.ok:
            return {"ok": False, "error_type": self.error_type, "error": self.error}
        return {"ok": True, "value": encode_value(self.value)}


def encode_value(value: Any) -> Any:
    if isinstance(value, bool):
        raise TypeError("bool is not a curve value")
    if isinstance(value, int):
        return encode_u128(value)
    if isinstance(value, CurveSnapshot):
        return {"step": encode_u128(value.step), "x": encode_u128(value.x), "y": encode_u128(value.y)}
    if isinstance(value, MintResult):
        return {"start_step": encode_u128(value.start_step), "tokens_out": encode_u128(value.tokens_out)}
    if isinstance(value, Curve):
        c = value.constants
        return {
            "config": {k: encode_u128(v) for k, v in config_to_dict(value.config).items()},
            "constants": {"y0": encode_u128(c.y0), "x0": encode_u128(c.x0), "k": encode_u128(c.k)},
        }
    if isinstance(value, (list, tuple)):
        return [encode_value(v) for v in value]
    raise TypeError(f"cannot encode {type(value).__name__}")


def _fail(error_type: str, message: str) -> BoxedResult:
    return BoxedResult(ok=False, error_type=error_type, error=message)


def curve_from_payload(payload: Mapping[str, Any]) -> Curve:
    """Build a Curve from a config mapping. Raises CurveError/ValueError/TypeError/KeyError."""
    if not isinstance(payload, Mapping):
        raise ValueError(f"config payload must be an object, got {type(payload).__name__}")
    return Curve.create(config_from_dict(payload))


def create_boxed(payload: Mapping[str, Any]) -> BoxedResult:
    try:
        curve = curve_from_payload(payload)
    except CurveError as exc:
        return _fail(type(exc).__name__, f"Failed to construct curve: {exc}")
    except (KeyError, TypeError, ValueError) as exc:
        return _fail("CurveCreateError", f"Failed to construct curve: invalid config: {exc}")
    return BoxedResult(ok=True, value=curve)


def _op_snapshot(curve: Curve, req: Mapping[str, Any]) -> Any:
    return curve.snapshot(decode_u128(req.get("step"), name="step"))


def _op_asset_out(curve: Curve, req: Mapping[str, Any]) -> Any:
    return curve.asset_out_given_quote_in(
        decode_u128(req.get("step"), name="step"),
        decode_u128(req.get("quote_in"), name="quote_in"),
    )


def _op_quote_in(curve: Curve, req: Mapping[str, Any]) -> Any:
    return curve.quote_in_given_asset_out(
        decode_u128(req.get("step"), name="step"),
        decode_u128(req.get("asset_out"), name="asset_out"),
    )


def _op_total_raise(curve: Curve, req: Mapping[str, Any]) -> Any:
    return curve.total_raise_sats()


def _op_final_mc(curve: Curve, req: Mapping[str, Any]) -> Any:
    return curve.final_mc_sats()


def _op_progress(curve: Curve, req: Mapping[str, Any]) -> Any:
    return curve.progress_at_step(decode_u128(req.get("step"), name="step"))


def _op_cumulative(curve: Curve, req: Mapping[str, Any]) -> Any:
    return curve.cumulative_quote_to_step(decode_u128(req.get("step"), name="step"))


def _op_simulate(curve: Curve, req: Mapping[str, Any]) -> Any:
    return curve.simulate_mints(decode_u128_list(req.get("mints"), name="mints"))


OpFn = Callable[[Curve, Mapping[str, Any]], Any]

_DISPATCH: dict[str, OpFn] = {
    "snapshot": _op_snapshot,
    "asset_out_given_quote_in": _op_asset_out,
    "quote_in_given_asset_out": _op_quote_in,
    "total_raise_sats": _op_total_raise,
    "final_mc_sats": _op_final_mc,
    "progress_at_step": _op_progress,
    "cumulative_quote_to_step": _op_cumulative,
    "simulate_mints": _op_simulate,
}

OPERATIONS: tuple[str, ...] = tuple(_DISPATCH)


def dispatch(curve: Curve, request: Mapping[str, Any]) -> BoxedResult:
    """Run one request against `curve`. Never raises for curve or request errors."""
    if not isinstance(request, Mapping):
        return _fail(REQUEST_ERROR, f"request must be an object, got {type(request).__name__}")
    op = request.get("op")
    fn = _DISPATCH.get(op) if isinstance(op, str) else None
    if fn is None:
        return _fail(REQUEST_ERROR, f"unknown op: {op!r}")

    try:
        value = fn(curve, request)
    except CurveError as exc:
        logger.debug("op %s rejected: %s", op, exc)
        return _fail(type(exc).__name__, f"Failed to run {op}: {exc}")
    except ValueError as exc:
        return _fail(REQUEST_ERROR, f"Failed to parse {op} request: {exc}")
    return BoxedResult(ok=True, value=value)

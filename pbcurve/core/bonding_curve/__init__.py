"""`bonding_curve`: immutable constant-product sale curve with a virtual token offset.

- deterministic, integer-only (u128 domain, checked multiply/add),
- immutable curve (frozen dataclass, constants derived once at construction),
- structured errors: one exception class per call site, each with a `kind`.

Public API:
- `Curve(config)` / `Curve.create(config)`
- `Curve.snapshot(step)`, `asset_out_given_quote_in`, `quote_in_given_asset_out`, `mint`
- `total_raise_sats`, `final_mc_sats`, `progress_at_step`, `cumulative_quote_to_step`
- `simulate_mints(amounts)` (all-or-nothing)
"""

from .config import config_from_dict, config_to_dict, dump_config, load_config
from .curve import Curve
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
from .invariants import INVARIANT_REGISTRY, check_all
from .types import CurveConfig, CurveConstants, CurveSnapshot, MintResult

__all__ = [
    "Curve",
    "CurveConfig",
    "CurveConstants",
    "CurveSnapshot",
    "MintResult",
    "config_from_dict",
    "config_to_dict",
    "dump_config",
    "load_config",
    "INVARIANT_REGISTRY",
    "check_all",
    "CurveError",
    "CurveErrorKind",
    "CurveCreateError",
    "CurveSnapshotError",
    "CurveAssetOutError",
    "CurveQuoteInError",
    "CurveMetricError",
    "CurveFinalMcError",
    "CurveProgressError",
    "CurveSimulateMintsError",
]

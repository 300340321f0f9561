"""
Core curve algorithms
"""

from .bonding_curve import (
    Curve,
    CurveConfig,
    CurveConstants,
    CurveError,
    CurveErrorKind,
    CurveSnapshot,
    MintResult,
)

__all__ = [
    "Curve",
    "CurveConfig",
    "CurveConstants",
    "CurveError",
    "CurveErrorKind",
    "CurveSnapshot",
    "MintResult",
]

"""Exception types for the bonding-curve engine.

One exception class per call site, each carrying a ``kind`` so callers can
branch on the failure without parsing messages. Errors are never recovered
internally; they propagate to the caller unchanged.
"""

from __future__ import annotations

from enum import Enum, unique


@unique
class CurveErrorKind(Enum):
    INVALID_CONFIG = "InvalidConfig"
    OVERFLOW = "Overflow"
    OUT_OF_RANGE = "OutOfRange"
    ZERO_INPUT = "ZeroInput"
    EXCEEDS_POOL = "ExceedsPool"


class CurveError(Exception):
    """Base class: a discrete ``kind`` plus a human-readable ``message``."""

    def __init__(self, kind: CurveErrorKind, message: str) -> None:
        self.kind = kind
        self.message = message
        super().__init__(f"CurveError::{kind.value}: {message}")


class CurveCreateError(CurveError):
    """Raised when a config is invalid or its constants cannot be derived."""


class CurveSnapshotError(CurveError):
    """Raised when a step lies outside ``[0, sell_amount]``."""


class CurveAssetOutError(CurveError):
    """Raised by the quote-in -> tokens-out swap."""


class CurveQuoteInError(CurveError):
    """Raised by the tokens-out -> quote-in swap."""


class CurveMetricError(CurveError):
    """Raised by aggregate metrics."""


class CurveFinalMcError(CurveMetricError):
    """Raised by valuation/raise metrics."""


class CurveProgressError(CurveMetricError):
    """Raised by progress metrics."""


class CurveSimulateMintsError(CurveError):
    """Raised when any mint in a simulated sequence fails.

    ``index`` is the position of the failing amount in the input sequence.
    """

    def __init__(self, kind: CurveErrorKind, message: str, *, index: int) -> None:
        self.index = index
        super().__init__(kind, message)

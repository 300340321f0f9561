from __future__ import annotations

import pytest

from pbcurve.core.bonding_curve import Curve
from pbcurve.integration.operations import OPERATIONS, BoxedResult, create_boxed, dispatch

SMALL = {"total_supply": "1000", "sell_amount": "800", "vt": "200", "mc_target_sats": "25000"}


@pytest.fixture()
def curve() -> Curve:
    return create_boxed(SMALL).expect("failed to create curve")


def test_create_boxed_ok_encodes_constants() -> None:
    res = create_boxed(SMALL)
    assert res.ok
    assert res.to_json_dict() == {
        "ok": True,
        "value": {
            "config": SMALL,
            "constants": {"y0": "1000", "x0": "1000", "k": "1000000"},
        },
    }


def test_create_boxed_reports_create_error() -> None:
    res = create_boxed({**SMALL, "sell_amount": "1001"})
    assert not res.ok
    assert res.error_type == "CurveCreateError"
    assert "InvalidConfig" in res.error


def test_create_boxed_reports_malformed_payload() -> None:
    res = create_boxed({**SMALL, "vt": "-5"})
    assert res.error_type == "CurveCreateError"
    assert create_boxed({"vt": "1"}).error_type == "CurveCreateError"


def test_expect_raises_on_error() -> None:
    with pytest.raises(RuntimeError, match="boom: CurveCreateError"):
        create_boxed({**SMALL, "vt": "0"}).expect("boom")


def test_snapshot(curve: Curve) -> None:
    res = dispatch(curve, {"op": "snapshot", "step": "500"})
    assert res.to_json_dict() == {"ok": True, "value": {"step": "500", "x": "2000", "y": "500"}}


@pytest.mark.parametrize(
    "request_, expected",
    [
        ({"op": "asset_out_given_quote_in", "step": "0", "quote_in": "1000"}, "500"),
        ({"op": "quote_in_given_asset_out", "step": "0", "asset_out": "300"}, "429"),
        ({"op": "total_raise_sats"}, "4000"),
        ({"op": "final_mc_sats"}, "25000"),
        ({"op": "progress_at_step", "step": 400}, "40"),
        ({"op": "cumulative_quote_to_step", "step": "500"}, "1000"),
    ],
)
def test_scalar_ops(curve: Curve, request_, expected) -> None:
    assert dispatch(curve, request_).to_json_dict() == {"ok": True, "value": expected}


def test_simulate_mints(curve: Curve) -> None:
    res = dispatch(curve, {"op": "simulate_mints", "mints": ["1000", "1000"]})
    assert res.to_json_dict()["value"] == [
        {"start_step": "0", "tokens_out": "500"},
        {"start_step": "500", "tokens_out": "167"},
    ]


@pytest.mark.parametrize(
    "request_, error_type",
    [
        ({"op": "snapshot", "step": "801"}, "CurveSnapshotError"),
        ({"op": "asset_out_given_quote_in", "step": "0", "quote_in": "4001"}, "CurveAssetOutError"),
        ({"op": "quote_in_given_asset_out", "step": "0", "asset_out": "0"}, "CurveQuoteInError"),
        ({"op": "progress_at_step", "step": "801"}, "CurveProgressError"),
        ({"op": "cumulative_quote_to_step", "step": "801"}, "CurveMetricError"),
        ({"op": "simulate_mints", "mints": ["1000", "0"]}, "CurveSimulateMintsError"),
        ({"op": "snapshot", "step": "-1"}, "CurveRequestError"),
        ({"op": "simulate_mints", "mints": "1000"}, "CurveRequestError"),
        ({"op": "snapshot"}, "CurveRequestError"),
        ({"op": "drain"}, "CurveRequestError"),
        ({}, "CurveRequestError"),
    ],
)
def test_errors_are_boxed(curve: Curve, request_, error_type) -> None:
    res = dispatch(curve, request_)
    assert res == BoxedResult(ok=False, error_type=error_type, error=res.error)
    assert res.error
    assert res.to_json_dict()["ok"] is False


def test_non_mapping_request(curve: Curve) -> None:
    assert dispatch(curve, ["snapshot"]).error_type == "CurveRequestError"  # type: ignore[arg-type]


def test_operation_table_complete() -> None:
    assert set(OPERATIONS) == {
        "snapshot",
        "asset_out_given_quote_in",
        "quote_in_given_asset_out",
        "total_raise_sats",
        "final_mc_sats",
        "progress_at_step",
        "cumulative_quote_to_step",
        "simulate_mints",
    }

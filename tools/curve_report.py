#!/usr/bin/env python3
"""
Print a JSON report for a bonding-curve config.

Reads a YAML config (see `examples/curve.yaml`), builds the curve, and reports
derived constants, aggregate metrics, snapshots at the requested steps, and an
optional mint simulation. Every value goes through the boxed dispatcher, so
failures are reported in the output rather than as tracebacks.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from pbcurve.core.bonding_curve import config_to_dict, load_config
from pbcurve.integration.operations import create_boxed, dispatch

logger = logging.getLogger("curve_report")


def _parse_csv(value: str) -> List[str]:
    return [v.strip() for v in value.split(",") if v.strip()]


def build_report(config_path: Path, *, steps: List[str], mints: List[str]) -> Dict[str, Any]:
    config = load_config(config_path)
    created = create_boxed(config_to_dict(config))
    report: Dict[str, Any] = {"config": str(config_path), "curve": created.to_json_dict()}
    if not created.ok:
        return report
    curve = created.value

    report["metrics"] = {
        op: dispatch(curve, {"op": op}).to_json_dict()
        for op in ("total_raise_sats", "final_mc_sats")
    }
    report["steps"] = {
        step: {
            op: dispatch(curve, {"op": op, "step": step}).to_json_dict()
            for op in ("snapshot", "progress_at_step", "cumulative_quote_to_step")
        }
        for step in steps
    }
    if mints:
        report["simulation"] = dispatch(curve, {"op": "simulate_mints", "mints": mints}).to_json_dict()
    return report


def main(argv: List[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Bonding-curve report (JSON).")
    ap.add_argument("config", type=str, help="YAML curve config")
    ap.add_argument("--steps", type=str, default="0", help="comma-separated steps to snapshot")
    ap.add_argument("--max-step", action="store_true", help="also snapshot the final step")
    ap.add_argument("--mints", type=str, default="", help="comma-separated sats amounts to simulate")
    ap.add_argument("--out", type=str, default="")
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="%(name)s: %(message)s")

    config_path = Path(args.config)
    if not config_path.is_file():
        raise SystemExit(f"config not found: {config_path}")

    steps = _parse_csv(args.steps)
    if args.max_step:
        steps.append(str(load_config(config_path).sell_amount))
    report = build_report(config_path, steps=steps, mints=_parse_csv(args.mints))
    logger.info("report built for %s", config_path)

    payload = json.dumps(report, indent=2, sort_keys=True)
    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(payload + "\n", encoding="utf-8")
        print(f"Wrote {out_path}")
    else:
        print(payload)
    return 0 if report["curve"]["ok"] else 1


if __name__ == "__main__":
    raise SystemExit(main())

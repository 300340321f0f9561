from __future__ import annotations

import importlib.util
import json
import sys
from pathlib import Path
from typing import Any

import pytest

ROOT = Path(__file__).resolve().parents[2]


def _import_tool() -> Any:
    path = ROOT / "tools" / "curve_report.py"
    module_name = "tools_curve_report"
    spec = importlib.util.spec_from_file_location(module_name, path)
    assert spec and spec.loader, f"could not load spec from {path}"
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    spec.loader.exec_module(module)
    return module


tool = _import_tool()


def test_report_for_shipped_example(capsys) -> None:
    rc = tool.main([str(ROOT / "examples" / "curve.yaml"), "--steps", "0", "--max-step", "--mints", "100,200"])
    assert rc == 0
    report = json.loads(capsys.readouterr().out)

    constants = report["curve"]["value"]["constants"]
    assert constants["x0"] == "4510309"
    assert report["steps"]["0"]["snapshot"]["value"]["x"] == "4510309"
    assert report["steps"]["720000000"]["snapshot"]["value"]["y"] == "250000000"
    assert report["steps"]["720000000"]["progress_at_step"]["value"] == "72"
    assert report["metrics"]["final_mc_sats"]["value"] == "69999995"
    assert len(report["simulation"]["value"]) == 2


def test_invalid_config_exits_non_zero(tmp_path, capsys) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("curve:\n  total_supply: 10\n  sell_amount: 11\n  vt: 1\n  mc_target_sats: 1\n", encoding="utf-8")
    assert tool.main([str(path)]) == 1
    report = json.loads(capsys.readouterr().out)
    assert report["curve"]["error_type"] == "CurveCreateError"


def test_writes_out_file(tmp_path) -> None:
    out = tmp_path / "report" / "curve.json"
    assert tool.main([str(ROOT / "examples" / "curve.yaml"), "--out", str(out)]) == 0
    assert json.loads(out.read_text(encoding="utf-8"))["curve"]["ok"] is True


def test_missing_config(tmp_path) -> None:
    with pytest.raises(SystemExit):
        tool.main([str(tmp_path / "nope.yaml")])

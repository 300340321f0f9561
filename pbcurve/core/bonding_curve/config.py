"""Config construction and serialization.

`config_from_dict()` accepts ints or base-10 strings, so configs written by
callers that cannot hold u128 natively load without loss.

Round-trip property (tested): `config_from_dict(config_to_dict(c)) == c`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

import yaml

from .types import CurveConfig

# Auto-derived from CurveConfig field definitions (single source of truth).
CONFIG_FIELD_NAMES: tuple[str, ...] = tuple(CurveConfig.__dataclass_fields__)


def _parse_amount(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise TypeError(f"config field {name!r} must be int or decimal string, got bool")
    if isinstance(value, int):
        return int(value)
    if isinstance(value, str):
        text = value.replace("_", "")
        if not text.isdigit() or not text.isascii():
            raise ValueError(f"config field {name!r} is not a decimal integer: {value!r}")
        return int(text, 10)
    raise TypeError(f"config field {name!r} must be int or decimal string, got {type(value).__name__}")


def config_to_dict(config: CurveConfig) -> dict[str, int]:
    return {name: getattr(config, name) for name in CONFIG_FIELD_NAMES}


def config_from_dict(d: Mapping[str, Any]) -> CurveConfig:
    """Deserialize a mapping to a CurveConfig. Raises KeyError on missing fields."""
    unknown = set(d) - set(CONFIG_FIELD_NAMES)
    if unknown:
        raise ValueError(f"unknown config fields: {sorted(unknown)}")
    return CurveConfig(**{name: _parse_amount(name, d[name]) for name in CONFIG_FIELD_NAMES})


def load_config(path: Path | str) -> CurveConfig:
    """Load a CurveConfig from a YAML mapping (optionally nested under `curve:`)."""
    obj = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    if isinstance(obj, Mapping) and "curve" in obj:
        obj = obj["curve"]
    if not isinstance(obj, Mapping):
        raise TypeError("curve config YAML must be a mapping")
    return config_from_dict(obj)


def dump_config(config: CurveConfig) -> str:
    # Written as decimal strings; read back through _parse_amount.
    data = {name: str(value) for name, value in config_to_dict(config).items()}
    return yaml.safe_dump({"curve": data}, sort_keys=False)

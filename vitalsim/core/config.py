"""
JSON configuration loading for the vitals engine.

Example file:

    {
        "tick_interval": 1.0,
        "history_capacity": 30,
        "anomaly_numerator": 1,
        "anomaly_denominator": 10,
        "rng_seed": 7,
        "ranges": {"heart_rate": {"normal": [55, 105]}}
    }
"""

import json
from typing import Any, Mapping

from .errors import ConfigurationError
from .ranges import RangeTable
from .state import EngineConfig

_SCALAR_KEYS = {
    "tick_interval": float,
    "history_capacity": int,
    "anomaly_numerator": int,
    "anomaly_denominator": int,
    "rng_seed": int,
}


def _coerce(key: str, value: Any):
    # JSON true/false and fractional counts are rejected rather than truncated.
    kind = _SCALAR_KEYS[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"Invalid value for {key!r}: {value!r}")
    if kind is int:
        if isinstance(value, float) and not value.is_integer():
            raise ConfigurationError(f"{key!r} must be a whole number, got {value!r}")
        return int(value)
    return float(value)


def config_from_dict(data: Mapping[str, Any]) -> EngineConfig:
    """Build an EngineConfig from parsed JSON; unknown keys are rejected."""
    if not isinstance(data, Mapping):
        raise ConfigurationError("Configuration root must be a JSON object")

    kwargs = {}
    for key, value in data.items():
        if key == "ranges":
            kwargs["ranges"] = RangeTable.from_dict(value or {})
        elif key in _SCALAR_KEYS:
            if value is None:
                continue
            kwargs[key] = _coerce(key, value)
        else:
            raise ConfigurationError(f"Unknown configuration key: {key!r}")
    return EngineConfig(**kwargs)


def load_config(path: str) -> EngineConfig:
    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Error loading config {path}: {e}") from e
    return config_from_dict(data)

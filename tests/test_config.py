import json

import pytest

from vitalsim.core.config import config_from_dict, load_config
from vitalsim.core.enums import VitalMetric
from vitalsim.core.errors import ConfigurationError
from vitalsim.core.ranges import DEFAULT_RANGE_TABLE
from vitalsim.core.state import EngineConfig


def test_empty_dict_gives_defaults():
    assert config_from_dict({}) == EngineConfig()


def test_full_config():
    config = config_from_dict({
        "tick_interval": 1,
        "history_capacity": 30,
        "anomaly_numerator": 1,
        "anomaly_denominator": 10,
        "rng_seed": 7,
        "ranges": {"spo2": {"normal": [94, 100], "low": [85, 93]}},
    })
    assert config.tick_interval == 1.0
    assert config.history_capacity == 30
    assert config.anomaly_probability == pytest.approx(0.1)
    assert config.rng_seed == 7
    assert config.ranges.normal(VitalMetric.SPO2).low == 94.0
    assert config.ranges[VitalMetric.HEART_RATE] == DEFAULT_RANGE_TABLE[VitalMetric.HEART_RATE]


@pytest.mark.parametrize("data", [
    [],
    {"speed": 2},
    {"history_capacity": "many"},
    {"history_capacity": 0},
    {"tick_interval": -1},
    {"tick_interval": True},
    {"tick_interval": "2"},
    {"history_capacity": 2.7},
    {"history_capacity": True},
    {"anomaly_numerator": False},
    {"rng_seed": 1.5},
    {"ranges": {"heart_rate": {"normal": [100, 60]}}},
])
def test_invalid_config(data):
    with pytest.raises(ConfigurationError):
        config_from_dict(data)


def test_whole_number_floats_accepted():
    config = config_from_dict({"history_capacity": 30.0, "rng_seed": 7.0})
    assert config.history_capacity == 30
    assert isinstance(config.history_capacity, int)
    assert config.rng_seed == 7


@pytest.mark.parametrize("literal", ["NaN", "Infinity"])
def test_non_finite_interval_in_file_rejected(tmp_path, literal):
    path = tmp_path / "vitals.json"
    path.write_text('{"tick_interval": ' + literal + "}")
    with pytest.raises(ConfigurationError):
        load_config(str(path))


def test_load_config(tmp_path):
    path = tmp_path / "vitals.json"
    path.write_text(json.dumps({"tick_interval": 0.5, "rng_seed": 3}))
    config = load_config(str(path))
    assert config.tick_interval == 0.5
    assert config.rng_seed == 3


def test_load_config_missing_file(tmp_path):
    with pytest.raises(ConfigurationError):
        load_config(str(tmp_path / "nope.json"))


def test_load_config_bad_json(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{not json")
    with pytest.raises(ConfigurationError, match="Error loading config"):
        load_config(str(path))


def test_ranges_must_be_mapping():
    with pytest.raises(ConfigurationError):
        config_from_dict({"ranges": [[60, 100]]})

import io
import json
from types import SimpleNamespace

import pytest

from vitalsim import cli
from vitalsim.core.state import EngineConfig


def headless_args(**overrides):
    values = dict(duration=10.0, realtime=False)
    values.update(overrides)
    return SimpleNamespace(**values)


def test_run_headless_prints_each_snapshot():
    out = io.StringIO()
    engine = cli.run_headless(headless_args(), EngineConfig(rng_seed=1), out=out)
    lines = [l for l in out.getvalue().splitlines() if l.startswith("Time:")]
    # Seed snapshot + one per 2s tick.
    assert len(lines) == 6
    assert engine.tick_count == 25
    assert not engine.running


def test_run_headless_partial_interval():
    out = io.StringIO()
    engine = cli.run_headless(headless_args(duration=3.0), EngineConfig(rng_seed=1), out=out)
    assert engine.tick_count == 21


def test_main_headless(capsys):
    cli.main(["--mode", "headless", "--duration", "4", "--seed", "9", "--interval", "1"])
    out = capsys.readouterr().out
    assert "Starting Headless Simulation" in out
    assert out.count("Time:") == 5


def test_build_config_flags_override_file(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({"tick_interval": 5, "history_capacity": 10, "rng_seed": 1}))
    args = cli.build_parser().parse_args(["--config", str(path), "--capacity", "12"])
    config = cli.build_config(args)
    assert config.tick_interval == 5.0
    assert config.history_capacity == 12
    assert config.rng_seed == 1


def test_bad_config_exits_with_status_2(tmp_path, capsys):
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({"history_capacity": 0}))
    with pytest.raises(SystemExit) as exc:
        cli.main(["--mode", "headless", "--config", str(path)])
    assert exc.value.code == 2
    assert "history_capacity" in capsys.readouterr().err


def test_bad_capacity_flag_exits(capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(["--mode", "headless", "--capacity", "0"])
    assert exc.value.code == 2


@pytest.mark.parametrize("interval", ["nan", "inf"])
def test_non_finite_interval_flag_exits(interval, capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(["--mode", "headless", "--interval", interval])
    assert exc.value.code == 2
    assert "tick_interval" in capsys.readouterr().err


def test_bad_log_level_rejected():
    with pytest.raises(SystemExit):
        cli.main(["--mode", "headless", "--log-level", "LOUD"])

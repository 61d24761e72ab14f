import argparse
import logging
import sys
import time
from dataclasses import replace

from vitalsim.core.config import load_config
from vitalsim.core.engine import VitalsEngine
from vitalsim.core.errors import ConfigurationError
from vitalsim.core.logging_setup import configure_logging
from vitalsim.core.state import EngineConfig
from vitalsim.monitors.display import format_console_line

logger = logging.getLogger(__name__)


def build_config(args) -> EngineConfig:
    """Config file values, overridden by any explicit command-line flags."""
    config = load_config(args.config) if args.config else EngineConfig()
    overrides = {
        "tick_interval": args.interval,
        "history_capacity": args.capacity,
        "rng_seed": args.seed,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    return replace(config, **overrides)


def run_headless(args, config: EngineConfig, out=None):
    """Run the feed without a window, printing one line per snapshot."""
    out = out or sys.stdout
    engine = VitalsEngine(config)
    engine.subscribe(lambda snapshot: print(format_console_line(snapshot, config.ranges), file=out))

    print(f"Starting Headless Simulation (Duration: {args.duration}s)...", file=out)
    start_real = time.time()
    engine.start()

    elapsed = 0.0
    while elapsed + 1e-9 < args.duration:
        dt = min(config.tick_interval, args.duration - elapsed)
        if args.realtime:
            time.sleep(dt)
        engine.advance(dt)
        elapsed += dt

    engine.stop()
    end_real = time.time()
    print(f"Simulation completed in {end_real - start_real:.2f}s real time.", file=out)
    return engine


def run_ui(config: EngineConfig):
    """Run the dashboard window."""
    from vitalsim.ui.dashboard import main as dashboard_main
    dashboard_main(config)


def build_parser():
    parser = argparse.ArgumentParser(description="VitalSim - Simulated Vitals Dashboard")
    parser.add_argument("--mode", choices=["ui", "headless"], default="ui", help="Run mode (default: ui)")
    parser.add_argument("--duration", type=float, default=20.0,
                        help="Simulated seconds to run in headless mode")
    parser.add_argument("--config", type=str, help="Path to JSON configuration file")
    parser.add_argument("--interval", type=float, help="Seconds between ticks (default 2)")
    parser.add_argument("--capacity", type=int, help="History samples per chart (default 20)")
    parser.add_argument("--seed", type=int, help="Random seed for a reproducible feed")
    parser.add_argument("--realtime", action="store_true",
                        help="Headless only: sleep between ticks instead of running flat out")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        configure_logging(args.log_level)
    except ValueError as e:
        parser.error(str(e))

    try:
        config = build_config(args)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    logger.info("Configuration: %s", config)

    if args.mode == "headless":
        run_headless(args, config)
    else:
        run_ui(config)


if __name__ == "__main__":
    main()

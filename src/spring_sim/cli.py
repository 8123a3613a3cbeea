"""
Command-line interface for headless mass-spring runs.

Usage:
    spring-sim --config configs/undamped.yaml --out output/
    spring-sim --preset lightly_damped --t-end 20
"""

import argparse
import dataclasses
import sys
from pathlib import Path

from .config import load_config
from .exporters import export_results
from .logger import Logger
from .presets import get_preset_config, list_presets
from .runner import SimulationRunner
from .state import SpringState


# Fewer steps than this per undamped period gives a visibly distorted orbit
MIN_STEPS_PER_PERIOD = 20


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Fixed-step mass-spring-damper simulation"
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--config", "-c",
        type=Path,
        help="Path to YAML configuration file"
    )
    source.add_argument(
        "--preset", "-p",
        choices=list_presets(),
        help="Use a built-in preset instead of a config file"
    )
    parser.add_argument(
        "--out", "-o",
        type=Path,
        default=None,
        help="Output directory (overrides config)"
    )
    parser.add_argument(
        "--name", "-n",
        type=str,
        default=None,
        help="Run name (overrides config)"
    )
    parser.add_argument(
        "--t-end",
        type=float,
        default=None,
        help="Simulated duration in seconds (overrides config)"
    )
    parser.add_argument(
        "--realtime",
        type=float,
        default=None,
        metavar="SECONDS",
        help="Tick against the wall clock for this many seconds instead of stepping to t_end"
    )
    parser.add_argument(
        "--no-header",
        action="store_true",
        help="Omit the CSV header line"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress output except errors"
    )
    return parser


def main(argv=None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    Logger.initialize()

    # Load and validate config
    try:
        if args.config is not None:
            config = load_config(args.config)
        else:
            config = get_preset_config(args.preset)
    except FileNotFoundError:
        print(f"Error: Config file not found: {args.config}", file=sys.stderr)
        sys.exit(1)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.t_end is not None:
        if not args.t_end > 0:
            print("Error: --t-end must be positive", file=sys.stderr)
            sys.exit(1)
        config = dataclasses.replace(
            config, dynamics=dataclasses.replace(config.dynamics, t_end=args.t_end)
        )
    if args.no_header:
        config = dataclasses.replace(
            config, output=dataclasses.replace(config.output, write_header=False)
        )

    out_dir = args.out or Path(config.output.out_dir)
    run_name = args.name or config.output.run_name

    period = SpringState(mass=config.model.mass, spring_constant=config.model.spring_constant).natural_period
    steps_per_period = period / config.dynamics.dt
    if steps_per_period < MIN_STEPS_PER_PERIOD:
        Logger.log(
            f"dt = {config.dynamics.dt} s gives only {steps_per_period:.1f} steps per natural period",
            Logger.LogPriority.WARNING
        )

    if not args.quiet:
        print("Running mass-spring simulation...")
        print(f"  m = {config.model.mass} kg, k = {config.model.spring_constant} N/m, c = {config.model.damping} N·s/m")
        print(f"  x0 = {config.model.x0} m, v0 = {config.model.v0} m/s, dt = {config.dynamics.dt} s")
        print(f"  Natural period: {period:.4f} s ({steps_per_period:.0f} steps per period)")

    runner = SimulationRunner(config)
    try:
        if args.realtime is not None:
            result = runner.run_realtime(args.realtime)
        else:
            result = runner.run()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    paths = export_results(result, out_dir, run_name)

    if not args.quiet:
        final = result.final_snapshot
        print()
        print("=" * 50)
        print("SIMULATION COMPLETE")
        print("=" * 50)
        print(f"  Steps: {result.n_steps}")
        print(f"  Final time: {final.time:.4f} s")
        print(f"  Final x: {final.displacement:.6f} m, v: {final.velocity:.6f} m/s")
        print(f"  Energy: {result.initial_energy:.6f} J -> {result.final_energy:.6f} J (max {result.max_energy:.6f} J)")
        print()
        print("Output files:")
        print(f"  CSV: {paths['csv']}")
        print(f"  Metadata: {paths['metadata']}")

    sys.exit(0)


if __name__ == "__main__":
    main()

"""Command-line demonstration of the pool.

Usage:
    # Run the built-in scenario
    lp-pool

    # Run a scenario file and print the report as JSON
    lp-pool --scenario scenario.json --json

Exit codes: 0 if every step succeeded, 1 if the pool could not be created
or a step failed, 2 if the scenario file is unreadable or invalid.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

import structlog
from pydantic import ValidationError

from lp_pool.math.fixed_point import Fp
from lp_pool.models import Scenario
from lp_pool.scenario import ScenarioReport, default_scenario, run_scenario

logger = structlog.get_logger()


def configure_logging(verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.INFO
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def load_scenario(path: Path) -> Scenario:
    """Load and validate a scenario file.

    Raises:
        OSError: If the file cannot be read
        ValidationError: If the content is not a valid scenario
    """
    with open(path) as f:
        data = f.read()
    return Scenario.model_validate_json(data)


def print_report(report: ScenarioReport) -> None:
    params = report.params
    print("=" * 60)
    print("Liquidity pool scenario")
    print("=" * 60)
    print(f"Price:            {Fp(params.price)}")
    print(f"Fee range:        {Fp(params.min_fee)} - {Fp(params.max_fee)}")
    print(f"Liquidity target: {params.liquidity_target}")
    if report.init_error is not None:
        print(f"\nPool creation failed: {report.init_error.value}")
        return

    print()
    for index, outcome in enumerate(report.steps):
        label = f"[{index}] {outcome.op.value}({outcome.amount})"
        result = outcome.result
        error = result.error
        if error is None:
            print(f"{label} -> {result.value}")
        elif result.max_swap is not None:
            print(f"{label} -> error: {error.value} (max: {result.max_swap})")
        else:
            print(f"{label} -> error: {error.value}")
        state = outcome.state
        print(
            f"    base_reserve={state.base_reserve} "
            f"staked_reserve={state.staked_reserve} lp_supply={state.lp_supply}"
        )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Run a sequence of operations against a staked-token liquidity pool"
    )
    parser.add_argument(
        "--scenario",
        type=Path,
        default=None,
        help="Scenario JSON file (default: built-in demonstration)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the report as JSON",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    args = parser.parse_args(argv)

    configure_logging(args.verbose)

    if args.scenario is None:
        scenario = default_scenario()
    else:
        try:
            scenario = load_scenario(args.scenario)
        except OSError as e:
            logger.error("scenario_unreadable", path=str(args.scenario), error=str(e))
            print(f"Error: cannot read scenario file: {args.scenario}", file=sys.stderr)
            return 2
        except ValidationError as e:
            logger.error("scenario_invalid", path=str(args.scenario), errors=e.error_count())
            print(f"Error: invalid scenario file: {args.scenario}\n{e}", file=sys.stderr)
            return 2

    report = run_scenario(scenario)

    if args.json:
        print(json.dumps(report.to_dict(), indent=2))
    else:
        print_report(report)

    return 0 if report.succeeded else 1


if __name__ == "__main__":
    sys.exit(main())

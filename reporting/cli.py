#!/usr/bin/env python3
"""
CLI for running mortgage simulations.

Usage:
    python -m reporting.cli simulate --catalog <catalog_json> [options]
    python -m reporting.cli schedule --principal <amount> --rate <tea> --term <months>

Examples:
    # Simulate against a catalog export
    python -m reporting.cli simulate --catalog data/mortgage_catalog.json \\
        --property-value 100000 --income 2000 --term 120 \\
        --profile empleado_dependencia --fund-use primera_vivienda

    # French amortization table for 80,000 at 21% TEA over 20 years
    python -m reporting.cli schedule --principal 80000 --rate 0.21 --term 240
"""

import argparse
import json
import logging
import math
import sys

from core.catalog import CatalogError, JsonFileCatalogSource, get_catalog_source
from core.mortgage_engine import (
    BorrowerProfile,
    FundUse,
    MortgageInquiry,
    MortgageSimulationEngine,
    amortization_schedule,
    monthly_rate,
)
from utils.config import Config

from .summary import render_outcome, render_schedule


# Exit codes
EXIT_OK = 0
EXIT_INPUT_ERROR = 1
EXIT_NO_RESULTS = 2

# Longest table the schedule command prints (50 years)
MAX_SCHEDULE_TERM_MONTHS = 600


def configure_logging(level: str) -> None:
    """Send engine logs to stderr at the configured level."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        stream=sys.stderr,
    )


def cmd_simulate(args, config: Config) -> int:
    """Run a simulation and print the ranked best offer per lender."""
    profile = BorrowerProfile.from_string(args.profile)
    if profile is None:
        print(f"Error: Unknown borrower profile: {args.profile}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    fund_use = FundUse.from_string(args.fund_use)
    if fund_use is None:
        print(f"Error: Unknown fund use: {args.fund_use}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    try:
        inquiry = MortgageInquiry(
            property_value=args.property_value,
            monthly_income=args.income,
            desired_term_months=args.term,
            borrower_profile=profile,
            fund_use=fund_use,
        )
    except ValueError as e:
        print(f"Error: Invalid inquiry: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    try:
        source = JsonFileCatalogSource(args.catalog) if args.catalog else get_catalog_source(config)
        catalog = source.fetch_offers()
    except CatalogError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    outcome = MortgageSimulationEngine().simulate(inquiry, catalog)

    top = outcome.results[0] if outcome.ok and outcome.results else None

    if args.json:
        body = outcome.to_dict()
        if args.schedule and top is not None:
            body["schedule"] = [row.to_dict() for row in top.amortization_schedule()]
        print(json.dumps(body, indent=2, ensure_ascii=False))
    else:
        print(render_outcome(outcome, config.default_currency))
        if args.schedule and top is not None:
            print()
            print(f"Amortization for {top.lender_name} - {top.product_name} "
                  f"over {top.effective_term_months} months:")
            print(render_schedule(top.amortization_schedule(), config.default_currency))

    return EXIT_OK if outcome.ok else EXIT_NO_RESULTS


def cmd_schedule(args, config: Config) -> int:
    """Print a French amortization table."""
    if not math.isfinite(args.principal) or not math.isfinite(args.rate):
        print("Error: principal and rate must be finite numbers", file=sys.stderr)
        return EXIT_INPUT_ERROR
    if args.principal <= 0 or args.term <= 0 or args.rate < 0:
        print("Error: principal and term must be positive, rate non-negative", file=sys.stderr)
        return EXIT_INPUT_ERROR
    if args.term > MAX_SCHEDULE_TERM_MONTHS:
        print(f"Error: term must not exceed {MAX_SCHEDULE_TERM_MONTHS} months", file=sys.stderr)
        return EXIT_INPUT_ERROR

    rows = amortization_schedule(args.principal, monthly_rate(args.rate), args.term)

    if args.json:
        print(json.dumps([row.to_dict() for row in rows], indent=2))
    else:
        print(render_schedule(rows, config.default_currency))
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Financing Viability Engine - Mortgage Simulator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m reporting.cli simulate --catalog data/mortgage_catalog.json \\
        --property-value 100000 --income 2000 --term 120 \\
        --profile salaried_employee --fund-use first_home
    python -m reporting.cli schedule --principal 80000 --rate 0.21 --term 240
        """,
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Simulate command
    sim_parser = subparsers.add_parser(
        "simulate",
        help="Simulate a mortgage inquiry against the catalog",
    )
    sim_parser.add_argument("--catalog", help="Path to a JSON catalog export (default: configured source)")
    sim_parser.add_argument("--property-value", type=float, required=True)
    sim_parser.add_argument("--income", type=float, required=True, help="Monthly income")
    sim_parser.add_argument("--term", type=int, required=True, help="Desired term in months")
    sim_parser.add_argument("--profile", required=True, help="Borrower profile code")
    sim_parser.add_argument("--fund-use", required=True, help="Intended use of funds code")
    sim_parser.add_argument("--json", action="store_true", help="Print JSON instead of a table")
    sim_parser.add_argument(
        "--schedule",
        action="store_true",
        help="Also print the amortization table of the top-ranked offer",
    )
    sim_parser.set_defaults(func=cmd_simulate)

    # Schedule command
    sched_parser = subparsers.add_parser(
        "schedule",
        help="Print a French amortization table",
    )
    sched_parser.add_argument("--principal", type=float, required=True)
    sched_parser.add_argument("--rate", type=float, required=True, help="Annual effective rate (0.21 for 21%%)")
    sched_parser.add_argument("--term", type=int, required=True, help="Term in months")
    sched_parser.add_argument("--json", action="store_true", help="Print JSON instead of a table")
    sched_parser.set_defaults(func=cmd_schedule)

    return parser


def main(argv=None):
    """Main CLI entry point."""
    config = Config.load()
    configure_logging(config.log_level)

    args = build_parser().parse_args(argv)
    return args.func(args, config)


if __name__ == "__main__":
    sys.exit(main())

"""Paycheck Command Line Interface.

Demonstration tool for:
- Computing a paycheck from the command line
- Listing the years covered by the tax tables

Usage:
    dutch-paycheck compute --income 36000 --period Year --year 2020
    dutch-paycheck compute --income 3000 --period Month --year 2022 --ruling young
    dutch-paycheck years
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from decimal import Decimal, InvalidOperation
from typing import Any

from dutch_paycheck.calculators.paycheck import PaycheckCalculator
from dutch_paycheck.calculators.types import Period, RulingChoice, RulingInput, SalaryInput
from dutch_paycheck.config import get_settings
from dutch_paycheck.tables import ConfigurationError, load_tax_tables

logger = logging.getLogger(__name__)


def parse_decimal(s: str) -> Decimal:
    """Parse a decimal amount."""
    try:
        return Decimal(s)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"invalid amount: {s!r}")


def decimal_default(obj: Any) -> str:
    """JSON serializer for Decimal values."""
    if isinstance(obj, Decimal):
        return str(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


class PaycheckCli:
    """Paycheck Command Line Interface."""

    def __init__(self) -> None:
        self.parser = self._build_parser()

    def _build_parser(self) -> argparse.ArgumentParser:
        """Build argument parser."""
        parser = argparse.ArgumentParser(
            prog="dutch-paycheck",
            description="Dutch gross-to-net salary calculator",
        )
        parser.add_argument(
            "--tables",
            type=str,
            help="Path to a tax tables JSON file (default: PAYCHECK_TAX_TABLES)",
        )
        subparsers = parser.add_subparsers(dest="command", help="Commands")

        # compute command
        compute = subparsers.add_parser(
            "compute",
            help="Compute a paycheck",
        )
        compute.add_argument(
            "--income",
            type=parse_decimal,
            required=True,
            help="Gross income for the chosen period",
        )
        compute.add_argument(
            "--period",
            type=Period,
            choices=list(Period),
            default=Period.YEAR,
            help="Period the income refers to (default: Year)",
        )
        compute.add_argument(
            "--year",
            type=int,
            help="Tax year (default: current year of the tables)",
        )
        compute.add_argument(
            "--hours",
            type=parse_decimal,
            help="Working hours per week (default: tables default)",
        )
        compute.add_argument(
            "--allowance",
            action="store_true",
            help="Income includes the holiday allowance",
        )
        compute.add_argument(
            "--no-social-security",
            action="store_true",
            help="Exclude social security contributions",
        )
        compute.add_argument(
            "--older",
            action="store_true",
            help="Past retirement age",
        )
        compute.add_argument(
            "--ruling",
            type=RulingChoice,
            choices=list(RulingChoice),
            help="Apply the 30%% ruling with this category",
        )

        # years command
        subparsers.add_parser(
            "years",
            help="List the years covered by the tax tables",
        )

        return parser

    def run(self, argv: list[str] | None = None) -> int:
        """Run CLI with arguments."""
        args = self.parser.parse_args(argv)

        if args.command is None:
            self.parser.print_help()
            return 1

        try:
            tables = load_tax_tables(args.tables or get_settings().tax_tables_path)
        except ConfigurationError as e:
            logger.error("%s", e)
            print(f"Error: {e}", file=sys.stderr)
            return 1

        if args.command == "years":
            print(json.dumps({"current_year": tables.current_year, "years": tables.years}))
            return 0

        return self._cmd_compute(args, PaycheckCalculator(tables))

    def _cmd_compute(self, args: argparse.Namespace, calculator: PaycheckCalculator) -> int:
        """Compute a paycheck and print it as JSON."""
        year = args.year if args.year is not None else calculator.tables.current_year
        salary_input = SalaryInput(
            income=args.income,
            allowance=args.allowance,
            social_security=not args.no_social_security,
            older=args.older,
            hours=args.hours or Decimal(calculator.tables.default_working_hours),
        )
        ruling = RulingInput(
            checked=args.ruling is not None,
            choice=args.ruling or RulingChoice.NORMAL,
        )

        try:
            paycheck = calculator.compute(salary_input, args.period, year, ruling)
        except ConfigurationError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

        print(json.dumps(asdict(paycheck), indent=2, default=decimal_default))
        return 0


def main() -> None:
    """CLI entry point."""
    logging.basicConfig(level=get_settings().log_level)
    sys.exit(PaycheckCli().run())


if __name__ == "__main__":
    main()

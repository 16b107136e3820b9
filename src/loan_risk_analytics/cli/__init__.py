"""
Loan Risk Analytics CLI
=======================

Command-line interface for loan risk reporting workflows.

Commands
--------
- loanrisk list: List available reports
- loanrisk validate: Load a dataset and summarize rejected rows and missing values
- loanrisk report: Run one or more reports and print or save them

Example Usage
-------------
# Show the default rate by income bracket
$ loanrisk report income --input data/credit_risk_dataset.csv

# Save every report as CSV
$ loanrisk report all --input data/credit_risk_dataset.csv --output-dir data/reports

# Check a file before reporting
$ loanrisk validate --input data/credit_risk_dataset.csv --show-errors 20

For detailed help on each command:
$ loanrisk report --help
$ loanrisk validate --help
"""

import argparse
import logging
import sys
from typing import Sequence

from ..core.reports import REPORTS
from .report import configure_report_parser, handle_report_command
from .validate import configure_validate_parser, handle_validate_command


def handle_list_command(args: argparse.Namespace) -> int:
    for name in REPORTS:
        print(name)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the loanrisk CLI.

    Parameters
    ----------
    argv : Sequence[str] | None, optional
        Command line arguments. If None, uses sys.argv[1:]

    Returns
    -------
    int
        Exit code (0 for success, non-zero for failure)
    """
    parser = argparse.ArgumentParser(
        prog="loanrisk",
        description="Loan Risk Analytics - Segment loan portfolios by default risk",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List available reports
  loanrisk list

  # Check a dataset
  loanrisk validate --input data/credit_risk_dataset.csv

  # Print the riskiest segments with at least 50 loans
  loanrisk report riskiest --input data/credit_risk_dataset.csv --min-count 50

  # Save all reports as Parquet
  loanrisk report all --output-dir data/reports --format parquet
        """,
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Set logging level (default: INFO)",
    )

    # Create subcommands
    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        help="Command to execute",
    )

    subparsers.add_parser(
        "list",
        help="List available reports",
    )

    # Configure validate subcommand
    validate_parser = subparsers.add_parser(
        "validate",
        help="Load a dataset and report rejected rows and missing values",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    configure_validate_parser(validate_parser)

    # Configure report subcommand
    report_parser = subparsers.add_parser(
        "report",
        help="Run loan risk reports",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    configure_report_parser(report_parser)

    # Parse arguments
    args = parser.parse_args(argv)

    # Configure logging
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    # Execute command
    try:
        if args.command == "list":
            return handle_list_command(args)
        elif args.command == "validate":
            return handle_validate_command(args)
        elif args.command == "report":
            return handle_report_command(args)
        else:
            parser.print_help()
            return 1
    except KeyboardInterrupt:
        print("\n\nOperation cancelled by user", file=sys.stderr)
        return 130
    except Exception as e:
        logging.error(f"Command failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())

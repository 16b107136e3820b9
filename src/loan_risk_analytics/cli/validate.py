"""
Validate Command CLI
====================

Command-line interface for checking a loan dataset before reporting.
"""

import argparse
import logging

from ..core.config import INPUT_FILE
from ..core.workflows import validate_workflow
from ..utils.export import format_table

logger = logging.getLogger(__name__)


def configure_validate_parser(parser: argparse.ArgumentParser) -> None:
    """
    Configure the validate subcommand parser.

    Parameters
    ----------
    parser : argparse.ArgumentParser
        Parser to configure
    """
    parser.description = """
Load a loan dataset and report data quality.

Prints the number of rows read, loaded and rejected, the first rejected
rows with the reason, and the count of missing values per column. Exits
with status 1 when any row was rejected.

Examples:
  loanrisk validate --input data/credit_risk_dataset.csv
  loanrisk validate --input data/credit_risk_dataset.csv --show-errors 50
    """

    parser.add_argument(
        "--input",
        type=str,
        default=None,
        metavar="PATH",
        help=f"Loan dataset CSV (default: {INPUT_FILE})",
    )

    parser.add_argument(
        "--show-errors",
        type=int,
        default=10,
        metavar="N",
        help="Number of rejected rows to print (default: 10)",
    )


def handle_validate_command(args: argparse.Namespace) -> int:
    """
    Handle the validate command.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed command line arguments

    Returns
    -------
    int
        Exit code (0 when every row loaded, 1 otherwise)
    """
    result, missing = validate_workflow(args.input)

    print(f"Source:   {result.source}")
    print(f"Rows:     {result.total_rows}")
    print(f"Loaded:   {result.loaded_count}")
    print(f"Rejected: {result.error_count}")

    for error in result.errors[: args.show_errors]:
        print(f"  {error}")
    if result.error_count > args.show_errors:
        print(f"  ... {result.error_count - args.show_errors} more")

    print("\nMissing values:")
    print(format_table(missing))

    return 0 if result.ok else 1

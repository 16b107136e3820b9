"""
Report Command CLI
==================

Command-line interface for running loan risk reports.
"""

import argparse
import logging

from ..core.config import INPUT_FILE
from ..core.loader import load_loan_records
from ..core.reports import RANKED_REPORTS, REPORTS, run_report
from ..core.workflows import run_reports_workflow
from ..utils.export import EXPORT_FORMATS, format_table

logger = logging.getLogger(__name__)


def configure_report_parser(parser: argparse.ArgumentParser) -> None:
    """
    Configure the report subcommand parser.

    Parameters
    ----------
    parser : argparse.ArgumentParser
        Parser to configure
    """
    parser.description = f"""
Run one or more loan risk reports.

Available reports: {', '.join(REPORTS)}
Use "all" to run every report.

Without --output-dir the reports are printed as tables. With --output-dir
each report is saved as <output-dir>/<report>.<format>.

Examples:
  # Print default rates by loan purpose
  loanrisk report intent --input data/credit_risk_dataset.csv

  # Top 5 riskiest segments with more than 50 loans
  loanrisk report riskiest --min-count 51 --limit 5

  # Save income and cross-segment reports as JSON
  loanrisk report income cross --output-dir data/reports --format json
    """

    parser.add_argument(
        "reports",
        nargs="+",
        choices=list(REPORTS) + ["all"],
        metavar="REPORT",
        help="Report name(s), or 'all'",
    )

    parser.add_argument(
        "--input",
        type=str,
        default=None,
        metavar="PATH",
        help=f"Loan dataset CSV (default: {INPUT_FILE})",
    )

    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        metavar="PATH",
        help="Folder for report files (default: print to terminal)",
    )

    parser.add_argument(
        "--format",
        choices=list(EXPORT_FORMATS) + ["table"],
        default=None,
        help="Output format (default: table without --output-dir, csv with it)",
    )

    parser.add_argument(
        "--min-count",
        type=int,
        default=None,
        help=f"Minimum loans per segment for {', '.join(RANKED_REPORTS)}",
    )

    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help=f"Maximum segments shown in {', '.join(RANKED_REPORTS)}",
    )


def _selected_reports(names: list[str]) -> list[str]:
    if "all" in names:
        return list(REPORTS)
    # Preserve order, drop repeats
    return list(dict.fromkeys(names))


def handle_report_command(args: argparse.Namespace) -> int:
    """
    Handle the report command.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed command line arguments

    Returns
    -------
    int
        Exit code (0 for success, non-zero for failure)
    """
    reports = _selected_reports(args.reports)
    input_path = args.input or INPUT_FILE
    fmt = args.format or ("table" if args.output_dir is None else "csv")
    options = {"min_count": args.min_count, "limit": args.limit}

    if fmt == "table":
        result = load_loan_records(input_path)
        for name in reports:
            report_options = options if name in RANKED_REPORTS else {}
            df = run_report(name, result.records, **report_options)
            print(f"\n== {name} ==")
            print(format_table(df))
        return 0

    try:
        results = run_reports_workflow(
            input_path=input_path,
            reports=reports,
            output_dir=args.output_dir,
            fmt=fmt,
            **options,
        )

        # Check if any reports failed
        if not all(results.values()):
            logger.warning("Some reports failed to run")
            return 1

        return 0

    except Exception as e:
        logger.error(f"Report run failed: {e}")
        return 1

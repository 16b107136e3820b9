"""
Loan Risk Analytics Workflows
=============================

High-level orchestration functions that combine loading, reporting and
export into complete workflows. These functions are designed to be used
both programmatically and via the CLI.

Functions
---------
- validate_workflow: Load a dataset and summarize rejected rows and missing values
- run_reports_workflow: Load a dataset once and write each requested report

Example Usage
-------------
>>> from loan_risk_analytics.core.workflows import run_reports_workflow
>>> results = run_reports_workflow("data/credit_risk_dataset.csv", reports=["income", "intent"])
>>> print(results)
{'income': True, 'intent': True}
"""

import logging
from pathlib import Path
from typing import Any

import polars as pl

from ..utils.export import write_report
from .config import INPUT_FILE, OUTPUT_DIR
from .loader import LoadResult, load_loan_records, missing_value_report
from .reports import RANKED_REPORTS, REPORTS, run_report

logger = logging.getLogger(__name__)


def validate_workflow(input_path: Path | str | None = None) -> tuple[LoadResult, pl.DataFrame]:
    """
    Load a dataset and report data quality.

    Parameters
    ----------
    input_path : Path | str | None, optional
        CSV to check. If None, uses the configured INPUT_FILE

    Returns
    -------
    tuple[LoadResult, pl.DataFrame]
        The load result (records and per-row errors) and the missing-value
        counts per column
    """
    input_path = Path(input_path) if input_path is not None else INPUT_FILE
    result = load_loan_records(input_path)
    missing = missing_value_report(input_path)

    logger.info("Rows read: %s", result.total_rows)
    logger.info("Records loaded: %s", result.loaded_count)
    logger.info("Rows rejected: %s", result.error_count)
    return result, missing


def run_reports_workflow(
    input_path: Path | str | None = None,
    reports: list[str] | None = None,
    output_dir: Path | str | None = None,
    fmt: str = "csv",
    **options: Any,
) -> dict[str, bool]:
    """
    Complete reporting workflow: load once, run and save each report.

    Parameters
    ----------
    input_path : Path | str | None, optional
        CSV to load. If None, uses the configured INPUT_FILE
    reports : list[str] | None, optional
        Report names to run. If None, runs every report in REPORTS
    output_dir : Path | str | None, optional
        Folder for report files. If None, uses the configured OUTPUT_DIR
    fmt : {"csv", "json", "parquet", "dta"}, default "csv"
        Output format
    **options : Any
        Passed to ranked reports (``min_count``, ``limit``)

    Returns
    -------
    dict[str, bool]
        Dictionary mapping report name to success status (True/False)

    Notes
    -----
    - Output files are named ``<output_dir>/<report>.<ext>``
    - Processing continues even if individual reports fail
    """
    input_path = Path(input_path) if input_path is not None else INPUT_FILE
    output_dir = Path(output_dir) if output_dir is not None else OUTPUT_DIR
    if reports is None:
        reports = list(REPORTS)

    logger.info("=" * 60)
    logger.info("Loan Risk Report Workflow")
    logger.info("=" * 60)
    logger.info(f"Input: {input_path}")
    logger.info(f"Reports: {', '.join(reports)}")
    logger.info(f"Output: {output_dir} ({fmt})")

    result = load_loan_records(input_path)
    if result.errors:
        logger.warning("Continuing with %s records; %s rows rejected", result.loaded_count, result.error_count)

    results: dict[str, bool] = {}
    for name in reports:
        try:
            report_options = options if name in RANKED_REPORTS else {}
            df = run_report(name, result.records, **report_options)
            write_report(df, output_dir / name, fmt=fmt)
            results[name] = True
        except Exception as e:
            logger.error(f"❌ Report '{name}' failed: {e}")
            results[name] = False

    succeeded = sum(results.values())
    logger.info("")
    logger.info("Completed %s of %s reports", succeeded, len(results))
    return results


__all__ = [
    "validate_workflow",
    "run_reports_workflow",
]

"""
Export utilities
================

Write report DataFrames to CSV, JSON, Parquet or Stata, and render them as
text tables for the terminal.
"""

import logging
from pathlib import Path

import polars as pl


logger = logging.getLogger(__name__)

EXPORT_FORMATS = {
    "csv": ".csv",
    "json": ".json",
    "parquet": ".parquet",
    "dta": ".dta",
}

# Variable labels attached to Stata exports (80 character limit)
REPORT_VARIABLE_LABELS = {
    "income_bracket": "Borrower income bracket",
    "income_level": "Borrower income level",
    "loan_intent": "Stated loan purpose",
    "rate_segment": "Interest rate tier",
    "profile_type": "Borrower risk profile",
    "metric_category": "Metric category",
    "recommendation": "Portfolio recommendation",
    "total_loans": "Number of loans",
    "loans": "Number of loans",
    "loan_count": "Number of loans",
    "defaults": "Number of defaulted loans",
    "total_defaults": "Number of defaulted loans",
    "default_rate_pct": "Default rate (percent)",
    "avg_income": "Average borrower income",
    "avg_loan_amount": "Average loan amount",
    "avg_rate": "Average interest rate",
    "avg_interest_rate": "Average interest rate",
    "avg_age": "Average borrower age",
    "avg_employment_years": "Average employment length (years)",
    "avg_loan_to_income_ratio": "Average loan amount as share of income",
    "total_loan_volume": "Total loan volume",
    "total_volume": "Total loan volume",
    "total_portfolio_value": "Total portfolio value",
    "total_defaults_value": "Total value of defaulted loans",
    "portfolio_loss_pct": "Defaulted value as share of portfolio (percent)",
    "portfolio_value_millions": "Portfolio value (millions)",
    "volume_millions": "Loan volume (millions)",
    "estimated_losses": "Estimated losses (defaulted loan amount)",
}


def format_table(df: pl.DataFrame) -> str:
    """Render a report as a text table with every row and column shown."""
    with pl.Config(tbl_rows=-1, tbl_cols=-1, fmt_str_lengths=60, tbl_hide_dataframe_shape=True):
        return str(df)


def prepare_report_for_stata(df: pl.DataFrame) -> tuple[pl.DataFrame, dict[str, str]]:
    """Trim names to Stata limits and make all-null columns numeric.

    Returns the transformed DataFrame and a variable labels dict suitable for
    ``DataFrame.to_stata(..., variable_labels=...)``.
    """
    stata_names = {
        column: column[0:32].replace("-", "_")
        for column in df.columns
        if column != column[0:32].replace("-", "_")
    }
    if stata_names:
        df = df.rename(stata_names)
    null_columns = [name for name, dtype in df.schema.items() if dtype == pl.Null]
    if null_columns:
        df = df.with_columns([pl.col(column).cast(pl.Float64) for column in null_columns])
    variable_labels = {
        column: REPORT_VARIABLE_LABELS[column][0:80]
        for column in df.columns
        if column in REPORT_VARIABLE_LABELS
    }
    return df, variable_labels


def save_report_to_stata(df: pl.DataFrame, path: Path) -> None:
    """Write a report to Stata ``.dta`` with variable labels."""
    df, variable_labels = prepare_report_for_stata(df)
    df.to_pandas().to_stata(
        path,
        write_index=False,
        variable_labels=variable_labels,
    )


def write_report(df: pl.DataFrame, path: Path | str, fmt: str | None = None) -> Path:
    """
    Write a report DataFrame to disk.

    Parameters
    ----------
    df : pl.DataFrame
        Report output
    path : Path | str
        Target file. When ``fmt`` is given the suffix is replaced to match.
    fmt : {"csv", "json", "parquet", "dta"} | None, optional
        Output format. If None, inferred from the file suffix.

    Returns
    -------
    Path
        The written file path

    Raises
    ------
    ValueError
        If the format is not supported
    """
    path = Path(path)
    if fmt is None:
        fmt = path.suffix.lstrip(".").lower()
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Unsupported export format {fmt!r}; choose one of {', '.join(EXPORT_FORMATS)}")
    path = path.with_suffix(EXPORT_FORMATS[fmt])
    path.parent.mkdir(parents=True, exist_ok=True)

    if fmt == "csv":
        df.write_csv(path)
    elif fmt == "json":
        df.write_json(path)
    elif fmt == "parquet":
        df.write_parquet(path)
    else:
        save_report_to_stata(df, path)

    logger.info("Saved %s rows to %s", df.height, path)
    return path


__all__ = [
    "EXPORT_FORMATS",
    "REPORT_VARIABLE_LABELS",
    "format_table",
    "prepare_report_for_stata",
    "save_report_to_stata",
    "write_report",
]

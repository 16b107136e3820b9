"""
Loan Risk Reports
=================

The standard segmentation report family. Each report takes a sequence of
loan records and returns a polars DataFrame with named, ordered columns
ready for display or export.

Reports
-------
- overview: Portfolio size, averages and default rate
- income: Default rate by income bracket
- intent: Default rate and volume by loan purpose
- cross: Default rate by income level and loan purpose
- financial_impact: Portfolio value, defaulted value and loss share
- rate: Default rate by interest-rate tier
- profiles: High-risk (defaulted) vs low-risk (performing) borrower means
- riskiest: Highest default-rate segments with significant volume
- safest: Lowest default-rate segments with significant volume
- executive: Rounded headline metrics
- recommendations: Segments to eliminate (default rate above threshold)

Example Usage
-------------
>>> from loan_risk_analytics.core import load_loan_records, run_report
>>> records = load_loan_records("data/credit_risk_dataset.csv").records
>>> run_report("riskiest", records, limit=5)
"""

import logging
from typing import Any, Callable, Sequence

import polars as pl

from . import classifiers
from .config import ELIMINATE_DEFAULT_RATE, MIN_SEGMENT_COUNT, TOP_N
from .engine import (
    cross_segment,
    profile,
    rank,
    round_half_up,
    segment,
    summarize_portfolio,
)
from .records import AggregateRow, LoanRecord


logger = logging.getLogger(__name__)

ReportFunction = Callable[..., pl.DataFrame]


# Bucket label columns; every other report column is numeric
LABEL_COLUMNS = {
    "income_bracket",
    "income_level",
    "loan_intent",
    "rate_segment",
    "profile_type",
    "metric_category",
    "recommendation",
}


def _frame(rows: list[dict[str, Any]], columns: Sequence[str]) -> pl.DataFrame:
    """Build a DataFrame with a fixed column order, even when empty."""
    if not rows:
        return pl.DataFrame(
            schema={
                column: pl.String if column in LABEL_COLUMNS else pl.Float64
                for column in columns
            }
        )
    return pl.DataFrame(rows).select(columns)


def _segment_rows(rows: Sequence[AggregateRow], columns: dict[str, str]) -> list[dict[str, Any]]:
    """Flatten aggregate rows and rename metric fields to report columns."""
    out = []
    for row in rows:
        flat = row.to_dict()
        out.append({target: flat[source] for source, target in columns.items()})
    return out


def _cross_rows(records: Sequence[LoanRecord]) -> list[AggregateRow]:
    return list(
        cross_segment(
            records,
            classifiers.income_tier(name="income_level"),
            classifiers.loan_intent(),
        ).values()
    )


def overview_report(records: Sequence[LoanRecord]) -> pl.DataFrame:
    summary = summarize_portfolio(records)
    return pl.DataFrame(
        [
            {
                "total_loans": summary.total_loans,
                "avg_income": summary.avg_income,
                "avg_loan_amount": summary.avg_loan_amount,
                "total_defaults": summary.total_defaults,
                "default_rate_pct": summary.default_rate_pct,
                "total_portfolio_value": summary.total_portfolio_value,
            }
        ]
    )


def income_report(records: Sequence[LoanRecord]) -> pl.DataFrame:
    tier = classifiers.income_tier(
        name="income_bracket",
        labels=("Low Income (<$50K)", "Middle Income ($50K-$100K)", "High Income (>$100K)"),
    )
    rows = rank(segment(records, tier), by="default_rate_pct", order="desc")
    columns = {
        "income_bracket": "income_bracket",
        "count": "total_loans",
        "defaults": "defaults",
        "default_rate_pct": "default_rate_pct",
        "avg_amount": "avg_loan_amount",
    }
    return _frame(_segment_rows(rows, columns), list(columns.values()))


def intent_report(records: Sequence[LoanRecord]) -> pl.DataFrame:
    rows = rank(segment(records, classifiers.loan_intent()), by="default_rate_pct", order="desc")
    columns = {
        "loan_intent": "loan_intent",
        "count": "total_loans",
        "defaults": "defaults",
        "default_rate_pct": "default_rate_pct",
        "avg_amount": "avg_loan_amount",
        "total_volume": "total_loan_volume",
    }
    return _frame(_segment_rows(rows, columns), list(columns.values()))


def cross_report(records: Sequence[LoanRecord]) -> pl.DataFrame:
    rows = rank(_cross_rows(records), by="default_rate_pct", order="desc")
    columns = {
        "income_level": "income_level",
        "loan_intent": "loan_intent",
        "count": "loans",
        "default_rate_pct": "default_rate_pct",
        "total_volume": "total_volume",
    }
    return _frame(_segment_rows(rows, columns), list(columns.values()))


def financial_impact_report(records: Sequence[LoanRecord]) -> pl.DataFrame:
    summary = summarize_portfolio(records)
    return pl.DataFrame(
        [
            {
                "total_portfolio_value": summary.total_portfolio_value,
                "total_defaults_value": summary.total_defaults_value,
                "portfolio_loss_pct": summary.portfolio_loss_pct,
            }
        ]
    )


def rate_report(records: Sequence[LoanRecord]) -> pl.DataFrame:
    rows = rank(segment(records, classifiers.interest_rate_tier()), by="default_rate_pct", order="asc")
    columns = {
        "rate_segment": "rate_segment",
        "count": "loan_count",
        "avg_interest_rate": "avg_rate",
        "default_rate_pct": "default_rate_pct",
        "total_volume": "total_volume",
    }
    return _frame(_segment_rows(rows, columns), list(columns.values()))


def profiles_report(records: Sequence[LoanRecord]) -> pl.DataFrame:
    profiles = [
        profile(records, lambda record: record.is_default, "High Risk Borrowers"),
        profile(records, lambda record: not record.is_default, "Low Risk Borrowers"),
    ]
    rows = [item.to_dict() for item in profiles]
    for row in rows:
        del row["count"]
    return pl.DataFrame(rows)


def riskiest_report(
    records: Sequence[LoanRecord],
    min_count: int | None = None,
    limit: int | None = None,
) -> pl.DataFrame:
    rows = rank(
        _cross_rows(records),
        by="default_rate_pct",
        order="desc",
        min_count=MIN_SEGMENT_COUNT if min_count is None else min_count,
        limit=TOP_N if limit is None else limit,
    )
    columns = {
        "income_level": "income_level",
        "loan_intent": "loan_intent",
        "count": "loans",
        "default_rate_pct": "default_rate_pct",
        "total_volume": "total_volume",
        "estimated_losses": "estimated_losses",
    }
    return _frame(_segment_rows(rows, columns), list(columns.values()))


def safest_report(
    records: Sequence[LoanRecord],
    min_count: int | None = None,
    limit: int | None = None,
) -> pl.DataFrame:
    rows = rank(
        _cross_rows(records),
        by="default_rate_pct",
        order="asc",
        min_count=MIN_SEGMENT_COUNT if min_count is None else min_count,
        limit=TOP_N if limit is None else limit,
    )
    columns = {
        "income_level": "income_level",
        "loan_intent": "loan_intent",
        "count": "loans",
        "default_rate_pct": "default_rate_pct",
        "total_volume": "total_volume",
    }
    return _frame(_segment_rows(rows, columns), list(columns.values()))


def executive_report(records: Sequence[LoanRecord]) -> pl.DataFrame:
    summary = summarize_portfolio(records)
    return pl.DataFrame(
        [
            {
                "metric_category": "Portfolio Summary",
                "total_loans": summary.total_loans,
                "avg_income": round_half_up(summary.avg_income, 0),
                "avg_loan_amount": round_half_up(summary.avg_loan_amount, 0),
                "total_defaults": summary.total_defaults,
                "default_rate_pct": summary.default_rate_pct,
                "portfolio_value_millions": summary.portfolio_value_millions,
            }
        ]
    )


def recommendations_report(
    records: Sequence[LoanRecord],
    min_count: int | None = None,
    limit: int | None = None,
    max_default_rate: float | None = None,
) -> pl.DataFrame:
    threshold = ELIMINATE_DEFAULT_RATE if max_default_rate is None else max_default_rate
    rows = rank(
        _cross_rows(records),
        by="default_rate_pct",
        order="desc",
        min_count=MIN_SEGMENT_COUNT if min_count is None else min_count,
    )
    # Filter on the unrounded rate
    rows = [row for row in rows if row.defaults / row.count * 100 > threshold]
    if limit is not None:
        rows = rows[:limit]
    logger.info("%s segments above the %s%% default-rate threshold", len(rows), threshold)

    columns = [
        "recommendation",
        "income_level",
        "loan_intent",
        "loans",
        "default_rate_pct",
        "volume_millions",
    ]
    out = [
        {
            "recommendation": "ELIMINATE - High Risk",
            "income_level": row.keys[0],
            "loan_intent": row.keys[1],
            "loans": row.count,
            "default_rate_pct": row.default_rate_pct,
            "volume_millions": round_half_up(row.total_volume / 1_000_000, 1),
        }
        for row in rows
    ]
    return _frame(out, columns)


REPORTS: dict[str, ReportFunction] = {
    "overview": overview_report,
    "income": income_report,
    "intent": intent_report,
    "cross": cross_report,
    "financial_impact": financial_impact_report,
    "rate": rate_report,
    "profiles": profiles_report,
    "riskiest": riskiest_report,
    "safest": safest_report,
    "executive": executive_report,
    "recommendations": recommendations_report,
}

# Reports that accept min_count / limit overrides
RANKED_REPORTS = ("riskiest", "safest", "recommendations")


def run_report(name: str, records: Sequence[LoanRecord], **options: Any) -> pl.DataFrame:
    """
    Run a named report.

    Parameters
    ----------
    name : str
        Key in REPORTS
    records : Sequence[LoanRecord]
        Loaded records
    **options : Any
        Report-specific keyword arguments (``min_count``, ``limit``,
        ``max_default_rate``). None values are ignored.

    Raises
    ------
    KeyError
        If the report name is unknown
    """
    if name not in REPORTS:
        raise KeyError(f"Unknown report {name!r}; available: {', '.join(REPORTS)}")
    options = {key: value for key, value in options.items() if value is not None}
    if options and name not in RANKED_REPORTS:
        logger.warning("Report '%s' takes no options; ignoring %s", name, sorted(options))
        options = {}
    logger.info("Running report '%s' over %s records", name, len(records))
    return REPORTS[name](records, **options)


__all__ = [
    "REPORTS",
    "RANKED_REPORTS",
    "run_report",
    "overview_report",
    "income_report",
    "intent_report",
    "cross_report",
    "financial_impact_report",
    "rate_report",
    "profiles_report",
    "riskiest_report",
    "safest_report",
    "executive_report",
    "recommendations_report",
]

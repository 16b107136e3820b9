"""
Loan Risk Analytics
===================

Segmentation and default-rate reporting for consumer loan portfolios.

This package provides functionality for:
- Loading the credit risk loan dataset with per-row validation
- Bucketing loans by income, interest rate, purpose and other segments
- Computing default rates, volumes and loss estimates per segment
- Ranking segments and profiling high- and low-risk borrowers
- Exporting reports to CSV, JSON, Parquet and Stata

Main Modules
------------
- core: Loader, classifiers, aggregation engine and reports
- utils: Cleaning and export helpers
- cli: The ``loanrisk`` command

Example Usage
-------------
>>> from loan_risk_analytics import load_loan_records, income_tier, segment, rank
>>> result = load_loan_records("data/credit_risk_dataset.csv")
>>> rows = rank(segment(result.records, income_tier()), by="default_rate_pct")

>>> from loan_risk_analytics import run_report
>>> run_report("riskiest", result.records, min_count=101, limit=10)

Notes
-----
A loan is in default when ``loan_status`` is 1. Estimated losses are the sum
of defaulted loan amounts and ignore recoveries.
"""

__version__ = "0.1.0"
__author__ = "Loan Risk Analytics Contributors"

from .core import (
    LoanAnalyticsError,
    ParseError,
    EmptyGroupError,
    InvalidThresholdError,
    HomeOwnership,
    LoanIntent,
    LoanGrade,
    LoanStatus,
    LoanRecord,
    AggregateRow,
    BorrowerProfile,
    PortfolioSummary,
    LoadResult,
    load_loan_records,
    missing_value_report,
    ThresholdClassifier,
    FieldClassifier,
    income_tier,
    interest_rate_tier,
    loan_intent,
    loan_grade,
    home_ownership,
    bucketize,
    aggregate,
    segment,
    cross_segment,
    rank,
    profile,
    summarize_portfolio,
    REPORTS,
    run_report,
)
from .utils import format_table, write_report

__all__ = [
    "__version__",
    "__author__",
    "LoanAnalyticsError",
    "ParseError",
    "EmptyGroupError",
    "InvalidThresholdError",
    "HomeOwnership",
    "LoanIntent",
    "LoanGrade",
    "LoanStatus",
    "LoanRecord",
    "AggregateRow",
    "BorrowerProfile",
    "PortfolioSummary",
    "LoadResult",
    "load_loan_records",
    "missing_value_report",
    "ThresholdClassifier",
    "FieldClassifier",
    "income_tier",
    "interest_rate_tier",
    "loan_intent",
    "loan_grade",
    "home_ownership",
    "bucketize",
    "aggregate",
    "segment",
    "cross_segment",
    "rank",
    "profile",
    "summarize_portfolio",
    "REPORTS",
    "run_report",
    "format_table",
    "write_report",
]

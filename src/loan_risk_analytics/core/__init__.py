"""
Core Loan Risk Analytics Functionality
======================================

This module contains the loader, classifiers, aggregation engine and
report set.

Modules
-------
- config: Configuration, thresholds and column constants
- errors: Exception taxonomy
- records: Loan record and result data model
- loader: CSV / DataFrame loading with per-row error collection
- classifiers: Named bucket functions (income tier, rate tier, intent, ...)
- engine: bucketize, aggregate, cross_segment, rank, profile
- reports: The standard report family
- workflows: Load -> report -> export orchestration
"""

# Import configuration constants
from .config import (
    PROJECT_DIR,
    DATA_DIR,
    INPUT_FILE,
    OUTPUT_DIR,
    INCOME_THRESHOLDS,
    RATE_THRESHOLDS,
    MIN_SEGMENT_COUNT,
    TOP_N,
    ELIMINATE_DEFAULT_RATE,
)

from .errors import (
    LoanAnalyticsError,
    ParseError,
    EmptyGroupError,
    InvalidThresholdError,
)

from .records import (
    HomeOwnership,
    LoanIntent,
    LoanGrade,
    LoanStatus,
    LoanRecord,
    AggregateRow,
    BorrowerProfile,
    PortfolioSummary,
)

from .loader import (
    LoadResult,
    load_loan_records,
    missing_value_report,
)

from .classifiers import (
    ThresholdClassifier,
    FieldClassifier,
    classifier_name,
    income_tier,
    interest_rate_tier,
    loan_intent,
    loan_grade,
    home_ownership,
)

from .engine import (
    bucketize,
    aggregate,
    segment,
    cross_segment,
    rank,
    profile,
    summarize_portfolio,
)

from .reports import (
    REPORTS,
    RANKED_REPORTS,
    run_report,
)

__all__ = [
    # Configuration
    "PROJECT_DIR",
    "DATA_DIR",
    "INPUT_FILE",
    "OUTPUT_DIR",
    "INCOME_THRESHOLDS",
    "RATE_THRESHOLDS",
    "MIN_SEGMENT_COUNT",
    "TOP_N",
    "ELIMINATE_DEFAULT_RATE",
    # Errors
    "LoanAnalyticsError",
    "ParseError",
    "EmptyGroupError",
    "InvalidThresholdError",
    # Data model
    "HomeOwnership",
    "LoanIntent",
    "LoanGrade",
    "LoanStatus",
    "LoanRecord",
    "AggregateRow",
    "BorrowerProfile",
    "PortfolioSummary",
    # Loading
    "LoadResult",
    "load_loan_records",
    "missing_value_report",
    # Classifiers
    "ThresholdClassifier",
    "FieldClassifier",
    "classifier_name",
    "income_tier",
    "interest_rate_tier",
    "loan_intent",
    "loan_grade",
    "home_ownership",
    # Engine
    "bucketize",
    "aggregate",
    "segment",
    "cross_segment",
    "rank",
    "profile",
    "summarize_portfolio",
    # Reports
    "REPORTS",
    "RANKED_REPORTS",
    "run_report",
]

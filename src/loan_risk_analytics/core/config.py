# -*- coding: utf-8 -*-
"""
Configuration management for Loan Risk Analytics.

This module handles path configuration, segmentation thresholds, and report
defaults. Every value can be overridden through environment variables or a
``.env`` file (read by python-decouple).
"""

# Import Packages
from decouple import Csv, config
from pathlib import Path

# Specific Data Folders
# Note: __file__.parent.parent.parent.parent goes from src/loan_risk_analytics/core/ back to project root
PROJECT_DIR = Path(config("PROJECT_DIR", default=Path(__file__).parent.parent.parent.parent))
DATA_DIR = Path(config("DATA_DIR", default=PROJECT_DIR / "data"))
INPUT_FILE = Path(config("LOAN_RISK_INPUT_FILE", default=DATA_DIR / "credit_risk_dataset.csv"))
OUTPUT_DIR = Path(config("LOAN_RISK_OUTPUT_DIR", default=DATA_DIR / "reports"))


# ============================================================================
# Segmentation Thresholds
# ============================================================================

# Income brackets: <50K, 50K-100K (inclusive), >100K
INCOME_THRESHOLDS = tuple(
    config("LOAN_RISK_INCOME_THRESHOLDS", default="50000,100000", cast=Csv(float))
)

# Interest-rate tiers: <10%, 10-15% (inclusive), >15%
RATE_THRESHOLDS = tuple(
    config("LOAN_RISK_RATE_THRESHOLDS", default="10,15", cast=Csv(float))
)


# ============================================================================
# Report Defaults
# ============================================================================

# Segments need more than 100 loans to be considered significant
MIN_SEGMENT_COUNT = config("LOAN_RISK_MIN_SEGMENT_COUNT", default=101, cast=int)

# Number of segments shown in the riskiest/safest reports
TOP_N = config("LOAN_RISK_TOP_N", default=10, cast=int)

# Default rate (percent) above which a segment is flagged for elimination
ELIMINATE_DEFAULT_RATE = config("LOAN_RISK_ELIMINATE_DEFAULT_RATE", default=25.0, cast=float)


# ============================================================================
# Column Constants
# ============================================================================

# Raw credit-risk dataset headers mapped to normalized field names.
# Only columns present in the data are renamed (safe application).
RENAME_DICTIONARY = {
    "person_age": "age",
    "person_income": "income",
    "person_home_ownership": "home_ownership",
    "person_emp_length": "employment_length_years",
    "loan_amnt": "loan_amount",
    "loan_int_rate": "interest_rate",
    "loan_status": "status",
    "cb_person_default_on_file": "prior_default_on_file",
    "cb_person_cred_hist_length": "credit_history_length_years",
}

# Normalized column order
LOAN_COLUMNS = [
    "age",
    "income",
    "home_ownership",
    "employment_length_years",
    "loan_intent",
    "loan_grade",
    "loan_amount",
    "interest_rate",
    "status",
    "loan_percent_income",
    "prior_default_on_file",
    "credit_history_length_years",
]

# Columns that may be empty without rejecting the row
NULLABLE_COLUMNS = [
    "employment_length_years",
    "interest_rate",
]

REQUIRED_COLUMNS = [column for column in LOAN_COLUMNS if column not in NULLABLE_COLUMNS]

# Float columns
FLOAT_COLUMNS = [
    "income",
    "employment_length_years",
    "loan_amount",
    "interest_rate",
    "loan_percent_income",
]

# Integer columns (parsed as floats, then checked for integrality)
INTEGER_COLUMNS = [
    "age",
    "credit_history_length_years",
]

# Tokens treated as missing values when reading raw files
NA_LIKE_VALUES = ("", "NA", "N/A", "nan", "NaN", "NULL", "null", "None")

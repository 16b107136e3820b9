"""
Utility Functions for Loan Data Processing
==========================================

Modules
-------
- cleaning: Polars helpers for header renaming, NA tokens and numeric coercion
- export: Report writers (CSV, JSON, Parquet, Stata) and table rendering
"""

from .cleaning import (
    rename_loan_columns,
    strip_string_columns,
    replace_na_like_values,
    coerce_numeric_columns,
    flag_unparseable_numbers,
    count_missing_values,
    normalize_loan_frame,
)
from .export import (
    EXPORT_FORMATS,
    format_table,
    prepare_report_for_stata,
    save_report_to_stata,
    write_report,
)

__all__ = [
    # Cleaning
    "rename_loan_columns",
    "strip_string_columns",
    "replace_na_like_values",
    "coerce_numeric_columns",
    "flag_unparseable_numbers",
    "count_missing_values",
    "normalize_loan_frame",

    # Export functions
    "EXPORT_FORMATS",
    "format_table",
    "prepare_report_for_stata",
    "save_report_to_stata",
    "write_report",
]

"""
Cleaning utilities (Polars): header renaming, NA handling, numeric coercion.
"""

from typing import Sequence
import polars as pl

from ..core.config import NA_LIKE_VALUES, RENAME_DICTIONARY


def rename_loan_columns(df: pl.DataFrame) -> pl.DataFrame:
    """Standardize raw credit-risk headers to normalized field names."""
    lowered = {
        column: column.strip().lower()
        for column in df.columns
        if column != column.strip().lower()
    }
    renamed = df.rename(lowered) if lowered else df.clone()
    # Only columns that exist in the data are renamed
    present = {old: new for old, new in RENAME_DICTIONARY.items() if old in renamed.columns}
    return renamed.rename(present) if present else renamed


def strip_string_columns(df: pl.DataFrame) -> pl.DataFrame:
    string_columns = [name for name, dtype in df.schema.items() if dtype == pl.String]
    if not string_columns:
        return df.clone()
    return df.with_columns(
        [pl.col(column).str.strip_chars().alias(column) for column in string_columns]
    )


def replace_na_like_values(
    df: pl.DataFrame,
    columns: Sequence[str],
    na_like: Sequence[str] = NA_LIKE_VALUES,
) -> pl.DataFrame:
    columns_to_update = [
        column for column in columns if column in df.columns and df.schema[column] == pl.String
    ]
    if not columns_to_update:
        return df.clone()
    replacements = list(na_like)
    return df.with_columns(
        [
            pl.when(pl.col(column).is_in(replacements))
            .then(None)
            .otherwise(pl.col(column))
            .alias(column)
            for column in columns_to_update
        ]
    )


def coerce_numeric_columns(
    df: pl.DataFrame,
    numeric_columns: Sequence[str],
) -> pl.DataFrame:
    columns_to_update = [column for column in numeric_columns if column in df.columns]
    if not columns_to_update:
        return df.clone()
    return df.with_columns(
        [pl.col(column).cast(pl.Float64, strict=False).alias(column) for column in columns_to_update]
    )


def flag_unparseable_numbers(
    raw: pl.DataFrame,
    coerced: pl.DataFrame,
    numeric_columns: Sequence[str],
) -> pl.DataFrame:
    """Return one boolean ``bad_<column>`` flag per numeric column.

    A value is unparseable when it was present in ``raw`` but became null
    after coercion.
    """
    columns = [column for column in numeric_columns if column in raw.columns]
    return pl.DataFrame(
        {
            f"bad_{column}": raw[column].is_not_null() & coerced[column].is_null()
            for column in columns
        }
    )


def count_missing_values(df: pl.DataFrame, columns: Sequence[str] | None = None) -> pl.DataFrame:
    """Null counts per column, in long format (``column``, ``missing_count``)."""
    selected = [column for column in (columns or df.columns) if column in df.columns]
    counts = df.select(selected).null_count()
    return pl.DataFrame(
        {
            "column": selected,
            "missing_count": [int(counts[column][0]) for column in selected],
        },
        schema={"column": pl.String, "missing_count": pl.Int64},
    )


def normalize_loan_frame(df: pl.DataFrame) -> pl.DataFrame:
    out = rename_loan_columns(df)
    out = strip_string_columns(out)
    return replace_na_like_values(out, out.columns)


__all__ = [
    "rename_loan_columns",
    "strip_string_columns",
    "replace_na_like_values",
    "coerce_numeric_columns",
    "flag_unparseable_numbers",
    "count_missing_values",
    "normalize_loan_frame",
]

"""Tests for loan data cleaning utilities."""

import polars as pl

from loan_risk_analytics.utils import (
    coerce_numeric_columns,
    count_missing_values,
    flag_unparseable_numbers,
    normalize_loan_frame,
    rename_loan_columns,
    replace_na_like_values,
)


def test_replace_na_like_values_replaces_tokens():
    df = pl.DataFrame({"col": ["NA", "value", "N/A"]})
    result = replace_na_like_values(df, ["col"])
    assert result["col"].to_list() == [None, "value", None]


def test_replace_na_like_values_skips_missing_and_numeric_columns():
    df = pl.DataFrame({"a": [1, 2]})
    result = replace_na_like_values(df, ["a", "missing"])
    assert result.equals(df)


def test_rename_loan_columns_maps_raw_headers():
    df = pl.DataFrame({" Person_Income ": ["1"], "loan_amnt": ["2"], "loan_intent": ["MEDICAL"]})
    result = rename_loan_columns(df)
    assert result.columns == ["income", "loan_amount", "loan_intent"]


def test_coerce_numeric_columns_handles_missing_columns():
    df = pl.DataFrame({"a": ["1"], "b": ["two"]})
    result = coerce_numeric_columns(df, ["a", "missing"])
    assert result["a"][0] == 1.0
    assert result["b"][0] == "two"
    assert "missing" not in result.columns


def test_flag_unparseable_numbers_ignores_genuine_nulls():
    raw = pl.DataFrame({"income": ["100", None, "abc"]})
    coerced = coerce_numeric_columns(raw, ["income"])
    flags = flag_unparseable_numbers(raw, coerced, ["income"])
    assert flags["bad_income"].to_list() == [False, False, True]


def test_normalize_loan_frame_strips_and_nulls():
    df = pl.DataFrame({"loan_int_rate": ["  ", " 11.5 "], "person_home_ownership": [" RENT", "nan"]})
    result = normalize_loan_frame(df)
    assert result["interest_rate"].to_list() == [None, "11.5"]
    assert result["home_ownership"].to_list() == ["RENT", None]


def test_count_missing_values_long_format():
    df = pl.DataFrame({"a": [None, 1, None], "b": ["x", "y", "z"]})
    result = count_missing_values(df)
    assert result.rows() == [("a", 2), ("b", 0)]

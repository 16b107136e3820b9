"""Tests for the aggregation engine."""

import pytest

from loan_risk_analytics import (
    EmptyGroupError,
    LoanIntent,
    LoanStatus,
    aggregate,
    bucketize,
    cross_segment,
    income_tier,
    interest_rate_tier,
    loan_grade,
    loan_intent,
    profile,
    rank,
    segment,
    summarize_portfolio,
)
from loan_risk_analytics.core.engine import round_half_up


def test_income_scenario(make_record):
    records = [
        make_record(income=40000.0, status=LoanStatus.DEFAULTED),
        make_record(income=40000.0, status=LoanStatus.DEFAULTED),
        make_record(income=60000.0, status=LoanStatus.PERFORMING),
        make_record(income=60000.0, status=LoanStatus.PERFORMING),
    ]

    buckets = bucketize(records, income_tier())

    assert {key: len(group) for key, group in buckets.items()} == {
        "Low Income": 2,
        "Middle Income": 2,
    }
    low = aggregate(buckets["Low Income"])
    middle = aggregate(buckets["Middle Income"])
    assert (low.count, low.default_rate_pct) == (2, 100.0)
    assert (middle.count, middle.default_rate_pct) == (2, 0.0)


def test_aggregate_empty_group_returns_no_data_row():
    row = aggregate([])

    assert row.count == 0
    assert row.is_empty
    assert row.default_rate_pct is None
    assert row.avg_amount is None
    assert row.total_volume == 0.0
    assert row.estimated_losses == 0.0


def test_aggregate_empty_group_strict_raises():
    with pytest.raises(EmptyGroupError):
        aggregate([], keys=("Low Income",), strict=True)


def test_aggregate_metrics(portfolio):
    low = [record for record in portfolio if record.income < 50000]
    row = aggregate(low, keys=("Low Income",), key_names=("income_level",))

    assert row.count == 3
    assert row.defaults == 2
    assert row.default_rate_pct == 66.67
    assert row.avg_amount == 10000.0
    assert row.total_volume == 30000.0
    assert row.estimated_losses == 20000.0
    assert row.avg_interest_rate == 16.0
    assert row.to_dict()["income_level"] == "Low Income"


def test_aggregate_is_deterministic(portfolio):
    assert aggregate(portfolio) == aggregate(portfolio)
    assert aggregate(list(reversed(portfolio))) == aggregate(portfolio)


@pytest.mark.parametrize("classifier", [income_tier(), interest_rate_tier(), loan_intent(), loan_grade()])
def test_bucket_counts_cover_every_record(portfolio, classifier):
    buckets = bucketize(portfolio, classifier)
    assert sum(len(group) for group in buckets.values()) == len(portfolio)

    rows = segment(portfolio, classifier)
    assert sum(row.count for row in rows) == len(portfolio)
    assert all(0 <= row.default_rate_pct <= 100 for row in rows)


def test_bucketize_keys_are_sorted(portfolio):
    assert list(bucketize(portfolio, loan_intent())) == ["EDUCATION", "HOMEIMPROVEMENT", "VENTURE"]


def test_cross_segment_pairs(portfolio):
    rows = cross_segment(portfolio, income_tier(), loan_intent())

    assert set(rows) == {
        ("High Income", "EDUCATION"),
        ("Low Income", "HOMEIMPROVEMENT"),
        ("Middle Income", "VENTURE"),
    }
    row = rows[("Low Income", "HOMEIMPROVEMENT")]
    assert row.key_names == ("income_level", "loan_intent")
    assert row.count == 3
    assert sum(item.count for item in rows.values()) == len(portfolio)


def test_rank_desc_and_asc_are_reversed(portfolio):
    rows = segment(portfolio, income_tier())

    desc = rank(rows, by="default_rate_pct", order="desc")
    asc = rank(rows, by="default_rate_pct", order="asc")

    assert [row.keys for row in desc] == [("High Income",), ("Low Income",), ("Middle Income",)]
    assert [row.keys for row in asc] == [row.keys for row in reversed(desc)]


def test_rank_breaks_ties_by_key(make_record):
    records = [
        make_record(loan_intent=intent)
        for intent in (LoanIntent.VENTURE, LoanIntent.EDUCATION, LoanIntent.MEDICAL)
    ]
    rows = segment(records, loan_intent())

    for order in ("asc", "desc"):
        ranked = rank(rows, by="default_rate_pct", order=order)
        assert [row.keys[0] for row in ranked] == ["EDUCATION", "MEDICAL", "VENTURE"]


def test_rank_filters_and_limits(portfolio):
    rows = list(cross_segment(portfolio, income_tier(), loan_intent()).values())

    ranked = rank(rows, by="total_volume", order="desc", min_count=2)
    assert [row.keys for row in ranked] == [
        ("Low Income", "HOMEIMPROVEMENT"),
        ("Middle Income", "VENTURE"),
    ]

    assert len(rank(rows, limit=1)) == 1
    assert rank(rows, min_count=10) == []


def test_rank_puts_missing_metric_last(portfolio):
    rows = segment(portfolio, interest_rate_tier())
    ranked = rank(rows, by="avg_interest_rate", order="asc")
    assert ranked[-1].keys == ("Rate Not Reported",)
    assert ranked[-1].avg_interest_rate is None


def test_rank_rejects_unknown_metric_and_order(portfolio):
    rows = segment(portfolio, loan_intent())
    with pytest.raises(ValueError):
        rank(rows, by="median_income")
    with pytest.raises(ValueError):
        rank(rows, order="sideways")


def test_profile_means_skip_missing_values(make_record):
    records = [
        make_record(age=20, income=30000.0, employment_length_years=None, interest_rate=10.0,
                    status=LoanStatus.DEFAULTED, loan_percent_income=0.2),
        make_record(age=30, income=50000.0, employment_length_years=4.0, interest_rate=None,
                    status=LoanStatus.DEFAULTED, loan_percent_income=0.4),
        make_record(age=60, status=LoanStatus.PERFORMING),
    ]

    high_risk = profile(records, lambda record: record.is_default, "High Risk Borrowers")

    assert high_risk.label == "High Risk Borrowers"
    assert high_risk.count == 2
    assert high_risk.avg_age == 25.0
    assert high_risk.avg_income == 40000.0
    assert high_risk.avg_employment_years == 4.0
    assert high_risk.avg_interest_rate == 10.0
    assert high_risk.avg_loan_to_income_ratio == pytest.approx(0.3)


def test_profile_of_empty_selection(portfolio):
    result = profile(portfolio, lambda record: record.age > 100)
    assert result.count == 0
    assert result.avg_age is None
    assert result.avg_income is None


def test_summarize_portfolio(portfolio):
    summary = summarize_portfolio(portfolio)

    assert summary.total_loans == 6
    assert summary.total_defaults == 3
    assert summary.default_rate_pct == 50.0
    assert summary.avg_income == 60000.0
    assert summary.total_portfolio_value == 60000.0
    assert summary.total_defaults_value == 40000.0
    assert summary.portfolio_loss_pct == 66.67
    assert summary.portfolio_value_millions == 0.1


def test_summarize_empty_portfolio():
    summary = summarize_portfolio([])
    assert summary.total_loans == 0
    assert summary.default_rate_pct is None
    assert summary.portfolio_loss_pct is None


@pytest.mark.parametrize(
    "value, digits, expected",
    [
        (2.345, 2, 2.35),
        (0.125, 2, 0.13),
        (66.666666, 2, 66.67),
        (59999.5, 0, 60000.0),
        (None, 2, None),
    ],
)
def test_round_half_up(value, digits, expected):
    assert round_half_up(value, digits) == expected

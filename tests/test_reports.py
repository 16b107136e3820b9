"""Tests for the standard report family."""

import pytest

from loan_risk_analytics import REPORTS, run_report
from loan_risk_analytics.core.reports import (
    cross_report,
    executive_report,
    financial_impact_report,
    income_report,
    intent_report,
    overview_report,
    profiles_report,
    rate_report,
    recommendations_report,
    riskiest_report,
    safest_report,
)
from loan_risk_analytics.core.records import LoanStatus


def test_overview_report(portfolio):
    row = overview_report(portfolio).row(0, named=True)
    assert row["total_loans"] == 6
    assert row["total_defaults"] == 3
    assert row["default_rate_pct"] == 50.0
    assert row["total_portfolio_value"] == 60000.0


def test_income_report_orders_by_default_rate(portfolio):
    df = income_report(portfolio)
    assert df.columns == ["income_bracket", "total_loans", "defaults", "default_rate_pct", "avg_loan_amount"]
    assert df["income_bracket"].to_list() == [
        "High Income (>$100K)",
        "Low Income (<$50K)",
        "Middle Income ($50K-$100K)",
    ]
    assert df["default_rate_pct"].to_list() == [100.0, 66.67, 0.0]


def test_intent_report(portfolio):
    df = intent_report(portfolio)
    assert df["loan_intent"].to_list() == ["EDUCATION", "HOMEIMPROVEMENT", "VENTURE"]
    assert df["total_loan_volume"].to_list() == [20000.0, 30000.0, 10000.0]


def test_cross_report(portfolio):
    df = cross_report(portfolio)
    assert df.columns == ["income_level", "loan_intent", "loans", "default_rate_pct", "total_volume"]
    assert df.height == 3
    assert df.row(0) == ("High Income", "EDUCATION", 1, 100.0, 20000.0)


def test_financial_impact_report(portfolio):
    row = financial_impact_report(portfolio).row(0, named=True)
    assert row == {
        "total_portfolio_value": 60000.0,
        "total_defaults_value": 40000.0,
        "portfolio_loss_pct": 66.67,
    }


def test_rate_report_orders_ascending(portfolio):
    df = rate_report(portfolio)
    assert df.columns == ["rate_segment", "loan_count", "avg_rate", "default_rate_pct", "total_volume"]
    assert df["rate_segment"].to_list() == ["Low Rate (<10%)", "High Rate (>15%)", "Rate Not Reported"]
    assert df["avg_rate"].to_list() == [8.0, 16.0, None]


def test_profiles_report(portfolio):
    df = profiles_report(portfolio)
    assert df["profile_type"].to_list() == ["High Risk Borrowers", "Low Risk Borrowers"]
    assert "count" not in df.columns
    high, low = df.rows(named=True)
    assert high["avg_loan_amount"] == pytest.approx(40000.0 / 3)
    assert low["avg_loan_amount"] == pytest.approx(20000.0 / 3)


def test_riskiest_and_safest_reports(portfolio):
    riskiest = riskiest_report(portfolio, min_count=2)
    safest = safest_report(portfolio, min_count=2)

    assert riskiest["loan_intent"].to_list() == ["HOMEIMPROVEMENT", "VENTURE"]
    assert riskiest["estimated_losses"].to_list() == [20000.0, 0.0]
    assert safest["loan_intent"].to_list() == ["VENTURE", "HOMEIMPROVEMENT"]
    assert "estimated_losses" not in safest.columns

    assert riskiest_report(portfolio, min_count=1, limit=1)["loan_intent"].to_list() == ["EDUCATION"]


def test_ranked_reports_default_to_significant_segments(portfolio):
    df = riskiest_report(portfolio)
    assert df.height == 0
    assert df.columns == [
        "income_level",
        "loan_intent",
        "loans",
        "default_rate_pct",
        "total_volume",
        "estimated_losses",
    ]


def test_executive_report(portfolio):
    row = executive_report(portfolio).row(0, named=True)
    assert row["metric_category"] == "Portfolio Summary"
    assert row["avg_income"] == 60000.0
    assert row["portfolio_value_millions"] == 0.1


def test_recommendations_report(portfolio):
    df = recommendations_report(portfolio, min_count=2)
    assert df.rows(named=True) == [
        {
            "recommendation": "ELIMINATE - High Risk",
            "income_level": "Low Income",
            "loan_intent": "HOMEIMPROVEMENT",
            "loans": 3,
            "default_rate_pct": 66.67,
            "volume_millions": 0.0,
        }
    ]
    assert recommendations_report(portfolio, min_count=2, max_default_rate=70).height == 0


def test_recommendations_threshold_uses_unrounded_rate(make_record):
    # 1251 / 5003 is 25.005%, which rounds to exactly 25.00
    records = [make_record(status=LoanStatus.DEFAULTED) for _ in range(1251)]
    records += [make_record() for _ in range(5003 - 1251)]

    df = recommendations_report(records, min_count=101)

    assert df.height == 1
    assert df["default_rate_pct"][0] == 25.0


@pytest.mark.parametrize("name", list(REPORTS))
def test_every_report_runs_on_empty_input(name):
    df = run_report(name, [])
    assert df.width > 0


def test_run_report_ignores_options_for_unranked_reports(portfolio):
    assert run_report("income", portfolio, min_count=5).height == 3
    assert run_report("safest", portfolio, min_count=2, limit=1).height == 1


def test_run_report_unknown_name(portfolio):
    with pytest.raises(KeyError):
        run_report("nonsense", portfolio)

"""Shared fixtures: loan record factory and sample credit risk CSV files."""

import pytest

from loan_risk_analytics import (
    HomeOwnership,
    LoanGrade,
    LoanIntent,
    LoanRecord,
    LoanStatus,
)


RAW_HEADER = (
    "person_age,person_income,person_home_ownership,person_emp_length,loan_intent,"
    "loan_grade,loan_amnt,loan_int_rate,loan_status,loan_percent_income,"
    "cb_person_default_on_file,cb_person_cred_hist_length"
)

SAMPLE_ROWS = [
    "22,59000,RENT,123.0,PERSONAL,D,35000,16.02,1,0.59,Y,3",
    "21,9600,OWN,5.0,EDUCATION,B,1000,11.14,0,0.1,N,2",
    "25,9600,MORTGAGE,1.0,MEDICAL,C,5500,12.87,1,0.57,N,3",
    "23,65500,RENT,4.0,MEDICAL,C,35000,15.23,1,0.53,N,2",
    "24,54400,RENT,8.0,MEDICAL,C,35000,14.27,1,0.55,Y,4",
    "21,9900,OWN,2.0,VENTURE,A,2500,7.14,1,0.25,N,2",
    "26,77100,RENT,8.0,EDUCATION,B,35000,,1,0.45,N,3",
]


def build_record(**overrides) -> LoanRecord:
    values = dict(
        age=30,
        income=60000.0,
        home_ownership=HomeOwnership.RENT,
        employment_length_years=5.0,
        loan_intent=LoanIntent.PERSONAL,
        loan_grade=LoanGrade.B,
        loan_amount=10000.0,
        interest_rate=11.0,
        status=LoanStatus.PERFORMING,
        loan_percent_income=0.17,
        prior_default_on_file=False,
        credit_history_length_years=4,
    )
    values.update(overrides)
    return LoanRecord(**values)


def write_csv(path, rows, header=RAW_HEADER):
    path.write_text("\n".join([header, *rows]) + "\n")
    return path


@pytest.fixture
def make_record():
    return build_record


@pytest.fixture
def loans_csv(tmp_path):
    """Write rows (plus a header) to a CSV in tmp_path and return its path."""

    def _write(rows, header=RAW_HEADER, name="loans.csv"):
        return write_csv(tmp_path / name, rows, header=header)

    return _write


@pytest.fixture
def sample_csv(tmp_path):
    return write_csv(tmp_path / "credit_risk_dataset.csv", SAMPLE_ROWS)


@pytest.fixture
def portfolio():
    """Six loans across three income/intent segments, half of them defaulted."""
    low = dict(income=30000.0, loan_intent=LoanIntent.HOMEIMPROVEMENT, loan_amount=10000.0, interest_rate=16.0)
    middle = dict(income=60000.0, loan_intent=LoanIntent.VENTURE, loan_amount=5000.0, interest_rate=8.0)
    high = dict(income=150000.0, loan_intent=LoanIntent.EDUCATION, loan_amount=20000.0, interest_rate=None)
    return [
        build_record(status=LoanStatus.DEFAULTED, **low),
        build_record(status=LoanStatus.DEFAULTED, **low),
        build_record(status=LoanStatus.PERFORMING, **low),
        build_record(status=LoanStatus.PERFORMING, **middle),
        build_record(status=LoanStatus.PERFORMING, **middle),
        build_record(status=LoanStatus.DEFAULTED, **high),
    ]

"""
Loan Record Data Model
======================

Typed, immutable representations of loan records and of the rows produced
by the aggregation engine.

Classes
-------
- LoanRecord: one loan application/origination
- AggregateRow: grouped statistics for one bucket (or bucket pair)
- BorrowerProfile: mean borrower characteristics for a selection of loans
- PortfolioSummary: whole-portfolio totals and loss metrics

Notes
-----
The source dataset stores ``loan_status`` as 0/1, sometimes as an integer and
sometimes as a string literal. Both forms are normalized to :class:`LoanStatus`.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class HomeOwnership(str, Enum):
    RENT = "RENT"
    OWN = "OWN"
    MORTGAGE = "MORTGAGE"
    OTHER = "OTHER"


class LoanIntent(str, Enum):
    PERSONAL = "PERSONAL"
    EDUCATION = "EDUCATION"
    MEDICAL = "MEDICAL"
    VENTURE = "VENTURE"
    HOMEIMPROVEMENT = "HOMEIMPROVEMENT"
    DEBTCONSOLIDATION = "DEBTCONSOLIDATION"


class LoanGrade(str, Enum):
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"
    F = "F"
    G = "G"


class LoanStatus(str, Enum):
    PERFORMING = "PERFORMING"
    DEFAULTED = "DEFAULTED"

    @classmethod
    def from_flag(cls, flag: int) -> "LoanStatus":
        """Map the dataset's 0/1 ``loan_status`` flag to a status."""
        if flag == 1:
            return cls.DEFAULTED
        if flag == 0:
            return cls.PERFORMING
        raise ValueError(f"loan status flag must be 0 or 1, got {flag!r}")


@dataclass(frozen=True)
class LoanRecord:
    """One loan from the credit risk dataset."""

    age: int
    income: float
    home_ownership: HomeOwnership
    employment_length_years: float | None
    loan_intent: LoanIntent
    loan_grade: LoanGrade
    loan_amount: float
    interest_rate: float | None
    status: LoanStatus
    loan_percent_income: float
    prior_default_on_file: bool
    credit_history_length_years: int

    @property
    def is_default(self) -> bool:
        return self.status is LoanStatus.DEFAULTED


@dataclass(frozen=True)
class AggregateRow:
    """Grouped statistics for one segment.

    ``default_rate_pct`` and the averages are None for an empty group
    (the "no data" row); sums are zero.
    """

    keys: tuple[str, ...]
    key_names: tuple[str, ...]
    count: int
    defaults: int
    default_rate_pct: float | None
    avg_amount: float | None
    total_volume: float
    estimated_losses: float
    avg_interest_rate: float | None = None

    @property
    def is_empty(self) -> bool:
        return self.count == 0

    def to_dict(self) -> dict[str, Any]:
        """Flatten the row, expanding bucket keys into named columns."""
        out: dict[str, Any] = dict(zip(self.key_names, self.keys))
        out.update(
            {
                "count": self.count,
                "defaults": self.defaults,
                "default_rate_pct": self.default_rate_pct,
                "avg_amount": self.avg_amount,
                "total_volume": self.total_volume,
                "estimated_losses": self.estimated_losses,
                "avg_interest_rate": self.avg_interest_rate,
            }
        )
        return out


@dataclass(frozen=True)
class BorrowerProfile:
    """Mean characteristics of the borrowers in a selection."""

    label: str
    count: int
    avg_age: float | None
    avg_income: float | None
    avg_employment_years: float | None
    avg_loan_amount: float | None
    avg_interest_rate: float | None
    avg_loan_to_income_ratio: float | None

    def to_dict(self) -> dict[str, Any]:
        return {
            "profile_type": self.label,
            "count": self.count,
            "avg_age": self.avg_age,
            "avg_income": self.avg_income,
            "avg_employment_years": self.avg_employment_years,
            "avg_loan_amount": self.avg_loan_amount,
            "avg_interest_rate": self.avg_interest_rate,
            "avg_loan_to_income_ratio": self.avg_loan_to_income_ratio,
        }


@dataclass(frozen=True)
class PortfolioSummary:
    total_loans: int
    avg_income: float | None
    avg_loan_amount: float | None
    total_defaults: int
    default_rate_pct: float | None
    total_portfolio_value: float
    total_defaults_value: float
    portfolio_loss_pct: float | None
    portfolio_value_millions: float = field(default=0.0)


__all__ = [
    "HomeOwnership",
    "LoanIntent",
    "LoanGrade",
    "LoanStatus",
    "LoanRecord",
    "AggregateRow",
    "BorrowerProfile",
    "PortfolioSummary",
]

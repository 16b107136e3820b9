"""
Segment Classifiers
===================

Named, reusable functions that map a :class:`LoanRecord` to a bucket label.

Any callable ``record -> str`` can be used as a classifier. Objects with a
``name`` attribute use it as the report column name; plain functions fall
back to ``__name__``.

Built-ins
---------
- income_tier: Low / Middle / High income (50K and 100K boundaries)
- interest_rate_tier: Low / Medium / High rate (10% and 15% boundaries)
- loan_intent: identity on the loan purpose
- loan_grade: identity on the loan grade
- home_ownership: identity on the housing status
"""

from enum import Enum
from typing import Callable, Sequence

from .config import INCOME_THRESHOLDS, RATE_THRESHOLDS
from .errors import InvalidThresholdError
from .records import LoanRecord


Classifier = Callable[[LoanRecord], str]


def classifier_name(classifier: Classifier) -> str:
    """Return the column name used for a classifier's bucket labels."""
    return getattr(classifier, "name", None) or getattr(classifier, "__name__", "segment")


class ThresholdClassifier:
    """
    Bucket a numeric field by ascending boundaries.

    With thresholds ``t`` and labels ``l``: ``value < t[0]`` gives ``l[0]``,
    ``t[i-1] <= value <= t[i]`` gives ``l[i]``, and ``value > t[-1]`` gives
    ``l[-1]``. Middle tiers include both boundaries, like SQL ``BETWEEN``.

    Parameters
    ----------
    name : str
        Column name for the bucket labels in reports
    field : str
        LoanRecord attribute to classify
    thresholds : Sequence[float]
        Strictly increasing boundaries
    labels : Sequence[str]
        One more label than there are thresholds
    missing_label : str | None, optional
        Label for records whose field is None. Without one, a None value
        raises InvalidThresholdError.

    Raises
    ------
    InvalidThresholdError
        If thresholds are empty or not strictly increasing, or the label
        count does not match
    """

    def __init__(
        self,
        name: str,
        field: str,
        thresholds: Sequence[float],
        labels: Sequence[str],
        missing_label: str | None = None,
    ) -> None:
        thresholds = tuple(float(t) for t in thresholds)
        if not thresholds:
            raise InvalidThresholdError(f"{name}: at least one threshold is required")
        if any(lower >= upper for lower, upper in zip(thresholds, thresholds[1:])):
            raise InvalidThresholdError(
                f"{name}: thresholds must be strictly increasing, got {list(thresholds)}"
            )
        if len(labels) != len(thresholds) + 1:
            raise InvalidThresholdError(
                f"{name}: expected {len(thresholds) + 1} labels for "
                f"{len(thresholds)} thresholds, got {len(labels)}"
            )
        self.name = name
        self.field = field
        self.thresholds = thresholds
        self.labels = tuple(labels)
        self.missing_label = missing_label

    def __call__(self, record: LoanRecord) -> str:
        value = getattr(record, self.field)
        if value is None:
            if self.missing_label is None:
                raise InvalidThresholdError(f"{self.name}: {self.field} is missing")
            return self.missing_label
        if value < self.thresholds[0]:
            return self.labels[0]
        for label, upper in zip(self.labels[1:], self.thresholds[1:]):
            if value <= upper:
                return label
        return self.labels[-1]

    def __repr__(self) -> str:
        return (
            f"ThresholdClassifier(name={self.name!r}, field={self.field!r}, "
            f"thresholds={list(self.thresholds)})"
        )


class FieldClassifier:
    """Identity classifier: the bucket is the field value itself."""

    def __init__(self, name: str, field: str) -> None:
        self.name = name
        self.field = field

    def __call__(self, record: LoanRecord) -> str:
        value = getattr(record, self.field)
        if isinstance(value, Enum):
            return str(value.value)
        if isinstance(value, bool):
            return "Y" if value else "N"
        return str(value)

    def __repr__(self) -> str:
        return f"FieldClassifier(name={self.name!r}, field={self.field!r})"


def income_tier(
    thresholds: Sequence[float] = INCOME_THRESHOLDS,
    name: str = "income_level",
    labels: Sequence[str] = ("Low Income", "Middle Income", "High Income"),
) -> ThresholdClassifier:
    return ThresholdClassifier(name, "income", thresholds, labels)


def interest_rate_tier(
    thresholds: Sequence[float] = RATE_THRESHOLDS,
    name: str = "rate_segment",
    labels: Sequence[str] = ("Low Rate (<10%)", "Medium Rate (10-15%)", "High Rate (>15%)"),
    missing_label: str | None = "Rate Not Reported",
) -> ThresholdClassifier:
    return ThresholdClassifier(name, "interest_rate", thresholds, labels, missing_label=missing_label)


def loan_intent(name: str = "loan_intent") -> FieldClassifier:
    return FieldClassifier(name, "loan_intent")


def loan_grade(name: str = "loan_grade") -> FieldClassifier:
    return FieldClassifier(name, "loan_grade")


def home_ownership(name: str = "home_ownership") -> FieldClassifier:
    return FieldClassifier(name, "home_ownership")


__all__ = [
    "Classifier",
    "classifier_name",
    "ThresholdClassifier",
    "FieldClassifier",
    "income_tier",
    "interest_rate_tier",
    "loan_intent",
    "loan_grade",
    "home_ownership",
]

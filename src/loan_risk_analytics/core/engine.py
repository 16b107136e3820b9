"""
Aggregation Engine
==================

Pure functions that bucket loan records and compute grouped statistics.

Every function takes an input record sequence and returns new immutable
values; nothing here holds state or mutates its input, so results are
reproducible for a given dataset.

Functions
---------
- bucketize: Group records by a classifier's bucket label
- aggregate: Count, default rate, volume and loss estimate for one group
- segment: bucketize + aggregate over a single classifier
- cross_segment: Aggregate over every occurring pair of two classifiers
- rank: Filter, sort and truncate aggregate rows by a metric
- profile: Mean borrower characteristics for records matching a predicate
- summarize_portfolio: Whole-portfolio totals and loss metrics
"""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Iterable, Sequence

from .classifiers import Classifier, classifier_name
from .errors import EmptyGroupError
from .records import AggregateRow, BorrowerProfile, LoanRecord, PortfolioSummary


logger = logging.getLogger(__name__)

RANKABLE_METRICS = (
    "count",
    "defaults",
    "default_rate_pct",
    "avg_amount",
    "total_volume",
    "estimated_losses",
    "avg_interest_rate",
)


def round_half_up(value: float | None, digits: int = 2) -> float | None:
    """Round like SQL ``ROUND`` (half away from zero), passing None through."""
    if value is None:
        return None
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def _mean(values: Iterable[float | None]) -> float | None:
    """Mean of the non-null values (SQL ``AVG`` semantics)."""
    present = [value for value in values if value is not None]
    if not present:
        return None
    return sum(present) / len(present)


def _pct(numerator: float, denominator: float) -> float | None:
    if not denominator:
        return None
    return round_half_up(numerator / denominator * 100, 2)


def bucketize(records: Iterable[LoanRecord], classifier: Classifier) -> dict[str, list[LoanRecord]]:
    """
    Group records by bucket label.

    Parameters
    ----------
    records : Iterable[LoanRecord]
        Records to group
    classifier : Classifier
        Function mapping a record to its bucket label

    Returns
    -------
    dict[str, list[LoanRecord]]
        Records per bucket, keys in sorted order. Each record appears in
        exactly one bucket.
    """
    buckets: dict[str, list[LoanRecord]] = {}
    for record in records:
        buckets.setdefault(classifier(record), []).append(record)
    return {key: buckets[key] for key in sorted(buckets)}


def aggregate(
    group: Sequence[LoanRecord],
    keys: tuple[str, ...] = (),
    key_names: tuple[str, ...] = (),
    strict: bool = False,
) -> AggregateRow:
    """
    Compute grouped statistics for one segment.

    Parameters
    ----------
    group : Sequence[LoanRecord]
        Records in the segment
    keys : tuple[str, ...], optional
        Bucket label(s) identifying the segment
    key_names : tuple[str, ...], optional
        Column names for the bucket labels
    strict : bool, default False
        Raise EmptyGroupError for an empty group instead of returning the
        no-data row

    Returns
    -------
    AggregateRow
        ``default_rate_pct`` is the defaulted share as a percentage rounded
        to 2 decimals. For an empty group it is None, as are the averages.

    Raises
    ------
    EmptyGroupError
        If ``group`` is empty and ``strict`` is True
    """
    count = len(group)
    if count == 0:
        if strict:
            raise EmptyGroupError(f"no records in segment {keys or '(all)'}")
        logger.debug("Empty segment %s reported as no-data row", keys)

    defaults = sum(1 for record in group if record.is_default)
    total_volume = sum(record.loan_amount for record in group)
    estimated_losses = sum(record.loan_amount for record in group if record.is_default)

    return AggregateRow(
        keys=tuple(keys),
        key_names=tuple(key_names),
        count=count,
        defaults=defaults,
        default_rate_pct=_pct(defaults, count),
        avg_amount=total_volume / count if count else None,
        total_volume=float(total_volume),
        estimated_losses=float(estimated_losses),
        avg_interest_rate=_mean(record.interest_rate for record in group),
    )


def segment(records: Iterable[LoanRecord], classifier: Classifier) -> list[AggregateRow]:
    """Aggregate each bucket of a single classifier, in bucket-key order."""
    name = classifier_name(classifier)
    return [
        aggregate(group, keys=(key,), key_names=(name,))
        for key, group in bucketize(records, classifier).items()
    ]


def cross_segment(
    records: Iterable[LoanRecord],
    classifier_a: Classifier,
    classifier_b: Classifier,
) -> dict[tuple[str, str], AggregateRow]:
    """
    Aggregate over every (bucket A, bucket B) pair that occurs in the data.

    Returns
    -------
    dict[tuple[str, str], AggregateRow]
        Rows keyed by label pair, in sorted key order
    """
    key_names = (classifier_name(classifier_a), classifier_name(classifier_b))

    def pair(record: LoanRecord) -> tuple[str, str]:
        return classifier_a(record), classifier_b(record)

    groups: dict[tuple[str, str], list[LoanRecord]] = {}
    for record in records:
        groups.setdefault(pair(record), []).append(record)

    return {
        keys: aggregate(groups[keys], keys=keys, key_names=key_names)
        for keys in sorted(groups)
    }


def rank(
    rows: Iterable[AggregateRow],
    by: str = "default_rate_pct",
    order: str = "desc",
    min_count: int = 0,
    limit: int | None = None,
) -> list[AggregateRow]:
    """
    Filter, sort and truncate aggregate rows.

    Parameters
    ----------
    rows : Iterable[AggregateRow]
        Rows to rank
    by : str, default "default_rate_pct"
        Metric to sort on (one of RANKABLE_METRICS)
    order : {"desc", "asc"}
        Sort direction
    min_count : int, default 0
        Drop rows with fewer records than this
    limit : int | None, optional
        Keep at most this many rows

    Returns
    -------
    list[AggregateRow]
        Ties are broken by ascending bucket key in both directions. Rows
        whose metric is None are placed last.

    Raises
    ------
    ValueError
        If ``by`` or ``order`` is not recognized
    """
    if by not in RANKABLE_METRICS:
        raise ValueError(f"Cannot rank by {by!r}; choose one of {', '.join(RANKABLE_METRICS)}")
    if order not in ("asc", "desc"):
        raise ValueError(f"order must be 'asc' or 'desc', got {order!r}")

    kept = sorted((row for row in rows if row.count >= min_count), key=lambda row: row.keys)
    ranked = [row for row in kept if getattr(row, by) is not None]
    unranked = [row for row in kept if getattr(row, by) is None]

    # sorted() is stable, so the key order above survives as the tie-breaker
    ranked = sorted(ranked, key=lambda row: getattr(row, by), reverse=order == "desc")

    result = ranked + unranked
    if limit is not None:
        result = result[:limit]
    return result


def profile(
    records: Iterable[LoanRecord],
    predicate: Callable[[LoanRecord], bool],
    label: str = "",
) -> BorrowerProfile:
    """
    Mean borrower characteristics for the records matching ``predicate``.

    Nullable fields (employment length, interest rate) are averaged over
    the records where they are present.

    Examples
    --------
    >>> high_risk = profile(records, lambda r: r.is_default, "High Risk Borrowers")
    """
    selected = [record for record in records if predicate(record)]
    return BorrowerProfile(
        label=label,
        count=len(selected),
        avg_age=_mean(record.age for record in selected),
        avg_income=_mean(record.income for record in selected),
        avg_employment_years=_mean(record.employment_length_years for record in selected),
        avg_loan_amount=_mean(record.loan_amount for record in selected),
        avg_interest_rate=_mean(record.interest_rate for record in selected),
        avg_loan_to_income_ratio=_mean(record.loan_percent_income for record in selected),
    )


def summarize_portfolio(records: Iterable[LoanRecord]) -> PortfolioSummary:
    """Whole-portfolio overview: volume, default rate and loss share."""
    records = list(records)
    overall = aggregate(records)
    total_value = overall.total_volume
    return PortfolioSummary(
        total_loans=overall.count,
        avg_income=_mean(record.income for record in records),
        avg_loan_amount=overall.avg_amount,
        total_defaults=overall.defaults,
        default_rate_pct=overall.default_rate_pct,
        total_portfolio_value=total_value,
        total_defaults_value=overall.estimated_losses,
        portfolio_loss_pct=_pct(overall.estimated_losses, total_value),
        portfolio_value_millions=round_half_up(total_value / 1_000_000, 1),
    )


__all__ = [
    "RANKABLE_METRICS",
    "round_half_up",
    "bucketize",
    "aggregate",
    "segment",
    "cross_segment",
    "rank",
    "profile",
    "summarize_portfolio",
]

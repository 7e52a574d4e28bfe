"""
Insights derived from monthly statistics.

This module provides the homework alerts shown next to a student's
statistics, the per-session score series used for charts, and the
pass/fail breakdowns of each categorical dimension.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd

from ..models.stats import MonthlyStats
from ..models.record import YesNoResult, parse_iso_date
from .aggregator import coerce_record, records_in_month
from .classifier import Metric, dimension_value, is_active


DEFAULT_NO_HOMEWORK_THRESHOLD = 3

SCORE_COLUMNS = ["date", "day", "knowledge", "quantity", "test"]


@dataclass(frozen=True)
class HomeworkAlert:
    """
    Warning about homework not being assigned.

    Attributes:
        code: Alert identifier
        message: Human-readable message
    """

    code: str
    message: str

    LAST_SESSION = "last_session_no_homework"
    FREQUENT = "frequent_no_homework"


def homework_alerts(
    history: Optional[Iterable[Any]],
    stats: MonthlyStats,
    threshold: int = DEFAULT_NO_HOMEWORK_THRESHOLD
) -> List[HomeworkAlert]:
    """
    Build homework alerts for a student.

    Args:
        history: Full session history
        stats: Statistics of the month being viewed
        threshold: Sessions without homework that trigger the monthly alert

    Returns:
        List of alerts, possibly empty
    """
    alerts = []

    dated = []
    for item in history or []:
        record = coerce_record(item)
        day = parse_iso_date(record.date) if record is not None else None
        if day is not None:
            dated.append((day, record))

    if dated:
        day, last = max(dated, key=lambda pair: pair[0])
        if dimension_value(last, Metric.ASSIGNED_HOMEWORK).value == YesNoResult.NO:
            alerts.append(HomeworkAlert(
                code=HomeworkAlert.LAST_SESSION,
                message=f"No homework was assigned in the last session ({day.isoformat()})",
            ))

    if stats.no_homework_count >= threshold:
        alerts.append(HomeworkAlert(
            code=HomeworkAlert.FREQUENT,
            message=(
                f"{stats.no_homework_count} sessions this month ended "
                f"without new homework"
            ),
        ))

    return alerts


def _score_or_none(record, metric: Metric):
    value = dimension_value(record, metric)
    return value.value if value.is_recorded else None


def score_series(
    history: Optional[Iterable[Any]],
    month: int,
    year: int
) -> pd.DataFrame:
    """
    Per-session scores of a month, for charting.

    One row per active record, sorted by date. A score that is ignored
    or n/a is NaN.

    Args:
        history: Full session history
        month: Calendar month (1-12)
        year: Calendar year

    Returns:
        DataFrame with columns date, day, knowledge, quantity, test

    Examples:
        >>> df = score_series(student.history, 1, 2024)
        >>> df["knowledge"].mean()
    """
    active = [
        (parse_iso_date(record.date), record)
        for record in records_in_month(history, month, year)
        if is_active(record)
    ]
    active.sort(key=lambda pair: pair[0])

    rows = [
        {
            "date": day.isoformat(),
            "day": day.day,
            "knowledge": _score_or_none(record, Metric.KNOWLEDGE),
            "quantity": _score_or_none(record, Metric.QUANTITY),
            "test": _score_or_none(record, Metric.TEST_SCORE),
        }
        for day, record in active
    ]

    df = pd.DataFrame(rows, columns=SCORE_COLUMNS)
    for column in ("knowledge", "quantity", "test"):
        df[column] = pd.to_numeric(df[column], errors="coerce")
    return df


def breakdowns(stats: MonthlyStats) -> Dict[str, Dict[str, int]]:
    """
    Pass/fail splits of the categorical dimensions.

    Each split uses the dimension's own valid count as denominator,
    so the remainder is never negative.
    """
    def split(passed: int, valid: int) -> Dict[str, int]:
        return {"passed": passed, "other": max(0, valid - passed)}

    return {
        "homework": stats.homework_counts.to_dict(),
        "formula_test": split(stats.formula_pass_count, stats.valid_formula_count),
        "regular_homework": split(
            stats.regular_homework_pass_count, stats.valid_regular_homework_count
        ),
        "assigned_homework": split(
            stats.assigned_homework_count, stats.valid_assigned_count
        ),
    }

"""
Record classification per statistical dimension.

Each session record carries evaluations grouped into five dimensions,
each with its own ignore flag. A value only counts toward statistics
when the session was active, its dimension is not ignored and the value
itself is applicable. DimensionValue folds those three checks into one
tagged value so callers never test the flag and the sentinel separately.
"""

import math
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, List, Optional

from ..models.record import (
    AttendanceStatus,
    HomeworkStatus,
    NOT_APPLICABLE,
    RegularHomeworkResult,
    StudyRecord,
    TriStateResult,
    YesNoResult,
    parse_choice,
    parse_score,
)


ACTIVE_STATUSES = (AttendanceStatus.ATTENDED, AttendanceStatus.MAKEUP)


class Dimension(Enum):
    """Part of a session an evaluation belongs to."""

    EARLY = "early"
    MID = "mid"
    OUTSIDE = "outside"
    TEST = "test"
    LATE = "late"

    @property
    def ignore_flag(self) -> str:
        """Name of the record attribute that excludes this dimension."""
        return f"ignore_{self.value}_stats"


class Metric(Enum):
    """Valued record fields, each bound to its dimension."""

    HOMEWORK = ("homework", Dimension.EARLY, HomeworkStatus)
    FORMULA_TEST = ("formula_test", Dimension.EARLY, TriStateResult)
    OLD_LESSON_TEST = ("old_lesson_test", Dimension.EARLY, TriStateResult)
    REGULAR_HOMEWORK = ("regular_homework_result", Dimension.EARLY, RegularHomeworkResult)
    KNOWLEDGE = ("eval_new_knowledge", Dimension.MID, None)
    QUANTITY = ("eval_quantity", Dimension.MID, None)
    HAS_REGULAR_HOMEWORK = ("has_regular_homework", Dimension.OUTSIDE, YesNoResult)
    TEST_SCORE = ("test_score", Dimension.TEST, None)
    ASSIGNED_HOMEWORK = ("assigned_homework", Dimension.LATE, YesNoResult)

    def __init__(self, field_name: str, dimension: Dimension, choices):
        self.field_name = field_name
        self.dimension = dimension
        self.choices = choices

    @property
    def is_numeric(self) -> bool:
        return self.choices is None


class DimensionState(Enum):
    RECORDED = "recorded"
    NOT_APPLICABLE = "not_applicable"
    IGNORED = "ignored"


@dataclass(frozen=True)
class DimensionValue:
    """
    Tagged value of one metric of one record.

    Examples:
        >>> DimensionValue.recorded(8).is_recorded
        True
        >>> DimensionValue.ignored().value is None
        True
    """

    state: DimensionState
    value: Any = None

    @classmethod
    def recorded(cls, value: Any) -> 'DimensionValue':
        return cls(DimensionState.RECORDED, value)

    @classmethod
    def not_applicable(cls) -> 'DimensionValue':
        return cls(DimensionState.NOT_APPLICABLE)

    @classmethod
    def ignored(cls) -> 'DimensionValue':
        return cls(DimensionState.IGNORED)

    @property
    def is_recorded(self) -> bool:
        return self.state == DimensionState.RECORDED


def is_active(record: StudyRecord) -> bool:
    """Check if the record is an attended or makeup session."""
    return getattr(record, "status", None) in ACTIVE_STATUSES


def _as_score(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return None
    score = parse_score(value)
    if score is None or not math.isfinite(score):
        return None
    return score


def dimension_value(record: StudyRecord, metric: Metric) -> DimensionValue:
    """
    Classify one metric of a record.

    Absent sessions and unknown statuses never carry pedagogical data,
    whatever their flags and values say. Unknown labels and
    non-numeric scores are treated as not applicable.

    Args:
        record: Session record
        metric: Metric to classify

    Returns:
        Recorded(value), Ignored or NotApplicable
    """
    if not is_active(record):
        return DimensionValue.not_applicable()

    if getattr(record, metric.dimension.ignore_flag, False):
        return DimensionValue.ignored()

    value = getattr(record, metric.field_name, None)

    if metric.is_numeric:
        score = _as_score(value)
        if score is None:
            return DimensionValue.not_applicable()
        return DimensionValue.recorded(score)

    choice = parse_choice(metric.choices, value)
    if choice is None or choice.value == NOT_APPLICABLE:
        return DimensionValue.not_applicable()
    return DimensionValue.recorded(choice)


def is_included(record: StudyRecord, metric: Metric) -> bool:
    """Check if the record counts toward the metric's denominator."""
    return dimension_value(record, metric).is_recorded


def valid_subset(records: Iterable[StudyRecord], metric: Metric) -> List[StudyRecord]:
    """Active records whose metric is recorded and not ignored."""
    return [record for record in records if is_included(record, metric)]

"""
Monthly statistics aggregation.

Turns a student's session history and weekly schedule into the
MonthlyStats snapshot for one calendar month: attendance counts, salary
owed, homework compliance and average scores.

The computation is a pure function of its inputs. It never mutates the
history or schedule and never raises on malformed data: missing lists
are empty, unreadable records are skipped, unknown labels never count.
"""

import logging
import math
from decimal import Decimal
from typing import Any, Iterable, List, Optional

from ..models.record import (
    AttendanceStatus,
    HomeworkStatus,
    RegularHomeworkResult,
    Student,
    StudyRecord,
    TriStateResult,
    YesNoResult,
    parse_iso_date,
)
from ..models.stats import AverageScores, HomeworkCounts, MonthlyStats
from .classifier import Metric, dimension_value, is_active, valid_subset
from .schedule import count_scheduled_sessions


logger = logging.getLogger(__name__)


def coerce_record(item: Any) -> Optional[StudyRecord]:
    """Accept a StudyRecord or its dictionary form; anything else is None."""
    if isinstance(item, StudyRecord):
        return item
    if isinstance(item, dict):
        return StudyRecord.from_dict(item)
    return None


def _coerce_amount(value: Any) -> float:
    """Salary as float; anything that is not a finite number is 0."""
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return 0.0
    amount = float(value)
    if not math.isfinite(amount):
        return 0.0
    return amount


def records_in_month(
    history: Optional[Iterable[Any]],
    month: int,
    year: int
) -> List[StudyRecord]:
    """
    Select the records dated in a calendar month.

    Args:
        history: Session records (StudyRecord or dict)
        month: Calendar month (1-12)
        year: Calendar year

    Returns:
        Records of that month, in history order
    """
    selected = []

    for item in history or []:
        record = coerce_record(item)
        if record is None:
            continue

        day = parse_iso_date(record.date)
        if day is not None and day.month == month and day.year == year:
            selected.append(record)

    return selected


def _count_status(records: List[StudyRecord], status: AttendanceStatus) -> int:
    return sum(1 for record in records if record.status == status)


def _count_value(records: List[StudyRecord], metric: Metric, expected) -> int:
    return sum(
        1 for record in records
        if dimension_value(record, metric).value == expected
    )


def _average(records: List[StudyRecord], metric: Metric) -> float:
    if not records:
        return 0.0
    total = sum(dimension_value(record, metric).value for record in records)
    return total / len(records)


def calculate_monthly_stats(
    history: Optional[Iterable[Any]],
    schedules: Optional[Iterable[Any]],
    month: int,
    year: int,
    base_salary: Any = 0
) -> MonthlyStats:
    """
    Compute the monthly statistics of one student.

    Makeup sessions are paid like regular attendance; absences are never
    paid. Every pedagogical count and average is taken over the active
    records whose dimension is neither ignored nor n/a, and a dimension
    without valid records reports 0.

    Args:
        history: Full session history (StudyRecord or dict entries)
        schedules: Weekly schedule (ScheduleEntry or dict entries)
        month: Calendar month (1-12)
        year: Calendar year
        base_salary: Amount per paid session

    Returns:
        MonthlyStats with every field set

    Examples:
        >>> stats = calculate_monthly_stats([], [ScheduleEntry(weekday=0)], 1, 2024)
        >>> stats.total_sessions
        5
    """
    records = records_in_month(history, month, year)

    total_sessions = count_scheduled_sessions(schedules, month, year)

    attended_count = _count_status(records, AttendanceStatus.ATTENDED)
    makeup_count = _count_status(records, AttendanceStatus.MAKEUP)
    absent_count = _count_status(records, AttendanceStatus.ABSENT)

    total_salary = (attended_count + makeup_count) * _coerce_amount(base_salary)

    active = [record for record in records if is_active(record)]

    homework = valid_subset(active, Metric.HOMEWORK)
    formula = valid_subset(active, Metric.FORMULA_TEST)
    old_lesson = valid_subset(active, Metric.OLD_LESSON_TEST)
    regular_homework = valid_subset(active, Metric.REGULAR_HOMEWORK)
    knowledge = valid_subset(active, Metric.KNOWLEDGE)
    quantity = valid_subset(active, Metric.QUANTITY)
    test = valid_subset(active, Metric.TEST_SCORE)
    assigned = valid_subset(active, Metric.ASSIGNED_HOMEWORK)
    outside = valid_subset(active, Metric.HAS_REGULAR_HOMEWORK)

    stats = MonthlyStats(
        month=month,
        year=year,
        total_sessions=total_sessions,
        attended_count=attended_count,
        absent_count=absent_count,
        makeup_count=makeup_count,
        total_salary=total_salary,
        avg_scores=AverageScores(
            knowledge=_average(knowledge, Metric.KNOWLEDGE),
            quantity=_average(quantity, Metric.QUANTITY),
            test=_average(test, Metric.TEST_SCORE),
        ),
        homework_counts=HomeworkCounts(
            none=_count_value(homework, Metric.HOMEWORK, HomeworkStatus.NOT_DONE),
            incomplete=_count_value(homework, Metric.HOMEWORK, HomeworkStatus.PARTIAL),
            satisfactory=_count_value(homework, Metric.HOMEWORK, HomeworkStatus.SATISFACTORY),
        ),
        formula_pass_count=_count_value(formula, Metric.FORMULA_TEST, TriStateResult.PASS),
        old_lesson_pass_count=_count_value(
            old_lesson, Metric.OLD_LESSON_TEST, TriStateResult.PASS
        ),
        regular_homework_pass_count=_count_value(
            regular_homework, Metric.REGULAR_HOMEWORK, RegularHomeworkResult.DONE
        ),
        assigned_homework_count=_count_value(
            assigned, Metric.ASSIGNED_HOMEWORK, YesNoResult.YES
        ),
        no_homework_count=_count_value(assigned, Metric.ASSIGNED_HOMEWORK, YesNoResult.NO),
        has_regular_homework_count=_count_value(
            outside, Metric.HAS_REGULAR_HOMEWORK, YesNoResult.YES
        ),
        active_count=len(active),
        valid_homework_count=len(homework),
        valid_formula_count=len(formula),
        valid_old_lesson_count=len(old_lesson),
        valid_regular_homework_count=len(regular_homework),
        valid_knowledge_count=len(knowledge),
        valid_quantity_count=len(quantity),
        valid_test_count=len(test),
        valid_assigned_count=len(assigned),
        valid_outside_count=len(outside),
    )

    logger.debug(
        f"Monthly stats {year}-{month}: {len(records)} records, "
        f"{stats.active_count} active, {total_sessions} scheduled"
    )
    return stats


def calculate_student_stats(student: Student, month: int, year: int) -> MonthlyStats:
    """Compute the monthly statistics of a stored student profile."""
    return calculate_monthly_stats(
        student.history,
        student.schedules,
        month,
        year,
        student.base_salary,
    )


def calculate_total_salary(
    students: Optional[Iterable[Student]],
    month: int,
    year: int
) -> float:
    """
    Sum the salary owed for a month over every student.

    Args:
        students: Student profiles
        month: Calendar month (1-12)
        year: Calendar year

    Returns:
        Total salary across students
    """
    total = 0.0
    for student in students or []:
        if student is None:
            continue
        total += calculate_student_stats(student, month, year).total_salary
    return total

"""
Monthly statistics engine.

Usage:
    >>> from edu_tracking.stats import calculate_monthly_stats
    >>>
    >>> stats = calculate_monthly_stats(student.history, student.schedules, 1, 2024, 140000)
    >>> print(stats.total_salary, stats.avg_scores.knowledge)
"""

from .aggregator import (
    calculate_monthly_stats,
    calculate_student_stats,
    calculate_total_salary,
    records_in_month,
)
from .classifier import (
    Dimension,
    DimensionState,
    DimensionValue,
    Metric,
    dimension_value,
    is_active,
    is_included,
    valid_subset,
)
from .schedule import count_scheduled_sessions, scheduled_dates, session_for_date

__all__ = [
    "calculate_monthly_stats",
    "calculate_student_stats",
    "calculate_total_salary",
    "records_in_month",
    "Dimension",
    "DimensionState",
    "DimensionValue",
    "Metric",
    "dimension_value",
    "is_active",
    "is_included",
    "valid_subset",
    "count_scheduled_sessions",
    "scheduled_dates",
    "session_for_date",
]

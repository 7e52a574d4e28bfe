"""
Monthly statistics data models.

MonthlyStats is a derived snapshot: it is never persisted and is
recomputed from a student's history and schedule on demand.
"""

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class AverageScores:
    """Mean scores over each dimension's valid records (0.0 when none)."""

    knowledge: float = 0.0
    quantity: float = 0.0
    test: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return {
            "knowledge": self.knowledge,
            "quantity": self.quantity,
            "test": self.test,
        }


@dataclass(frozen=True)
class HomeworkCounts:
    """Partition of the valid early-session homework checks."""

    none: int = 0
    incomplete: int = 0
    satisfactory: int = 0

    @property
    def total(self) -> int:
        return self.none + self.incomplete + self.satisfactory

    def to_dict(self) -> Dict[str, int]:
        return {
            "none": self.none,
            "incomplete": self.incomplete,
            "satisfactory": self.satisfactory,
        }


@dataclass(frozen=True)
class MonthlyStats:
    """
    Statistics of one student for one calendar month.

    Attributes:
        month: Calendar month (1-12)
        year: Calendar year
        total_sessions: Scheduled sessions in the month
        attended_count: Records with status attended
        absent_count: Records with status absent
        makeup_count: Records with status makeup
        total_salary: Paid sessions times the base salary
        avg_scores: Knowledge, quantity and test averages
        homework_counts: Homework check partition
        formula_pass_count: Passed formula tests
        old_lesson_pass_count: Passed old-lesson tests
        regular_homework_pass_count: Completed regular homework
        assigned_homework_count: Sessions ending with homework assigned
        no_homework_count: Sessions ending without homework assigned
        has_regular_homework_count: Sessions where regular homework exists
        active_count: Attended plus makeup records
        valid_*_count: Denominator of each dimension

    Examples:
        >>> stats = MonthlyStats(month=1, year=2024)
        >>> stats.attendance_rate
        0.0
    """

    month: int
    year: int
    total_sessions: int = 0
    attended_count: int = 0
    absent_count: int = 0
    makeup_count: int = 0
    total_salary: float = 0
    avg_scores: AverageScores = field(default_factory=AverageScores)
    homework_counts: HomeworkCounts = field(default_factory=HomeworkCounts)
    formula_pass_count: int = 0
    old_lesson_pass_count: int = 0
    regular_homework_pass_count: int = 0
    assigned_homework_count: int = 0
    no_homework_count: int = 0
    has_regular_homework_count: int = 0
    active_count: int = 0
    valid_homework_count: int = 0
    valid_formula_count: int = 0
    valid_old_lesson_count: int = 0
    valid_regular_homework_count: int = 0
    valid_knowledge_count: int = 0
    valid_quantity_count: int = 0
    valid_test_count: int = 0
    valid_assigned_count: int = 0
    valid_outside_count: int = 0

    @property
    def paid_sessions(self) -> int:
        """Sessions that are paid: attended plus makeup."""
        return self.attended_count + self.makeup_count

    @property
    def attendance_rate(self) -> float:
        """Active sessions over scheduled sessions (0.0 with no schedule)."""
        if self.total_sessions <= 0:
            return 0.0
        return self.active_count / self.total_sessions

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to dictionary format.

        Returns:
            Dictionary representation of the statistics
        """
        return {
            "month": self.month,
            "year": self.year,
            "total_sessions": self.total_sessions,
            "attended_count": self.attended_count,
            "absent_count": self.absent_count,
            "makeup_count": self.makeup_count,
            "total_salary": self.total_salary,
            "avg_scores": self.avg_scores.to_dict(),
            "homework_counts": self.homework_counts.to_dict(),
            "formula_pass_count": self.formula_pass_count,
            "old_lesson_pass_count": self.old_lesson_pass_count,
            "regular_homework_pass_count": self.regular_homework_pass_count,
            "assigned_homework_count": self.assigned_homework_count,
            "no_homework_count": self.no_homework_count,
            "has_regular_homework_count": self.has_regular_homework_count,
            "active_count": self.active_count,
            "valid_homework_count": self.valid_homework_count,
            "valid_formula_count": self.valid_formula_count,
            "valid_old_lesson_count": self.valid_old_lesson_count,
            "valid_regular_homework_count": self.valid_regular_homework_count,
            "valid_knowledge_count": self.valid_knowledge_count,
            "valid_quantity_count": self.valid_quantity_count,
            "valid_test_count": self.valid_test_count,
            "valid_assigned_count": self.valid_assigned_count,
            "valid_outside_count": self.valid_outside_count,
            "attendance_rate": self.attendance_rate,
        }

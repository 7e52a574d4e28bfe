"""
Study record data models.

This module provides the schedule, study record and student structures
together with the label enums used for per-session evaluations.
Legacy (Vietnamese) labels found in version 1.0 data files are
accepted on input and mapped to the canonical English members.
"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional, Type, TypeVar


E = TypeVar('E', bound=Enum)

NOT_APPLICABLE = "n/a"


# Legacy label -> canonical value, per enum class name
LEGACY_LABELS: Dict[str, Dict[str, str]] = {
    "SessionType": {
        "Sáng": "Morning",
        "Chiều": "Afternoon",
        "Tối": "Evening",
    },
    "HomeworkStatus": {
        "Không làm": "not_done",
        "Làm thiếu": "partial",
        "Đạt yêu cầu": "satisfactory",
        "N/A": NOT_APPLICABLE,
    },
    "TriStateResult": {
        "Đạt": "pass",
        "Chưa đạt": "fail",
        "N/A": NOT_APPLICABLE,
    },
    "RegularHomeworkResult": {
        "Hoàn thành": "done",
        "Không hoàn thành": "not_done",
        "N/A": NOT_APPLICABLE,
    },
    "YesNoResult": {
        "Có": "yes",
        "Không": "no",
        "N/A": NOT_APPLICABLE,
    },
}


class LabeledEnum(str, Enum):
    """String enum that also resolves legacy labels."""

    @classmethod
    def _missing_(cls, value):
        canonical = LEGACY_LABELS.get(cls.__name__, {}).get(value)
        if canonical is None:
            return None
        return cls(canonical)


class SessionType(LabeledEnum):
    MORNING = "Morning"
    AFTERNOON = "Afternoon"
    EVENING = "Evening"


class AttendanceStatus(LabeledEnum):
    ATTENDED = "attended"
    ABSENT = "absent"
    MAKEUP = "makeup"


class HomeworkStatus(LabeledEnum):
    NOT_DONE = "not_done"
    PARTIAL = "partial"
    SATISFACTORY = "satisfactory"
    NOT_APPLICABLE = "n/a"


class TriStateResult(LabeledEnum):
    PASS = "pass"
    FAIL = "fail"
    NOT_APPLICABLE = "n/a"


class RegularHomeworkResult(LabeledEnum):
    DONE = "done"
    NOT_DONE = "not_done"
    NOT_APPLICABLE = "n/a"


class YesNoResult(LabeledEnum):
    YES = "yes"
    NO = "no"
    NOT_APPLICABLE = "n/a"


def parse_choice(enum_cls: Type[E], value: Any) -> Optional[E]:
    """
    Resolve a label to an enum member.

    Args:
        enum_cls: Target enum class
        value: Canonical label, legacy label or member

    Returns:
        Enum member, or None if the label is unknown

    Examples:
        >>> parse_choice(TriStateResult, "Đạt")
        <TriStateResult.PASS: 'pass'>
        >>> parse_choice(TriStateResult, "maybe") is None
        True
    """
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except (ValueError, TypeError):
        return None


def parse_score(value: Any) -> Optional[float]:
    """
    Parse a numeric evaluation.

    Returns:
        The number (int kept as int, Decimal as float), or None for n/a
        or unparseable input
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, Decimal):
        if not value.is_finite():
            return None
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, str):
        text = value.strip()
        if not text or text.upper() == "N/A":
            return None
        try:
            number = float(text)
        except ValueError:
            return None
        return int(number) if number.is_integer() else number
    return None


def parse_iso_date(value: Any) -> Optional[date]:
    """Parse a YYYY-MM-DD string as a local calendar date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    try:
        year, month, day = (int(part) for part in value.strip().split("-"))
        return date(year, month, day)
    except (ValueError, TypeError):
        return None


def _pick(data: Dict[str, Any], snake: str, camel: str, default: Any = None) -> Any:
    if snake in data:
        return data[snake]
    return data.get(camel, default)


def _label(value: Optional[Enum]) -> Optional[str]:
    return value.value if value is not None else None


@dataclass
class ScheduleEntry:
    """
    One recurring weekly slot.

    Attributes:
        weekday: 0 (Monday) .. 6 (Sunday)
        session: Session of the day
        id: Schedule entry identifier
    """

    weekday: int
    session: Optional[SessionType] = SessionType.AFTERNOON
    id: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "weekday": self.weekday,
            "session": _label(self.session),
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'ScheduleEntry':
        return cls(
            weekday=d.get("weekday"),
            session=parse_choice(SessionType, d.get("session")),
            id=d.get("id") or "",
        )


@dataclass
class MockTest:
    id: str
    date: str
    score: float

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "date": self.date, "score": self.score}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'MockTest':
        return cls(id=d.get("id", ""), date=d.get("date", ""), score=d.get("score"))


@dataclass
class StudyRecord:
    """
    One actual session instance with its attendance and evaluations.

    Evaluations are grouped by the part of the session they belong to;
    each group carries an ignore flag that removes it from statistics.

    Attributes:
        date: Session date (YYYY-MM-DD)
        session: Session of the day
        status: Attendance status (None if the stored label is unknown)
        weekday: 0 (Monday) .. 6 (Sunday), derived from date when omitted
        absent_reason: Free text, only kept for absent sessions
        homework: Early-session homework check
        formula_test: Early-session formula test
        old_lesson_test: Early-session old-lesson test
        regular_homework_result: Early-session regular homework result
        ignore_early_stats: Exclude early-session evaluations
        eval_new_knowledge: Mid-session knowledge score (1-10, None for n/a)
        eval_quantity: Mid-session quantity score (1-10, None for n/a)
        ignore_mid_stats: Exclude mid-session evaluations
        assigned_homework: Whether homework was assigned at the end
        ignore_late_stats: Exclude late-session evaluations
        has_regular_homework: Whether the student has regular homework
        ignore_outside_stats: Exclude outside-session evaluations
        test_score: Periodic test score (0-10), None when not taken
        ignore_test_stats: Exclude the periodic test score
        mock_tests: Mock test results attached to the session
        id: Record identifier

    Examples:
        >>> record = StudyRecord(
        ...     date="2024-01-08",
        ...     status=AttendanceStatus.ATTENDED,
        ...     eval_new_knowledge=8,
        ... )
        >>> record.weekday
        0
    """

    date: str
    session: Optional[SessionType] = SessionType.AFTERNOON
    status: Optional[AttendanceStatus] = AttendanceStatus.ATTENDED
    weekday: Optional[int] = None
    absent_reason: Optional[str] = None

    homework: Optional[HomeworkStatus] = HomeworkStatus.NOT_APPLICABLE
    formula_test: Optional[TriStateResult] = TriStateResult.NOT_APPLICABLE
    old_lesson_test: Optional[TriStateResult] = TriStateResult.NOT_APPLICABLE
    regular_homework_result: Optional[RegularHomeworkResult] = RegularHomeworkResult.NOT_APPLICABLE
    ignore_early_stats: bool = False

    eval_new_knowledge: Optional[float] = None
    eval_quantity: Optional[float] = None
    ignore_mid_stats: bool = False

    assigned_homework: Optional[YesNoResult] = YesNoResult.NOT_APPLICABLE
    ignore_late_stats: bool = False

    has_regular_homework: Optional[YesNoResult] = YesNoResult.NOT_APPLICABLE
    ignore_outside_stats: bool = True

    test_score: Optional[float] = None
    ignore_test_stats: bool = True

    mock_tests: List[MockTest] = field(default_factory=list)
    id: str = ""

    def __post_init__(self):
        """Derive weekday from the date when it was not given."""
        for name in ("eval_new_knowledge", "eval_quantity", "test_score"):
            value = getattr(self, name)
            if isinstance(value, Decimal):
                setattr(self, name, parse_score(value))

        if self.weekday is None:
            parsed = parse_iso_date(self.date)
            if parsed is not None:
                self.weekday = parsed.weekday()

    @property
    def is_absent(self) -> bool:
        return self.status == AttendanceStatus.ABSENT

    def normalized(self) -> 'StudyRecord':
        """
        Return a copy that carries no pedagogical data if absent.

        Absent sessions count toward attendance only, so every evaluation
        is reset to n/a and the ignore flags to their absent defaults.
        """
        if not self.is_absent:
            return replace(self, absent_reason=None, mock_tests=list(self.mock_tests))

        return replace(
            self,
            homework=HomeworkStatus.NOT_APPLICABLE,
            formula_test=TriStateResult.NOT_APPLICABLE,
            old_lesson_test=TriStateResult.NOT_APPLICABLE,
            regular_homework_result=RegularHomeworkResult.NOT_APPLICABLE,
            ignore_early_stats=False,
            eval_new_knowledge=None,
            eval_quantity=None,
            ignore_mid_stats=False,
            assigned_homework=YesNoResult.NOT_APPLICABLE,
            ignore_late_stats=False,
            has_regular_homework=YesNoResult.NOT_APPLICABLE,
            ignore_outside_stats=True,
            test_score=None,
            ignore_test_stats=False,
            mock_tests=list(self.mock_tests),
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to dictionary format.

        Returns:
            Dictionary with snake_case keys and canonical labels
        """
        return {
            "id": self.id,
            "date": self.date,
            "weekday": self.weekday,
            "session": _label(self.session),
            "status": _label(self.status),
            "absent_reason": self.absent_reason,
            "homework": _label(self.homework),
            "formula_test": _label(self.formula_test),
            "old_lesson_test": _label(self.old_lesson_test),
            "regular_homework_result": _label(self.regular_homework_result),
            "ignore_early_stats": self.ignore_early_stats,
            "eval_new_knowledge": (
                NOT_APPLICABLE if self.eval_new_knowledge is None else self.eval_new_knowledge
            ),
            "eval_quantity": NOT_APPLICABLE if self.eval_quantity is None else self.eval_quantity,
            "ignore_mid_stats": self.ignore_mid_stats,
            "assigned_homework": _label(self.assigned_homework),
            "ignore_late_stats": self.ignore_late_stats,
            "has_regular_homework": _label(self.has_regular_homework),
            "ignore_outside_stats": self.ignore_outside_stats,
            "test_score": self.test_score,
            "ignore_test_stats": self.ignore_test_stats,
            "mock_tests": [m.to_dict() for m in self.mock_tests],
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'StudyRecord':
        """
        Create instance from dictionary.

        Accepts both snake_case keys and the camelCase keys of the
        version 1.0 data files. Unknown labels become None, unparseable
        scores become n/a.

        Args:
            d: Record dictionary

        Returns:
            StudyRecord instance
        """
        weekday = d.get("weekday")
        if not isinstance(weekday, int) or isinstance(weekday, bool):
            weekday = None

        return cls(
            id=d.get("id") or "",
            date=d.get("date") or "",
            weekday=weekday,
            session=parse_choice(SessionType, d.get("session")),
            status=parse_choice(AttendanceStatus, d.get("status")),
            absent_reason=_pick(d, "absent_reason", "absentReason"),
            homework=parse_choice(HomeworkStatus, d.get("homework", NOT_APPLICABLE)),
            formula_test=parse_choice(
                TriStateResult, _pick(d, "formula_test", "formulaTest", NOT_APPLICABLE)
            ),
            old_lesson_test=parse_choice(
                TriStateResult, _pick(d, "old_lesson_test", "oldLessonTest", NOT_APPLICABLE)
            ),
            regular_homework_result=parse_choice(
                RegularHomeworkResult,
                _pick(d, "regular_homework_result", "regularHomeworkResult", NOT_APPLICABLE),
            ),
            ignore_early_stats=bool(_pick(d, "ignore_early_stats", "ignoreEarlyStats", False)),
            eval_new_knowledge=parse_score(_pick(d, "eval_new_knowledge", "evalNewKnowledge")),
            eval_quantity=parse_score(_pick(d, "eval_quantity", "evalQuantity")),
            ignore_mid_stats=bool(_pick(d, "ignore_mid_stats", "ignoreMidStats", False)),
            assigned_homework=parse_choice(
                YesNoResult, _pick(d, "assigned_homework", "assignedHomework", NOT_APPLICABLE)
            ),
            ignore_late_stats=bool(_pick(d, "ignore_late_stats", "ignoreLateStats", False)),
            has_regular_homework=parse_choice(
                YesNoResult, _pick(d, "has_regular_homework", "hasRegularHomework", NOT_APPLICABLE)
            ),
            ignore_outside_stats=bool(_pick(d, "ignore_outside_stats", "ignoreOutsideStats", True)),
            test_score=parse_score(_pick(d, "test_score", "testScore")),
            ignore_test_stats=bool(_pick(d, "ignore_test_stats", "ignoreTestStats", True)),
            mock_tests=[
                MockTest.from_dict(m)
                for m in (_pick(d, "mock_tests", "mockTests") or [])
                if isinstance(m, dict)
            ],
        )


@dataclass
class Student:
    """
    Tutoring student profile.

    Attributes:
        id: Student identifier
        full_name: Full name
        class_name: School class
        base_salary: Amount paid per attended or makeup session
        schedules: Recurring weekly slots
        history: Session records
    """

    id: str
    full_name: str
    class_name: str = ""
    base_salary: float = 0
    schedules: List[ScheduleEntry] = field(default_factory=list)
    history: List[StudyRecord] = field(default_factory=list)

    def find_record(self, record_id: str) -> Optional[StudyRecord]:
        for record in self.history:
            if record.id == record_id:
                return record
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "full_name": self.full_name,
            "class_name": self.class_name,
            "base_salary": self.base_salary,
            "schedules": [s.to_dict() for s in self.schedules],
            "history": [r.to_dict() for r in self.history],
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'Student':
        return cls(
            id=d.get("id") or "",
            full_name=_pick(d, "full_name", "fullName", ""),
            class_name=_pick(d, "class_name", "className", ""),
            base_salary=_pick(d, "base_salary", "baseSalary", 0) or 0,
            schedules=[
                ScheduleEntry.from_dict(s)
                for s in (d.get("schedules") or [])
                if isinstance(s, dict)
            ],
            history=[
                StudyRecord.from_dict(r)
                for r in (d.get("history") or [])
                if isinstance(r, dict)
            ],
        )

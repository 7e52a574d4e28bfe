"""
Shared fixtures for the edu_tracking tests.

Usage:
    pytest tests/ -v
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from edu_tracking.models.record import (
    AttendanceStatus,
    HomeworkStatus,
    RegularHomeworkResult,
    ScheduleEntry,
    SessionType,
    StudyRecord,
    TriStateResult,
    YesNoResult,
)


def make_record(date: str = "2024-01-08", **overrides) -> StudyRecord:
    """
    Build an attended record with every dimension filled in and counted.

    Args:
        date: Session date (YYYY-MM-DD)
        **overrides: Field values replacing the defaults
    """
    fields = dict(
        date=date,
        session=SessionType.AFTERNOON,
        status=AttendanceStatus.ATTENDED,
        homework=HomeworkStatus.SATISFACTORY,
        formula_test=TriStateResult.PASS,
        old_lesson_test=TriStateResult.PASS,
        regular_homework_result=RegularHomeworkResult.DONE,
        ignore_early_stats=False,
        eval_new_knowledge=8,
        eval_quantity=7,
        ignore_mid_stats=False,
        assigned_homework=YesNoResult.YES,
        ignore_late_stats=False,
        has_regular_homework=YesNoResult.YES,
        ignore_outside_stats=False,
        test_score=None,
        ignore_test_stats=False,
    )
    fields.update(overrides)
    return StudyRecord(**fields)


@pytest.fixture
def record_factory():
    """Factory for fully-evaluated attended records."""
    return make_record


@pytest.fixture
def monday_schedule():
    """One Monday afternoon slot per week."""
    return [ScheduleEntry(weekday=0, session=SessionType.AFTERNOON, id="sch_mon")]


@pytest.fixture
def legacy_student_dict():
    """Version 1.0 student profile (camelCase keys, Vietnamese labels)."""
    return {
        "id": "std_1704067200000",
        "fullName": "Nguyễn Văn An",
        "className": "Lớp 5",
        "baseSalary": 140000,
        "schedules": [
            {"id": "sch_a1", "weekday": 0, "session": "Chiều"},
            {"id": "sch_a2", "weekday": 3, "session": "Tối"},
        ],
        "history": [
            {
                "id": "rec_1",
                "date": "2024-01-08",
                "weekday": 0,
                "session": "Chiều",
                "status": "attended",
                "homework": "Đạt yêu cầu",
                "formulaTest": "Đạt",
                "oldLessonTest": "Chưa đạt",
                "regularHomeworkResult": "Hoàn thành",
                "ignoreEarlyStats": False,
                "evalNewKnowledge": 9,
                "evalQuantity": "N/A",
                "ignoreMidStats": False,
                "assignedHomework": "Không",
                "ignoreLateStats": False,
                "hasRegularHomework": "Có",
                "ignoreOutsideStats": False,
                "testScore": 8.5,
                "ignoreTestStats": False,
                "mockTests": [],
            },
            {
                "id": "rec_2",
                "date": "2024-01-11",
                "weekday": 3,
                "session": "Tối",
                "status": "absent",
                "absentReason": "Ốm",
                "homework": "N/A",
                "formulaTest": "N/A",
                "oldLessonTest": "N/A",
                "regularHomeworkResult": "N/A",
                "ignoreEarlyStats": False,
                "evalNewKnowledge": "N/A",
                "evalQuantity": "N/A",
                "ignoreMidStats": False,
                "assignedHomework": "N/A",
                "ignoreLateStats": False,
                "hasRegularHomework": "N/A",
                "ignoreOutsideStats": True,
                "ignoreTestStats": False,
                "mockTests": [],
            },
        ],
    }

"""
Unit tests for validation layer.
"""

import pytest

from edu_tracking.models.record import (
    AttendanceStatus,
    ScheduleEntry,
    SessionType,
    Student,
    StudyRecord,
)
from edu_tracking.validation.validators import ValidationResult
from edu_tracking.validation.student_validator import StudentValidator
from edu_tracking.validation.record_validator import StudyRecordValidator


class TestValidationResult:
    """Test cases for ValidationResult."""

    def test_valid_result(self):
        """Test creating a valid result."""
        result = ValidationResult(is_valid=True)

        assert result.is_valid
        assert not result.has_errors
        assert not result.has_warnings

    def test_add_error(self):
        """Test adding errors."""
        result = ValidationResult(is_valid=True)
        result.add_error("First error").add_error("Second error")

        assert not result.is_valid
        assert result.has_errors
        assert len(result.errors) == 2

    def test_add_warning(self):
        """Test adding warnings."""
        result = ValidationResult(is_valid=True)
        result.add_warning("Warning message")

        assert result.is_valid  # Warnings don't affect validity
        assert result.has_warnings

    def test_get_summary(self):
        """Test summary with errors and warnings."""
        result = ValidationResult(is_valid=True)
        assert result.get_summary() == "Validation passed"

        result.add_error("Error 1")
        result.add_warning("Warning 1")
        summary = result.get_summary()

        assert "Errors (1)" in summary
        assert "Warnings (1)" in summary
        assert "Error 1" in summary


class TestStudentValidator:
    """Test cases for StudentValidator."""

    @pytest.fixture
    def validator(self):
        """Create validator instance."""
        return StudentValidator()

    @pytest.fixture
    def valid_student(self):
        """Create valid student profile."""
        return Student(
            id="std_1",
            full_name="Nguyễn Văn An",
            class_name="Lớp 5",
            base_salary=140000,
            schedules=[
                ScheduleEntry(weekday=0, session=SessionType.AFTERNOON, id="sch_1"),
                ScheduleEntry(weekday=3, session=SessionType.EVENING, id="sch_2"),
            ],
        )

    def test_valid_student(self, validator, valid_student):
        """Test validation of valid student."""
        result = validator.validate(valid_student)

        assert result.is_valid
        assert not result.has_errors
        assert not result.has_warnings

    @pytest.mark.parametrize("name", ["", "   ", None, "x" * 201])
    def test_invalid_name(self, validator, valid_student, name):
        """Test blank, missing and overlong names."""
        valid_student.full_name = name

        result = validator.validate(valid_student)

        assert not result.is_valid
        assert any("full_name" in e for e in result.errors)

    def test_negative_salary(self, validator, valid_student):
        """Test validation fails for negative salary."""
        valid_student.base_salary = -1

        result = validator.validate(valid_student)

        assert not result.is_valid
        assert any("base_salary" in e for e in result.errors)

    def test_non_numeric_salary(self, validator, valid_student):
        """Test validation fails for a salary string."""
        valid_student.base_salary = "140000"

        assert not validator.validate(valid_student).is_valid

    def test_zero_salary_warns(self, validator, valid_student):
        """Test zero salary is valid with a warning."""
        valid_student.base_salary = 0

        result = validator.validate(valid_student)

        assert result.is_valid
        assert result.has_warnings

    @pytest.mark.parametrize("weekday", [-1, 7, None, "0"])
    def test_invalid_weekday(self, validator, valid_student, weekday):
        """Test weekdays outside 0-6."""
        valid_student.schedules.append(ScheduleEntry(weekday=weekday))

        result = validator.validate(valid_student)

        assert not result.is_valid
        assert any("schedules[2].weekday" in e for e in result.errors)

    def test_unknown_session(self, validator, valid_student):
        """Test an unknown session is an error."""
        valid_student.schedules.append(ScheduleEntry(weekday=1, session=None))

        result = validator.validate(valid_student)

        assert not result.is_valid
        assert any("schedules[2].session" in e for e in result.errors)

    def test_duplicate_slot_warns(self, validator, valid_student):
        """Test duplicate slots are allowed with a warning."""
        valid_student.schedules.append(
            ScheduleEntry(weekday=0, session=SessionType.AFTERNOON, id="sch_3")
        )

        result = validator.validate(valid_student)

        assert result.is_valid
        assert any("Duplicate" in w for w in result.warnings)


class TestStudyRecordValidator:
    """Test cases for StudyRecordValidator."""

    @pytest.fixture
    def validator(self):
        """Create validator instance."""
        return StudyRecordValidator()

    def test_valid_record(self, validator, record_factory):
        """Test validation of valid record."""
        result = validator.validate(record_factory(test_score=8.75))

        assert result.is_valid
        assert not result.has_warnings

    @pytest.mark.parametrize("date", ["2024/01/08", "2024-02-30", "", None])
    def test_invalid_date(self, validator, record_factory, date):
        """Test invalid date format or nonexistent date."""
        result = validator.validate(record_factory(date=date))

        assert not result.is_valid
        assert any("date" in e for e in result.errors)

    def test_weekday_mismatch_warns(self, validator, record_factory):
        """Test a weekday not matching the date is a warning."""
        result = validator.validate(record_factory(date="2024-01-08", weekday=2))

        assert result.is_valid
        assert any("weekday" in w for w in result.warnings)

    def test_unknown_labels(self, validator, record_factory):
        """Test unknown status, session and label values."""
        record = record_factory(status=None, session=None, formula_test=None)

        result = validator.validate(record)

        assert not result.is_valid
        assert len(result.errors) == 3

    @pytest.mark.parametrize("score", [0, 11, 7.5, "8"])
    def test_invalid_eval_score(self, validator, record_factory, score):
        """Test evaluation scores must be whole numbers from 1 to 10."""
        result = validator.validate(record_factory(eval_quantity=score))

        assert not result.is_valid
        assert any("eval_quantity" in e for e in result.errors)

    @pytest.mark.parametrize("score", [-0.25, 10.5, 8.1])
    def test_invalid_test_score(self, validator, record_factory, score):
        """Test test scores must be 0-10 in quarter steps."""
        result = validator.validate(record_factory(test_score=score))

        assert not result.is_valid
        assert any("test_score" in e for e in result.errors)

    @pytest.mark.parametrize("score", [0, 10, 6.25, 9.5])
    def test_valid_test_score(self, validator, record_factory, score):
        """Test boundary and quarter-step test scores."""
        assert validator.validate(record_factory(test_score=score)).is_valid

    def test_absent_with_evaluations_warns(self, validator, record_factory):
        """Test absent records carrying evaluations warn."""
        record = record_factory(status=AttendanceStatus.ABSENT)

        result = validator.validate(record)

        assert result.is_valid
        assert any("Absent" in w for w in result.warnings)

    def test_normalized_absent_is_clean(self, validator):
        """Test a normalized absent record has no warnings."""
        record = StudyRecord(
            date="2024-01-08",
            status=AttendanceStatus.ABSENT,
            absent_reason="Ốm",
        ).normalized()

        result = validator.validate(record)

        assert result.is_valid
        assert not result.has_warnings


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

"""
Study record validator.

Validates a session record before it is stored: date, labels and the
range of every score.
"""

from .validators import Validator, ValidationResult
from ..models.record import NOT_APPLICABLE, StudyRecord, parse_iso_date


class StudyRecordValidator(Validator):
    """
    Validator for study records.

    Validates:
    - Date format and existence
    - Status, session and evaluation labels
    - Mid-session scores (integers 1-10)
    - Periodic test score (0-10 in quarter-point steps)

    Examples:
        >>> validator = StudyRecordValidator()
        >>> record = StudyRecord(date="2024-01-08", eval_new_knowledge=8)
        >>> result = validator.validate(record)
        >>> if result.is_valid:
        ...     print("Record is valid")
    """

    # Business rule constraints
    MIN_EVAL_SCORE = 1
    MAX_EVAL_SCORE = 10
    MIN_TEST_SCORE = 0
    MAX_TEST_SCORE = 10
    TEST_SCORE_STEP = 0.25

    LABEL_FIELDS = [
        "homework",
        "formula_test",
        "old_lesson_test",
        "regular_homework_result",
        "assigned_homework",
        "has_regular_homework",
    ]

    def validate(self, data: StudyRecord) -> ValidationResult:
        """
        Validate a study record.

        Args:
            data: Record to validate

        Returns:
            ValidationResult with errors and warnings
        """
        result = ValidationResult(is_valid=True)

        # Validate date format
        error = self.validate_date_format(data.date, "date")
        if error:
            result.add_error(error)
        else:
            weekday = parse_iso_date(data.date).weekday()
            if data.weekday is not None and data.weekday != weekday:
                result.add_warning(
                    f"weekday {data.weekday} does not match date {data.date} "
                    f"(expected {weekday})"
                )

        if data.status is None:
            result.add_error("status is unknown (must be attended, absent or makeup)")

        if data.session is None:
            result.add_error("session is unknown (must be Morning, Afternoon or Evening)")

        for name in self.LABEL_FIELDS:
            if getattr(data, name) is None:
                result.add_error(f"{name} has an unknown value")

        for name in ("eval_new_knowledge", "eval_quantity"):
            self._validate_eval_score(getattr(data, name), name, result)

        if data.test_score is not None:
            error = self.validate_number_range(
                data.test_score,
                "test_score",
                self.MIN_TEST_SCORE,
                self.MAX_TEST_SCORE
            )
            if error:
                result.add_error(error)
            elif (float(data.test_score) / self.TEST_SCORE_STEP) % 1 != 0:
                result.add_error(
                    f"test_score must be a multiple of {self.TEST_SCORE_STEP}, "
                    f"got {data.test_score}"
                )

        if data.is_absent and self._has_evaluations(data):
            result.add_warning(
                "Absent record carries evaluations; they are cleared on save"
            )

        return result

    def _has_evaluations(self, data: StudyRecord) -> bool:
        labels = [getattr(data, name) for name in self.LABEL_FIELDS]
        if any(label not in (None, NOT_APPLICABLE) for label in labels):
            return True
        scores = [data.eval_new_knowledge, data.eval_quantity, data.test_score]
        return any(score is not None for score in scores)

    def _validate_eval_score(self, value, field_name: str, result: ValidationResult) -> None:
        if value is None:
            return

        error = self.validate_number_range(
            value,
            field_name,
            self.MIN_EVAL_SCORE,
            self.MAX_EVAL_SCORE
        )
        if error:
            result.add_error(error)
        elif value != int(value):
            result.add_error(f"{field_name} must be a whole number, got {value}")

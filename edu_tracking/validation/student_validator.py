"""
Student profile validator.

Validates the profile fields and the weekly schedule of a student.
"""

from .validators import Validator, ValidationResult
from ..models.record import ScheduleEntry, Student


class StudentValidator(Validator):
    """
    Validator for student profiles.

    Validates:
    - Name and class name
    - Base salary (non-negative)
    - Schedule entries (weekday range, known session)

    Duplicate weekday+session entries are reported as a warning only:
    they are billed as two sessions on the same slot.

    Examples:
        >>> validator = StudentValidator()
        >>> student = Student(id="std_1", full_name="Nguyễn Văn An", base_salary=140000)
        >>> validator.validate(student).is_valid
        True
    """

    MAX_NAME_LENGTH = 200

    def validate(self, data: Student) -> ValidationResult:
        """
        Validate a student profile.

        Args:
            data: Student to validate

        Returns:
            ValidationResult with errors and warnings
        """
        result = ValidationResult(is_valid=True)

        error = self.validate_string_length(
            data.full_name,
            "full_name",
            min_length=1,
            max_length=self.MAX_NAME_LENGTH
        )
        if error:
            result.add_error(error)

        error = self.validate_string_length(data.class_name, "class_name", max_length=100)
        if error:
            result.add_error(error)

        error = self.validate_non_negative_number(data.base_salary, "base_salary")
        if error:
            result.add_error(error)
        elif data.base_salary == 0:
            result.add_warning("base_salary is 0: sessions will not be paid")

        seen = set()
        for index, entry in enumerate(data.schedules):
            self._validate_schedule_entry(entry, index, result)

            slot = (entry.weekday, entry.session)
            if slot in seen:
                result.add_warning(
                    f"Duplicate schedule slot: weekday {entry.weekday}, "
                    f"{entry.session.value if entry.session else None} (counted twice)"
                )
            seen.add(slot)

        return result

    def _validate_schedule_entry(
        self,
        entry: ScheduleEntry,
        index: int,
        result: ValidationResult
    ) -> None:
        weekday = entry.weekday
        if isinstance(weekday, bool) or not isinstance(weekday, int) or not 0 <= weekday <= 6:
            result.add_error(
                f"schedules[{index}].weekday must be 0 (Monday) to 6 (Sunday), got {weekday}"
            )

        if entry.session is None:
            result.add_error(f"schedules[{index}].session is unknown")

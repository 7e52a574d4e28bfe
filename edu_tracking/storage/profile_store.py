"""
Student profile store.

This module persists student profiles, their weekly schedules and their
session histories in a single JSON data file. Every mutating operation
validates its input, writes the file and reports the outcome as a
Result; a failed write leaves the in-memory state unchanged.
"""

import copy
import logging
import uuid
from pathlib import Path
from typing import Any, Iterable, List, Optional

from ..models.record import ScheduleEntry, Student, StudyRecord
from ..models.result import Result
from ..models.schema_version import CURRENT_VERSION, VersionedData
from ..utils.file_utils import load_json, save_json
from ..validation.record_validator import StudyRecordValidator
from ..validation.student_validator import StudentValidator


logger = logging.getLogger(__name__)


def generate_id(prefix: str) -> str:
    """
    Generate a unique identifier.

    Examples:
        >>> generate_id("std")
        'std_3f9a1c2b7d4e'
    """
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


def _coerce_schedule(entries: Optional[Iterable[Any]]) -> List[ScheduleEntry]:
    schedules = []
    for entry in entries or []:
        if isinstance(entry, dict):
            entry = ScheduleEntry.from_dict(entry)
        elif isinstance(entry, ScheduleEntry):
            entry = copy.copy(entry)
        else:
            continue
        if not entry.id:
            entry.id = generate_id("sch")
        schedules.append(entry)
    return schedules


class ProfileStore:
    """
    JSON-file backed store of student profiles.

    Examples:
        >>> store = ProfileStore(Path("data/edu_tracking_data.json"))
        >>> store.load()
        >>> result = store.add_student("Nguyễn Văn An", "Lớp 5", 140000, [])
        >>> if result.is_success:
        ...     student = result.value
    """

    def __init__(
        self,
        data_file: Path,
        default_class_name: str = "Lớp 1",
        default_base_salary: float = 0
    ):
        """
        Initialize ProfileStore.

        Args:
            data_file: Path of the JSON data file
            default_class_name: Class name used when none is given
            default_base_salary: Salary used when none is given
        """
        self.data_file = Path(data_file)
        self.default_class_name = default_class_name
        self.default_base_salary = default_base_salary
        self._students: List[Student] = []
        self._student_validator = StudentValidator()
        self._record_validator = StudyRecordValidator()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def load(self) -> List[Student]:
        """
        Load students from the data file.

        A missing or unreadable file loads as an empty store.

        Returns:
            Loaded students
        """
        self._students = []

        if not self.data_file.exists():
            logger.info(f"No data file at {self.data_file}, starting empty")
            return self.list_students()

        raw = load_json(self.data_file)
        if raw is None:
            logger.error(f"Could not read {self.data_file}, starting empty")
            return self.list_students()

        try:
            versioned = VersionedData.from_raw(raw)
        except ValueError as e:
            logger.error(f"Invalid data file {self.data_file}: {e}")
            return self.list_students()

        self._students = [Student.from_dict(d) for d in versioned.students]
        logger.info(
            f"Loaded {len(self._students)} students "
            f"(schema {versioned.schema_version}) from {self.data_file}"
        )
        return self.list_students()

    def save(self) -> bool:
        """
        Write all students to the data file.

        Returns:
            True if save successful, False otherwise
        """
        versioned = VersionedData(
            schema_version=CURRENT_VERSION.value,
            data={"students": [s.to_dict() for s in self._students]}
        )
        return save_json(versioned.to_dict(), self.data_file)

    def _commit(self, snapshot: List[Student], value: Any, message: str) -> Result:
        if self.save():
            logger.info(message)
            return Result.success(value, message)

        self._students = snapshot
        return Result.failure(f"Failed to save data file {self.data_file}")

    # ------------------------------------------------------------------
    # Students
    # ------------------------------------------------------------------

    def list_students(self) -> List[Student]:
        """Get all students (the list is a copy, the profiles are not)."""
        return list(self._students)

    def get_student(self, student_id: str) -> Optional[Student]:
        """Find a student by id."""
        for student in self._students:
            if student.id == student_id:
                return student
        return None

    def add_student(
        self,
        full_name: str,
        class_name: Optional[str] = None,
        base_salary: Optional[float] = None,
        schedules: Optional[Iterable[Any]] = None
    ) -> Result[Student]:
        """
        Create a student profile.

        Args:
            full_name: Full name (trimmed, must not be blank)
            class_name: Class name (defaults to the configured class)
            base_salary: Per-session salary (defaults to the configured salary)
            schedules: Weekly schedule entries (ScheduleEntry or dict)

        Returns:
            Result with the created Student
        """
        student = Student(
            id=generate_id("std"),
            full_name=(full_name or "").strip(),
            class_name=class_name or self.default_class_name,
            base_salary=self.default_base_salary if base_salary is None else base_salary,
            schedules=_coerce_schedule(schedules),
            history=[],
        )

        validation = self._student_validator.validate(student)
        if not validation.is_valid:
            return Result.failure("Invalid student profile", details=validation.errors)

        snapshot = copy.deepcopy(self._students)
        self._students.append(student)
        return self._commit(snapshot, student, f"Added student {student.id}")

    def update_student(
        self,
        student_id: str,
        full_name: str,
        class_name: str,
        base_salary: float,
        schedules: Optional[Iterable[Any]] = None
    ) -> Result[Student]:
        """
        Replace the profile fields and schedule of a student.

        The session history is kept as is.

        Returns:
            Result with the updated Student
        """
        current = self.get_student(student_id)
        if current is None:
            return Result.failure(f"Student not found: {student_id}")

        updated = Student(
            id=current.id,
            full_name=(full_name or "").strip(),
            class_name=class_name,
            base_salary=base_salary,
            schedules=_coerce_schedule(schedules),
            history=current.history,
        )

        validation = self._student_validator.validate(updated)
        if not validation.is_valid:
            return Result.failure("Invalid student profile", details=validation.errors)

        snapshot = copy.deepcopy(self._students)
        self._students = [updated if s.id == student_id else s for s in self._students]
        return self._commit(snapshot, updated, f"Updated student {student_id}")

    def delete_student(self, student_id: str) -> Result[str]:
        """
        Delete a student together with its schedule and history.

        Returns:
            Result with the deleted student id
        """
        if self.get_student(student_id) is None:
            return Result.failure(f"Student not found: {student_id}")

        snapshot = copy.deepcopy(self._students)
        self._students = [s for s in self._students if s.id != student_id]
        return self._commit(snapshot, student_id, f"Deleted student {student_id}")

    # ------------------------------------------------------------------
    # Session records
    # ------------------------------------------------------------------

    def save_record(self, student_id: str, record: StudyRecord) -> Result[StudyRecord]:
        """
        Add or replace a session record of a student.

        The record is normalized first (absent sessions carry no
        evaluations). A record without id, or with an id not present in
        the history, is added with a new id; otherwise it replaces the
        record with the same id.

        Args:
            student_id: Owner of the record
            record: Record to store

        Returns:
            Result with the stored record
        """
        student = self.get_student(student_id)
        if student is None:
            return Result.failure(f"Student not found: {student_id}")

        stored = record.normalized()
        validation = self._record_validator.validate(stored)
        if not validation.is_valid:
            return Result.failure("Invalid study record", details=validation.errors)

        for warning in validation.warnings:
            logger.warning(f"Record {stored.date}: {warning}")

        snapshot = copy.deepcopy(self._students)

        if stored.id and student.find_record(stored.id) is not None:
            student.history = [stored if r.id == stored.id else r for r in student.history]
            message = f"Updated record {stored.id} of {student_id}"
        else:
            stored.id = generate_id("rec")
            student.history = student.history + [stored]
            message = f"Added record {stored.id} to {student_id}"

        return self._commit(snapshot, stored, message)

    def delete_record(self, student_id: str, record_id: str) -> Result[str]:
        """
        Delete a session record.

        Returns:
            Result with the deleted record id
        """
        student = self.get_student(student_id)
        if student is None:
            return Result.failure(f"Student not found: {student_id}")

        if student.find_record(record_id) is None:
            return Result.failure(f"Record not found: {record_id}")

        snapshot = copy.deepcopy(self._students)
        student.history = [r for r in student.history if r.id != record_id]
        return self._commit(snapshot, record_id, f"Deleted record {record_id} of {student_id}")

"""
Unit tests for the JSON profile store.
"""

import json
import pytest

from edu_tracking.models.record import (
    AttendanceStatus,
    HomeworkStatus,
    ScheduleEntry,
    SessionType,
    StudyRecord,
    YesNoResult,
)
from edu_tracking.storage.profile_store import ProfileStore, generate_id


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "data" / "edu_tracking_data.json"


@pytest.fixture
def store(data_file):
    """Empty store writing to a temporary file."""
    store = ProfileStore(data_file, default_class_name="Lớp 1", default_base_salary=140000)
    store.load()
    return store


@pytest.fixture
def student(store):
    """Stored student with one Monday slot."""
    return store.add_student(
        "Nguyễn Văn An",
        "Lớp 5",
        140000,
        [{"weekday": 0, "session": "Afternoon"}],
    ).unwrap()


class TestGenerateId:
    """Test cases for generate_id."""

    def test_prefix_and_uniqueness(self):
        """Test ids carry the prefix and do not repeat."""
        ids = {generate_id("std") for _ in range(100)}

        assert len(ids) == 100
        assert all(i.startswith("std_") for i in ids)


class TestLoad:
    """Test cases for loading the data file."""

    def test_missing_file(self, store):
        """Test a missing file loads as empty."""
        assert store.list_students() == []

    def test_invalid_json(self, data_file):
        """Test unreadable content loads as empty."""
        data_file.parent.mkdir(parents=True)
        data_file.write_text("{not json", encoding="utf-8")

        assert ProfileStore(data_file).load() == []

    def test_unrecognized_layout(self, data_file):
        """Test a JSON scalar loads as empty."""
        data_file.parent.mkdir(parents=True)
        data_file.write_text("42", encoding="utf-8")

        assert ProfileStore(data_file).load() == []

    def test_legacy_list(self, data_file, legacy_student_dict):
        """Test a version 1.0 bare list loads."""
        data_file.parent.mkdir(parents=True)
        data_file.write_text(json.dumps([legacy_student_dict]), encoding="utf-8")

        students = ProfileStore(data_file).load()

        assert len(students) == 1
        assert students[0].full_name == "Nguyễn Văn An"
        assert students[0].history[0].homework == HomeworkStatus.SATISFACTORY

    def test_save_writes_envelope(self, store, student, data_file):
        """Test saved files are versioned with canonical labels."""
        raw = json.loads(data_file.read_text(encoding="utf-8"))

        assert raw["schema_version"] == "2.0"
        saved = raw["data"]["students"][0]
        assert saved["full_name"] == "Nguyễn Văn An"
        assert saved["schedules"][0]["session"] == "Afternoon"

    def test_reload(self, store, student, data_file):
        """Test a new store sees saved students."""
        reloaded = ProfileStore(data_file).load()

        assert reloaded == [student]


class TestStudents:
    """Test cases for student operations."""

    def test_add_student(self, store, student):
        """Test a student is created with ids."""
        assert student.id.startswith("std_")
        assert student.class_name == "Lớp 5"
        assert student.schedules[0].id.startswith("sch_")
        assert student.schedules[0].session == SessionType.AFTERNOON
        assert store.get_student(student.id) is student

    def test_add_student_defaults(self, store):
        """Test class name and salary defaults."""
        result = store.add_student("  Trần Thị Bình  ")

        assert result.is_success
        assert result.value.full_name == "Trần Thị Bình"
        assert result.value.class_name == "Lớp 1"
        assert result.value.base_salary == 140000

    def test_add_student_invalid(self, store):
        """Test an invalid profile is rejected and not stored."""
        result = store.add_student("   ", base_salary=-5)

        assert result.is_failure
        assert result.message == "Invalid student profile"
        assert len(result.details) == 2
        assert store.list_students() == []

    def test_update_student_keeps_history(self, store, student):
        """Test updates replace profile fields but keep history."""
        store.save_record(student.id, StudyRecord(date="2024-01-08"))

        result = store.update_student(
            student.id,
            "Nguyễn Văn An",
            "Lớp 6",
            150000,
            [ScheduleEntry(weekday=2, session=SessionType.EVENING)],
        )

        updated = result.unwrap()
        assert updated.class_name == "Lớp 6"
        assert updated.base_salary == 150000
        assert updated.schedules[0].weekday == 2
        assert len(updated.history) == 1
        assert store.get_student(student.id) is updated

    def test_update_unknown_student(self, store):
        """Test updating a missing student fails."""
        result = store.update_student("std_missing", "X", "Lớp 1", 0)

        assert result.is_failure
        assert result.message == "Student not found: std_missing"

    def test_delete_student(self, store, student, data_file):
        """Test deleting a student removes it from the file."""
        result = store.delete_student(student.id)

        assert result.value == student.id
        assert ProfileStore(data_file).load() == []

    def test_delete_unknown_student(self, store):
        """Test deleting a missing student fails."""
        assert store.delete_student("std_missing").is_failure


class TestRecords:
    """Test cases for session record operations."""

    def test_add_record(self, store, student):
        """Test a new record gets an id."""
        result = store.save_record(student.id, StudyRecord(date="2024-01-08", eval_quantity=7))

        record = result.unwrap()
        assert record.id.startswith("rec_")
        assert student.find_record(record.id) is record

    def test_replace_record(self, store, student):
        """Test saving a record with a known id replaces it."""
        record = store.save_record(student.id, StudyRecord(date="2024-01-08")).unwrap()
        record.assigned_homework = YesNoResult.NO

        store.save_record(student.id, record)

        assert len(student.history) == 1
        assert student.history[0].assigned_homework == YesNoResult.NO

    def test_absent_record_is_normalized(self, store, student):
        """Test absent records are stored without evaluations."""
        record = StudyRecord(
            date="2024-01-08",
            status=AttendanceStatus.ABSENT,
            absent_reason="Ốm",
            homework=HomeworkStatus.NOT_DONE,
            eval_new_knowledge=9,
        )

        stored = store.save_record(student.id, record).unwrap()

        assert stored.homework == HomeworkStatus.NOT_APPLICABLE
        assert stored.eval_new_knowledge is None
        assert stored.absent_reason == "Ốm"
        assert record.eval_new_knowledge == 9

    def test_invalid_record(self, store, student):
        """Test an invalid record is rejected."""
        result = store.save_record(student.id, StudyRecord(date="2024-02-30", eval_quantity=11))

        assert result.is_failure
        assert result.message == "Invalid study record"
        assert len(result.details) == 2
        assert student.history == []

    def test_record_for_unknown_student(self, store):
        """Test saving for a missing student fails."""
        result = store.save_record("std_missing", StudyRecord(date="2024-01-08"))

        assert result.message == "Student not found: std_missing"

    def test_delete_record(self, store, student):
        """Test deleting a record."""
        record = store.save_record(student.id, StudyRecord(date="2024-01-08")).unwrap()

        assert store.delete_record(student.id, record.id).is_success
        assert student.history == []
        assert store.delete_record(student.id, record.id).message == \
            f"Record not found: {record.id}"


class TestFailedSave:
    """Test cases for save failures."""

    def test_state_restored(self, store, student, monkeypatch):
        """Test a failed write leaves the store unchanged."""
        monkeypatch.setattr(store, "save", lambda: False)

        result = store.add_student("Lê Văn Cường")

        assert result.is_failure
        assert "Failed to save" in result.message
        assert [s.id for s in store.list_students()] == [student.id]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

from dataclasses import replace
from datetime import UTC, datetime, timedelta

import pytest
from fitsync.application.use_cases.records.manage_records import ManageRecordsUseCase
from fitsync.domain import Event, Exercise, InvariantViolation, Meal, User, normalize_email
from fitsync.shared.errors import RecordNotFoundError

NOW = datetime(2025, 5, 1, 9, 30, tzinfo=UTC)


def test_normalize_email_trims_and_lowercases() -> None:
    assert normalize_email("  Alice@Example.COM ") == "alice@example.com"


def test_user_summary_hides_password_hash() -> None:
    user = User(id=1, name="Al", email="al@x.io", password_hash="h", created_at=NOW)
    assert user.summary() == {"id": 1, "name": "Al", "email": "al@x.io"}


def test_exercise_defaults() -> None:
    exercise = Exercise(id=1, user_id=1, name="Squat", date=NOW)
    assert (exercise.sets, exercise.reps, exercise.completed) == (3, 10, False)
    assert exercise.duration is None


def test_records_require_names() -> None:
    with pytest.raises(InvariantViolation):
        Exercise(id=1, user_id=1, name="  ", date=NOW)
    with pytest.raises(InvariantViolation):
        Event(id=1, user_id=1, title="", start_time=NOW, date=NOW)


def test_meal_rejects_negative_macros() -> None:
    with pytest.raises(InvariantViolation) as excinfo:
        Meal(id=1, user_id=1, name="Oats", calories=300, date=NOW, protein=-1)
    assert excinfo.value.field == "protein"
    assert excinfo.value.status == 400


def test_event_end_must_not_precede_start() -> None:
    with pytest.raises(InvariantViolation) as excinfo:
        Event(
            id=1,
            user_id=1,
            title="Run",
            start_time=NOW,
            end_time=NOW - timedelta(minutes=1),
            date=NOW,
        )
    assert excinfo.value.to_dict()["context"] == {"fields": ["endTime"]}


class InMemoryRecords:
    def __init__(self) -> None:
        self.rows: dict[int, Exercise] = {}

    def list_for_user(self, user_id: int):
        return [r for r in self.rows.values() if r.user_id == user_id]

    def get(self, user_id: int, record_id: int):
        row = self.rows.get(record_id)
        return row if row and row.user_id == user_id else None

    def add(self, record):
        stored = replace(record, id=len(self.rows) + 1)
        self.rows[stored.id] = stored
        return stored

    def save(self, record):
        self.rows[record.id] = record
        return record

    def delete(self, user_id: int, record_id: int) -> bool:
        if self.get(user_id, record_id) is None:
            return False
        del self.rows[record_id]
        return True


def test_manage_records_scopes_by_owner() -> None:
    records = InMemoryRecords()
    use_case = ManageRecordsUseCase(kind="exercise", records=records, factory=Exercise)

    created = use_case.create(1, {"name": "Push-up", "date": NOW})
    assert use_case.list(1) == [created]
    assert use_case.list(2) == []

    with pytest.raises(RecordNotFoundError):
        use_case.update(2, created.id, {"reps": 20})
    with pytest.raises(RecordNotFoundError):
        use_case.delete(2, created.id)


def test_manage_records_update_keeps_identity_fields() -> None:
    records = InMemoryRecords()
    use_case = ManageRecordsUseCase(kind="exercise", records=records, factory=Exercise)
    created = use_case.create(1, {"name": "Push-up", "date": NOW})

    updated = use_case.update(1, created.id, {"reps": 20, "user_id": 2, "id": 99})
    assert updated.id == created.id
    assert updated.user_id == 1
    assert updated.reps == 20

    use_case.delete(1, created.id)
    assert use_case.list(1) == []

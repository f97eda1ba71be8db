from __future__ import annotations

from datetime import UTC, datetime, timedelta

from fitsync.domain import Event, Meal, User
from fitsync.interfaces.http.dto.records import EventDTO, EventUpdateDTO, MealDTO
from fitsync.interfaces.http.dto.users import ProfileDTO

NOW = datetime(2025, 5, 1, 9, 30, tzinfo=UTC)


def test_profile_reads_snake_case_user_attributes() -> None:
    user = User(id=7, name="Alice", email="alice@example.com", password_hash="h", created_at=NOW)

    body = ProfileDTO.model_validate(user).model_dump(mode="json", by_alias=True)

    assert body == {
        "id": 7,
        "name": "Alice",
        "email": "alice@example.com",
        "createdAt": "2025-05-01T09:30:00Z",
    }


def test_event_output_renders_camel_case_times() -> None:
    event = Event(
        id=3,
        user_id=1,
        title="Long run",
        start_time=NOW,
        end_time=NOW + timedelta(hours=1),
        date=NOW,
    )

    body = EventDTO.model_validate(event).model_dump(mode="json", by_alias=True)

    assert body["startTime"] == "2025-05-01T09:30:00Z"
    assert body["endTime"] == "2025-05-01T10:30:00Z"
    assert "user_id" not in body and "userId" not in body


def test_meal_output_keeps_missing_macros_as_null() -> None:
    meal = Meal(id=1, user_id=1, name="Oats", calories=350, date=NOW)

    body = MealDTO.model_validate(meal).model_dump(mode="json", by_alias=True)

    assert body["protein"] is None
    assert body["calories"] == 350


def test_event_update_clears_only_nullable_fields() -> None:
    dto = EventUpdateDTO.model_validate({"endTime": None, "title": None})

    assert dto.to_values() == {"end_time": None}

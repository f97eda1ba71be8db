# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Wire shapes for exercises, meals and events.

Incoming payloads use camelCase keys; ``to_values`` hands the use cases
snake_case keyword arguments matching the domain dataclasses.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated, Any, ClassVar

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StrictBool, StrictStr
from pydantic.alias_generators import to_camel


def _as_utc(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _now() -> datetime:
    return datetime.now(UTC)


UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]
Count = Annotated[int, Field(ge=0, strict=True)]
Amount = Annotated[float, Field(ge=0)]


class _RecordInput(BaseModel):
    # fields that may be cleared with an explicit null
    nullable: ClassVar[frozenset[str]] = frozenset()

    model_config = ConfigDict(alias_generator=to_camel, validate_by_name=True, extra="ignore")

    def to_values(self) -> dict[str, Any]:
        values = self.model_dump(exclude_unset=True)
        return {k: v for k, v in values.items() if v is not None or k in self.nullable}


class ExerciseCreateDTO(_RecordInput):
    name: StrictStr = Field(min_length=1, max_length=128)
    sets: Count = 3
    reps: Count = 10
    duration: Count | None = None
    completed: StrictBool = False
    date: UtcDatetime = Field(default_factory=_now)

    def to_values(self) -> dict[str, Any]:
        return self.model_dump()


class ExerciseUpdateDTO(_RecordInput):
    nullable = frozenset({"duration"})

    name: StrictStr | None = Field(None, min_length=1, max_length=128)
    sets: Count | None = None
    reps: Count | None = None
    duration: Count | None = None
    completed: StrictBool | None = None
    date: UtcDatetime | None = None


class MealCreateDTO(_RecordInput):
    name: StrictStr = Field(min_length=1, max_length=128)
    calories: Count
    protein: Amount | None = None
    carbs: Amount | None = None
    fat: Amount | None = None
    date: UtcDatetime = Field(default_factory=_now)

    def to_values(self) -> dict[str, Any]:
        return self.model_dump()


class MealUpdateDTO(_RecordInput):
    nullable = frozenset({"protein", "carbs", "fat"})

    name: StrictStr | None = Field(None, min_length=1, max_length=128)
    calories: Count | None = None
    protein: Amount | None = None
    carbs: Amount | None = None
    fat: Amount | None = None
    date: UtcDatetime | None = None


class EventCreateDTO(_RecordInput):
    title: StrictStr = Field(min_length=1, max_length=256)
    description: StrictStr | None = None
    start_time: UtcDatetime
    end_time: UtcDatetime | None = None
    date: UtcDatetime | None = None

    def to_values(self) -> dict[str, Any]:
        values = self.model_dump()
        # calendar day defaults to the start of the event
        if values["date"] is None:
            values["date"] = values["start_time"]
        return values


class EventUpdateDTO(_RecordInput):
    nullable = frozenset({"description", "end_time"})

    title: StrictStr | None = Field(None, min_length=1, max_length=256)
    description: StrictStr | None = None
    start_time: UtcDatetime | None = None
    end_time: UtcDatetime | None = None
    date: UtcDatetime | None = None


class _RecordOutput(BaseModel):
    model_config = ConfigDict(
        from_attributes=True, alias_generator=to_camel, validate_by_name=True
    )


class ExerciseDTO(_RecordOutput):
    id: int
    name: str
    sets: int
    reps: int
    duration: int | None
    completed: bool
    date: datetime


class MealDTO(_RecordOutput):
    id: int
    name: str
    calories: int
    protein: float | None
    carbs: float | None
    fat: float | None
    date: datetime


class EventDTO(_RecordOutput):
    id: int
    title: str
    description: str | None
    start_time: datetime
    end_time: datetime | None
    date: datetime


__all__ = [
    "EventCreateDTO",
    "EventDTO",
    "EventUpdateDTO",
    "ExerciseCreateDTO",
    "ExerciseDTO",
    "ExerciseUpdateDTO",
    "MealCreateDTO",
    "MealDTO",
    "MealUpdateDTO",
]

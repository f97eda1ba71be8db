# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Tracked records a user owns: exercises, meals and calendar events."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar

from fitsync.domain.exceptions import InvariantViolation


def _require_text(value: str, field_name: str) -> None:
    if not value or not value.strip():
        raise InvariantViolation(f"{field_name} is required", field=field_name)


def _non_negative(value: float | None, field_name: str) -> None:
    if value is not None and value < 0:
        raise InvariantViolation(f"{field_name} must be >= 0", field=field_name)


@dataclass(slots=True, frozen=True)
class Exercise:
    kind: ClassVar[str] = "exercise"

    id: int
    user_id: int
    name: str
    date: datetime
    sets: int = 3
    reps: int = 10
    duration: int | None = None
    completed: bool = False

    def __post_init__(self) -> None:
        _require_text(self.name, "name")
        _non_negative(self.sets, "sets")
        _non_negative(self.reps, "reps")
        _non_negative(self.duration, "duration")


@dataclass(slots=True, frozen=True)
class Meal:
    kind: ClassVar[str] = "meal"

    id: int
    user_id: int
    name: str
    calories: int
    date: datetime
    protein: float | None = None
    carbs: float | None = None
    fat: float | None = None

    def __post_init__(self) -> None:
        _require_text(self.name, "name")
        for fld in ("calories", "protein", "carbs", "fat"):
            _non_negative(getattr(self, fld), fld)


@dataclass(slots=True, frozen=True)
class Event:
    kind: ClassVar[str] = "event"

    id: int
    user_id: int
    title: str
    start_time: datetime
    date: datetime
    description: str | None = None
    end_time: datetime | None = None

    def __post_init__(self) -> None:
        _require_text(self.title, "title")
        if self.end_time is not None and self.end_time < self.start_time:
            raise InvariantViolation("end time must not precede start time", field="endTime")

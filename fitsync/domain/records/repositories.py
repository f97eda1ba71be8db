# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, TypeVar

from .entities import Event, Exercise, Meal

RecordT = TypeVar("RecordT", Exercise, Meal, Event)


class RecordRepository(Protocol[RecordT]):
    """Storage for records scoped to their owner; foreign ids behave as missing."""

    def list_for_user(self, user_id: int) -> Sequence[RecordT]: ...
    def get(self, user_id: int, record_id: int) -> RecordT | None: ...
    def add(self, record: RecordT) -> RecordT: ...
    def save(self, record: RecordT) -> RecordT: ...
    def delete(self, user_id: int, record_id: int) -> bool: ...

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import fields
from datetime import UTC, datetime
from typing import Any

from sqlalchemy.orm import Session

from fitsync.domain.records.entities import Event, Exercise, Meal
from fitsync.domain.records.repositories import RecordRepository, RecordT
from fitsync.infrastructure.db import models
from fitsync.infrastructure.unit_of_work import unit_of_work_scope


def _aware(value: Any) -> Any:
    if isinstance(value, datetime) and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class SqlAlchemyRecordRepository(RecordRepository[RecordT]):
    """Maps a record dataclass onto the ORM model whose columns share its field names."""

    def __init__(
        self,
        session_factory: Callable[[], Session],
        *,
        entity: type[RecordT],
        model: type[models.Base],
    ) -> None:
        self._session_factory = session_factory
        self._entity = entity
        self._model = model
        self._field_names = [f.name for f in fields(entity)]

    def list_for_user(self, user_id: int) -> Sequence[RecordT]:
        with unit_of_work_scope(self._session_factory, read_only=True) as session:
            rows = (
                session.query(self._model)
                .filter(self._model.user_id == user_id)
                .order_by(self._model.date.asc(), self._model.id.asc())
                .all()
            )
            return [self._to_domain(row) for row in rows]

    def get(self, user_id: int, record_id: int) -> RecordT | None:
        with unit_of_work_scope(self._session_factory, read_only=True) as session:
            row = self._owned(session, user_id, record_id)
            return self._to_domain(row) if row else None

    def add(self, record: RecordT) -> RecordT:
        with unit_of_work_scope(self._session_factory) as session:
            row = self._model(**self._columns(record))
            session.add(row)
            session.flush()
            session.refresh(row)
            return self._to_domain(row)

    def save(self, record: RecordT) -> RecordT:
        with unit_of_work_scope(self._session_factory) as session:
            row = self._owned(session, record.user_id, record.id)
            if row is None:
                raise LookupError(f"{self._entity.kind} {record.id} vanished during update")
            for name, value in self._columns(record).items():
                setattr(row, name, value)
            session.flush()
            return self._to_domain(row)

    def delete(self, user_id: int, record_id: int) -> bool:
        with unit_of_work_scope(self._session_factory) as session:
            row = self._owned(session, user_id, record_id)
            if row is None:
                return False
            session.delete(row)
            return True

    def _owned(self, session: Session, user_id: int, record_id: int):
        return (
            session.query(self._model)
            .filter(self._model.id == record_id, self._model.user_id == user_id)
            .first()
        )

    def _columns(self, record: RecordT) -> dict[str, Any]:
        return {name: getattr(record, name) for name in self._field_names if name != "id"}

    def _to_domain(self, row: Any) -> RecordT:
        return self._entity(**{name: _aware(getattr(row, name)) for name in self._field_names})


def exercise_repository(session_factory: Callable[[], Session]) -> SqlAlchemyRecordRepository[Exercise]:
    return SqlAlchemyRecordRepository(session_factory, entity=Exercise, model=models.Exercise)


def meal_repository(session_factory: Callable[[], Session]) -> SqlAlchemyRecordRepository[Meal]:
    return SqlAlchemyRecordRepository(session_factory, entity=Meal, model=models.Meal)


def event_repository(session_factory: Callable[[], Session]) -> SqlAlchemyRecordRepository[Event]:
    return SqlAlchemyRecordRepository(session_factory, entity=Event, model=models.Event)

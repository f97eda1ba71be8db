# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import replace
from typing import Any, Generic

from fitsync.domain.records.repositories import RecordRepository, RecordT
from fitsync.shared.errors.base import RecordNotFoundError

_IMMUTABLE_FIELDS = frozenset({"id", "user_id"})


class ManageRecordsUseCase(Generic[RecordT]):
    """List/create/update/delete for one kind of user-owned record."""

    def __init__(
        self,
        *,
        kind: str,
        records: RecordRepository[RecordT],
        factory: Callable[..., RecordT],
    ) -> None:
        self.kind = kind
        self._records = records
        self._factory = factory

    def list(self, user_id: int) -> Sequence[RecordT]:
        return self._records.list_for_user(user_id)

    def create(self, user_id: int, values: Mapping[str, Any]) -> RecordT:
        record = self._factory(id=0, user_id=user_id, **values)
        return self._records.add(record)

    def update(self, user_id: int, record_id: int, changes: Mapping[str, Any]) -> RecordT:
        existing = self._records.get(user_id, record_id)
        if existing is None:
            raise RecordNotFoundError(self.kind, record_id)
        allowed = {key: value for key, value in changes.items() if key not in _IMMUTABLE_FIELDS}
        return self._records.save(replace(existing, **allowed))

    def delete(self, user_id: int, record_id: int) -> None:
        if not self._records.delete(user_id, record_id):
            raise RecordNotFoundError(self.kind, record_id)

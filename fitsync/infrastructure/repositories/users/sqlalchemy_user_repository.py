# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from fitsync.domain.users.entities import User as DomainUser
from fitsync.domain.users.entities import normalize_email
from fitsync.domain.users.exceptions import UserAlreadyExistsError
from fitsync.domain.users.repositories import UserRepository
from fitsync.infrastructure.db.models import User
from fitsync.infrastructure.unit_of_work import unit_of_work_scope
from fitsync.shared.logging import logger


def _aware(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=UTC)


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        name=row.name,
        email=row.email,
        password_hash=row.password_hash,
        created_at=_aware(row.created_at),
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def find_by_email(self, email: str) -> DomainUser | None:
        with unit_of_work_scope(self._session_factory, read_only=True) as session:
            row = session.query(User).filter(User.email == normalize_email(email)).first()
            return _to_domain(row) if row else None

    def find_by_id(self, user_id: int) -> DomainUser | None:
        with unit_of_work_scope(self._session_factory, read_only=True) as session:
            row = session.get(User, user_id)
            return _to_domain(row) if row else None

    def add(self, user: DomainUser) -> DomainUser:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = User(
                    name=user.name,
                    email=normalize_email(user.email),
                    password_hash=user.password_hash,
                    created_at=user.created_at,
                )
                session.add(row)
                session.flush()
                session.refresh(row)
                return _to_domain(row)
        except IntegrityError as exc:
            logger.info("users.add: unique index rejected duplicate email")
            raise UserAlreadyExistsError() from exc

    def update_name(self, user_id: int, name: str) -> DomainUser | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(User, user_id)
            if row is None:
                return None
            row.name = name
            session.flush()
            return _to_domain(row)

    def update_password_hash(self, user_id: int, password_hash: str) -> DomainUser | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(User, user_id)
            if row is None:
                return None
            row.password_hash = password_hash
            session.flush()
            return _to_domain(row)

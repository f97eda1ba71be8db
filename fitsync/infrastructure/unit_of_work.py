# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Transaction boundaries for the SQLAlchemy repositories."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager

from sqlalchemy.orm import Session

from fitsync.shared.logging import logger


@contextmanager
def unit_of_work_scope(
    factory: Callable[[], Session], *, read_only: bool = False
) -> Iterator[Session]:
    """Yield a session that commits on success and rolls back on any error.

    Read-only scopes never commit; whatever the caller touched is rolled back
    when the scope closes.
    """

    session = factory()
    try:
        yield session
        if read_only:
            session.rollback()
        else:
            session.commit()
    except Exception as exc:
        logger.debug(f"uow: rollback after {type(exc).__name__}")
        session.rollback()
        raise
    finally:
        session.close()


__all__ = ["unit_of_work_scope"]

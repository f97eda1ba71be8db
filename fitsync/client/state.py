# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class SessionStatus(str, Enum):
    ABSENT = "absent"
    # restored from storage, server not yet consulted
    UNVERIFIED = "unverified"
    VERIFIED = "verified"


@dataclass
class SessionState:
    """In-memory view of the signed-in user, owned by one SessionClient."""

    token: str | None = None
    user: dict[str, Any] | None = None
    status: SessionStatus = SessionStatus.ABSENT
    last_auth_time: float | None = None
    generation: int = field(default=0, compare=False)

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None and self.user is not None

    def establish(
        self,
        token: str,
        user: dict[str, Any],
        *,
        status: SessionStatus,
        auth_time: float | None,
    ) -> None:
        self.token = token
        self.user = dict(user)
        self.status = status
        self.last_auth_time = auth_time
        self.generation += 1

    def clear(self) -> None:
        self.token = None
        self.user = None
        self.status = SessionStatus.ABSENT
        self.last_auth_time = None
        self.generation += 1


__all__ = ["SessionState", "SessionStatus"]

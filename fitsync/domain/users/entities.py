# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


def normalize_email(email: str) -> str:
    return email.strip().lower()


@dataclass(slots=True, frozen=True)
class User:

    id: int
    name: str
    email: str
    password_hash: str
    created_at: datetime

    def summary(self) -> dict[str, object]:
        return {"id": self.id, "name": self.name, "email": self.email}


@dataclass(slots=True, frozen=True)
class TokenClaims:
    """Verified contents of a session token."""

    subject: int
    version: str
    issued_at: datetime
    expires_at: datetime


@dataclass(slots=True, frozen=True)
class IssuedToken:

    token: str
    expires_at: datetime

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .exceptions import DomainError, InvariantViolation
from .records.entities import Event, Exercise, Meal
from .users.entities import TokenClaims, User, normalize_email

__all__ = [
    "Event",
    "Exercise",
    "Meal",
    "TokenClaims",
    "User",
    "normalize_email",
    "DomainError",
    "InvariantViolation",
]

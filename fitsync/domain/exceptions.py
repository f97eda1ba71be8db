# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from fitsync.shared.errors.base import DomainError, ValidationError


class InvariantViolationError(ValidationError):
    def __init__(self, message: str, *, field: str | None = None):
        context = {"fields": [field]} if field else None
        super().__init__(context=context, message=message)
        self.field = field

    def __str__(self) -> str:
        if self.field:
            return f"{self.field}: {self.message}"
        return str(self.message)


InvariantViolation = InvariantViolationError

__all__ = ["DomainError", "InvariantViolation", "InvariantViolationError"]

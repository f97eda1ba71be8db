# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any, NoReturn

from pydantic import ValidationError as PydanticValidationError
from pydantic_core import ErrorDetails

from .base import ValidationError


def _field_path(error: ErrorDetails) -> str:
    return ".".join(str(part) for part in error.get("loc", ()) if part is not None)


def _describe(error: ErrorDetails) -> dict[str, Any]:
    entry: dict[str, Any] = {
        "field": _field_path(error) or "body",
        "type": error.get("type", "value_error"),
        "message": error.get("msg", ""),
    }
    ctx = error.get("ctx")
    if ctx:
        # ctx may hold the raised exception itself; keep it JSON-safe
        entry["ctx"] = {key: str(value) for key, value in ctx.items()}
    return entry


def format_pydantic_errors(exc: PydanticValidationError) -> dict[str, Any]:
    """Collapse pydantic errors into ``{"fields": [...], "errors": [...]}``."""

    errors = exc.errors(include_url=False, include_input=False)
    return {
        "fields": sorted({path for path in map(_field_path, errors) if path}),
        "errors": [_describe(error) for error in errors],
    }


def raise_validation_error(exc: PydanticValidationError) -> NoReturn:
    raise ValidationError(context=format_pydantic_errors(exc)) from exc


__all__ = [
    "format_pydantic_errors",
    "raise_validation_error",
]

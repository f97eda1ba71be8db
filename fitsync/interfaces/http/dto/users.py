# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator
from pydantic.alias_generators import to_camel

from .auth import MIN_PASSWORD_LENGTH


class ProfileDTO(BaseModel):
    id: int
    name: str
    email: str
    created_at: datetime

    model_config = ConfigDict(
        from_attributes=True, alias_generator=to_camel, validate_by_name=True
    )


class UpdateProfileRequestDTO(BaseModel):
    name: StrictStr = Field(min_length=1, max_length=128)

    model_config = ConfigDict(extra="ignore")

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Name cannot be empty")
        return value.strip()


class ChangePasswordRequestDTO(BaseModel):
    current_password: StrictStr = Field(min_length=1, max_length=128)
    new_password: StrictStr = Field(min_length=MIN_PASSWORD_LENGTH, max_length=128)

    model_config = ConfigDict(alias_generator=to_camel, validate_by_name=True, extra="ignore")

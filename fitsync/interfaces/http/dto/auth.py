# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator
from pydantic_core import PydanticCustomError

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 6


def _check_email(value: str) -> str:
    value = value.strip()
    if not EMAIL_PATTERN.match(value):
        raise PydanticCustomError(
            "email_invalid",
            "Email address is not valid",
            {"pattern": EMAIL_PATTERN.pattern},
        )
    return value


class RegisterRequestDTO(BaseModel):
    name: StrictStr = Field(min_length=1, max_length=128)
    email: StrictStr = Field(min_length=3, max_length=254)
    password: StrictStr = Field(max_length=128)

    model_config = ConfigDict(extra="ignore")

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        if not value.strip():
            raise PydanticCustomError("missing", "Name cannot be empty", {})
        return value.strip()

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return _check_email(value)

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, value: str) -> str:
        if len(value) < MIN_PASSWORD_LENGTH:
            raise PydanticCustomError(
                "password_too_short",
                "Password must be at least {min_length} characters long",
                {"min_length": MIN_PASSWORD_LENGTH},
            )
        return value


class LoginRequestDTO(BaseModel):
    email: StrictStr = Field(min_length=1, max_length=254)
    password: StrictStr = Field(min_length=1, max_length=128)  # no strength check on login

    model_config = ConfigDict(extra="ignore")


class UserSummaryDTO(BaseModel):
    id: int
    name: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class AuthSuccessDTO(BaseModel):
    token: str
    user: UserSummaryDTO


class VerifyResponseDTO(BaseModel):
    valid: bool = True
    user: UserSummaryDTO


class OkDTO(BaseModel):
    ok: bool = True

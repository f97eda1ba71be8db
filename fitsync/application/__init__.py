# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .use_cases.records.manage_records import ManageRecordsUseCase
from .use_cases.users.authenticate_request import AuthenticateRequestUseCase
from .use_cases.users.login_user import LoginUserUseCase
from .use_cases.users.logout_user import LogoutUserUseCase
from .use_cases.users.manage_profile import ChangePasswordUseCase, UpdateProfileUseCase
from .use_cases.users.register_user import RegisterUserUseCase

__all__ = [
    "AuthenticateRequestUseCase",
    "ChangePasswordUseCase",
    "LoginUserUseCase",
    "LogoutUserUseCase",
    "ManageRecordsUseCase",
    "RegisterUserUseCase",
    "UpdateProfileUseCase",
]

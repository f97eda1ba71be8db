# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import timedelta
from functools import cached_property

from fitsync.application.services.password_hashing import WerkzeugPasswordHasher
from fitsync.application.services.token_service import JwtTokenService
from fitsync.application.use_cases.records.manage_records import ManageRecordsUseCase
from fitsync.application.use_cases.users.authenticate_request import AuthenticateRequestUseCase
from fitsync.application.use_cases.users.login_user import LoginUserUseCase
from fitsync.application.use_cases.users.logout_user import LogoutUserUseCase
from fitsync.application.use_cases.users.manage_profile import (
    ChangePasswordUseCase,
    UpdateProfileUseCase,
)
from fitsync.application.use_cases.users.register_user import RegisterUserUseCase
from fitsync.domain.records.entities import Event, Exercise, Meal
from fitsync.infrastructure.auth.login_attempts import LoginAttemptsTracker
from fitsync.infrastructure.db import SessionLocal
from fitsync.infrastructure.repositories.records.sqlalchemy_record_repository import (
    SqlAlchemyRecordRepository,
    event_repository,
    exercise_repository,
    meal_repository,
)
from fitsync.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)
from fitsync.interfaces.http.auth_guard import RequireAuth
from fitsync.interfaces.http.controllers.auth_controller import AuthController
from fitsync.interfaces.http.controllers.records_controller import RecordsController
from fitsync.interfaces.http.controllers.users_controller import UsersController
from fitsync.interfaces.http.dto import records as record_dto
from fitsync.shared.config import AppConfig, load_config


class Container:
    def __init__(self, config: AppConfig | None = None) -> None:
        self.config = config or load_config()

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher()

    @cached_property
    def token_service(self) -> JwtTokenService:
        security = self.config.security
        return JwtTokenService(
            secret=self.config.secret_key,
            ttl=timedelta(days=security.token_ttl_days),
            fingerprint_length=security.token_fingerprint_length,
        )

    @cached_property
    def login_attempts(self) -> LoginAttemptsTracker:
        security = self.config.security
        return LoginAttemptsTracker(
            max_failures=security.login_max_failures,
            window_seconds=security.login_window_seconds,
        )

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(SessionLocal)

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            tokens=self.token_service,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            tokens=self.token_service,
            password_hasher=self.password_hasher,
            attempts=self.login_attempts,
        )

    @cached_property
    def logout_user_use_case(self) -> LogoutUserUseCase:
        return LogoutUserUseCase()

    @cached_property
    def authenticate_request_use_case(self) -> AuthenticateRequestUseCase:
        return AuthenticateRequestUseCase(users=self.user_repository, tokens=self.token_service)

    @cached_property
    def require_auth(self) -> RequireAuth:
        return RequireAuth(self.authenticate_request_use_case)

    @cached_property
    def update_profile_use_case(self) -> UpdateProfileUseCase:
        return UpdateProfileUseCase(users=self.user_repository)

    @cached_property
    def change_password_use_case(self) -> ChangePasswordUseCase:
        return ChangePasswordUseCase(
            users=self.user_repository,
            tokens=self.token_service,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            logout_use_case=self.logout_user_use_case,
            require_auth=self.require_auth,
        )

    @cached_property
    def users_controller(self) -> UsersController:
        return UsersController(
            update_profile=self.update_profile_use_case,
            change_password=self.change_password_use_case,
            require_auth=self.require_auth,
        )

    # Records

    @cached_property
    def exercise_repository(self) -> SqlAlchemyRecordRepository[Exercise]:
        return exercise_repository(SessionLocal)

    @cached_property
    def meal_repository(self) -> SqlAlchemyRecordRepository[Meal]:
        return meal_repository(SessionLocal)

    @cached_property
    def event_repository(self) -> SqlAlchemyRecordRepository[Event]:
        return event_repository(SessionLocal)

    @cached_property
    def exercises_use_case(self) -> ManageRecordsUseCase[Exercise]:
        return ManageRecordsUseCase(
            kind=Exercise.kind, records=self.exercise_repository, factory=Exercise
        )

    @cached_property
    def meals_use_case(self) -> ManageRecordsUseCase[Meal]:
        return ManageRecordsUseCase(kind=Meal.kind, records=self.meal_repository, factory=Meal)

    @cached_property
    def events_use_case(self) -> ManageRecordsUseCase[Event]:
        return ManageRecordsUseCase(kind=Event.kind, records=self.event_repository, factory=Event)

    @cached_property
    def record_controllers(self) -> list[RecordsController]:
        return [
            RecordsController(
                collection="exercises",
                use_case=self.exercises_use_case,
                create_dto=record_dto.ExerciseCreateDTO,
                update_dto=record_dto.ExerciseUpdateDTO,
                output_dto=record_dto.ExerciseDTO,
                require_auth=self.require_auth,
            ),
            RecordsController(
                collection="meals",
                use_case=self.meals_use_case,
                create_dto=record_dto.MealCreateDTO,
                update_dto=record_dto.MealUpdateDTO,
                output_dto=record_dto.MealDTO,
                require_auth=self.require_auth,
            ),
            RecordsController(
                collection="events",
                use_case=self.events_use_case,
                create_dto=record_dto.EventCreateDTO,
                update_dto=record_dto.EventUpdateDTO,
                output_dto=record_dto.EventDTO,
                require_auth=self.require_auth,
            ),
        ]


container = Container()

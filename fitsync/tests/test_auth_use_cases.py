from __future__ import annotations

from dataclasses import replace
from datetime import UTC, datetime, timedelta

import pytest

from fitsync.application.services.token_service import JwtTokenService
from fitsync.application.use_cases.users.authenticate_request import (
    AuthenticateRequestUseCase,
    extract_bearer_token,
)
from fitsync.application.use_cases.users.login_user import LoginUserUseCase
from fitsync.application.use_cases.users.manage_profile import (
    ChangePasswordUseCase,
    UpdateProfileUseCase,
)
from fitsync.application.use_cases.users.register_user import RegisterUserUseCase
from fitsync.domain.users.entities import User
from fitsync.domain.users.exceptions import (
    ExpiredTokenError,
    InvalidCredentialsError,
    InvalidTokenError,
    MissingTokenError,
    SessionSupersededError,
    TooManyAttemptsError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from fitsync.infrastructure.auth.login_attempts import LoginAttemptsTracker


class InMemoryUsers:
    def __init__(self) -> None:
        self.rows: dict[int, User] = {}
        self.lookups = 0

    def find_by_email(self, email: str) -> User | None:
        self.lookups += 1
        return next((u for u in self.rows.values() if u.email == email.strip().lower()), None)

    def find_by_id(self, user_id: int) -> User | None:
        return self.rows.get(user_id)

    def add(self, user: User) -> User:
        if any(u.email == user.email for u in self.rows.values()):
            raise UserAlreadyExistsError()
        stored = replace(user, id=len(self.rows) + 1)
        self.rows[stored.id] = stored
        return stored

    def update_name(self, user_id: int, name: str) -> User | None:
        if user_id not in self.rows:
            return None
        self.rows[user_id] = replace(self.rows[user_id], name=name)
        return self.rows[user_id]

    def update_password_hash(self, user_id: int, password_hash: str) -> User | None:
        if user_id not in self.rows:
            return None
        self.rows[user_id] = replace(self.rows[user_id], password_hash=password_hash)
        return self.rows[user_id]


class PlainHasher:
    """Reversible stand-in; hashing strength is not under test here."""

    def __init__(self) -> None:
        self.counter = 0

    def hash(self, password: str) -> str:
        self.counter += 1
        return f"plain${self.counter:04d}${password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed.split("$", 2)[2] == password


@pytest.fixture()
def users() -> InMemoryUsers:
    return InMemoryUsers()


@pytest.fixture()
def hasher() -> PlainHasher:
    return PlainHasher()


@pytest.fixture()
def tokens() -> JwtTokenService:
    return JwtTokenService(secret="unit-secret", fingerprint_length=10)


def _register(users, tokens, hasher, email="Alice@Example.com", password="secret1"):
    use_case = RegisterUserUseCase(users=users, tokens=tokens, password_hasher=hasher)
    return use_case.execute("Alice", email, password)


def test_register_normalizes_email_and_hashes_password(users, tokens, hasher) -> None:
    user, issued = _register(users, tokens, hasher)

    assert user.email == "alice@example.com"
    assert user.password_hash != "secret1"
    assert tokens.verify(issued.token).subject == user.id


def test_register_rejects_duplicate_email_case_insensitively(users, tokens, hasher) -> None:
    _register(users, tokens, hasher)
    with pytest.raises(UserAlreadyExistsError):
        _register(users, tokens, hasher, email="  ALICE@example.COM ")
    assert len(users.rows) == 1


def test_login_unknown_email_and_wrong_password_look_identical(users, tokens, hasher) -> None:
    _register(users, tokens, hasher)
    login = LoginUserUseCase(
        users=users, tokens=tokens, password_hasher=hasher, attempts=LoginAttemptsTracker()
    )

    with pytest.raises(InvalidCredentialsError) as unknown:
        login.execute("bob@example.com", "secret1", "1.1.1.1")
    with pytest.raises(InvalidCredentialsError) as wrong:
        login.execute("alice@example.com", "nope", "1.1.1.1")

    assert unknown.value.to_dict() == wrong.value.to_dict()


class RecordingHasher(PlainHasher):
    def __init__(self) -> None:
        super().__init__()
        self.verified: list[str] = []

    def verify(self, password: str, hashed: str) -> bool:
        self.verified.append(hashed)
        return super().verify(password, hashed)


def test_login_unknown_email_still_checks_a_hash(users, tokens) -> None:
    hasher = RecordingHasher()
    _register(users, tokens, hasher)
    login = LoginUserUseCase(
        users=users, tokens=tokens, password_hasher=hasher, attempts=LoginAttemptsTracker()
    )

    with pytest.raises(InvalidCredentialsError):
        login.execute("bob@example.com", "secret1", "1.1.1.1")

    assert len(hasher.verified) == 1
    assert hasher.verified[0] not in {u.password_hash for u in users.rows.values()}


def test_login_is_throttled_before_store_lookup(users, tokens, hasher) -> None:
    _register(users, tokens, hasher)
    login = LoginUserUseCase(
        users=users,
        tokens=tokens,
        password_hasher=hasher,
        attempts=LoginAttemptsTracker(max_failures=5, window_seconds=900),
    )
    for _ in range(5):
        with pytest.raises(InvalidCredentialsError):
            login.execute("alice@example.com", "wrong", "9.9.9.9")

    lookups = users.lookups
    with pytest.raises(TooManyAttemptsError) as excinfo:
        login.execute("alice@example.com", "secret1", "9.9.9.9")
    assert users.lookups == lookups
    assert excinfo.value.status == 429
    assert excinfo.value.to_dict()["context"]["retry_after_seconds"] > 0

    # another address is unaffected
    user, _ = login.execute("alice@example.com", "secret1", "8.8.8.8")
    assert user.email == "alice@example.com"


def test_successful_login_clears_failures(users, tokens, hasher) -> None:
    _register(users, tokens, hasher)
    attempts = LoginAttemptsTracker(max_failures=5, window_seconds=900)
    login = LoginUserUseCase(users=users, tokens=tokens, password_hasher=hasher, attempts=attempts)

    for _ in range(4):
        with pytest.raises(InvalidCredentialsError):
            login.execute("alice@example.com", "wrong", "ip")
    login.execute("ALICE@example.com", "secret1", "ip")
    assert attempts.failures("ip") == 0


def test_extract_bearer_token() -> None:
    assert extract_bearer_token("Bearer abc.def") == "abc.def"
    assert extract_bearer_token("bearer abc") == "abc"
    for header in (None, "", "Bearer", "Basic abc", "Bearer a b", "Token abc"):
        with pytest.raises(MissingTokenError):
            extract_bearer_token(header)


def test_authenticate_request_resolves_user(users, tokens, hasher) -> None:
    user, issued = _register(users, tokens, hasher)
    auth = AuthenticateRequestUseCase(users=users, tokens=tokens)
    assert auth.execute(f"Bearer {issued.token}") == user


def test_authenticate_request_failure_codes(users, tokens, hasher) -> None:
    user, issued = _register(users, tokens, hasher)
    auth = AuthenticateRequestUseCase(users=users, tokens=tokens)

    with pytest.raises(MissingTokenError):
        auth.execute(None)
    with pytest.raises(InvalidTokenError):
        auth.execute("Bearer not-a-jwt")

    del users.rows[user.id]
    with pytest.raises(UserNotFoundError):
        auth.execute(f"Bearer {issued.token}")


def test_expired_token_is_reported_as_expired(users, hasher) -> None:
    issued_at = datetime(2025, 1, 1, tzinfo=UTC)
    past = JwtTokenService(secret="unit-secret", clock=lambda: issued_at)
    user, _ = _register(users, past, hasher)
    token = past.issue(user).token

    later = JwtTokenService(secret="unit-secret", clock=lambda: issued_at + timedelta(days=8))
    with pytest.raises(ExpiredTokenError):
        AuthenticateRequestUseCase(users=users, tokens=later).execute(f"Bearer {token}")


def test_password_change_supersedes_old_tokens(users, tokens, hasher) -> None:
    user, old = _register(users, tokens, hasher)
    change = ChangePasswordUseCase(users=users, tokens=tokens, password_hasher=hasher)
    auth = AuthenticateRequestUseCase(users=users, tokens=tokens)

    updated, fresh = change.execute(user, "secret1", "brand-new")

    with pytest.raises(SessionSupersededError):
        auth.execute(f"Bearer {old.token}")
    assert auth.execute(f"Bearer {fresh.token}").id == updated.id


def test_password_change_requires_current_password(users, tokens, hasher) -> None:
    user, _ = _register(users, tokens, hasher)
    change = ChangePasswordUseCase(users=users, tokens=tokens, password_hasher=hasher)

    with pytest.raises(InvalidCredentialsError):
        change.execute(user, "wrong", "brand-new")
    assert users.rows[user.id].password_hash == user.password_hash


def test_update_profile_renames_user(users, tokens, hasher) -> None:
    user, _ = _register(users, tokens, hasher)
    updated = UpdateProfileUseCase(users=users).execute(user.id, "  Alicia ")
    assert updated.name == "Alicia"

    with pytest.raises(UserNotFoundError):
        UpdateProfileUseCase(users=users).execute(999, "Ghost")

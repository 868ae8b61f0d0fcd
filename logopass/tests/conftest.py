from __future__ import annotations

import base64
import os
import tempfile
from collections.abc import Iterator
from pathlib import Path

import pytest

_TMP = Path(tempfile.mkdtemp(prefix="logopass-tests-"))
TEST_KEY = b"0123456789abcdef0123456789abcdef"
ROTATED_KEY = b"fedcba9876543210fedcba9876543210"
RESET_URL = "http://test.local/changepassword/"

os.environ["APP_ENV"] = "test"
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP / 'test.db'}"
os.environ["LOG_FILE"] = str(_TMP / "app.log")
os.environ["TOKEN_KEYS"] = base64.urlsafe_b64encode(TEST_KEY).decode("ascii")
os.environ["RESET_TOKEN_TTL"] = "600"
os.environ["RESTORE_PASSWORD_URL"] = RESET_URL

from logopass.application.services.credential_service import (  # noqa: E402
    CredentialService,
    CredentialSettings,
)
from logopass.domain.credentials.entities import StoredCredential  # noqa: E402
from logopass.domain.credentials.exceptions import EmailAlreadyUsedError  # noqa: E402
from logopass.domain.credentials.repositories import (  # noqa: E402
    Mailer,
    PasswordGenerator,
    PasswordHasher,
    UserRepository,
)
from logopass.infrastructure.tokens import AesGcmTokenCodec  # noqa: E402


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._users: dict[str, StoredCredential] = {}
        self._seq = 1

    def save_user(self, user: StoredCredential) -> StoredCredential:
        if user.id:
            self._users[user.email] = user
            return user
        if user.email in self._users:
            raise EmailAlreadyUsedError()
        new_user = StoredCredential(
            id=self._seq, email=user.email, password_hash=user.password_hash
        )
        self._seq += 1
        self._users[new_user.email] = new_user
        return new_user

    def get_user_by_email(self, email: str) -> StoredCredential | None:
        return self._users.get(email.strip().lower())


class RecordingMailer(Mailer):
    def __init__(self) -> None:
        self.sent: list[tuple[str, str, str]] = []

    def send_email(self, to_address: str, subject: str, body: str) -> None:
        self.sent.append((to_address, subject, body))

    @property
    def last_body(self) -> str:
        return self.sent[-1][2]


class DeterministicHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"


class SequencePasswordGenerator(PasswordGenerator):
    def __init__(self) -> None:
        self._counter = 0

    def generate(self) -> str:
        self._counter += 1
        return f"Generated-Pass-{self._counter:04d}"


@pytest.fixture()
def settings() -> CredentialSettings:
    return CredentialSettings(token_keys=(TEST_KEY,), reset_ttl=600, reset_url=RESET_URL)


@pytest.fixture()
def codec() -> AesGcmTokenCodec:
    return AesGcmTokenCodec([TEST_KEY])


@pytest.fixture()
def credentials(settings: CredentialSettings, codec: AesGcmTokenCodec) -> CredentialService:
    return CredentialService(
        settings=settings,
        codec=codec,
        password_hasher=DeterministicHasher(),
        password_generator=SequencePasswordGenerator(),
    )


@pytest.fixture()
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def mailer() -> RecordingMailer:
    return RecordingMailer()


@pytest.fixture()
def reset_database() -> Iterator[None]:
    from logopass.infrastructure.db import ENGINE, Base

    Base.metadata.drop_all(bind=ENGINE)
    Base.metadata.create_all(bind=ENGINE)
    yield
    Base.metadata.drop_all(bind=ENGINE)

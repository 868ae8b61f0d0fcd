# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Credential payloads carried inside tokens and the stored user credential."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TypeAlias

from logopass.domain.exceptions import InvariantViolation


def _require_int(value: object, field: str) -> int:
    # bool is an int subclass, but True is not a user id or a timestamp
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvariantViolation("must be an integer", field=field)
    return value


@dataclass(slots=True, frozen=True)
class AuthPayload:
    """Subject of an authenticated session. Carries no expiry."""

    user_id: int

    def __post_init__(self) -> None:
        if _require_int(self.user_id, "user_id") <= 0:
            raise InvariantViolation("user id must be positive", field="user_id")


@dataclass(slots=True, frozen=True)
class ResetPayload:
    """Pending password reset for ``email``, valid while ``expires_at`` is in the future."""

    email: str
    expires_at: int

    def __post_init__(self) -> None:
        if not isinstance(self.email, str) or not self.email.strip():
            raise InvariantViolation("email must be a non-empty string", field="email")
        _require_int(self.expires_at, "expires_at")


CredentialPayload: TypeAlias = AuthPayload | ResetPayload


@dataclass(slots=True, frozen=True)
class StoredCredential:

    id: int
    email: str
    password_hash: str
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "email", self.email.strip().lower())
        if not self.password_hash:
            raise InvariantViolation("password hash must not be empty", field="password_hash")

    def with_password_hash(self, password_hash: str) -> StoredCredential:
        return StoredCredential(
            id=self.id,
            email=self.email,
            password_hash=password_hash,
            created_at=self.created_at,
        )

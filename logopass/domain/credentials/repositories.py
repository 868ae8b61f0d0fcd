# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import CredentialPayload, StoredCredential


class UserRepository(Protocol):
    def save_user(self, user: StoredCredential) -> StoredCredential: ...
    def get_user_by_email(self, email: str) -> StoredCredential | None: ...


class Mailer(Protocol):
    def send_email(self, to_address: str, subject: str, body: str) -> None: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...


class PasswordGenerator(Protocol):
    def generate(self) -> str: ...


class TokenCodec(Protocol):
    def encode(self, payload: CredentialPayload) -> str: ...
    def decode(self, token: str) -> CredentialPayload: ...

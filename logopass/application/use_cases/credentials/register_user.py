# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from logopass.application.services.credential_service import CredentialService
from logopass.application.services.mail_messages import build_password_email
from logopass.domain.credentials.entities import StoredCredential
from logopass.domain.credentials.exceptions import EmailAlreadyUsedError
from logopass.domain.credentials.repositories import Mailer, UserRepository
from logopass.shared.logging import logger


class RegisterUserUseCase:
    """Create an account with a generated password and mail the password to the owner."""

    def __init__(
        self,
        *,
        users: UserRepository,
        credentials: CredentialService,
        mailer: Mailer,
    ) -> None:
        self._users = users
        self._credentials = credentials
        self._mailer = mailer

    def execute(self, email: str) -> tuple[StoredCredential, str]:
        email = email.strip().lower()
        password = self._credentials.new_password()
        candidate = StoredCredential(
            id=0, email=email, password_hash=self._credentials.hash_password(password)
        )
        try:
            user = self._users.save_user(candidate)
        except EmailAlreadyUsedError:
            logger.info("auth.register: email already used")
            raise

        message = build_password_email(password)
        self._mailer.send_email(user.email, message.subject, message.body)

        token = self._credentials.issue_auth_token(user.id)
        logger.info(f"auth.register: ok user_id={user.id}")
        return user, token

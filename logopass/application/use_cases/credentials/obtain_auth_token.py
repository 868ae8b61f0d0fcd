# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from logopass.application.services.credential_service import CredentialService
from logopass.domain.credentials.exceptions import InvalidCredentialsError
from logopass.domain.credentials.repositories import UserRepository
from logopass.shared.logging import logger


class ObtainAuthTokenUseCase:
    def __init__(self, *, users: UserRepository, credentials: CredentialService) -> None:
        self._users = users
        self._credentials = credentials

    def execute(self, login: str, password: str) -> str:
        user = self._users.get_user_by_email(login.strip().lower())
        password_valid = user is not None and self._credentials.verify_login(
            user.password_hash, password
        )

        if not password_valid:
            logger.info("auth.token: rejected credentials")
            raise InvalidCredentialsError()

        return self._credentials.issue_auth_token(user.id)

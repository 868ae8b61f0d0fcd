# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable

from logopass.application.services.credential_service import CredentialService, unix_now
from logopass.application.services.mail_messages import build_password_email
from logopass.domain.credentials.exceptions import UserNotFoundError
from logopass.domain.credentials.repositories import Mailer, UserRepository
from logopass.shared.logging import logger


class RedeemPasswordResetUseCase:
    """Redeem a reset link: overwrite the password, mail it, hand back a fresh auth token."""

    def __init__(
        self,
        *,
        users: UserRepository,
        credentials: CredentialService,
        mailer: Mailer,
        clock: Callable[[], int] = unix_now,
    ) -> None:
        self._users = users
        self._credentials = credentials
        self._mailer = mailer
        self._clock = clock

    def execute(self, token: str) -> str:
        email = self._credentials.redeem_reset_link(token, now=self._clock())

        user = self._users.get_user_by_email(email)
        if user is None:
            raise UserNotFoundError()

        password = self._credentials.new_password()
        updated = self._users.save_user(
            user.with_password_hash(self._credentials.hash_password(password))
        )

        message = build_password_email(password)
        self._mailer.send_email(updated.email, message.subject, message.body)

        logger.info(f"auth.reset_redeem: password replaced user_id={updated.id}")
        return self._credentials.issue_auth_token(updated.id)

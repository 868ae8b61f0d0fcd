# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable

from logopass.application.services.credential_service import CredentialService, unix_now
from logopass.application.services.mail_messages import build_reset_email
from logopass.domain.credentials.repositories import Mailer
from logopass.shared.logging import logger


class RequestPasswordResetUseCase:
    def __init__(
        self,
        *,
        credentials: CredentialService,
        mailer: Mailer,
        clock: Callable[[], int] = unix_now,
    ) -> None:
        self._credentials = credentials
        self._mailer = mailer
        self._clock = clock

    def execute(self, email: str) -> None:
        email = email.strip().lower()
        token = self._credentials.issue_reset_link(email, now=self._clock())
        message = build_reset_email(self._credentials.reset_url(token))
        self._mailer.send_email(email, message.subject, message.body)
        logger.info("auth.reset_request: link sent")

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""SMTP delivery with bounded retries."""

from __future__ import annotations

import smtplib
from email.message import EmailMessage

from tenacity import (
    RetryError,
    Retrying,
    retry_if_exception_type,
    retry_if_not_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from logopass.domain.credentials.exceptions import MailDeliveryError
from logopass.domain.credentials.repositories import Mailer
from logopass.shared.config.settings import SmtpConfig
from logopass.shared.logging import logger

# the server answered and said no; another attempt gets the same answer
_PERMANENT_FAILURES = (
    smtplib.SMTPAuthenticationError,
    smtplib.SMTPRecipientsRefused,
    smtplib.SMTPSenderRefused,
    smtplib.SMTPNotSupportedError,
)


class SmtpMailer(Mailer):
    def __init__(self, config: SmtpConfig, *, backoff_base: float = 0.5) -> None:
        self._config = config
        self._backoff_base = backoff_base

    def send_email(self, to_address: str, subject: str, body: str) -> None:
        message = EmailMessage()
        message["From"] = self._config.sender
        message["To"] = to_address
        message["Subject"] = subject
        message.set_content(body)

        retrying = Retrying(
            retry=(
                retry_if_exception_type((smtplib.SMTPException, OSError))
                & retry_if_not_exception_type(_PERMANENT_FAILURES)
            ),
            stop=stop_after_attempt(self._config.max_attempts),
            wait=wait_exponential(multiplier=self._backoff_base, max=8.0),
            reraise=False,
        )
        try:
            for attempt in retrying:
                with attempt:
                    self._deliver(message)
        except RetryError as exc:
            cause = exc.last_attempt.exception()
            logger.error(
                f"mail.send: giving up after {self._config.max_attempts} attempts: "
                f"{type(cause).__name__}"
            )
            raise MailDeliveryError() from cause
        except _PERMANENT_FAILURES as exc:
            logger.error(f"mail.send: rejected by server: {type(exc).__name__}")
            raise MailDeliveryError(context={"reason": "rejected"}) from exc
        logger.info(f"mail.send: delivered to {to_address}")

    def _deliver(self, message: EmailMessage) -> None:
        with smtplib.SMTP(
            self._config.host, self._config.port, timeout=self._config.timeout
        ) as server:
            if self._config.use_tls:
                server.starttls()
            if self._config.username and self._config.password:
                server.login(self._config.username, self._config.password)
            server.send_message(message)

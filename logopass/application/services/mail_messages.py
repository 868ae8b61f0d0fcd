# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class MailMessage:
    subject: str
    body: str


def build_password_email(password: str) -> MailMessage:
    return MailMessage(
        subject="Your password",
        body=f"Your new password: {password}\n",
    )


def build_reset_email(reset_url: str) -> MailMessage:
    return MailMessage(
        subject="Password change",
        body=(
            "A password change was requested for your account.\n"
            f"Follow the link to receive a new password: {reset_url}\n"
            "If you did not request it, ignore this message.\n"
        ),
    )

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets

from logopass.domain.credentials.exceptions import EntropyError
from logopass.domain.credentials.password_policy import (
    CHARACTER_CLASSES,
    MIN_PASSWORD_LENGTH,
)
from logopass.domain.credentials.repositories import PasswordGenerator
from logopass.shared.logging import logger


class SecretsPasswordGenerator(PasswordGenerator):
    def __init__(self, length: int = 16) -> None:
        if length < MIN_PASSWORD_LENGTH:
            raise ValueError(f"length must be at least {MIN_PASSWORD_LENGTH}")
        self._length = length
        self._alphabet = "".join(CHARACTER_CLASSES)

    def generate(self) -> str:
        try:
            # one character from every class, the rest from the full alphabet
            chars = [secrets.choice(group) for group in CHARACTER_CLASSES]
            chars.extend(
                secrets.choice(self._alphabet) for _ in range(self._length - len(chars))
            )
            secrets.SystemRandom().shuffle(chars)
        except (OSError, NotImplementedError) as exc:
            logger.error(f"password.generate: entropy source unavailable: {exc}")
            raise EntropyError() from exc
        return "".join(chars)

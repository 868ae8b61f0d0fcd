# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Issue and verify credential tokens.

The service is stateless: every call reads only its arguments and the
immutable :class:`CredentialSettings`, so one instance can be shared by any
number of request threads.
"""

from __future__ import annotations

import base64
import binascii
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from logopass.domain.credentials.entities import AuthPayload, ResetPayload
from logopass.domain.credentials.exceptions import ExpiredTokenError, WrongPayloadKindError
from logopass.domain.credentials.repositories import (
    PasswordGenerator,
    PasswordHasher,
    TokenCodec,
)
from logopass.domain.credentials.validator import TokenValidator
from logopass.shared.logging import logger

if TYPE_CHECKING:
    from logopass.shared.config import AppConfig

KEY_SIZE = 32


def unix_now() -> int:
    return int(time.time())


def decode_key(value: str) -> bytes:
    text = value.strip()
    try:
        raw = base64.b64decode(
            text + "=" * (-len(text) % 4), altchars=b"-_", validate=True
        )
    except (binascii.Error, ValueError) as exc:
        raise ValueError("token key must be url-safe base64") from exc
    if len(raw) != KEY_SIZE:
        raise ValueError(f"token key must decode to {KEY_SIZE} bytes, got {len(raw)}")
    return raw


@dataclass(slots=True, frozen=True)
class CredentialSettings:
    token_keys: tuple[bytes, ...]
    reset_ttl: int
    reset_url: str

    def __post_init__(self) -> None:
        if not self.token_keys:
            raise ValueError("at least one token key is required")
        for key in self.token_keys:
            if len(key) != KEY_SIZE:
                raise ValueError(f"token keys must be {KEY_SIZE} bytes")
        if self.reset_ttl <= 0:
            raise ValueError("reset ttl must be positive")

    @classmethod
    def from_config(cls, config: AppConfig) -> CredentialSettings:
        return cls(
            token_keys=tuple(decode_key(key) for key in config.tokens.keys),
            reset_ttl=config.tokens.reset_ttl,
            reset_url=config.tokens.restore_password_url,
        )


class CredentialService:
    def __init__(
        self,
        *,
        settings: CredentialSettings,
        codec: TokenCodec,
        password_hasher: PasswordHasher,
        password_generator: PasswordGenerator,
        validator: TokenValidator | None = None,
    ) -> None:
        self._settings = settings
        self._codec = codec
        self._password_hasher = password_hasher
        self._password_generator = password_generator
        self._validator = validator or TokenValidator()

    @property
    def settings(self) -> CredentialSettings:
        return self._settings

    def issue_auth_token(self, user_id: int) -> str:
        token = self._codec.encode(AuthPayload(user_id=user_id))
        logger.debug(f"credentials.issue_auth_token: user_id={user_id}")
        return token

    def issue_reset_link(self, email: str, now: int | None = None) -> str:
        """Return a reset token for ``email`` that expires ``reset_ttl`` seconds after ``now``.

        Whether the email belongs to a user is not checked here.
        """

        issued_at = unix_now() if now is None else now
        payload = ResetPayload(email=email, expires_at=issued_at + self._settings.reset_ttl)
        token = self._codec.encode(payload)
        logger.debug(f"credentials.issue_reset_link: expires_at={payload.expires_at}")
        return token

    def reset_url(self, token: str) -> str:
        return f"{self._settings.reset_url}{token}"

    def verify_auth_token(self, token: str) -> int:
        payload = self._codec.decode(token)
        if not isinstance(payload, AuthPayload):
            logger.warning("credentials.verify_auth_token: reset token presented as auth token")
            raise WrongPayloadKindError()
        return payload.user_id

    def redeem_reset_link(self, token: str, now: int) -> str:
        payload = self._codec.decode(token)
        if not isinstance(payload, ResetPayload):
            logger.warning("credentials.redeem_reset_link: auth token presented as reset link")
            raise WrongPayloadKindError()
        if not self._validator.is_live(payload, now):
            logger.info(
                f"credentials.redeem_reset_link: expired at={payload.expires_at} now={now}"
            )
            raise ExpiredTokenError(context={"expires_at": payload.expires_at})
        return payload.email

    def verify_login(self, stored_digest: str, supplied_plaintext: str) -> bool:
        return self._password_hasher.verify(supplied_plaintext, stored_digest)

    def hash_password(self, plaintext: str) -> str:
        return self._password_hasher.hash(plaintext)

    def new_password(self) -> str:
        return self._password_generator.generate()

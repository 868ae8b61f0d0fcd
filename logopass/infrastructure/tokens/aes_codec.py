# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""AES-256-GCM token codec.

Token format: url-safe base64 (padding stripped) of
``nonce (12 bytes) || ciphertext || auth tag (16 bytes)`` where the
plaintext is the canonical JSON of the payload claims.
"""

from __future__ import annotations

import base64
import binascii
import json
import os
from collections.abc import Sequence

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from pydantic import ValidationError

from logopass.domain.credentials.entities import AuthPayload, CredentialPayload, ResetPayload
from logopass.domain.credentials.exceptions import (
    CryptoError,
    MalformedTokenError,
    SerializationError,
    TokenDecryptError,
    TokenPayloadError,
)
from logopass.domain.credentials.repositories import TokenCodec
from logopass.domain.exceptions import InvariantViolation
from logopass.shared.logging import logger

from .schemas import CLAIMS_ADAPTER, AuthClaims, ResetClaims


class AesGcmTokenCodec(TokenCodec):
    NONCE_SIZE = 12
    TAG_SIZE = 16
    KEY_SIZE = 32

    def __init__(self, keys: Sequence[bytes]) -> None:
        if not keys:
            raise ValueError("at least one key is required")
        for key in keys:
            if len(key) != self.KEY_SIZE:
                raise ValueError(
                    f"token key must be exactly {self.KEY_SIZE} bytes, got {len(key)} bytes"
                )
        self._ciphers = [AESGCM(bytes(key)) for key in keys]

    def encode(self, payload: CredentialPayload) -> str:
        plaintext = self._serialize(payload)
        try:
            nonce = os.urandom(self.NONCE_SIZE)
            ciphertext = self._ciphers[0].encrypt(nonce, plaintext, None)
        except (OSError, ValueError, OverflowError) as exc:
            logger.error(f"token.encode: encryption failed: {type(exc).__name__}")
            raise CryptoError() from exc
        return base64.urlsafe_b64encode(nonce + ciphertext).decode("ascii").rstrip("=")

    def decode(self, token: str) -> CredentialPayload:
        raw = self._unwrap(token)
        nonce, ciphertext = raw[: self.NONCE_SIZE], raw[self.NONCE_SIZE :]
        for cipher in self._ciphers:
            try:
                plaintext = cipher.decrypt(nonce, ciphertext, None)
            except InvalidTag:
                continue
            return self._deserialize(plaintext)
        logger.info("token.decode: no key authenticates the token")
        raise TokenDecryptError()

    def _unwrap(self, token: str) -> bytes:
        if not isinstance(token, str) or not token.strip():
            raise MalformedTokenError(context={"reason": "empty"})
        text = token.strip()
        try:
            raw = base64.b64decode(
                text + "=" * (-len(text) % 4), altchars=b"-_", validate=True
            )
        except (binascii.Error, ValueError) as exc:
            raise MalformedTokenError(context={"reason": "encoding"}) from exc
        # b64decode ignores the unused low bits of the last character
        if base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=") != text:
            raise MalformedTokenError(context={"reason": "encoding"})
        if len(raw) < self.NONCE_SIZE + self.TAG_SIZE:
            raise MalformedTokenError(context={"reason": "length"})
        return raw

    @staticmethod
    def _serialize(payload: CredentialPayload) -> bytes:
        if isinstance(payload, AuthPayload):
            claims: AuthClaims | ResetClaims = AuthClaims(user_id=payload.user_id)
        elif isinstance(payload, ResetPayload):
            claims = ResetClaims(email=payload.email, expires_at=payload.expires_at)
        else:
            raise SerializationError(context={"type": type(payload).__name__})
        try:
            return json.dumps(
                claims.model_dump(), sort_keys=True, separators=(",", ":")
            ).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise SerializationError() from exc

    @staticmethod
    def _deserialize(plaintext: bytes) -> CredentialPayload:
        try:
            data = json.loads(plaintext.decode("utf-8"))
        except (UnicodeDecodeError, ValueError) as exc:
            raise TokenPayloadError(context={"reason": "json"}) from exc
        try:
            claims = CLAIMS_ADAPTER.validate_python(data)
        except ValidationError as exc:
            raise TokenPayloadError(context={"reason": "shape"}) from exc
        try:
            if isinstance(claims, AuthClaims):
                return AuthPayload(user_id=claims.user_id)
            return ResetPayload(email=claims.email, expires_at=claims.expires_at)
        except InvariantViolation as exc:
            raise TokenPayloadError(context={"reason": "shape", "field": exc.field}) from exc

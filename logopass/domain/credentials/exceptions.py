# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from logopass.shared.errors.base import DomainError, InfrastructureError


class InvalidTokenError(DomainError):
    code = "invalid_token"
    status = HTTPStatus.UNAUTHORIZED


class MalformedTokenError(InvalidTokenError):
    code = "malformed_token"


class TokenDecryptError(InvalidTokenError):
    code = "token_decrypt_failed"


class TokenPayloadError(InvalidTokenError):
    code = "token_payload_invalid"


class ExpiredTokenError(DomainError):
    code = "expired_token"
    status = HTTPStatus.GONE


class WrongPayloadKindError(DomainError):
    code = "wrong_payload_kind"
    status = HTTPStatus.UNAUTHORIZED


class InvalidCredentialsError(DomainError):
    code = "invalid_credentials"
    status = HTTPStatus.UNAUTHORIZED


class UserNotFoundError(DomainError):
    code = "user_not_found"
    status = HTTPStatus.NOT_FOUND


class EmailAlreadyUsedError(DomainError):
    code = "email_already_used"
    status = HTTPStatus.CONFLICT


class SerializationError(InfrastructureError):
    code = "serialization_error"


class CryptoError(InfrastructureError):
    code = "crypto_error"


class EntropyError(InfrastructureError):
    code = "entropy_unavailable"
    status = HTTPStatus.SERVICE_UNAVAILABLE


class CollaboratorError(InfrastructureError):
    code = "collaborator_error"
    status = HTTPStatus.BAD_GATEWAY


class StorageError(CollaboratorError):
    code = "storage_error"


class MailDeliveryError(CollaboratorError):
    code = "mail_delivery_failed"

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, cast

# Text shown to the client in the answer envelope, keyed by error code.
ERROR_MESSAGES: dict[str, str] = {
    "validation_error": "Wrong data!",
    "invalid_email": "Invalid email format!",
    "invalid_token": "Invalid token!",
    "malformed_token": "Invalid token!",
    "token_decrypt_failed": "Token decryption error!",
    "token_payload_invalid": "Invalid link!",
    "expired_token": "Expired link!",
    "wrong_payload_kind": "Invalid token!",
    "invalid_credentials": "Wrong login or password!",
    "user_not_found": "Unknown email!",
    "email_already_used": "Email already used!",
    "entropy_unavailable": "Password generation error, try again later!",
    "serialization_error": "Token encoding error!",
    "crypto_error": "Token encryption error!",
    "storage_error": "Save error!",
    "mail_delivery_failed": "Email sending error!",
    "collaborator_error": "Service unavailable!",
    "internal_error": "Internal error!",
}


def envelope(
    data: str = "", success: bool = True, message: str = "", payload: str = ""
) -> dict[str, object]:
    return {"data": data, "success": success, "message": message, "payload": payload}


def message_for(code: str) -> str:
    return ERROR_MESSAGES.get(code, ERROR_MESSAGES["internal_error"])


@dataclass(slots=True)
class AppError(Exception):
    code: str
    status: HTTPStatus
    context: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.code)

    @property
    def message(self) -> str:
        return message_for(self.code)

    def to_envelope(self) -> dict[str, object]:
        return envelope(success=False, message=self.message)


def _class_default(error: AppError, name: str, fallback: Any) -> Any:
    # unset slots raise AttributeError, subclasses shadow them with plain attrs
    return getattr(error, name, fallback)


class DomainError(AppError):
    """Expected failure of a credential operation, answered as a 4xx."""

    def __init__(
        self,
        *,
        code: str | None = None,
        status: HTTPStatus | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code=code or cast(str, _class_default(self, "code", "domain_error")),
            status=status
            or cast(HTTPStatus, _class_default(self, "status", HTTPStatus.BAD_REQUEST)),
            context=context,
        )


class InfrastructureError(AppError):
    """A collaborator (crypto, entropy, storage, mail) did not do its job."""

    def __init__(
        self,
        code: str | None = None,
        *,
        status: HTTPStatus | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code=code or cast(str, _class_default(self, "code", "infrastructure_error")),
            status=status
            or cast(
                HTTPStatus,
                _class_default(self, "status", HTTPStatus.INTERNAL_SERVER_ERROR),
            ),
            context=context,
        )


class ValidationError(AppError):
    def __init__(
        self,
        code: str = "validation_error",
        *,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code=code,
            status=HTTPStatus.UNPROCESSABLE_ENTITY,
            context=context,
        )

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import TypeVar

from flask import Blueprint, Response, jsonify, request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from logopass.application.use_cases.credentials.fetch_protected_resource import (
    FetchProtectedResourceUseCase,
)
from logopass.application.use_cases.credentials.obtain_auth_token import (
    ObtainAuthTokenUseCase,
)
from logopass.application.use_cases.credentials.redeem_password_reset import (
    RedeemPasswordResetUseCase,
)
from logopass.application.use_cases.credentials.register_user import RegisterUserUseCase
from logopass.application.use_cases.credentials.request_password_reset import (
    RequestPasswordResetUseCase,
)
from logopass.interfaces.http.dto.credentials import (
    INVALID_EMAIL,
    EnvelopeDTO,
    PasswordResetRequestDTO,
    RegisterRequestDTO,
    TokenRequestDTO,
)
from logopass.shared.errors.base import ValidationError
from logopass.shared.errors.validation import format_pydantic_errors, raise_validation_error
from logopass.shared.logging import logger

DTO = TypeVar("DTO", bound=BaseModel)


def _parse_body(model: type[DTO]) -> DTO:
    try:
        return model.model_validate(request.get_json(silent=True) or {})
    except PydanticValidationError as exc:
        if any(error.get("type") == INVALID_EMAIL for error in exc.errors()):
            raise ValidationError(INVALID_EMAIL, context=format_pydantic_errors(exc)) from exc
        raise_validation_error(exc)


def _bearer_token() -> str:
    header = request.headers.get("Authorization", "").strip()
    if header[:7].lower() == "bearer ":
        return header[7:].strip()
    return header


def _answer(data: str = "", message: str = "", payload: str = "") -> tuple[Response, int]:
    body = EnvelopeDTO(data=data, success=True, message=message, payload=payload)
    return jsonify(body.model_dump()), 200


class CredentialsController:
    def __init__(
        self,
        *,
        obtain_token_use_case: ObtainAuthTokenUseCase,
        register_use_case: RegisterUserUseCase,
        request_reset_use_case: RequestPasswordResetUseCase,
        redeem_reset_use_case: RedeemPasswordResetUseCase,
        fetch_resource_use_case: FetchProtectedResourceUseCase,
    ) -> None:
        self._obtain_token_use_case = obtain_token_use_case
        self._register_use_case = register_use_case
        self._request_reset_use_case = request_reset_use_case
        self._redeem_reset_use_case = redeem_reset_use_case
        self._fetch_resource_use_case = fetch_resource_use_case

    def obtain_auth_token(self) -> tuple[Response, int]:
        dto = _parse_body(TokenRequestDTO)
        token = self._obtain_token_use_case.execute(dto.login, dto.password)
        logger.info("http.getauthtoken: ok")
        return _answer(data=token)

    def register(self) -> tuple[Response, int]:
        dto = _parse_body(RegisterRequestDTO)
        user, token = self._register_use_case.execute(dto.email)
        logger.info(f"http.registration: ok user_id={user.id}")
        return _answer(data=token)

    def request_password_reset(self) -> tuple[Response, int]:
        dto = _parse_body(PasswordResetRequestDTO)
        self._request_reset_use_case.execute(dto.email)
        return _answer(message="An email with instructions has been sent to you!")

    def redeem_password_reset(self, token: str) -> tuple[Response, int]:
        auth_token = self._redeem_reset_use_case.execute(token)
        return _answer(data=auth_token)

    def fetch_protected_resource(self) -> tuple[Response, int]:
        if request.method == "OPTIONS":
            response = Response(status=200)
            response.headers["Access-Control-Allow-Headers"] = "Content-Type, Authorization"
            return response, 200
        resource = self._fetch_resource_use_case.execute(_bearer_token())
        return _answer(payload=resource.payload)

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("credentials", __name__)
        bp.add_url_rule("/getauthtoken/", view_func=self.obtain_auth_token, methods=["POST"])
        bp.add_url_rule("/registration/", view_func=self.register, methods=["POST"])
        bp.add_url_rule(
            "/getpasswordrestoreemail/",
            view_func=self.request_password_reset,
            methods=["POST"],
        )
        bp.add_url_rule(
            "/changepassword/<token>", view_func=self.redeem_password_reset, methods=["GET"]
        )
        bp.add_url_rule(
            "/gettestdatabytoken/",
            view_func=self.fetch_protected_resource,
            methods=["POST", "OPTIONS"],
        )
        return bp

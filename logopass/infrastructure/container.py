# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import cached_property

from logopass.application.services.credential_service import (
    CredentialService,
    CredentialSettings,
)
from logopass.application.services.password_generator import SecretsPasswordGenerator
from logopass.application.services.password_hashing import WerkzeugPasswordHasher
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
from logopass.infrastructure.mail import SmtpMailer
from logopass.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)
from logopass.infrastructure.tokens import AesGcmTokenCodec
from logopass.interfaces.http.controllers.credentials_controller import (
    CredentialsController,
)
from logopass.shared.config import AppConfig, load_config


class Container:
    def __init__(self, config: AppConfig | None = None) -> None:
        self.config = config or load_config()

    @cached_property
    def credential_settings(self) -> CredentialSettings:
        return CredentialSettings.from_config(self.config)

    @cached_property
    def token_codec(self) -> AesGcmTokenCodec:
        return AesGcmTokenCodec(self.credential_settings.token_keys)

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher()

    @cached_property
    def password_generator(self) -> SecretsPasswordGenerator:
        return SecretsPasswordGenerator()

    @cached_property
    def credential_service(self) -> CredentialService:
        return CredentialService(
            settings=self.credential_settings,
            codec=self.token_codec,
            password_hasher=self.password_hasher,
            password_generator=self.password_generator,
        )

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository()

    @cached_property
    def mailer(self) -> SmtpMailer:
        return SmtpMailer(self.config.smtp)

    @cached_property
    def obtain_auth_token_use_case(self) -> ObtainAuthTokenUseCase:
        return ObtainAuthTokenUseCase(
            users=self.user_repository, credentials=self.credential_service
        )

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            credentials=self.credential_service,
            mailer=self.mailer,
        )

    @cached_property
    def request_password_reset_use_case(self) -> RequestPasswordResetUseCase:
        return RequestPasswordResetUseCase(
            credentials=self.credential_service, mailer=self.mailer
        )

    @cached_property
    def redeem_password_reset_use_case(self) -> RedeemPasswordResetUseCase:
        return RedeemPasswordResetUseCase(
            users=self.user_repository,
            credentials=self.credential_service,
            mailer=self.mailer,
        )

    @cached_property
    def fetch_protected_resource_use_case(self) -> FetchProtectedResourceUseCase:
        return FetchProtectedResourceUseCase(credentials=self.credential_service)

    @cached_property
    def credentials_controller(self) -> CredentialsController:
        return CredentialsController(
            obtain_token_use_case=self.obtain_auth_token_use_case,
            register_use_case=self.register_user_use_case,
            request_reset_use_case=self.request_password_reset_use_case,
            redeem_reset_use_case=self.redeem_password_reset_use_case,
            fetch_resource_use_case=self.fetch_protected_resource_use_case,
        )

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from functools import lru_cache
from typing import Annotated

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from logopass.shared.logging import logger

# URL-safe base64 of b"dev-key-for-local-dev-32-bytes!!"
DEV_TOKEN_KEY = "ZGV2LWtleS1mb3ItbG9jYWwtZGV2LTMyLWJ5dGVzISE="

_GROUP_CONFIG = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    extra="ignore",
    validate_by_name=True,
)


class DatabaseConfig(BaseSettings):
    url: str = Field("sqlite:///logopass.db", alias="DATABASE_URL")
    pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")

    model_config = _GROUP_CONFIG


class TokenConfig(BaseSettings):
    # Comma separated, the first key encrypts, all keys decrypt.
    keys: Annotated[list[str], NoDecode] = Field(default_factory=list, alias="TOKEN_KEYS")
    reset_ttl: int = Field(3600, ge=1, alias="RESET_TOKEN_TTL")
    restore_password_url: str = Field(
        "http://localhost:8080/changepassword/", alias="RESTORE_PASSWORD_URL"
    )

    model_config = _GROUP_CONFIG

    @field_validator("keys", mode="before")
    @classmethod
    def _parse_keys(cls, value: str | list[str] | None) -> list[str]:
        if value is None:
            return []
        if isinstance(value, str):
            return [key.strip() for key in value.split(",") if key.strip()]
        return value


class SmtpConfig(BaseSettings):
    host: str = Field("localhost", alias="SMTP_HOST")
    port: int = Field(587, ge=1, le=65535, alias="SMTP_PORT")
    username: str | None = Field(None, alias="SMTP_USERNAME")
    password: str | None = Field(None, alias="SMTP_PASSWORD")
    sender: str = Field("noreply@localhost", alias="SMTP_SENDER")
    use_tls: bool = Field(True, alias="SMTP_USE_TLS")
    timeout: float = Field(10.0, ge=0.1, alias="SMTP_TIMEOUT")
    max_attempts: int = Field(3, ge=1, alias="SMTP_MAX_ATTEMPTS")

    model_config = _GROUP_CONFIG

    @field_validator("use_tls", mode="before")
    @classmethod
    def _parse_bool(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)


class SecurityConfig(BaseSettings):
    allowed_origins: Annotated[list[str], NoDecode] = Field(["*"], alias="ALLOWED_ORIGINS")

    model_config = _GROUP_CONFIG

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _parse_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value


def _database_config_factory() -> DatabaseConfig:
    return DatabaseConfig()  # type: ignore[call-arg]


def _token_config_factory() -> TokenConfig:
    return TokenConfig()  # type: ignore[call-arg]


def _smtp_config_factory() -> SmtpConfig:
    return SmtpConfig()  # type: ignore[call-arg]


def _security_config_factory() -> SecurityConfig:
    return SecurityConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")

    database: DatabaseConfig = Field(default_factory=_database_config_factory)
    tokens: TokenConfig = Field(default_factory=_token_config_factory)
    smtp: SmtpConfig = Field(default_factory=_smtp_config_factory)
    security: SecurityConfig = Field(default_factory=_security_config_factory)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        validate_assignment=True,
        extra="ignore",
    )

    @model_validator(mode="after")
    def _validate_token_keys(self) -> "AppConfig":
        if self.tokens.keys and DEV_TOKEN_KEY not in self.tokens.keys:
            return self

        if self.is_production():
            print(
                "\n❌ CRITICAL: TOKEN_KEYS not set (or set to the development key) in production!\n"
                "   Tokens cannot be issued without a secret key.\n"
                "   Generate one with: python -c \"import base64, os; "
                "print(base64.urlsafe_b64encode(os.urandom(32)).decode())\"\n",
                file=sys.stderr,
            )
            sys.exit(1)

        if not self.tokens.keys:
            logger.warning(
                "TOKEN_KEYS not set, using fixed development key. DO NOT use this in production!"
            )
            self.tokens.keys = [DEV_TOKEN_KEY]
        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()


__all__ = ["AppConfig", "DEV_TOKEN_KEY", "load_config"]

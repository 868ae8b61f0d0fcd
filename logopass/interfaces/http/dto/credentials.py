from __future__ import annotations

import re

from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}$")
INVALID_EMAIL = "invalid_email"


def _normalize_email(value: str) -> str:
    value = value.strip().lower()
    if not EMAIL_PATTERN.match(value):
        raise PydanticCustomError(
            INVALID_EMAIL,
            "Email must look like name@example.com",
            {"pattern": EMAIL_PATTERN.pattern},
        )
    return value


class TokenRequestDTO(BaseModel):
    login: str = Field(min_length=3, max_length=320)
    password: str = Field(min_length=1, max_length=128)  # No strength check on login


class RegisterRequestDTO(BaseModel):
    email: str = Field(min_length=3, max_length=320)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return _normalize_email(value)


class PasswordResetRequestDTO(BaseModel):
    email: str = Field(min_length=3, max_length=320)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return _normalize_email(value)


class EnvelopeDTO(BaseModel):
    data: str = ""
    success: bool = True
    message: str = ""
    payload: str = ""

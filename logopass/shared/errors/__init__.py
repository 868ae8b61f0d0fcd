# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .base import (
    ERROR_MESSAGES,
    AppError,
    DomainError,
    InfrastructureError,
    ValidationError,
    envelope,
    message_for,
)
from .http import handle_app_error, register_error_handler

__all__ = [
    "ERROR_MESSAGES",
    "AppError",
    "DomainError",
    "InfrastructureError",
    "ValidationError",
    "envelope",
    "handle_app_error",
    "message_for",
    "register_error_handler",
]

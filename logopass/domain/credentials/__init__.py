# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import AuthPayload, CredentialPayload, ResetPayload, StoredCredential
from .validator import TokenValidator

__all__ = [
    "AuthPayload",
    "CredentialPayload",
    "ResetPayload",
    "StoredCredential",
    "TokenValidator",
]

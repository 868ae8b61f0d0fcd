# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import json
from dataclasses import dataclass

from logopass.application.services.credential_service import CredentialService


@dataclass(slots=True, frozen=True)
class ProtectedResource:
    user_id: int
    payload: str


class FetchProtectedResourceUseCase:
    def __init__(self, *, credentials: CredentialService) -> None:
        self._credentials = credentials

    def execute(self, token: str) -> ProtectedResource:
        user_id = self._credentials.verify_auth_token(token)
        return ProtectedResource(
            user_id=user_id,
            payload=json.dumps({"param": "value"}, separators=(",", ":")),
        )

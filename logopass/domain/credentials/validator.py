# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from .entities import AuthPayload, CredentialPayload, ResetPayload


class TokenValidator:
    def is_live(self, payload: CredentialPayload, now: int) -> bool:
        """Return whether a decoded payload may still be honoured at ``now``."""

        if isinstance(payload, AuthPayload):
            return True
        if isinstance(payload, ResetPayload):
            return payload.expires_at > now
        return False

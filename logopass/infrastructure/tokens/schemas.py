# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class AuthClaims(BaseModel):
    user_id: int = Field(gt=0)

    model_config = ConfigDict(extra="forbid", strict=True, frozen=True)


class ResetClaims(BaseModel):
    email: str = Field(min_length=1)
    expires_at: int

    model_config = ConfigDict(extra="forbid", strict=True, frozen=True)


# Claims shapes share no keys and forbid extras, so at most one can match.
CLAIMS_ADAPTER: TypeAdapter[AuthClaims | ResetClaims] = TypeAdapter(AuthClaims | ResetClaims)

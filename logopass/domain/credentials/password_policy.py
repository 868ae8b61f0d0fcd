# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re
import string

MIN_PASSWORD_LENGTH = 12
SPECIAL_CHARACTERS = "!@#$%^&*()-_=+[]{};:,.?"

_RULES: tuple[tuple[str, str], ...] = (
    ("password_no_lowercase", r"[a-z]"),
    ("password_no_uppercase", r"[A-Z]"),
    ("password_no_digit", r"\d"),
    ("password_no_special", "[" + re.escape(SPECIAL_CHARACTERS) + "]"),
)

CHARACTER_CLASSES: tuple[str, ...] = (
    string.ascii_lowercase,
    string.ascii_uppercase,
    string.digits,
    SPECIAL_CHARACTERS,
)


def password_violations(value: str) -> list[str]:
    """Return the policy rules ``value`` breaks, empty when it is strong enough."""

    violations = []
    if len(value) < MIN_PASSWORD_LENGTH:
        violations.append("password_too_short")
    for rule, pattern in _RULES:
        if not re.search(pattern, value):
            violations.append(rule)
    return violations


def is_strong_password(value: str) -> bool:
    return not password_violations(value)

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Logger, per-request correlation ids and masking of secrets in log lines."""

from .logger import (
    clear_correlation_id,
    get_correlation_id,
    logger,
    set_correlation_id,
    setup_logging,
)
from .sensitive_filter import sanitize_message

__all__ = [
    "logger",
    "setup_logging",
    "set_correlation_id",
    "get_correlation_id",
    "clear_correlation_id",
    "sanitize_message",
]

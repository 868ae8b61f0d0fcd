# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .settings import DEV_TOKEN_KEY, AppConfig, load_config

__all__ = ["AppConfig", "DEV_TOKEN_KEY", "load_config"]

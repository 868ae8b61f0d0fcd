# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .session import ENGINE, Base, SessionLocal, init_db, session_scope
from .models import User

__all__ = ["Base", "ENGINE", "SessionLocal", "User", "init_db", "session_scope"]

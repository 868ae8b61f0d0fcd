# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from logopass.domain.credentials.entities import StoredCredential
from logopass.domain.credentials.exceptions import (
    EmailAlreadyUsedError,
    StorageError,
    UserNotFoundError,
)
from logopass.domain.credentials.repositories import UserRepository
from logopass.infrastructure.db.models import User
from logopass.infrastructure.db.session import session_scope
from logopass.shared.logging import logger


def _to_domain(row: User) -> StoredCredential:
    return StoredCredential(
        id=row.id,
        email=row.email,
        password_hash=row.password_hash,
        created_at=row.created_at,
    )


class SqlAlchemyUserRepository(UserRepository):
    def save_user(self, user: StoredCredential) -> StoredCredential:
        """Insert a new user (``id == 0``) or overwrite the password of an existing one."""

        try:
            with session_scope() as session:
                if user.id:
                    row = session.get(User, user.id)
                    if row is None:
                        raise UserNotFoundError(context={"user_id": user.id})
                    row.password_hash = user.password_hash
                else:
                    row = User(email=user.email, password_hash=user.password_hash)
                    session.add(row)
                session.flush()
                session.refresh(row)
                return _to_domain(row)
        except IntegrityError as exc:
            logger.info("users.save: email already registered")
            raise EmailAlreadyUsedError() from exc
        except SQLAlchemyError as exc:
            logger.error(f"users.save: storage failure {type(exc).__name__}")
            raise StorageError() from exc

    def get_user_by_email(self, email: str) -> StoredCredential | None:
        normalized = (email or "").strip().lower()
        if not normalized:
            return None
        try:
            with session_scope() as session:
                row = session.scalars(select(User).where(User.email == normalized)).first()
                return _to_domain(row) if row else None
        except SQLAlchemyError as exc:
            logger.error(f"users.get_by_email: storage failure {type(exc).__name__}")
            raise StorageError() from exc

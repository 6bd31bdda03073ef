# server/core/store.py

import logging
from typing import Any
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from core.errors import InternalError
from models.user import User


logger = logging.getLogger(__name__)


class UserStore:
    """
    Persistence operations the account flows rely on, backed by a SQLAlchemy session.
    Any database failure is rolled back and surfaced as InternalError.
    """

    def __init__(self, db: Session):
        self.db = db

    def find_by_email(self, email: str) -> User | None:
        try:
            return self.db.query(User).filter(User.email == email).first()
        except SQLAlchemyError as exc:
            raise self._internal("find_by_email", exc) from exc

    def find_by_id(self, user_id: int) -> User | None:
        try:
            return self.db.query(User).filter(User.id == user_id).first()
        except SQLAlchemyError as exc:
            raise self._internal("find_by_id", exc) from exc

    def insert(self, user: User) -> User:
        try:
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
            return user
        except SQLAlchemyError as exc:
            raise self._internal("insert", exc) from exc

    def update_by_id(self, user_id: int, fields: dict[str, Any]) -> User | None:
        try:
            updated = self.db.query(User).filter(User.id == user_id).update(fields)
            self.db.commit()
        except SQLAlchemyError as exc:
            raise self._internal("update_by_id", exc) from exc

        if not updated:
            return None
        return self.find_by_id(user_id)

    def _internal(self, operation: str, exc: Exception) -> InternalError:
        self.db.rollback()
        logger.exception("User store %s failed: %s", operation, exc)
        return InternalError()

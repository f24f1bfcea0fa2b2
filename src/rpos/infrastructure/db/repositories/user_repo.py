from __future__ import annotations

import logging

from sqlalchemy import Engine, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from rpos.application.errors import TransactionError
from rpos.application.ports.repositories import UserRepository
from rpos.domain.common.ids import UserId
from rpos.domain.user.entities import User
from rpos.infrastructure.db.models.user import UserModel
from rpos.infrastructure.db.transactions import transaction_scope

logger = logging.getLogger(__name__)


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def upsert_by_email(self, user: User) -> UserId:
        """Insert the user, or refresh username and phone of the row owning the email.

        A concurrent first login for the same email loses on the unique index;
        the retry then finds the winner's row and updates it.
        """
        try:
            return self._upsert(user)
        except TransactionError as exc:
            if not isinstance(exc.__cause__, IntegrityError):
                raise
            logger.info("user_upsert_retried", extra={"user_id": user.user_id})
            return self._upsert(user)

    def _upsert(self, user: User) -> UserId:
        with transaction_scope(self._engine, "log in user") as session:
            existing = self._find_by_email(session, user.email)
            if existing is None:
                session.add(
                    UserModel(
                        id=str(user.user_id),
                        username=user.username,
                        email=user.email,
                        phone=user.phone,
                    )
                )
                session.flush()
                user_id = user.user_id
            else:
                existing.username = user.username
                existing.phone = user.phone
                user_id = UserId(existing.id)
        return user_id

    def _find_by_email(self, session: Session, email: str) -> UserModel | None:
        statement = select(UserModel).where(UserModel.email == email).limit(1)
        return session.execute(statement).scalar_one_or_none()

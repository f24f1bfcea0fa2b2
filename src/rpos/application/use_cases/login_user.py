from __future__ import annotations

import logging
from uuid import uuid4

from rpos.application.dto.requests import LoginRequest
from rpos.application.errors import ValidationError
from rpos.application.ports.repositories import UserRepository
from rpos.domain.common.ids import UserId
from rpos.domain.user.entities import User

logger = logging.getLogger(__name__)


class LoginUser:
    """Register a user on first login, or refresh the profile of a known email."""

    def __init__(self, user_repository: UserRepository) -> None:
        self._user_repository = user_repository

    def execute(self, request_dto: LoginRequest) -> UserId:
        username = (request_dto.username or "").strip()
        email = (request_dto.email or "").strip().lower()
        phone = (request_dto.phone or "").strip()
        if not username or not email or not phone:
            raise ValidationError("Username, email, and phone are required")

        user_id = self._user_repository.upsert_by_email(
            User(user_id=UserId(str(uuid4())), username=username, email=email, phone=phone)
        )
        logger.info("user_logged_in", extra={"user_id": user_id})
        return user_id

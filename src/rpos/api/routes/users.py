from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.engine import Engine

from rpos.api.dependencies import get_engine
from rpos.application.dto.requests import LoginRequest
from rpos.application.dto.responses import LoginResponse
from rpos.application.use_cases.login_user import LoginUser
from rpos.infrastructure.db.repositories.user_repo import SqlAlchemyUserRepository

router = APIRouter(tags=["users"])


@router.post("/users/login", response_model=LoginResponse)
def login(request_dto: LoginRequest, engine: Engine = Depends(get_engine)) -> LoginResponse:
    user_id = LoginUser(SqlAlchemyUserRepository(engine)).execute(request_dto)
    return LoginResponse(success=True, userId=str(user_id))

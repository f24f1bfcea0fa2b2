from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.engine import Engine

from rpos.api.dependencies import get_engine
from rpos.infrastructure.db.session import ping_database

router = APIRouter(tags=["health"])


@router.get("/health/live")
def live() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/health/ready")
def ready(response: Response, engine: Engine = Depends(get_engine)) -> dict[str, object]:
    if ping_database(engine):
        return {"status": "ok"}

    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return {"status": "unavailable", "checks": {"database": False}}

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.engine import Engine

from rpos.api.dependencies import get_engine
from rpos.application.dto.responses import MenuMutationResponse, SeedResponse
from rpos.application.use_cases.seed_menu import SeedMenu
from rpos.infrastructure.db.repositories.menu_repo import SqlAlchemyMenuRepository
from rpos.infrastructure.db.schema import create_schema

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/setup-db", response_model=MenuMutationResponse)
def setup_db(engine: Engine = Depends(get_engine)) -> MenuMutationResponse:
    create_schema(engine)
    return MenuMutationResponse(success=True, message="Database tables created successfully")


@router.post("/reseed-db", response_model=SeedResponse)
def reseed_db(engine: Engine = Depends(get_engine)) -> SeedResponse:
    count = SeedMenu(SqlAlchemyMenuRepository(engine)).execute()
    return SeedResponse(success=True, count=count)

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.engine import Engine

from rpos.api.dependencies import get_engine
from rpos.application.dto.requests import MenuItemRequest
from rpos.application.dto.responses import (
    CategoriesResponse,
    MenuItemResponse,
    MenuMutationResponse,
    MenuResponse,
)
from rpos.application.use_cases.get_menu import GetMenuItem, ListCategories, ListMenu
from rpos.application.use_cases.manage_menu import CreateMenuItem, DeleteMenuItem, UpdateMenuItem
from rpos.domain.common.ids import MenuItemId
from rpos.infrastructure.db.repositories.menu_repo import SqlAlchemyMenuRepository

router = APIRouter(tags=["menu"])


def _menu_repository(engine: Engine = Depends(get_engine)) -> SqlAlchemyMenuRepository:
    return SqlAlchemyMenuRepository(engine)


@router.get("/menu", response_model=MenuResponse)
def list_menu(
    category: str | None = None,
    repository: SqlAlchemyMenuRepository = Depends(_menu_repository),
) -> MenuResponse:
    return ListMenu(repository).execute(category=category)


@router.get("/menu/categories", response_model=CategoriesResponse)
def list_categories(
    repository: SqlAlchemyMenuRepository = Depends(_menu_repository),
) -> CategoriesResponse:
    return ListCategories(repository).execute()


@router.get("/menu/{item_id}", response_model=MenuItemResponse)
def get_menu_item(
    item_id: str,
    repository: SqlAlchemyMenuRepository = Depends(_menu_repository),
) -> MenuItemResponse:
    return GetMenuItem(repository).execute(MenuItemId(item_id))


@router.post("/menu/create", response_model=MenuMutationResponse)
def create_menu_item(
    request_dto: MenuItemRequest,
    repository: SqlAlchemyMenuRepository = Depends(_menu_repository),
) -> MenuMutationResponse:
    item_id = CreateMenuItem(repository).execute(request_dto)
    return MenuMutationResponse(
        success=True,
        id=str(item_id),
        message="Menu item created successfully",
    )


@router.put("/menu/{item_id}", response_model=MenuMutationResponse)
def update_menu_item(
    item_id: str,
    request_dto: MenuItemRequest,
    repository: SqlAlchemyMenuRepository = Depends(_menu_repository),
) -> MenuMutationResponse:
    UpdateMenuItem(repository).execute(item_id, request_dto)
    return MenuMutationResponse(success=True)


@router.delete("/menu/{item_id}", response_model=MenuMutationResponse)
def delete_menu_item(
    item_id: str,
    repository: SqlAlchemyMenuRepository = Depends(_menu_repository),
) -> MenuMutationResponse:
    DeleteMenuItem(repository).execute(item_id)
    return MenuMutationResponse(
        success=True,
        message="Menu item and related order items deleted successfully",
    )

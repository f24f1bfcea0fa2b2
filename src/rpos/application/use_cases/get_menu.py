from __future__ import annotations

from rpos.application.dto.responses import CategoriesResponse, MenuItemResponse, MenuResponse
from rpos.application.errors import MenuItemNotFoundError
from rpos.application.mappers.menu_mapper import to_menu_item_response, to_menu_response
from rpos.application.ports.repositories import MenuRepository
from rpos.domain.common.ids import MenuItemId


class ListMenu:
    def __init__(self, repository: MenuRepository) -> None:
        self._repository = repository

    def execute(self, category: str | None = None) -> MenuResponse:
        if category is None:
            return to_menu_response(self._repository.list_all())
        return to_menu_response(self._repository.list_by_category(category))


class GetMenuItem:
    def __init__(self, repository: MenuRepository) -> None:
        self._repository = repository

    def execute(self, item_id: MenuItemId) -> MenuItemResponse:
        item = self._repository.get(item_id)
        if item is None:
            raise MenuItemNotFoundError(f"menu item {item_id} not found")
        return to_menu_item_response(item)


class ListCategories:
    def __init__(self, repository: MenuRepository) -> None:
        self._repository = repository

    def execute(self) -> CategoriesResponse:
        return CategoriesResponse(categories=self._repository.list_categories())

from __future__ import annotations

from collections.abc import Iterable

from rpos.application.dto.responses import MenuItemResponse, MenuResponse
from rpos.domain.menu.entities import MenuItem


def to_menu_item_response(item: MenuItem) -> MenuItemResponse:
    return MenuItemResponse(
        id=str(item.item_id),
        name=item.name,
        description=item.description,
        price=float(item.price),
        category=item.category,
        image_url=item.image_url,
        restaurant_location=item.restaurant_location,
        created_at=item.created_at,
    )


def to_menu_response(items: Iterable[MenuItem]) -> MenuResponse:
    return MenuResponse(items=[to_menu_item_response(item) for item in items])

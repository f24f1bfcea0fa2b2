from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from rpos.domain.common.ids import MenuItemId


@dataclass(frozen=True)
class MenuItemFields:
    """Writable attributes of a menu item, already parsed and validated."""

    name: str
    description: str | None
    price: Decimal
    category: str
    image_url: str | None
    restaurant_location: str | None = None

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("name must be non-empty")
        if not self.category.strip():
            raise ValueError("category must be non-empty")
        if self.price < 0:
            raise ValueError("price must be >= 0")


@dataclass(frozen=True)
class MenuItem:
    item_id: MenuItemId
    name: str
    description: str | None
    price: Decimal
    category: str
    image_url: str | None
    restaurant_location: str
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("name must be non-empty")
        if not self.category.strip():
            raise ValueError("category must be non-empty")
        if self.price < 0:
            raise ValueError("price must be >= 0")
        if not self.restaurant_location.strip():
            raise ValueError("restaurant_location must be non-empty")


def create_menu_item(item_id: MenuItemId, fields: MenuItemFields) -> MenuItem:
    if fields.restaurant_location is None:
        raise ValueError("restaurant_location is required")
    return MenuItem(
        item_id=item_id,
        name=fields.name,
        description=fields.description,
        price=fields.price,
        category=fields.category,
        image_url=fields.image_url,
        restaurant_location=fields.restaurant_location,
    )

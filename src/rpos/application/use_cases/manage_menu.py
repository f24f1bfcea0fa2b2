from __future__ import annotations

import logging
from uuid import uuid4

from rpos.application.dto.requests import MenuItemRequest
from rpos.application.errors import ValidationError
from rpos.application.metrics.order_lifecycle import record_menu_mutation
from rpos.application.ports.repositories import MenuRepository
from rpos.domain.common.ids import MenuItemId
from rpos.domain.common.money import to_amount
from rpos.domain.menu.entities import MenuItemFields, create_menu_item

logger = logging.getLogger(__name__)


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def parse_menu_item_fields(
    request_dto: MenuItemRequest,
    require_location: bool,
) -> MenuItemFields:
    """Validate a create/update payload.

    name, price and category are mandatory; price must be a non-negative
    number. restaurant_location is mandatory only for new items, since the
    update path never overwrites it.
    """
    name = _clean(request_dto.name)
    category = _clean(request_dto.category)
    raw_price = request_dto.price
    if isinstance(raw_price, str):
        raw_price = raw_price.strip() or None

    if name is None or category is None or raw_price is None:
        raise ValidationError("Name, price, and category are required")

    try:
        price = to_amount(raw_price)
    except ValueError as exc:
        raise ValidationError("Price must be a valid non-negative number", details=str(exc)) from exc

    restaurant_location = _clean(request_dto.restaurant_location)
    if require_location and restaurant_location is None:
        raise ValidationError("Restaurant location is required")

    return MenuItemFields(
        name=name,
        description=request_dto.description,
        price=price,
        category=category,
        image_url=_clean(request_dto.image_url),
        restaurant_location=restaurant_location,
    )


def _require_item_id(item_id: str | None) -> MenuItemId:
    if item_id is None or not item_id.strip():
        raise ValidationError("Menu item ID is required")
    return MenuItemId(item_id.strip())


class CreateMenuItem:
    def __init__(self, repository: MenuRepository) -> None:
        self._repository = repository

    def execute(self, request_dto: MenuItemRequest) -> MenuItemId:
        fields = parse_menu_item_fields(request_dto, require_location=True)
        item = create_menu_item(MenuItemId(str(uuid4())), fields)
        self._repository.add(item)
        record_menu_mutation("create")
        logger.info("menu_item_created", extra={"menu_item_id": item.item_id})
        return item.item_id


class UpdateMenuItem:
    def __init__(self, repository: MenuRepository) -> None:
        self._repository = repository

    def execute(self, item_id: str, request_dto: MenuItemRequest) -> None:
        menu_item_id = _require_item_id(item_id)
        fields = parse_menu_item_fields(request_dto, require_location=False)
        matched = self._repository.update(menu_item_id, fields)
        record_menu_mutation("update")
        if not matched:
            logger.info("menu_item_update_unmatched", extra={"menu_item_id": menu_item_id})
            return
        logger.info("menu_item_updated", extra={"menu_item_id": menu_item_id})


class DeleteMenuItem:
    def __init__(self, repository: MenuRepository) -> None:
        self._repository = repository

    def execute(self, item_id: str | None) -> None:
        menu_item_id = _require_item_id(item_id)
        self._repository.delete(menu_item_id)
        record_menu_mutation("delete")
        logger.info("menu_item_deleted", extra={"menu_item_id": menu_item_id})

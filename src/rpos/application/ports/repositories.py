from __future__ import annotations

from collections.abc import Sequence
from contextlib import AbstractContextManager
from typing import Protocol

from rpos.domain.common.ids import MenuItemId, OrderId, UserId
from rpos.domain.menu.entities import MenuItem, MenuItemFields
from rpos.domain.order.entities import Order
from rpos.domain.user.entities import User


class MenuRepository(Protocol):
    def list_all(self) -> list[MenuItem]: ...

    def get(self, item_id: MenuItemId) -> MenuItem | None: ...

    def list_by_category(self, category: str) -> list[MenuItem]: ...

    def list_categories(self) -> list[str]: ...

    def add(self, item: MenuItem) -> None: ...

    def update(self, item_id: MenuItemId, fields: MenuItemFields) -> bool: ...

    def delete(self, item_id: MenuItemId) -> None: ...

    def replace_all(self, items: Sequence[MenuItem]) -> None: ...


class UserRepository(Protocol):
    def upsert_by_email(self, user: User) -> UserId: ...


class OrderTransaction(Protocol):
    """Reads and writes that share one database transaction."""

    def user_exists(self, user_id: UserId) -> bool: ...

    def pickup_locations(self, menu_ids: Sequence[MenuItemId]) -> dict[str, str]: ...

    def find_by_idempotency_key(self, key: str) -> Order | None: ...

    def add(self, order: Order) -> None: ...


class OrderRepository(Protocol):
    def transaction(self) -> AbstractContextManager[OrderTransaction]: ...

    def get(self, order_id: OrderId) -> Order | None: ...

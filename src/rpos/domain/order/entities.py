from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum

from rpos.domain.common.ids import DeliveryId, MenuItemId, OrderId, OrderItemId, UserId
from rpos.domain.common.money import ZERO, line_total

# INTEGER column
MAX_QUANTITY = 2**31 - 1


class OrderStatus(str, Enum):
    PENDING = "pending"
    PREPARING = "preparing"
    OUT_FOR_DELIVERY = "out-for-delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class DeliveryStatus(str, Enum):
    PENDING = "pending"
    PREPARING = "preparing"
    OUT_FOR_DELIVERY = "out-for-delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class RequestedItem:
    menu_id: MenuItemId
    quantity: int
    price: Decimal

    def __post_init__(self) -> None:
        if not 1 <= self.quantity <= MAX_QUANTITY:
            raise ValueError(f"quantity must be between 1 and {MAX_QUANTITY}")
        if self.price < 0:
            raise ValueError("price must be >= 0")


@dataclass(frozen=True)
class AcceptedItem:
    requested: RequestedItem
    pickup_location: str


@dataclass(frozen=True)
class ItemSelection:
    accepted: list[AcceptedItem] = field(default_factory=list)
    rejected_ids: list[MenuItemId] = field(default_factory=list)


@dataclass(frozen=True)
class OrderItem:
    item_id: OrderItemId
    order_id: OrderId
    menu_id: MenuItemId
    quantity: int
    price: Decimal

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError("quantity must be >= 1")


@dataclass(frozen=True)
class DeliveryRecord:
    delivery_id: DeliveryId
    order_id: OrderId
    menu_id: MenuItemId
    quantity: int
    delivery_location: str
    pickup_location: str
    status: DeliveryStatus = DeliveryStatus.PENDING


@dataclass(frozen=True)
class Order:
    order_id: OrderId
    user_id: UserId
    total_amount: Decimal
    status: OrderStatus
    items: list[OrderItem]
    deliveries: list[DeliveryRecord]
    created_at: datetime
    idempotency_key: str | None = None
    idempotency_hash: str | None = None

    def __post_init__(self) -> None:
        if self.total_amount < 0:
            raise ValueError("total_amount must be >= 0")
        for item in self.items:
            if item.order_id != self.order_id:
                raise ValueError("order item belongs to a different order")
        for delivery in self.deliveries:
            if delivery.order_id != self.order_id:
                raise ValueError("delivery record belongs to a different order")


@dataclass(frozen=True)
class PlacedOrder:
    """Outcome of an order placement, including the requested ids that were dropped."""

    order_id: OrderId
    total_amount: Decimal
    accepted_item_ids: list[MenuItemId]
    rejected_item_ids: list[MenuItemId] = field(default_factory=list)
    replayed: bool = False

    @property
    def is_partial(self) -> bool:
        return bool(self.rejected_item_ids)


def select_valid_items(
    requested: Iterable[RequestedItem],
    pickup_locations: Mapping[str, str],
) -> ItemSelection:
    accepted: list[AcceptedItem] = []
    rejected: list[MenuItemId] = []
    for item in requested:
        location = pickup_locations.get(str(item.menu_id))
        if location is None:
            if item.menu_id not in rejected:
                rejected.append(item.menu_id)
            continue
        accepted.append(AcceptedItem(requested=item, pickup_location=location))
    return ItemSelection(accepted=accepted, rejected_ids=rejected)


def derive_total(items: Iterable[RequestedItem]) -> Decimal:
    return sum((line_total(item.price, item.quantity) for item in items), ZERO)


def create_pending_order(
    order_id: OrderId,
    user_id: UserId,
    total_amount: Decimal,
    items: list[OrderItem],
    deliveries: list[DeliveryRecord],
    now: datetime,
    idempotency_key: str | None = None,
    idempotency_hash: str | None = None,
) -> Order:
    if not items:
        raise ValueError("order must contain at least one item")
    if len(items) != len(deliveries):
        raise ValueError("every order item needs exactly one delivery record")

    return Order(
        order_id=order_id,
        user_id=user_id,
        total_amount=total_amount,
        status=OrderStatus.PENDING,
        items=items,
        deliveries=deliveries,
        created_at=now,
        idempotency_key=idempotency_key,
        idempotency_hash=idempotency_hash,
    )

from __future__ import annotations

import hashlib
import json
import logging
from datetime import datetime, timezone
from decimal import Decimal
from uuid import uuid4

from rpos.application.dto.requests import PlaceOrderRequest
from rpos.application.errors import (
    ApplicationError,
    IdempotencyReplayMismatchError,
    MenuItemsUnavailableError,
    NoValidItemsError,
    UserNotFoundError,
    ValidationError,
)
from rpos.application.metrics.order_lifecycle import (
    record_items_rejected,
    record_order_placed,
    record_placement_failure,
)
from rpos.application.ports.repositories import OrderRepository
from rpos.domain.common.ids import DeliveryId, MenuItemId, OrderId, OrderItemId, UserId
from rpos.domain.common.money import MAX_AMOUNT, to_amount
from rpos.domain.order.entities import (
    MAX_QUANTITY,
    DeliveryRecord,
    Order,
    OrderItem,
    PlacedOrder,
    RequestedItem,
    create_pending_order,
    derive_total,
    select_valid_items,
)

logger = logging.getLogger(__name__)


class PlaceOrder:
    """Persist an order, its lines and their delivery records in one transaction.

    Requested menu ids that no longer exist are dropped and reported back in
    ``PlacedOrder.rejected_item_ids``; pass ``reject_partial=True`` to fail the
    whole order instead. When no total is supplied it is derived from the
    accepted lines only.
    """

    def __init__(self, order_repository: OrderRepository) -> None:
        self._order_repository = order_repository

    def execute(
        self,
        request_dto: PlaceOrderRequest,
        idempotency_key: str | None = None,
        reject_partial: bool = False,
    ) -> PlacedOrder:
        user_id, requested, delivery_address, total_amount = _validate(request_dto)
        payload_hash = _request_hash(request_dto) if idempotency_key else None

        try:
            with self._order_repository.transaction() as tx:
                if idempotency_key:
                    existing = tx.find_by_idempotency_key(idempotency_key)
                    if existing is not None:
                        if existing.idempotency_hash != payload_hash:
                            raise IdempotencyReplayMismatchError(
                                f"idempotency key replay with different payload: {idempotency_key}"
                            )
                        logger.info("order_replayed", extra={"order_id": existing.order_id})
                        return _replayed(existing, requested)

                if not tx.user_exists(user_id):
                    raise UserNotFoundError(f"User {user_id} not found. Please login again.")

                locations = tx.pickup_locations([item.menu_id for item in requested])
                selection = select_valid_items(requested, locations)
                if not selection.accepted:
                    raise NoValidItemsError(
                        "None of the menu items exist in the database",
                        details=", ".join(selection.rejected_ids),
                    )
                if selection.rejected_ids:
                    if reject_partial:
                        raise MenuItemsUnavailableError(
                            "Some menu items do not exist in the database",
                            details=", ".join(selection.rejected_ids),
                        )
                    logger.warning(
                        "order_items_rejected",
                        extra={"user_id": user_id, "rejected_item_ids": selection.rejected_ids},
                    )

                accepted_requests = [accepted.requested for accepted in selection.accepted]
                total = total_amount if total_amount else derive_total(accepted_requests)
                if total > MAX_AMOUNT:
                    raise ValidationError(f"Order total must be <= {MAX_AMOUNT}")

                order_id = OrderId(str(uuid4()))
                items: list[OrderItem] = []
                deliveries: list[DeliveryRecord] = []
                for accepted in selection.accepted:
                    line = accepted.requested
                    items.append(
                        OrderItem(
                            item_id=OrderItemId(str(uuid4())),
                            order_id=order_id,
                            menu_id=line.menu_id,
                            quantity=line.quantity,
                            price=line.price,
                        )
                    )
                    deliveries.append(
                        DeliveryRecord(
                            delivery_id=DeliveryId(str(uuid4())),
                            order_id=order_id,
                            menu_id=line.menu_id,
                            quantity=line.quantity,
                            delivery_location=delivery_address,
                            pickup_location=accepted.pickup_location,
                        )
                    )

                order = create_pending_order(
                    order_id=order_id,
                    user_id=user_id,
                    total_amount=total,
                    items=items,
                    deliveries=deliveries,
                    now=datetime.now(timezone.utc),
                    idempotency_key=idempotency_key,
                    idempotency_hash=payload_hash,
                )
                tx.add(order)
        except ApplicationError as exc:
            record_placement_failure(type(exc).__name__)
            raise

        record_order_placed(order)
        record_items_rejected(len(selection.rejected_ids))
        logger.info(
            "order_placed",
            extra={"order_id": order.order_id, "user_id": user_id, "count": len(items)},
        )
        return PlacedOrder(
            order_id=order.order_id,
            total_amount=order.total_amount,
            accepted_item_ids=[item.menu_id for item in items],
            rejected_item_ids=list(selection.rejected_ids),
        )


def _validate(
    request_dto: PlaceOrderRequest,
) -> tuple[UserId, list[RequestedItem], str, Decimal | None]:
    raw_user_id = "" if request_dto.user_id is None else str(request_dto.user_id).strip()
    if not raw_user_id:
        raise ValidationError("User ID is required")
    if not request_dto.items:
        raise ValidationError("Order must include at least one item")

    delivery_address = (request_dto.delivery_address or "").strip()
    if not delivery_address:
        raise ValidationError("Delivery address is required")

    requested: list[RequestedItem] = []
    for position, line in enumerate(request_dto.items, start=1):
        menu_id = "" if line.id is None else str(line.id).strip()
        if not menu_id:
            raise ValidationError(f"Item {position} is missing a menu item id")
        if line.quantity is None or line.quantity < 1:
            raise ValidationError(f"Item {menu_id}: quantity must be >= 1")
        if line.quantity > MAX_QUANTITY:
            raise ValidationError(f"Item {menu_id}: quantity must be <= {MAX_QUANTITY}")
        try:
            price = to_amount(line.price)
        except ValueError as exc:
            raise ValidationError(f"Item {menu_id}: price is invalid", details=str(exc)) from exc
        requested.append(RequestedItem(menu_id=MenuItemId(menu_id), quantity=line.quantity, price=price))

    total_amount: Decimal | None = None
    if request_dto.total_amount is not None:
        try:
            total_amount = to_amount(request_dto.total_amount)
        except ValueError as exc:
            raise ValidationError("Total amount is invalid", details=str(exc)) from exc

    return UserId(raw_user_id), requested, delivery_address, total_amount


def _request_hash(request_dto: PlaceOrderRequest) -> str:
    normalized_payload = request_dto.model_dump(mode="json", by_alias=True, exclude_none=False)
    canonical = json.dumps(normalized_payload, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def _replayed(existing: Order, requested: list[RequestedItem]) -> PlacedOrder:
    """Rebuild the placement result of a stored order.

    The payload hash matched, so every requested id without a stored line was
    rejected by the original placement.
    """
    stored_ids = {item.menu_id for item in existing.items}
    accepted_ids = [line.menu_id for line in requested if line.menu_id in stored_ids]
    rejected_ids: list[MenuItemId] = []
    for line in requested:
        if line.menu_id not in stored_ids and line.menu_id not in rejected_ids:
            rejected_ids.append(line.menu_id)
    return PlacedOrder(
        order_id=existing.order_id,
        total_amount=existing.total_amount,
        accepted_item_ids=accepted_ids,
        rejected_item_ids=rejected_ids,
        replayed=True,
    )

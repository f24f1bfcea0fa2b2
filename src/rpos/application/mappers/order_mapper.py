from __future__ import annotations

from rpos.application.dto.responses import (
    DeliveryResponse,
    OrderItemResponse,
    OrderResponse,
    PlaceOrderResponse,
)
from rpos.domain.order.entities import Order, PlacedOrder


def to_place_order_response(placed: PlacedOrder) -> PlaceOrderResponse:
    return PlaceOrderResponse(
        success=True,
        orderId=str(placed.order_id),
        totalAmount=float(placed.total_amount),
        acceptedItemIds=[str(item_id) for item_id in placed.accepted_item_ids],
        rejectedItemIds=[str(item_id) for item_id in placed.rejected_item_ids],
        replayed=placed.replayed,
    )


def to_order_response(order: Order) -> OrderResponse:
    return OrderResponse(
        orderId=str(order.order_id),
        userId=str(order.user_id),
        status=order.status.value,
        totalAmount=float(order.total_amount),
        items=[
            OrderItemResponse(
                id=str(item.item_id),
                menuId=str(item.menu_id),
                quantity=item.quantity,
                price=float(item.price),
            )
            for item in order.items
        ],
        deliveries=[
            DeliveryResponse(
                id=str(delivery.delivery_id),
                menuId=str(delivery.menu_id),
                quantity=delivery.quantity,
                deliveryLocation=delivery.delivery_location,
                pickupLocation=delivery.pickup_location,
                status=delivery.status.value,
            )
            for delivery in order.deliveries
        ],
        createdAt=order.created_at,
    )

from __future__ import annotations

from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from datetime import timezone

from sqlalchemy import Engine, select
from sqlalchemy.orm import Session, selectinload

from rpos.application.ports.repositories import OrderRepository, OrderTransaction
from rpos.domain.common.ids import DeliveryId, MenuItemId, OrderId, OrderItemId, UserId
from rpos.domain.order.entities import (
    DeliveryRecord,
    DeliveryStatus,
    Order,
    OrderItem,
    OrderStatus,
)
from rpos.infrastructure.db.models.menu import MenuModel
from rpos.infrastructure.db.models.order import DeliveryModel, OrderItemModel, OrderModel
from rpos.infrastructure.db.models.user import UserModel
from rpos.infrastructure.db.transactions import transaction_scope


class SqlAlchemyOrderTransaction(OrderTransaction):
    def __init__(self, session: Session) -> None:
        self._session = session

    def user_exists(self, user_id: UserId) -> bool:
        statement = select(UserModel.id).where(UserModel.id == str(user_id)).limit(1)
        return self._session.scalar(statement) is not None

    def pickup_locations(self, menu_ids: Sequence[MenuItemId]) -> dict[str, str]:
        if not menu_ids:
            return {}
        statement = select(MenuModel.id, MenuModel.restaurant_location).where(
            MenuModel.id.in_([str(menu_id) for menu_id in menu_ids])
        )
        return {row.id: row.restaurant_location for row in self._session.execute(statement)}

    def find_by_idempotency_key(self, key: str) -> Order | None:
        statement = (
            select(OrderModel)
            .options(selectinload(OrderModel.items), selectinload(OrderModel.deliveries))
            .where(OrderModel.idempotency_key == key)
            .limit(1)
        )
        model = self._session.execute(statement).scalar_one_or_none()
        if model is None:
            return None
        return _to_domain(model)

    def add(self, order: Order) -> None:
        self._session.add(_to_model(order))
        self._session.flush()


class SqlAlchemyOrderRepository(OrderRepository):
    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    @contextmanager
    def transaction(self) -> Iterator[SqlAlchemyOrderTransaction]:
        with transaction_scope(self._engine, "place order") as session:
            yield SqlAlchemyOrderTransaction(session)

    def get(self, order_id: OrderId) -> Order | None:
        statement = (
            select(OrderModel)
            .options(selectinload(OrderModel.items), selectinload(OrderModel.deliveries))
            .where(OrderModel.id == str(order_id))
            .limit(1)
        )
        with Session(self._engine) as session:
            model = session.execute(statement).scalar_one_or_none()
            if model is None:
                return None
            return _to_domain(model)


def _to_model(order: Order) -> OrderModel:
    order_model = OrderModel(
        id=str(order.order_id),
        user_id=str(order.user_id),
        total_amount=order.total_amount,
        status=order.status.value,
        idempotency_key=order.idempotency_key,
        idempotency_hash=order.idempotency_hash,
        created_at=order.created_at,
    )
    order_model.items = [
        OrderItemModel(
            id=str(item.item_id),
            order_id=str(order.order_id),
            menu_id=str(item.menu_id),
            quantity=item.quantity,
            price=item.price,
        )
        for item in order.items
    ]
    order_model.deliveries = [
        DeliveryModel(
            id=str(delivery.delivery_id),
            order_id=str(order.order_id),
            menu_id=str(delivery.menu_id),
            quantity=delivery.quantity,
            delivery_location=delivery.delivery_location,
            pickup_location=delivery.pickup_location,
            status=delivery.status.value,
        )
        for delivery in order.deliveries
    ]
    return order_model


def _to_domain(model: OrderModel) -> Order:
    created_at = model.created_at
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)

    return Order(
        order_id=OrderId(model.id),
        user_id=UserId(model.user_id),
        total_amount=model.total_amount,
        status=OrderStatus(model.status),
        items=[
            OrderItem(
                item_id=OrderItemId(item.id),
                order_id=OrderId(item.order_id),
                menu_id=MenuItemId(item.menu_id),
                quantity=item.quantity,
                price=item.price,
            )
            for item in model.items
        ],
        deliveries=[
            DeliveryRecord(
                delivery_id=DeliveryId(delivery.id),
                order_id=OrderId(delivery.order_id),
                menu_id=MenuItemId(delivery.menu_id),
                quantity=delivery.quantity,
                delivery_location=delivery.delivery_location,
                pickup_location=delivery.pickup_location,
                status=DeliveryStatus(delivery.status),
            )
            for delivery in model.deliveries
        ],
        created_at=created_at,
        idempotency_key=model.idempotency_key,
        idempotency_hash=model.idempotency_hash,
    )

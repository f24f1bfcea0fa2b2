from __future__ import annotations

from fastapi import APIRouter, Depends, Header, Query
from sqlalchemy.engine import Engine

from rpos.api.dependencies import get_engine
from rpos.application.dto.requests import PlaceOrderRequest
from rpos.application.dto.responses import OrderResponse, PlaceOrderResponse
from rpos.application.mappers.order_mapper import to_place_order_response
from rpos.application.use_cases.get_order import GetOrder
from rpos.application.use_cases.place_order import PlaceOrder
from rpos.domain.common.ids import OrderId
from rpos.infrastructure.db.repositories.order_repo import SqlAlchemyOrderRepository

router = APIRouter(tags=["orders"])


def _order_repository(engine: Engine = Depends(get_engine)) -> SqlAlchemyOrderRepository:
    return SqlAlchemyOrderRepository(engine)


@router.post("/orders", response_model=PlaceOrderResponse)
def place_order(
    request_dto: PlaceOrderRequest,
    reject_partial: bool = Query(default=False, alias="rejectPartial"),
    idempotency_key: str | None = Header(default=None, alias="Idempotency-Key"),
    repository: SqlAlchemyOrderRepository = Depends(_order_repository),
) -> PlaceOrderResponse:
    placed = PlaceOrder(order_repository=repository).execute(
        request_dto,
        idempotency_key=idempotency_key.strip() if idempotency_key else None,
        reject_partial=reject_partial,
    )
    return to_place_order_response(placed)


@router.get("/orders/{order_id}", response_model=OrderResponse)
def get_order(
    order_id: str,
    repository: SqlAlchemyOrderRepository = Depends(_order_repository),
) -> OrderResponse:
    return GetOrder(order_repository=repository).execute(order_id=OrderId(order_id))

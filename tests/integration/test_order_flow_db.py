from __future__ import annotations

from fastapi.testclient import TestClient
from sqlalchemy import text
from sqlalchemy.orm import Session

from rpos.infrastructure.db.models.menu import MenuModel
from rpos.infrastructure.db.models.order import DeliveryModel, OrderItemModel, OrderModel


def _order_payload(items, total_amount=None, user_id="u1") -> dict[str, object]:
    payload: dict[str, object] = {
        "userId": user_id,
        "items": items,
        "deliveryAddress": "12 MG Road, Bangalore",
    }
    if total_amount is not None:
        payload["totalAmount"] = total_amount
    return payload


def test_order_is_persisted_with_items_and_deliveries(client: TestClient, count_rows) -> None:
    response = client.post(
        "/orders",
        json=_order_payload([{"id": "menu-1", "quantity": 2, "price": 80}], total_amount=160),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["totalAmount"] == 160.0
    assert body["rejectedItemIds"] == []
    assert count_rows(OrderModel) == 1
    assert count_rows(OrderItemModel) == 1
    assert count_rows(DeliveryModel) == 1

    order = client.get(f"/orders/{body['orderId']}").json()
    assert order["status"] == "pending"
    assert order["userId"] == "u1"
    assert order["items"][0] == {
        "id": order["items"][0]["id"],
        "menuId": "menu-1",
        "quantity": 2,
        "price": 80.0,
    }
    delivery = order["deliveries"][0]
    assert delivery["status"] == "pending"
    assert delivery["deliveryLocation"] == "12 MG Road, Bangalore"
    assert delivery["pickupLocation"].startswith("The Rameshwaram Cafe")


def test_deleted_menu_item_is_dropped_from_order(engine, client: TestClient, count_rows) -> None:
    with Session(engine) as session:
        session.delete(session.get(MenuModel, "menu-9"))
        session.commit()

    response = client.post(
        "/orders",
        json=_order_payload(
            [
                {"id": "menu-1", "quantity": 2, "price": 80},
                {"id": "menu-9", "quantity": 1, "price": 50},
            ],
            total_amount=160,
        ),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["acceptedItemIds"] == ["menu-1"]
    assert body["rejectedItemIds"] == ["menu-9"]
    assert body["totalAmount"] == 160.0
    assert count_rows(OrderItemModel) == 1
    assert count_rows(DeliveryModel) == 1


def test_reject_partial_leaves_no_rows(client: TestClient, count_rows) -> None:
    response = client.post(
        "/orders",
        params={"rejectPartial": "true"},
        json=_order_payload(
            [
                {"id": "menu-1", "quantity": 1, "price": 80},
                {"id": "menu-404", "quantity": 1, "price": 50},
            ]
        ),
    )

    assert response.status_code == 422
    assert response.json()["code"] == "MENU_ITEMS_UNAVAILABLE"
    assert count_rows(OrderModel) == 0


def test_total_is_derived_when_absent(client: TestClient) -> None:
    response = client.post(
        "/orders",
        json=_order_payload(
            [
                {"id": "menu-1", "quantity": 2, "price": 80},
                {"id": "menu-7", "quantity": 3, "price": 4.99},
            ]
        ),
    )

    assert response.json()["totalAmount"] == 174.97


def test_unknown_user_rolls_back(client: TestClient, count_rows) -> None:
    response = client.post(
        "/orders",
        json=_order_payload([{"id": "menu-1", "quantity": 1, "price": 80}], user_id="ghost"),
    )

    assert response.status_code == 404
    body = response.json()
    assert body["code"] == "USER_NOT_FOUND"
    assert body["error"] == "User ghost not found. Please login again."
    assert count_rows(OrderModel) == 0
    assert count_rows(OrderItemModel) == 0
    assert count_rows(DeliveryModel) == 0


def test_no_valid_items_rolls_back(client: TestClient, count_rows) -> None:
    response = client.post(
        "/orders",
        json=_order_payload([{"id": "menu-404", "quantity": 1, "price": 10}]),
    )

    assert response.status_code == 422
    body = response.json()
    assert body["code"] == "NO_VALID_ITEMS"
    assert body["details"] == "menu-404"
    assert count_rows(OrderModel) == 0


def test_invalid_order_requests_are_400(client: TestClient, count_rows) -> None:
    no_items = client.post("/orders", json=_order_payload([]))
    no_user = client.post("/orders", json=_order_payload([{"id": "menu-1", "quantity": 1, "price": 80}], user_id=""))
    bad_quantity = client.post("/orders", json=_order_payload([{"id": "menu-1", "quantity": 0, "price": 80}]))

    assert no_items.status_code == 400
    assert no_user.status_code == 400
    assert bad_quantity.status_code == 400
    assert count_rows(OrderModel) == 0


def test_idempotency_key_creates_single_order(client: TestClient, count_rows) -> None:
    payload = _order_payload([{"id": "menu-1", "quantity": 1, "price": 80}], total_amount=80)

    first = client.post("/orders", json=payload, headers={"Idempotency-Key": "key-001"})
    second = client.post("/orders", json=payload, headers={"Idempotency-Key": "key-001"})

    assert first.status_code == 200
    assert second.status_code == 200
    assert second.json()["orderId"] == first.json()["orderId"]
    assert second.json()["replayed"] is True
    assert count_rows(OrderModel) == 1


def test_idempotency_key_with_new_payload_is_409(client: TestClient, count_rows) -> None:
    client.post(
        "/orders",
        json=_order_payload([{"id": "menu-1", "quantity": 1, "price": 80}]),
        headers={"Idempotency-Key": "key-002"},
    )

    mismatch = client.post(
        "/orders",
        json=_order_payload([{"id": "menu-1", "quantity": 2, "price": 80}]),
        headers={"Idempotency-Key": "key-002"},
    )

    assert mismatch.status_code == 409
    assert mismatch.json()["code"] == "IDEMPOTENCY_KEY_REPLAY_DIFFERENT_PAYLOAD"
    assert count_rows(OrderModel) == 1


def test_get_unknown_order_is_404(client: TestClient) -> None:
    response = client.get("/orders/missing")

    assert response.status_code == 404
    assert response.json()["code"] == "ORDER_NOT_FOUND"


def test_order_metrics_are_exported(client: TestClient) -> None:
    client.post("/orders", json=_order_payload([{"id": "menu-1", "quantity": 1, "price": 80}]))

    metrics = client.get("/metrics").text

    assert "rpos_orders_total" in metrics
    assert "http_requests_total" in metrics


def test_out_of_range_quantity_is_rejected_before_writing(client: TestClient, count_rows) -> None:
    response = client.post(
        "/orders",
        json=_order_payload([{"id": "menu-1", "quantity": 10**20, "price": 80}], total_amount=80),
    )

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_REQUEST"
    assert count_rows(OrderModel) == 0


def test_out_of_range_total_is_rejected(client: TestClient, count_rows) -> None:
    response = client.post(
        "/orders",
        json=_order_payload([{"id": "menu-1", "quantity": 1, "price": 80}], total_amount="100000000"),
    )

    assert response.status_code == 400
    assert count_rows(OrderModel) == 0


def test_failed_line_insert_rolls_back_the_order(engine, client: TestClient, count_rows) -> None:
    with engine.begin() as connection:
        connection.execute(
            text(
                "CREATE TRIGGER block_order_items BEFORE INSERT ON order_items "
                "BEGIN SELECT RAISE(ABORT, 'order_items insert blocked'); END"
            )
        )

    response = client.post(
        "/orders",
        json=_order_payload([{"id": "menu-1", "quantity": 1, "price": 80}], total_amount=80),
    )

    assert response.status_code == 500
    body = response.json()
    assert body["code"] == "TRANSACTION_FAILED"
    assert "order_items insert blocked" in body["details"]
    assert count_rows(OrderModel) == 0
    assert count_rows(OrderItemModel) == 0
    assert count_rows(DeliveryModel) == 0

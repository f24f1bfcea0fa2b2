from __future__ import annotations

from fastapi.testclient import TestClient
from sqlalchemy import text

from rpos.infrastructure.db.models.menu import MenuModel
from rpos.infrastructure.db.models.order import DeliveryModel, OrderItemModel

NEW_ITEM = {
    "name": "Masala Dosa",
    "description": "Crispy dosa with potato filling",
    "price": 120,
    "category": "Breakfast",
    "image_url": "/dosa.png",
    "restaurant_location": "Rameshwaram Cafe",
}


def test_menu_lists_seeded_items_by_category_then_name(client: TestClient) -> None:
    response = client.get("/menu")

    assert response.status_code == 200
    items = response.json()["items"]
    assert len(items) == 12
    keys = [(item["category"], item["name"]) for item in items]
    assert keys == sorted(keys)
    assert items[0]["category"] == "Beverages"


def test_menu_filters_by_category(client: TestClient) -> None:
    items = client.get("/menu", params={"category": "Breakfast"}).json()["items"]

    assert {item["id"] for item in items} == {"menu-1", "menu-2", "menu-3", "menu-10"}
    assert [item["name"] for item in items] == sorted(item["name"] for item in items)


def test_menu_category_without_items_is_empty(client: TestClient) -> None:
    response = client.get("/menu", params={"category": "Snacks"})

    assert response.status_code == 200
    assert response.json() == {"items": []}


def test_menu_categories(client: TestClient) -> None:
    response = client.get("/menu/categories")

    assert response.json() == {"categories": ["Beverages", "Breakfast", "Desserts", "Main Course"]}


def test_create_then_get_menu_item(client: TestClient) -> None:
    created = client.post("/menu/create", json=NEW_ITEM)

    assert created.status_code == 200
    body = created.json()
    assert body["success"] is True
    assert body["message"] == "Menu item created successfully"

    fetched = client.get(f"/menu/{body['id']}")
    assert fetched.status_code == 200
    item = fetched.json()
    assert item["name"] == "Masala Dosa"
    assert item["price"] == 120.0
    assert item["category"] == "Breakfast"
    assert item["restaurant_location"] == "Rameshwaram Cafe"
    assert item["created_at"] is not None


def test_create_accepts_camel_case_fields(client: TestClient) -> None:
    payload = {
        "name": "Filter Coffee",
        "price": "30.50",
        "category": "Beverages",
        "imageUrl": "/coffee.png",
        "restaurantLocation": "Koshy's",
    }

    item_id = client.post("/menu/create", json=payload).json()["id"]
    item = client.get(f"/menu/{item_id}").json()

    assert item["price"] == 30.5
    assert item["image_url"] == "/coffee.png"


def test_create_validation_errors(client: TestClient, count_rows) -> None:
    missing = client.post("/menu/create", json={**NEW_ITEM, "name": ""})
    bad_price = client.post("/menu/create", json={**NEW_ITEM, "price": "abc"})
    negative = client.post("/menu/create", json={**NEW_ITEM, "price": -5})
    no_location = client.post("/menu/create", json={**NEW_ITEM, "restaurant_location": None})

    assert missing.status_code == 400
    assert missing.json()["error"] == "Name, price, and category are required"
    assert bad_price.status_code == 400
    assert bad_price.json()["error"] == "Price must be a valid non-negative number"
    assert negative.status_code == 400
    assert no_location.status_code == 400
    assert count_rows(MenuModel) == 12


def test_get_unknown_menu_item_is_404(client: TestClient) -> None:
    response = client.get("/menu/menu-404")

    assert response.status_code == 404
    assert response.json()["code"] == "MENU_ITEM_NOT_FOUND"


def test_update_menu_item(client: TestClient) -> None:
    response = client.put(
        "/menu/menu-6",
        json={"name": "Strong Filter Coffee", "price": 35, "category": "Beverages"},
    )

    assert response.status_code == 200
    assert response.json()["success"] is True
    item = client.get("/menu/menu-6").json()
    assert item["name"] == "Strong Filter Coffee"
    assert item["price"] == 35.0
    assert item["description"] is None


def test_update_unknown_item_still_succeeds(client: TestClient, count_rows) -> None:
    response = client.put("/menu/menu-404", json={"name": "Ghost", "price": 1, "category": "X"})

    assert response.status_code == 200
    assert count_rows(MenuModel) == 12


def test_update_requires_fields(client: TestClient) -> None:
    response = client.put("/menu/menu-6", json={"name": "Coffee"})

    assert response.status_code == 400


def test_delete_menu_item_removes_order_lines(client: TestClient, count_rows) -> None:
    placed = client.post(
        "/orders",
        json={
            "userId": "u1",
            "items": [
                {"id": "menu-3", "quantity": 1, "price": 40},
                {"id": "menu-6", "quantity": 2, "price": 25},
            ],
            "deliveryAddress": "12 MG Road",
            "totalAmount": 90,
        },
    )
    assert placed.status_code == 200

    response = client.delete("/menu/menu-3")

    assert response.status_code == 200
    assert response.json()["message"] == "Menu item and related order items deleted successfully"
    assert client.get("/menu/menu-3").status_code == 404
    assert count_rows(MenuModel) == 11
    assert count_rows(OrderItemModel) == 1
    assert count_rows(DeliveryModel) == 1

    order = client.get(f"/orders/{placed.json()['orderId']}").json()
    assert [item["menuId"] for item in order["items"]] == ["menu-6"]


def test_delete_unknown_item_is_404_and_changes_nothing(client: TestClient, count_rows) -> None:
    response = client.delete("/menu/menu-404")

    assert response.status_code == 404
    assert response.json()["error"] == "Menu item not found"
    assert count_rows(MenuModel) == 12


def test_failed_menu_delete_keeps_order_lines(engine, client: TestClient, count_rows) -> None:
    placed = client.post(
        "/orders",
        json={
            "userId": "u1",
            "items": [{"id": "menu-3", "quantity": 1, "price": 40}],
            "deliveryAddress": "12 MG Road",
        },
    )
    assert placed.status_code == 200
    with engine.begin() as connection:
        connection.execute(
            text(
                "CREATE TRIGGER block_menu_delete BEFORE DELETE ON menu "
                "BEGIN SELECT RAISE(ABORT, 'menu delete blocked'); END"
            )
        )

    response = client.delete("/menu/menu-3")

    assert response.status_code == 500
    assert response.json()["code"] == "TRANSACTION_FAILED"
    assert count_rows(MenuModel) == 12
    assert count_rows(OrderItemModel) == 1
    assert count_rows(DeliveryModel) == 1
    assert client.get("/menu/menu-3").status_code == 200


def test_out_of_range_price_is_rejected(client: TestClient, count_rows) -> None:
    response = client.post("/menu/create", json={**NEW_ITEM, "price": "100000000"})

    assert response.status_code == 400
    assert response.json()["error"] == "Price must be a valid non-negative number"
    assert count_rows(MenuModel) == 12

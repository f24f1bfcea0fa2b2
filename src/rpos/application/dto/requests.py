from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


def _to_camel(value: str) -> str:
    parts = value.split("_")
    return parts[0] + "".join(part.capitalize() for part in parts[1:])


class CamelBaseModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=_to_camel,
        populate_by_name=True,
    )


class MenuItemRequest(CamelBaseModel):
    name: str | None = None
    description: str | None = None
    price: float | str | None = None
    category: str | None = None
    image_url: str | None = None
    restaurant_location: str | None = None


class PlaceOrderItemRequest(CamelBaseModel):
    id: str | int | None = None
    quantity: int | None = None
    price: float | str | None = None


class PlaceOrderRequest(CamelBaseModel):
    user_id: str | int | None = None
    items: list[PlaceOrderItemRequest] = Field(default_factory=list)
    delivery_address: str | None = None
    total_amount: float | str | None = None


class LoginRequest(CamelBaseModel):
    username: str | None = None
    email: str | None = None
    phone: str | None = None

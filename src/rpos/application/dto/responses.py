from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class MenuItemResponse(BaseModel):
    id: str
    name: str
    description: str | None = None
    price: float
    category: str
    image_url: str | None = None
    restaurant_location: str
    created_at: datetime | None = None


class MenuResponse(BaseModel):
    items: list[MenuItemResponse] = Field(default_factory=list)


class CategoriesResponse(BaseModel):
    categories: list[str] = Field(default_factory=list)


class MenuMutationResponse(BaseModel):
    success: bool
    id: str | None = None
    message: str | None = None


class PlaceOrderResponse(BaseModel):
    success: bool
    orderId: str
    totalAmount: float
    acceptedItemIds: list[str] = Field(default_factory=list)
    rejectedItemIds: list[str] = Field(default_factory=list)
    replayed: bool = False


class OrderItemResponse(BaseModel):
    id: str
    menuId: str
    quantity: int
    price: float


class DeliveryResponse(BaseModel):
    id: str
    menuId: str
    quantity: int
    deliveryLocation: str
    pickupLocation: str
    status: str


class OrderResponse(BaseModel):
    orderId: str
    userId: str
    status: str
    totalAmount: float
    items: list[OrderItemResponse] = Field(default_factory=list)
    deliveries: list[DeliveryResponse] = Field(default_factory=list)
    createdAt: datetime


class LoginResponse(BaseModel):
    success: bool
    userId: str


class SeedResponse(BaseModel):
    success: bool
    count: int

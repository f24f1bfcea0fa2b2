from __future__ import annotations

from typing import NewType

UserId = NewType("UserId", str)
MenuItemId = NewType("MenuItemId", str)
OrderId = NewType("OrderId", str)
OrderItemId = NewType("OrderItemId", str)
DeliveryId = NewType("DeliveryId", str)

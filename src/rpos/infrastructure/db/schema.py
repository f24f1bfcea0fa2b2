from __future__ import annotations

import logging

from sqlalchemy.engine import Engine

from rpos.infrastructure.db.models.menu import Base, MenuModel
from rpos.infrastructure.db.models.order import DeliveryModel, OrderItemModel, OrderModel
from rpos.infrastructure.db.models.user import UserModel

logger = logging.getLogger(__name__)

TABLES = (
    UserModel.__table__,
    MenuModel.__table__,
    OrderModel.__table__,
    OrderItemModel.__table__,
    DeliveryModel.__table__,
)
metadata = Base.metadata


def create_schema(engine: Engine) -> None:
    """Create any missing tables; existing tables are left untouched."""
    Base.metadata.create_all(engine, tables=list(TABLES), checkfirst=True)
    logger.info("schema_ready", extra={"count": len(TABLES)})

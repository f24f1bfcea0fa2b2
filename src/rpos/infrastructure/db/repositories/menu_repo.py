from __future__ import annotations

from collections.abc import Sequence
from datetime import timezone

from sqlalchemy import Engine, delete, select, update
from sqlalchemy.orm import Session

from rpos.application.errors import MenuItemNotFoundError
from rpos.application.ports.repositories import MenuRepository
from rpos.domain.common.ids import MenuItemId
from rpos.domain.menu.entities import MenuItem, MenuItemFields
from rpos.infrastructure.db.models.menu import MenuModel
from rpos.infrastructure.db.models.order import DeliveryModel, OrderItemModel
from rpos.infrastructure.db.transactions import transaction_scope


class SqlAlchemyMenuRepository(MenuRepository):
    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def list_all(self) -> list[MenuItem]:
        statement = select(MenuModel).order_by(MenuModel.category, MenuModel.name)
        with Session(self._engine) as session:
            models = list(session.execute(statement).scalars().all())
        return [self._to_domain(model) for model in models]

    def get(self, item_id: MenuItemId) -> MenuItem | None:
        statement = select(MenuModel).where(MenuModel.id == str(item_id)).limit(1)
        with Session(self._engine) as session:
            model = session.execute(statement).scalar_one_or_none()
        if model is None:
            return None
        return self._to_domain(model)

    def list_by_category(self, category: str) -> list[MenuItem]:
        statement = (
            select(MenuModel).where(MenuModel.category == category).order_by(MenuModel.name)
        )
        with Session(self._engine) as session:
            models = list(session.execute(statement).scalars().all())
        return [self._to_domain(model) for model in models]

    def list_categories(self) -> list[str]:
        statement = select(MenuModel.category).distinct().order_by(MenuModel.category)
        with Session(self._engine) as session:
            return list(session.execute(statement).scalars().all())

    def add(self, item: MenuItem) -> None:
        with transaction_scope(self._engine, "create menu item") as session:
            session.add(self._to_model(item))

    def update(self, item_id: MenuItemId, fields: MenuItemFields) -> bool:
        statement = (
            update(MenuModel)
            .where(MenuModel.id == str(item_id))
            .values(
                name=fields.name,
                description=fields.description,
                price=fields.price,
                category=fields.category,
                image_url=fields.image_url,
            )
        )
        with transaction_scope(self._engine, "update menu item") as session:
            result = session.execute(statement)
            matched = result.rowcount == 1
        return matched

    def delete(self, item_id: MenuItemId) -> None:
        """Delete a menu item together with the order lines that reference it."""
        with transaction_scope(self._engine, "delete menu item") as session:
            found = session.scalar(select(MenuModel.id).where(MenuModel.id == str(item_id)))
            if found is None:
                raise MenuItemNotFoundError("Menu item not found", details=str(item_id))

            session.execute(delete(OrderItemModel).where(OrderItemModel.menu_id == str(item_id)))
            session.execute(delete(DeliveryModel).where(DeliveryModel.menu_id == str(item_id)))
            session.execute(delete(MenuModel).where(MenuModel.id == str(item_id)))

    def replace_all(self, items: Sequence[MenuItem]) -> None:
        with transaction_scope(self._engine, "reseed menu") as session:
            session.execute(delete(OrderItemModel))
            session.execute(delete(DeliveryModel))
            session.execute(delete(MenuModel))
            session.add_all([self._to_model(item) for item in items])

    def _to_model(self, item: MenuItem) -> MenuModel:
        return MenuModel(
            id=str(item.item_id),
            name=item.name,
            description=item.description,
            price=item.price,
            category=item.category,
            image_url=item.image_url,
            restaurant_location=item.restaurant_location,
        )

    def _to_domain(self, model: MenuModel) -> MenuItem:
        created_at = model.created_at
        if created_at is not None and created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)

        return MenuItem(
            item_id=MenuItemId(model.id),
            name=model.name,
            description=model.description,
            price=model.price,
            category=model.category,
            image_url=model.image_url,
            restaurant_location=model.restaurant_location,
            created_at=created_at,
        )

from __future__ import annotations

import logging
from decimal import Decimal

from rpos.application.ports.repositories import MenuRepository
from rpos.domain.common.ids import MenuItemId
from rpos.domain.menu.entities import MenuItem

logger = logging.getLogger(__name__)


def _item(
    item_id: str,
    name: str,
    description: str,
    price: str,
    category: str,
    image_url: str,
    restaurant_location: str,
) -> MenuItem:
    return MenuItem(
        item_id=MenuItemId(item_id),
        name=name,
        description=description,
        price=Decimal(price),
        category=category,
        image_url=image_url,
        restaurant_location=restaurant_location,
    )


SEED_MENU_ITEMS: tuple[MenuItem, ...] = (
    _item(
        "menu-1",
        "Open Butter Masala Dosa",
        "Crispy dosa filled with spiced potato filling and butter",
        "80.00",
        "Breakfast",
        "/imgg1.avif?height=160&width=300",
        "The Rameshwaram Cafe - 32, Gandhi Bazaar Main Road, Basavanagudi, Bangalore",
    ),
    _item(
        "menu-2",
        "Ghee Pudi Idli with Coconut Chutney",
        "Steamed rice cakes served with lentil soup",
        "60.00",
        "Breakfast",
        "/imgg2.jpeg?height=160&width=300",
        "Central Tiffin Room (CTR/Sri Sagar) - 7th Cross, Margosa Road, Malleshwaram, Bangalore",
    ),
    _item(
        "menu-3",
        "Mini Vada with Sambar",
        "Crispy savory donut made from lentil batter",
        "40.00",
        "Breakfast",
        "/img3.webp?height=160&width=300",
        "Koshy's - 39, St. Mark's Road, Bangalore",
    ),
    _item(
        "menu-4",
        "Pulav and Raitha",
        "Spicy pulav rice with flavourful spices and raitha",
        "70.00",
        "Main Course",
        "/imgg4.jpeg?height=160&width=300",
        "Toit Brewpub - 298, 100 Feet Road, Indiranagar, Bangalore",
    ),
    _item(
        "menu-5",
        "Hyderabadi Chicken Biryani",
        "Fragrant rice dish with spices and chicken",
        "150.00",
        "Main Course",
        "/img5.jpg?height=160&width=300",
        "The Rameshwaram Cafe - 252, 36th Cross, 9th Main, 5th Block, Jayanagar, Bangalore",
    ),
    _item(
        "menu-6",
        "Filter Coffee",
        "Traditional South Indian coffee with frothy milk",
        "25.00",
        "Beverages",
        "/img6.jpeg?height=160&width=300",
        "Karavalli - The Gateway Hotel, 66, Residency Road, Ashok Nagar, Bangalore",
    ),
    _item(
        "menu-7",
        "Puri with Sagu",
        "Puri served with spicy potato curry",
        "4.99",
        "Main Course",
        "/puri.webp?height=160&width=300",
        "Nagarjuna - 44/1, Residency Road, Bangalore",
    ),
    _item(
        "menu-8",
        "Curd Rice",
        "Curd rice served with pickles and papad",
        "40.00",
        "Main Course",
        "/imgg8.jpeg?height=160&width=300",
        "Sharief Bhai - Koramangala Branch, Bangalore",
    ),
    _item(
        "menu-9",
        "Mysore Pak",
        "Traditional sweet made with gram flour, ghee and sugar",
        "50.00",
        "Desserts",
        "/imgg9.webp?height=160&width=300",
        "Jamavar - The Leela Palace, 23, Old Airport Road, Bangalore",
    ),
    _item(
        "menu-10",
        "Pongal with Coconut Chutney",
        "Savory rice and lentil dish, seasoned with spices",
        "80.00",
        "Breakfast",
        "/imgg10.jpg?height=160&width=300",
        "MTR (Mavalli Tiffin Room) - 14, Lalbagh Road, Bangalore",
    ),
    _item(
        "menu-11",
        "Palak Paneer",
        "Green palak served with fresh paneer",
        "170.00",
        "Main Course",
        "/imgg11.jpg?height=160&width=300",
        "Sankalp Restaurant - 1st Floor, Ashoka Nagar, Bangalore",
    ),
    _item(
        "menu-12",
        "Bisi Bele Bath",
        "Spicy rice dish with lentils and vegetables",
        "60.00",
        "Main Course",
        "/img12.jpg?height=160&width=300",
        "Vidyarthi Bhavan - 32, Gandhi Bazaar Main Road, Basavanagudi, Bangalore",
    ),
)


class SeedMenu:
    def __init__(self, repository: MenuRepository) -> None:
        self._repository = repository

    def execute(self) -> int:
        """Replace the whole menu with the seed catalogue."""
        self._repository.replace_all(SEED_MENU_ITEMS)
        logger.info("menu_seeded", extra={"count": len(SEED_MENU_ITEMS)})
        return len(SEED_MENU_ITEMS)

    def seed_if_empty(self) -> int:
        if self._repository.list_all():
            return 0
        return self.execute()

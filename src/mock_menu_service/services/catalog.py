"""In-memory menu catalog.

The catalog is populated once at construction and is read-only afterwards, so
it can be shared by any number of concurrent request handlers without locking.
"""

import logging
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from mock_menu_service.models.menu_models import MenuItem

logger = logging.getLogger(__name__)

SEED_MENU_ITEMS: tuple[MenuItem, ...] = (
    MenuItem(
        id="1",
        name="Margherita Pizza",
        price=12.99,
        available=True,
        description="Fresh mozzarella, tomato sauce, basil",
        restaurant="Tony's Pizza",
        category="Pizza",
        prep_time_minutes=20,
    ),
    MenuItem(
        id="2",
        name="Chicken Pad Thai",
        price=14.99,
        available=True,
        description="Rice noodles, chicken, peanuts, lime",
        restaurant="Thai Palace",
        category="Asian",
        prep_time_minutes=15,
    ),
    MenuItem(
        id="3",
        name="Classic Burger",
        price=11.99,
        available=False,
        description="Beef patty, lettuce, tomato, cheese",
        restaurant="Burger Joint",
        category="Burgers",
        prep_time_minutes=12,
    ),
    MenuItem(
        id="4",
        name="Caesar Salad",
        price=8.99,
        available=True,
        description="Romaine lettuce, parmesan, croutons",
        restaurant="Healthy Bites",
        category="Salads",
        prep_time_minutes=5,
    ),
    MenuItem(
        id="5",
        name="Sushi Platter",
        price=24.99,
        available=True,
        description="12 piece mixed sushi selection",
        restaurant="Sakura Sushi",
        category="Japanese",
        prep_time_minutes=25,
    ),
)


class MenuCatalog(Mapping[str, MenuItem]):
    """Read-only mapping of menu item ID to menu item."""

    def __init__(self, items: Iterable[MenuItem]) -> None:
        """Build the catalog from a collection of menu items.

        Args:
            items: Menu items to index by their ID

        Raises:
            ValueError: If two items share the same ID
        """
        indexed: dict[str, MenuItem] = {}
        for item in items:
            if item.id in indexed:
                raise ValueError(f"Duplicate menu item ID: {item.id}")
            indexed[item.id] = item

        self._items = MappingProxyType(indexed)

    def __getitem__(self, item_id: str) -> MenuItem:
        return self._items[item_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"MenuCatalog(ids={list(self._items)})"

    def items_list(self) -> list[MenuItem]:
        """Return every menu item in the catalog."""
        return list(self._items.values())


def new_catalog() -> MenuCatalog:
    """Create the catalog seeded with the fixed demo menu.

    Returns:
        A new MenuCatalog holding the five seed items
    """
    catalog = MenuCatalog(SEED_MENU_ITEMS)
    logger.debug(f"Menu catalog created with {len(catalog)} items")
    return catalog

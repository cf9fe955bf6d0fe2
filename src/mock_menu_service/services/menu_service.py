"""Menu service holding the catalog and the fault-injection hook.

The service is the only thing the HTTP handlers talk to. It owns an immutable
catalog and its own random source, so independent instances never share state.
"""

import logging
import random

from opentelemetry import trace

from mock_menu_service.models.menu_models import MenuItem
from mock_menu_service.observability.decorators import traced
from mock_menu_service.observability.metrics import record_fault_injection
from mock_menu_service.services.catalog import MenuCatalog, new_catalog

logger = logging.getLogger(__name__)

# Fraction of menu listings that fail with a simulated database error.
FAULT_INJECTION_RATE = 0.1


class MenuServiceError(Exception):
    """Base class for errors raised by the menu service."""

    status_code = 500


class MenuItemIdRequiredError(MenuServiceError):
    """Raised when a lookup is made without a menu item ID."""

    status_code = 400

    def __init__(self) -> None:
        super().__init__("Menu item ID is required")


class MenuItemNotFoundError(MenuServiceError):
    """Raised when a menu item ID is not in the catalog."""

    status_code = 404

    def __init__(self, item_id: str) -> None:
        self.item_id = item_id
        super().__init__(f"Menu item with ID '{item_id}' not found")


class MenuFetchError(MenuServiceError):
    """Simulated upstream failure injected into menu listings."""

    status_code = 500

    def __init__(self) -> None:
        super().__init__("Failed to fetch menu items from restaurant database")


class MenuService:
    """Read-only access to the menu catalog with injected random failures."""

    def __init__(self, catalog: MenuCatalog | None = None, rng: random.Random | None = None) -> None:
        """Initialize the menu service.

        Args:
            catalog: Catalog to serve (defaults to the seeded demo catalog)
            rng: Random source for fault injection (defaults to an unseeded generator)
        """
        self.catalog = catalog if catalog is not None else new_catalog()
        self.rng = rng if rng is not None else random.Random()

    def should_inject_fault(self) -> bool:
        """Draw from the random source and decide whether to simulate a failure."""
        return self.rng.random() < FAULT_INJECTION_RATE

    @traced("fetchMenuItems")
    def list_menu_items(self) -> list[MenuItem]:
        """Return every menu item, failing randomly at FAULT_INJECTION_RATE.

        Returns:
            All catalog items (order not significant)

        Raises:
            MenuFetchError: When the simulated database failure is injected
        """
        if self.should_inject_fault():
            logger.warning("Injecting simulated menu database failure")
            record_fault_injection("list_menu_items")
            raise MenuFetchError()

        items = self.catalog.items_list()
        trace.get_current_span().set_attribute("menu.count", len(items))
        return items

    @traced("fetchMenuItemByID")
    def get_menu_item(self, item_id: str) -> MenuItem:
        """Look up a single menu item.

        Args:
            item_id: Raw item ID taken from the request path

        Returns:
            The matching menu item

        Raises:
            MenuItemIdRequiredError: If the ID is empty after trimming whitespace
            MenuItemNotFoundError: If no item has this ID
        """
        item_id = item_id.strip()
        span = trace.get_current_span()
        span.set_attribute("menu.item.id", item_id)

        if not item_id:
            raise MenuItemIdRequiredError()

        item = self.catalog.get(item_id)
        if item is None:
            raise MenuItemNotFoundError(item_id)

        span.set_attribute("menu.item.name", item.name)
        span.set_attribute("menu.item.price", item.price)
        return item

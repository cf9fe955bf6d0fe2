"""Unit tests for the in-memory menu catalog."""

import pytest

from mock_menu_service.models.menu_models import MenuItem
from mock_menu_service.services.catalog import SEED_MENU_ITEMS, MenuCatalog, new_catalog


@pytest.mark.unit
class TestNewCatalog:
    """Test suite for the seeded catalog."""

    def test_catalog_has_five_items(self, catalog: MenuCatalog) -> None:
        """Test that the seeded catalog holds exactly five items."""
        assert len(catalog) == 5

    def test_catalog_has_expected_ids(self, catalog: MenuCatalog) -> None:
        """Test that IDs 1 through 5 are present."""
        assert sorted(catalog) == ["1", "2", "3", "4", "5"]

    def test_catalog_keys_match_item_ids(self, catalog: MenuCatalog) -> None:
        """Test that every key equals the ID of its item."""
        for item_id, item in catalog.items():
            assert item.id == item_id

    def test_margherita_pizza_seed_values(self, catalog: MenuCatalog) -> None:
        """Test the literal values of item 1."""
        item = catalog["1"]

        assert item.name == "Margherita Pizza"
        assert item.price == 12.99
        assert item.available is True
        assert item.prep_time_minutes == 20
        assert item.restaurant == "Tony's Pizza"
        assert item.category == "Pizza"

    def test_classic_burger_is_unavailable(self, catalog: MenuCatalog) -> None:
        """Test that the seed data includes an unavailable item."""
        assert catalog["3"].name == "Classic Burger"
        assert catalog["3"].available is False

    def test_each_call_returns_independent_catalog(self) -> None:
        """Test that catalogs are not shared between calls."""
        first = new_catalog()
        second = new_catalog()

        assert first is not second
        assert dict(first) == dict(second)

    def test_items_list_returns_all_items(self, catalog: MenuCatalog) -> None:
        """Test that items_list contains every seeded item."""
        assert sorted(item.id for item in catalog.items_list()) == ["1", "2", "3", "4", "5"]


@pytest.mark.unit
class TestMenuCatalog:
    """Test suite for MenuCatalog behaviour."""

    def test_rejects_duplicate_ids(self, sample_menu_item: MenuItem) -> None:
        """Test that two items with the same ID are rejected."""
        items = [
            sample_menu_item.model_copy(update={"id": "1", "name": "First"}),
            sample_menu_item.model_copy(update={"id": "1", "name": "Second"}),
        ]

        with pytest.raises(ValueError, match="Duplicate menu item ID"):
            MenuCatalog(items)

    def test_cannot_be_mutated(self, catalog: MenuCatalog) -> None:
        """Test that the catalog offers no way to add or replace items."""
        with pytest.raises(TypeError):
            catalog["6"] = SEED_MENU_ITEMS[0]  # type: ignore[index]

        with pytest.raises(TypeError):
            catalog._items["6"] = SEED_MENU_ITEMS[0]  # type: ignore[index]

    def test_get_returns_none_for_unknown_id(self, catalog: MenuCatalog) -> None:
        """Test that unknown IDs are reported as missing."""
        assert catalog.get("999") is None
        assert "999" not in catalog

    def test_empty_catalog(self) -> None:
        """Test that a catalog can be empty."""
        empty = MenuCatalog([])

        assert len(empty) == 0
        assert empty.items_list() == []

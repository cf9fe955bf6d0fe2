"""Shared pytest fixtures and configuration for all tests."""

import os
import random
from collections.abc import Iterator

# Must be set before src.main is imported so no real app is built at import time
os.environ["ENVIRONMENT"] = "test"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from opentelemetry import trace  # noqa: E402
from opentelemetry.sdk.trace import TracerProvider  # noqa: E402
from opentelemetry.sdk.trace.export import SimpleSpanProcessor  # noqa: E402
from opentelemetry.sdk.trace.export.in_memory_span_exporter import (  # noqa: E402
    InMemorySpanExporter,
)

from mock_menu_service.handlers.api_handler import create_app  # noqa: E402
from mock_menu_service.models.menu_models import MenuItem  # noqa: E402
from mock_menu_service.services.catalog import MenuCatalog, new_catalog  # noqa: E402
from mock_menu_service.services.menu_service import MenuService  # noqa: E402


class FixedRandom(random.Random):
    """Random source that always draws the same value."""

    def __init__(self, value: float) -> None:
        super().__init__()
        self.value = value
        self.draws = 0

    def random(self) -> float:
        self.draws += 1
        return self.value


@pytest.fixture(scope="session")
def _in_memory_exporter() -> InMemorySpanExporter:
    """Install a global tracer provider that keeps finished spans in memory."""
    exporter = InMemorySpanExporter()
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(exporter))
    trace.set_tracer_provider(provider)
    return exporter


@pytest.fixture
def span_exporter(_in_memory_exporter: InMemorySpanExporter) -> Iterator[InMemorySpanExporter]:
    """Fixture providing the in-memory span exporter, cleared for each test."""
    _in_memory_exporter.clear()
    yield _in_memory_exporter
    _in_memory_exporter.clear()


@pytest.fixture
def fixed_random() -> type[FixedRandom]:
    """Fixture providing the FixedRandom class for building deterministic services."""
    return FixedRandom


@pytest.fixture
def sample_menu_item() -> MenuItem:
    """Fixture providing a standalone menu item."""
    return MenuItem(
        id="test-1",
        name="Test Dish",
        price=15.50,
        available=True,
        description="A delicious test",
        restaurant="Test Kitchen",
        category="Test Category",
        prep_time_minutes=30,
    )


@pytest.fixture
def catalog() -> MenuCatalog:
    """Fixture providing the seeded demo catalog."""
    return new_catalog()


@pytest.fixture
def healthy_menu_service(catalog: MenuCatalog) -> MenuService:
    """Menu service whose fault injection never fires."""
    return MenuService(catalog=catalog, rng=FixedRandom(0.99))


@pytest.fixture
def failing_menu_service(catalog: MenuCatalog) -> MenuService:
    """Menu service whose fault injection always fires."""
    return MenuService(catalog=catalog, rng=FixedRandom(0.0))


@pytest.fixture
def client(healthy_menu_service: MenuService) -> TestClient:
    """Test client for an app that never injects failures."""
    return TestClient(create_app(menu_service=healthy_menu_service))


@pytest.fixture
def failing_client(failing_menu_service: MenuService) -> TestClient:
    """Test client for an app that always injects failures."""
    return TestClient(create_app(menu_service=failing_menu_service))

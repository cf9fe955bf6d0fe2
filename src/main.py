"""Main application entry point for the mock menu service.

This module provides the FastAPI application factory and the uvicorn runner
used to serve it locally or in a container.
"""

import logging
import os
import random
import sys
from typing import Any

import uvicorn
from fastapi import FastAPI

from mock_menu_service.handlers.api_handler import create_app
from mock_menu_service.observability import (
    configure_logging,
    setup_observability,
    shutdown_observability,
)
from mock_menu_service.services.catalog import new_catalog
from mock_menu_service.services.menu_service import MenuService

logger = logging.getLogger(__name__)

DEFAULT_PORT = 8080
GRACEFUL_SHUTDOWN_SECONDS = 5
IDLE_TIMEOUT_SECONDS = 60


def create_random_source() -> random.Random:
    """Create the random source used for fault injection.

    Returns:
        Generator seeded from MENU_RANDOM_SEED when set, otherwise unseeded

    Raises:
        ValueError: If MENU_RANDOM_SEED is not an integer
    """
    seed = os.getenv("MENU_RANDOM_SEED")
    if seed:
        logger.info(f"Fault injection random source seeded with {seed}")
        return random.Random(int(seed))
    return random.Random()


def create_menu_service() -> MenuService:
    """Create the menu service with the seeded catalog.

    Returns:
        MenuService ready to be served
    """
    catalog = new_catalog()
    logger.info(f"Menu catalog loaded with {len(catalog)} items")
    return MenuService(catalog=catalog, rng=create_random_source())


def create_application() -> tuple[FastAPI, list[Any]]:
    """Create and configure the FastAPI application with all dependencies.

    This factory function:
    1. Configures logging
    2. Creates the menu service
    3. Creates the FastAPI app
    4. Sets up observability

    Returns:
        Configured FastAPI application and the telemetry providers to shut down on exit
    """
    log_level = os.getenv("LOG_LEVEL", "INFO")
    configure_logging(log_level)

    logger.info("Initializing mock menu service...")

    menu_service = create_menu_service()
    app = create_app(menu_service=menu_service)

    providers: list[Any] = []
    if os.getenv("ENABLE_TRACING", "true").lower() == "true":
        providers = setup_observability(app)
    else:
        logger.info("Tracing disabled, skipping OpenTelemetry setup")

    logger.info("Mock menu service initialized successfully")
    return app, providers


def run(app: FastAPI, providers: list[Any]) -> None:
    """Serve the application until SIGINT or SIGTERM is received.

    uvicorn stops accepting connections on the signal and gives in-flight
    requests GRACEFUL_SHUTDOWN_SECONDS to finish before cancelling them.

    Args:
        app: Application to serve
        providers: Telemetry providers to flush once the server has stopped
    """
    port = int(os.getenv("PORT", str(DEFAULT_PORT)))
    host = os.getenv("HOST", "0.0.0.0")

    config = uvicorn.Config(
        app,
        host=host,
        port=port,
        log_config=None,
        access_log=False,
        timeout_keep_alive=IDLE_TIMEOUT_SECONDS,
        timeout_graceful_shutdown=GRACEFUL_SHUTDOWN_SECONDS,
    )
    server = uvicorn.Server(config)

    logger.info(f"Starting server on {host}:{port}")
    try:
        server.run()
    finally:
        logger.info("Shutting down server...")
        shutdown_observability(providers)

    if not server.started:
        logger.error(f"Server failed to start on {host}:{port}")
        sys.exit(1)

    logger.info("Server exited gracefully")


# Create the FastAPI application instance (only when not in test mode)
# This prevents the app from being created during test collection
if os.getenv("ENVIRONMENT") != "test":  # noqa: SIM108
    app, _providers = create_application()
else:
    # Create a placeholder app for test imports
    app = FastAPI()
    _providers: list[Any] = []


def main() -> None:
    """Console script entry point."""
    run(app, _providers)


if __name__ == "__main__":
    main()

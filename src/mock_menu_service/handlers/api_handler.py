"""FastAPI application for the menu endpoints."""

import logging
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.responses import Response
from opentelemetry import trace
from starlette.exceptions import HTTPException as StarletteHTTPException

from mock_menu_service.handlers.responses import (
    ResponseSerializationError,
    plain_text_error_response,
    write_error,
    write_json,
)
from mock_menu_service.models.menu_models import (
    ErrorResponse,
    HealthResponse,
    MenuItemResponse,
    MenuListResponse,
)
from mock_menu_service.observability.middleware import RequestLoggingMiddleware
from mock_menu_service.services.menu_service import MenuService, MenuServiceError

logger = logging.getLogger(__name__)

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def create_app(menu_service: MenuService) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        menu_service: Service providing menu data

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="Mock Menu Service",
        description="Static restaurant menu with injected failures for observability testing",
        version="1.0.0",
    )

    app.state.menu_service = menu_service
    app.add_middleware(RequestLoggingMiddleware)

    @app.exception_handler(MenuServiceError)
    async def handle_menu_service_error(_request: Request, exc: MenuServiceError) -> Response:
        try:
            return write_error(exc.status_code, str(exc))
        except ResponseSerializationError:
            return plain_text_error_response()

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(_request: Request, exc: StarletteHTTPException) -> Response:
        try:
            response = write_error(exc.status_code, str(exc.detail))
        except ResponseSerializationError:
            return plain_text_error_response()
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(ResponseSerializationError)
    async def handle_serialization_error(
        _request: Request, exc: ResponseSerializationError
    ) -> Response:
        span = trace.get_current_span()
        span.set_attribute("error", True)
        span.record_exception(exc)
        logger.error(f"Falling back to plain-text error response: {exc}")
        return plain_text_error_response()

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check() -> Response:
        """Health check endpoint.

        Returns:
            Health status with the current server time
        """
        timestamp = datetime.now().astimezone().isoformat(timespec="seconds")
        return write_json(200, {"status": "healthy", "timestamp": timestamp})

    @app.get(
        "/api/menu",
        response_model=MenuListResponse,
        responses={500: ERROR_RESPONSES[500]},
        tags=["Menu"],
    )
    async def list_menu(request: Request) -> Response:
        """List every menu item.

        Roughly one call in ten fails with a simulated database error.

        Returns:
            All menu items and their count
        """
        service: MenuService = request.app.state.menu_service
        items = service.list_menu_items()
        return write_json(200, {"menu_items": items, "count": len(items)})

    @app.get(
        "/api/menu/{item_id:path}",
        response_model=MenuItemResponse,
        responses={400: ERROR_RESPONSES[400], 404: ERROR_RESPONSES[404]},
        tags=["Menu"],
    )
    async def get_menu_item(item_id: str, request: Request) -> Response:
        """Get a single menu item by ID.

        Args:
            item_id: Menu item ID (surrounding whitespace is ignored)

        Returns:
            The matching menu item
        """
        service: MenuService = request.app.state.menu_service
        item = service.get_menu_item(item_id)
        return write_json(200, {"menu_item": item})

    return app

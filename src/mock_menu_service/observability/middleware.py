"""Request logging middleware.

Logs one structured record per HTTP request, annotates the active trace span
and records request metrics. It only observes: the response passes through
untouched.
"""

import logging
from collections.abc import Awaitable, Callable, MutableMapping
from time import perf_counter
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import Span

from mock_menu_service.observability.metrics import record_http_request

logger = logging.getLogger("mock_menu_service.access")

Scope = MutableMapping[str, Any]
Message = MutableMapping[str, Any]
Receive = Callable[[], Awaitable[Message]]
Send = Callable[[Message], Awaitable[None]]
ASGIApp = Callable[[Scope, Receive, Send], Awaitable[None]]

MENU_ITEM_PATH_PREFIX = "/api/menu/"

# Metric label for requests no route matched
UNMATCHED_ROUTE = "unmatched"


class StatusRecordingSend:
    """Wraps an ASGI ``send`` callable and remembers the response status.

    The recorded status defaults to 200 until a ``http.response.start``
    message passes through; after that it holds the last status sent. When a
    span is given, its ``error`` flag is set before the status is forwarded,
    while the span is still open.
    """

    def __init__(self, send: Send, default_status: int = 200, span: Span | None = None) -> None:
        self._send = send
        self._span = span
        self.status_code = default_status
        self.status_sent = False

    async def __call__(self, message: Message) -> None:
        if message.get("type") == "http.response.start":
            self.status_code = int(message.get("status", self.status_code))
            self.status_sent = True
            if self._span is not None:
                self._span.set_attribute("error", self.status_code >= 500)
        await self._send(message)


def log_level_for_status(status_code: int) -> int:
    """Pick the log severity for a response status.

    Args:
        status_code: HTTP status code sent to the client

    Returns:
        logging.ERROR for 5xx, logging.WARNING for 4xx, logging.INFO otherwise
    """
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


def extract_menu_item_id(path: str) -> str | None:
    """Return the menu item ID embedded in an item lookup path, if any."""
    if not path.startswith(MENU_ITEM_PATH_PREFIX):
        return None
    return path[len(MENU_ITEM_PATH_PREFIX) :].strip()


class RequestLoggingMiddleware:
    """Logs method, path, status and duration of every HTTP request."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        method = scope.get("method", "")
        path = scope.get("path", "")
        item_id = extract_menu_item_id(path)

        # The server span may end with the last body message, so annotate it up front
        span = trace.get_current_span()
        span.set_attribute("http.request.method", method)
        span.set_attribute("url.path", path)
        if item_id is not None:
            span.set_attribute("menu.item.id", item_id)

        recorder = StatusRecordingSend(send, span=span)
        start = perf_counter()
        error: Exception | None = None

        try:
            await self.app(scope, receive, recorder)
        except Exception as e:
            error = e
            if not recorder.status_sent:
                recorder.status_code = 500
                span.set_attribute("error", True)
            raise
        finally:
            duration = perf_counter() - start
            self._observe(scope, method, path, item_id, recorder.status_code, duration, error)

    def _observe(
        self,
        scope: Scope,
        method: str,
        path: str,
        item_id: str | None,
        status_code: int,
        duration: float,
        error: Exception | None,
    ) -> None:
        route = scope.get("route")
        route_path = getattr(route, "path", UNMATCHED_ROUTE)
        record_http_request(method, route_path, status_code, duration)

        headers = dict(scope.get("headers") or [])
        client = scope.get("client")
        extra: dict[str, Any] = {
            "method": method,
            "path": path,
            "status": status_code,
            "duration_ms": round(duration * 1000.0, 3),
            "remote_addr": f"{client[0]}:{client[1]}" if client else None,
            "user_agent": headers.get(b"user-agent", b"").decode("latin-1"),
        }
        if item_id is not None:
            extra["item_id"] = item_id
        if error is not None:
            extra["error"] = f"{type(error).__name__}: {error}"

        logger.log(log_level_for_status(status_code), "HTTP request", extra=extra)

"""JSON response helpers.

Every JSON body the service sends goes through write_json(), which serializes
the whole payload before a response object is built. A payload that cannot be
serialized therefore never produces a partial body: the failure is raised as
ResponseSerializationError and answered with a plain-text 500 by
plain_text_error_response().
"""

import json
import logging
from http import HTTPStatus
from typing import Any

from fastapi.responses import PlainTextResponse, Response
from pydantic import BaseModel

logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json"
FALLBACK_ERROR_BODY = "Internal Server Error"


class ResponseSerializationError(Exception):
    """Raised when a response payload cannot be serialized to JSON."""

    def __init__(self, status_code: int, cause: Exception) -> None:
        self.status_code = status_code
        self.cause = cause
        super().__init__(f"Failed to serialize JSON response (status {status_code}): {cause}")


def _encode_model(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def reason_phrase(status_code: int) -> str:
    """Return the standard HTTP reason phrase for a status code."""
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return ""


def write_json(status_code: int, content: Any) -> Response:
    """Serialize content into a JSON response.

    Args:
        status_code: HTTP status code for the response
        content: JSON-compatible value; pydantic models may appear anywhere in it

    Returns:
        Response with the serialized body and an application/json content type

    Raises:
        ResponseSerializationError: If content cannot be serialized
    """
    try:
        body = json.dumps(content, default=_encode_model, allow_nan=False, separators=(",", ":"))
    except (TypeError, ValueError) as e:
        logger.error(
            "Failed to marshal JSON response",
            extra={"status": status_code, "error": str(e)},
        )
        raise ResponseSerializationError(status_code, e) from e

    return Response(content=body, status_code=status_code, media_type=JSON_MEDIA_TYPE)


def write_error(status_code: int, message: str) -> Response:
    """Build the standard JSON error response.

    Args:
        status_code: HTTP status code for the response
        message: Human readable description of the error

    Returns:
        Response with body {"error": <reason phrase>, "message": <message>}

    Raises:
        ResponseSerializationError: If the error body cannot be serialized
    """
    return write_json(status_code, {"error": reason_phrase(status_code), "message": message})


def plain_text_error_response() -> Response:
    """Fallback response used when a JSON body could not be produced."""
    return PlainTextResponse(content=FALLBACK_ERROR_BODY, status_code=500)

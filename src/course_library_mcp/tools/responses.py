"""Tool response helpers.

Tools report failures in the result instead of raising, so the client sees
what went wrong. Failed results carry an HTTP-style status and a
problem-details body:

    {
        "isError": True,
        "status": 404,
        "content": [{"type": "text", "text": "Author not found: ..."}],
        "problem": {"status": 404, "title": "Not Found", "detail": "..."},
    }
"""

import logging
from typing import Any

from pydantic import ValidationError

from ..database.repository import NotFoundError
from ..media_types import NotAcceptableError, UnsupportedMediaTypeError
from ..shaping import InvalidFieldsError, InvalidOrderByError

logger = logging.getLogger(__name__)

STATUS_TITLES = {
    400: "Bad Request",
    404: "Not Found",
    406: "Not Acceptable",
    415: "Unsupported Media Type",
    422: "One or more validation errors occurred.",
    500: "Internal Server Error",
}

# Checked in order: ValidationError and URIParseError are ValueErrors too
CLIENT_ERROR_STATUSES: list[tuple[type[Exception], int]] = [
    (ValidationError, 422),
    (InvalidOrderByError, 400),
    (InvalidFieldsError, 400),
    (NotFoundError, 404),
    (NotAcceptableError, 406),
    (UnsupportedMediaTypeError, 415),
    (ValueError, 400),
]

CLIENT_ERRORS = tuple(exc_type for exc_type, _ in CLIENT_ERROR_STATUSES)


def success_response(message: str, data: Any) -> dict[str, Any]:
    return {"content": [{"type": "text", "text": message}], "data": data}


def error_response(
    status: int, detail: str, errors: dict[str, list[str]] | None = None
) -> dict[str, Any]:
    """A failed tool result with a problem-details body."""
    problem: dict[str, Any] = {
        "status": status,
        "title": STATUS_TITLES.get(status, "Error"),
        "detail": detail,
    }
    if errors:
        problem["errors"] = errors
    return {
        "isError": True,
        "status": status,
        "content": [{"type": "text", "text": detail}],
        "problem": problem,
    }


def _validation_errors(error: ValidationError) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "payload"
        errors.setdefault(location, []).append(item["msg"])
    return errors


def client_error_response(error: Exception) -> dict[str, Any]:
    """Translate a client-caused exception into a failed tool result."""
    for exc_type, status in CLIENT_ERROR_STATUSES:
        if isinstance(error, exc_type):
            break
    else:
        status = 400

    if isinstance(error, ValidationError):
        logger.warning("Validation failed: %s", error)
        return error_response(
            status,
            f"{error.error_count()} validation error(s) for {error.title}",
            _validation_errors(error),
        )

    logger.warning("Client error (%d): %s", status, error)
    return error_response(status, str(error))


def unexpected_error_response(tool_name: str, error: Exception) -> dict[str, Any]:
    logger.exception("Unexpected error in %s tool", tool_name)
    return error_response(500, f"An unexpected error occurred: {error!s}")

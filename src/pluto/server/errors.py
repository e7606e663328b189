"""Ready-made error responses.

Every failure the dispatcher resolves internally ends up as one of these
JSON bodies. Handlers use them too, returned directly or raised through
``ResponseError``.
"""

from typing import Any

from pluto.http.response import HttpResponse


def bad_request_error(error: Any) -> HttpResponse:
    """400 with *error* (any JSON value) describing what was wrong."""
    return HttpResponse(
        status_code=400,
        body={
            "statusCode": 400,
            "message": "Bad Request",
            "error": error,
        },
    )


def internal_server_error() -> HttpResponse:
    """Generic 500. Deliberately says nothing about the cause."""
    return HttpResponse(
        status_code=500,
        body={
            "statusCode": 500,
            "message": "Internal server error",
        },
    )


def not_found_error(message: str) -> HttpResponse:
    """404 carrying the router's ``Cannot <METHOD> <path>`` message."""
    return HttpResponse(
        status_code=404,
        body={
            "statusCode": 404,
            "message": message,
            "error": "Not Found",
        },
    )

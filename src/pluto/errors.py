"""Pluto exception hierarchy.

Shared across Router, HttpServe, App, and request helpers so every module
raises and catches the same types.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pluto.http.response import HttpResponse


class PlutoError(Exception):
    """Base for all pluto-specific errors."""


class ConfigurationError(PlutoError):
    """Raised when route or app configuration is invalid.

    Raised during setup; never converted into a response.
    """


class RouteConflict(ConfigurationError):  # noqa: N818
    """Two registrations in the same method table are ambiguous.

    Misrouting in production is worse than a crash at boot, so this is
    always fatal for the setup pass that triggered it.
    """

    def __init__(self, method: str, pattern: str, reason: str) -> None:
        self.method = method
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Cannot register {method} {pattern!r}: {reason}")


class MalformedMethod(PlutoError, ValueError):  # noqa: N818
    """The wire method string is not a recognized HTTP verb."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"Unrecognized HTTP method: {value!r}")


class NoRoute(PlutoError):  # noqa: N818
    """No method table or no trie match for the normalized path."""

    def __init__(self, method: str, path: str) -> None:
        self.method = method
        self.path = path or "/"
        super().__init__(f"Cannot {method} {self.path}")

    @property
    def message(self) -> str:
        return str(self)


class UpgradeRequired(PlutoError):  # noqa: N818
    """A state-mutating handler was matched on the read-only entry point."""

    def __init__(self, method: str, path: str) -> None:
        self.method = method
        self.path = path
        super().__init__(f"{method} {path} must be called through the update entry point")


class ResponseError(PlutoError):
    """Carries an error response out of a handler.

    Handlers may either return an error ``HttpResponse`` or raise it
    wrapped in this exception; the dispatcher treats both the same::

        if not authorized:
            raise ResponseError(bad_request_error("missing token"))
    """

    def __init__(self, response: HttpResponse) -> None:
        self.response = response
        super().__init__(f"{response.status_code} error response")


class BodyValidationError(PlutoError, ValueError):
    """The request body could not be decoded into the requested type."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)

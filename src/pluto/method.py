"""HTTP methods understood by the router.

A closed set: every route is filed under exactly one of these, and a
wire method string outside the set is rejected before routing.
"""

from __future__ import annotations

from enum import StrEnum

from pluto.errors import MalformedMethod


class Method(StrEnum):
    """HTTP verbs, in the order used when listing allowed methods."""

    GET = "GET"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"

    @classmethod
    def parse(cls, value: str) -> Method:
        """Return the member named by *value*.

        Method tokens are case-sensitive. Raises ``MalformedMethod``
        for anything else.
        """
        try:
            return cls(value)
        except ValueError:
            raise MalformedMethod(value) from None

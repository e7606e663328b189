"""CORS response policy.

An immutable, builder-configured set of rules for adding
``Access-Control-*`` headers to outgoing responses. A policy without an
allowed origin is not a CORS policy and leaves responses untouched.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace

from pluto.http.response import HttpResponse
from pluto.method import Method

ANY_ORIGIN = "*"


@dataclass(frozen=True, slots=True)
class Cors:
    """CORS policy. Every builder call returns a new policy::

        cors = (
            Cors()
            .allow_origin("*")
            .allow_methods([Method.POST, Method.PUT])
            .allow_headers(["Content-Type", "Authorization"])
            .max_age(3600)
        )
    """

    origin: str | None = None
    allowed_methods: tuple[Method, ...] = ()
    allowed_headers: tuple[str, ...] = ()
    exposed_headers: tuple[str, ...] = ()
    allow_credentials: bool = False
    max_age_seconds: int | None = None
    vary_origin: bool = False

    # -- Builder --

    def allow_origin(self, origin: str) -> Cors:
        """Allow a single literal origin."""
        return replace(self, origin=origin)

    def any_origin(self) -> Cors:
        """Allow every origin (``*``)."""
        return replace(self, origin=ANY_ORIGIN)

    def credentials(self, value: bool) -> Cors:
        return replace(self, allow_credentials=value)

    def expose_headers(self, headers: Iterable[str]) -> Cors:
        return replace(self, exposed_headers=tuple(headers))

    def allow_headers(self, headers: Iterable[str]) -> Cors:
        return replace(self, allowed_headers=tuple(headers))

    def allow_methods(self, methods: Iterable[Method | str]) -> Cors:
        return replace(self, allowed_methods=tuple(Method.parse(str(m)) for m in methods))

    def max_age(self, seconds: int | None) -> Cors:
        return replace(self, max_age_seconds=seconds)

    def vary_on_origin(self, value: bool = True) -> Cors:
        return replace(self, vary_origin=value)

    # -- Behaviour --

    @property
    def enabled(self) -> bool:
        return self.origin is not None

    @property
    def is_any_origin(self) -> bool:
        return self.origin == ANY_ORIGIN

    def merge(self, response: HttpResponse) -> HttpResponse:
        """Return *response* with this policy's headers set.

        Each header overwrites a same-named one already on the response.
        """
        if self.origin is None:
            return response

        response = response.with_header("Access-Control-Allow-Origin", self.origin)

        if self.allow_credentials:
            response = response.with_header("Access-Control-Allow-Credentials", "true")

        if self.exposed_headers:
            response = response.with_header(
                "Access-Control-Expose-Headers",
                ", ".join(self.exposed_headers),
            )

        if self.allowed_headers:
            response = response.with_header(
                "Access-Control-Allow-Headers",
                ", ".join(self.allowed_headers),
            )

        if self.allowed_methods:
            response = response.with_header(
                "Access-Control-Allow-Methods",
                ", ".join(m.value for m in self.allowed_methods),
            )

        if self.max_age_seconds is not None:
            response = response.with_header("Access-Control-Max-Age", str(self.max_age_seconds))

        if self.vary_origin:
            response = response.with_header("Vary", "Origin")

        return response

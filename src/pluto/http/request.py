"""Immutable HTTP request.

Frozen metadata plus the raw body. The request is honest about what it
is: received data that doesn't change. Routing produces a copy that also
carries the matched path and its parameters.
"""

from __future__ import annotations

import json as json_module
from dataclasses import dataclass, field, replace
from typing import Any
from urllib.parse import parse_qs

from pluto.errors import BodyValidationError, ResponseError
from pluto.http.headers import Headers
from pluto.http.wire import RawHttpRequest


@dataclass(frozen=True, slots=True)
class HttpRequest:
    """An immutable HTTP request, as seen by handlers.

    ``path`` is the matched path (no query string, no trailing slash) and
    ``params`` maps each ``:name`` segment of the matched pattern to its
    decoded value. Both are empty until routing fills them in.
    """

    method: str
    url: str
    headers: Headers
    body: bytes = b""
    params: dict[str, str] = field(default_factory=dict)
    path: str = ""

    @classmethod
    def from_raw(cls, raw: RawHttpRequest) -> HttpRequest:
        return cls(
            method=raw.method,
            url=raw.url,
            headers=Headers(raw.headers),
            body=raw.body,
        )

    def with_route(self, path: str, params: dict[str, str]) -> HttpRequest:
        """Return a copy enriched with the matched path and parameters."""
        return replace(self, path=path, params=dict(params))

    # -- Computed properties --

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    @property
    def query_string(self) -> str:
        _, _, qs = self.url.partition("?")
        return qs

    @property
    def query(self) -> dict[str, list[str]]:
        """Query parameters, every value kept."""
        return parse_qs(self.query_string, keep_blank_values=True)

    # -- Body access --

    def text(self) -> str:
        """The body as text (UTF-8)."""
        return self.body.decode("utf-8")

    def json(self) -> Any:
        """Parse the body as JSON."""
        return json_module.loads(self.body)

    def validate_body[T](self, cls: type[T]) -> T:
        """Decode the JSON body into *cls*.

        A body that does not fit raises ``ResponseError`` carrying a 400,
        so a handler can call this without its own error handling::

            def create(req: HttpRequest) -> HttpResponse:
                item = req.validate_body(NewItem)
                ...
        """
        from pluto.server.errors import bad_request_error
        from pluto.validation import decode_body

        try:
            return decode_body(cls, self.body)
        except BodyValidationError as exc:
            raise ResponseError(bad_request_error(str(exc))) from exc

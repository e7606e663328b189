"""HTTP response with chainable .with_*() transformation API.

Each transformation returns a new HttpResponse. Immutable by convention,
built incrementally by design.

The body is one of three shapes, and serialization is total over all of
them:

- ``bytes`` — sent as-is
- ``str`` — sent as UTF-8 text
- anything else — a JSON value, serialized compactly
"""

from __future__ import annotations

import json as json_module
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from pluto.http.headers import find_header

type HttpBody = str | bytes | dict[str, Any] | list[Any] | int | float | bool | None


def encode_body(body: HttpBody) -> bytes:
    """Serialize any body variant to wire bytes."""
    if isinstance(body, bytes | bytearray | memoryview):
        return bytes(body)
    if isinstance(body, str):
        return body.encode("utf-8")
    return json_module.dumps(body, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


@dataclass(frozen=True, slots=True)
class HttpResponse:
    """An HTTP response built through immutable transformations.

    Handlers construct one directly or through the ``json`` / ``text``
    shortcuts::

        HttpResponse.json({"message": "Hello World"})
        HttpResponse(status_code=201, body=b"\\x00\\x01")
    """

    status_code: int = 200
    headers: Mapping[str, str] = field(default_factory=dict)
    body: HttpBody = ""

    @classmethod
    def json(cls, value: Any, status_code: int = 200) -> HttpResponse:
        """A JSON response; wire conversion fills in ``application/json``."""
        return cls(status_code=status_code, body=value)

    @classmethod
    def text(cls, value: str, status_code: int = 200, content_type: str = "text/plain") -> HttpResponse:
        return cls(status_code=status_code, headers={"Content-Type": content_type}, body=value)

    # -- Chainable transformations --

    def with_status(self, status_code: int) -> HttpResponse:
        """Return a new HttpResponse with a different status code."""
        return replace(self, status_code=status_code)

    def with_header(self, name: str, value: str) -> HttpResponse:
        """Return a new HttpResponse with *name* set, replacing any same-named header."""
        headers = dict(self.headers)
        existing = find_header(headers, name)
        if existing is not None:
            del headers[existing]
        headers[name] = value
        return replace(self, headers=headers)

    def with_headers(self, headers: Mapping[str, str]) -> HttpResponse:
        """Return a new HttpResponse with every header in *headers* set."""
        response = self
        for name, value in headers.items():
            response = response.with_header(name, value)
        return response

    def without_header(self, name: str) -> HttpResponse:
        headers = dict(self.headers)
        existing = find_header(headers, name)
        if existing is not None:
            del headers[existing]
        return replace(self, headers=headers)

    def with_body(self, body: HttpBody) -> HttpResponse:
        return replace(self, body=body)

    # -- Header helpers --

    def header(self, name: str) -> str | None:
        """Return the value of *name* (case-insensitive), or None."""
        key = find_header(self.headers, name)
        return None if key is None else self.headers[key]

    def has_header(self, name: str) -> bool:
        return find_header(self.headers, name) is not None

    # -- Body helpers --

    @property
    def body_bytes(self) -> bytes:
        """Body as wire bytes."""
        return encode_body(self.body)

"""Wire shapes exchanged with the host.

The host decodes each call into a ``RawHttpRequest`` and encodes the
``RawHttpResponse`` it gets back. These are the only types that cross
the entry points; everything in between works on ``HttpRequest`` and
``HttpResponse``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from pluto.config import AppConfig
from pluto.http.headers import find_header
from pluto.http.response import HttpResponse


@dataclass(frozen=True, slots=True)
class RawHttpRequest:
    """A request as delivered by the host: nothing parsed yet."""

    method: str
    url: str
    headers: tuple[tuple[str, str], ...] = ()
    body: bytes = b""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RawHttpRequest:
        """Build from a host-decoded payload.

        ``headers`` may be a list of pairs or a mapping; ``body`` may be
        bytes, a list of ints, or a string.
        """
        raw_headers = data.get("headers") or ()
        if isinstance(raw_headers, Mapping):
            raw_headers = raw_headers.items()
        body = data.get("body") or b""
        if isinstance(body, str):
            body = body.encode("utf-8")
        return cls(
            method=str(data["method"]),
            url=str(data["url"]),
            headers=_pairs(raw_headers),
            body=bytes(body),
        )


def _pairs(raw: Iterable[Any]) -> tuple[tuple[str, str], ...]:
    return tuple((str(name), str(value)) for name, value in raw)


@dataclass(frozen=True, slots=True)
class RawHttpResponse:
    """A response in the shape the host encodes.

    ``upgrade`` tells the host the same call must be replayed through
    the state-mutating entry point to take effect.
    """

    status_code: int
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    upgrade: bool | None = None

    @classmethod
    def from_response(cls, response: HttpResponse, config: AppConfig | None = None) -> RawHttpResponse:
        """Serialize *response* and add the default headers.

        ``Content-Type`` is only filled in when missing; ``X-Powered-By``
        is always set.
        """
        cfg = config or AppConfig()
        headers = dict(response.headers)
        if find_header(headers, "Content-Type") is None:
            headers["Content-Type"] = cfg.default_content_type
        existing = find_header(headers, "X-Powered-By")
        if existing is not None:
            del headers[existing]
        headers["X-Powered-By"] = cfg.powered_by
        return cls(
            status_code=response.status_code,
            headers=headers,
            body=response.body_bytes,
            upgrade=False,
        )

    def with_upgrade(self, upgrade: bool) -> RawHttpResponse:
        return replace(self, upgrade=upgrade)

    def to_dict(self) -> dict[str, Any]:
        return {
            "status_code": self.status_code,
            "headers": dict(self.headers),
            "body": self.body,
            "upgrade": self.upgrade,
        }

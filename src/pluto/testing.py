"""Async test client for pluto applications.

Sends wire requests straight through the entry points, with no host
involved, and returns the same ``RawHttpResponse`` the host would get.
"""

import json as json_module
from typing import Any

from pluto.app import App
from pluto.cors import Cors
from pluto.http.wire import RawHttpRequest, RawHttpResponse
from pluto.routing.router import Router
from pluto.server.serve import HttpServe


class TestClient:
    """In-process client for an ``App`` or a bare ``Router``.

    Requests go through the read-only entry point unless ``update=True``.
    With ``follow_upgrade=True`` the client behaves like the host: a
    read-only response flagged ``upgrade`` is replayed through the update
    entry point.

    Usage::

        client = TestClient(app, follow_upgrade=True)
        response = await client.post("/items", json={"name": "x"})
        assert response.status_code == 200
    """

    __test__ = False  # Tell pytest this is not a test class

    __slots__ = ("_cors", "follow_upgrade", "target")

    def __init__(
        self,
        target: App | Router,
        *,
        cors: Cors | None = None,
        follow_upgrade: bool = False,
    ) -> None:
        self.target = target
        self._cors = cors
        self.follow_upgrade = follow_upgrade

    async def _call(self, req: RawHttpRequest, *, update: bool) -> RawHttpResponse:
        if isinstance(self.target, App):
            if update:
                return await self.target.http_request_update(req)
            return await self.target.http_request(req)
        return await HttpServe(self.target, is_query=not update, cors=self._cors).serve(req)

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
        json: Any = None,
        update: bool = False,
    ) -> RawHttpResponse:
        """Send a request with an arbitrary method string."""
        request_headers: dict[str, str] = {}
        request_body = body or b""
        if json is not None:
            request_body = json_module.dumps(json).encode("utf-8")
            request_headers["Content-Type"] = "application/json"
        request_headers.update(headers or {})

        req = RawHttpRequest(
            method=method,
            url=url,
            headers=tuple(request_headers.items()),
            body=request_body,
        )
        response = await self._call(req, update=update)
        if not update and self.follow_upgrade and response.upgrade:
            response = await self._call(req, update=True)
        return response

    async def get(self, url: str, **kwargs: Any) -> RawHttpResponse:
        return await self.request("GET", url, **kwargs)

    async def head(self, url: str, **kwargs: Any) -> RawHttpResponse:
        return await self.request("HEAD", url, **kwargs)

    async def options(self, url: str, **kwargs: Any) -> RawHttpResponse:
        return await self.request("OPTIONS", url, **kwargs)

    async def post(self, url: str, **kwargs: Any) -> RawHttpResponse:
        return await self.request("POST", url, **kwargs)

    async def put(self, url: str, **kwargs: Any) -> RawHttpResponse:
        return await self.request("PUT", url, **kwargs)

    async def patch(self, url: str, **kwargs: Any) -> RawHttpResponse:
        return await self.request("PATCH", url, **kwargs)

    async def delete(self, url: str, **kwargs: Any) -> RawHttpResponse:
        return await self.request("DELETE", url, **kwargs)


def decode_json(response: RawHttpResponse) -> Any:
    """Parse a wire response body as JSON."""
    return json_module.loads(response.body)

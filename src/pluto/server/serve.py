"""Dispatch orchestrator — one wire request in, one wire response out.

``HttpServe`` is constructed per invocation with the current route table,
the CORS policy, and which entry point the call arrived on. ``serve()``
never raises: every failure is resolved into a well-formed response.

Each invocation ends in one of three outcomes:

- handled — a route matched and its handler ran
- pre-flight answered — an unmatched OPTIONS request was answered by the
  fallback handler or a synthetic 204
- rejected — unknown method (500), upgrade required (500), no route (404)
"""

import logging

from pluto.config import AppConfig
from pluto.cors import Cors
from pluto.errors import MalformedMethod, NoRoute, UpgradeRequired
from pluto.http.request import HttpRequest
from pluto.http.response import HttpResponse
from pluto.http.wire import RawHttpRequest, RawHttpResponse
from pluto.method import Method
from pluto.routing.handler import call_handler
from pluto.routing.route import Route
from pluto.routing.router import Router, strip_trailing_slash
from pluto.server.errors import internal_server_error, not_found_error

logger = logging.getLogger("pluto.server")


def get_path(url: str) -> str:
    """The routable path of *url*: no query string, no trailing slash.

    An empty path is reported as ``/``.
    """
    path = url.split("?", 1)[0]
    return strip_trailing_slash(path) or "/"


class HttpServe:
    """Per-invocation dispatcher.

    Usage::

        app = HttpServe(router, cors=cors, is_query=True)
        raw_response = await app.serve(raw_request)

    ``is_query`` is True on the read-only entry point. A route declared
    with ``upgrade=True`` never runs there; the caller gets a 500 whose
    wire ``upgrade`` flag asks for a replay through the update entry
    point.
    """

    __slots__ = ("config", "cors_policy", "is_query", "router")

    def __init__(
        self,
        router: Router,
        *,
        is_query: bool,
        cors: Cors | None = None,
        config: AppConfig | None = None,
    ) -> None:
        self.router = router
        self.is_query = is_query
        self.cors_policy = cors
        self.config = config or AppConfig()

    async def serve(self, req: RawHttpRequest) -> RawHttpResponse:
        """Route and execute *req*, returning the wire response."""
        try:
            method = Method.parse(req.method)
        except MalformedMethod as exc:
            logger.debug("500 %s", exc)
            return self._to_wire(internal_server_error(), upgrade=False)

        path = get_path(req.url)
        try:
            match = self.router.lookup(method, path)
        except NoRoute as exc:
            if method is Method.OPTIONS and self.router.handle_options:
                allow = self.router.allowed(path)
                if allow:
                    return await self._answer_preflight(req, path, allow)
            logger.debug("404 %s", exc)
            return self._to_wire(not_found_error(exc.message), upgrade=False)

        return await self._execute(req, match.route, path, match.params)

    async def _execute(
        self,
        req: RawHttpRequest,
        route: Route,
        path: str,
        params: dict[str, str],
    ) -> RawHttpResponse:
        """Gate on the upgrade flag, run the handler, post-process.

        Anything the handler or its response body raises, including a
        JSON body that cannot be encoded, becomes a 500.
        """
        try:
            self._check_upgrade(req, route, path)
        except UpgradeRequired as exc:
            logger.debug("500 %s", exc)
            return self._to_wire(internal_server_error(), upgrade=route.upgrade)

        request = HttpRequest.from_raw(req).with_route(path, params)
        try:
            response = await call_handler(route.handler, request)
            return self._to_wire(self._use_plugins(response), upgrade=route.upgrade)
        except Exception as exc:
            logger.exception("500 %s %s", req.method, path)
            response = self._use_plugins(self._handler_failure(exc))
            return self._to_wire(response, upgrade=route.upgrade)

    def _check_upgrade(self, req: RawHttpRequest, route: Route, path: str) -> None:
        if self.is_query and route.upgrade:
            raise UpgradeRequired(req.method, path)

    async def _answer_preflight(
        self,
        req: RawHttpRequest,
        path: str,
        allow: list[str],
    ) -> RawHttpResponse:
        """Answer an OPTIONS request that matched no route."""
        fallback = self.router.global_options
        if fallback is not None:
            return await self._execute(req, fallback, path, {})

        response = self._use_plugins(HttpResponse(status_code=204, body=""))
        allow_value = ", ".join(allow)
        if not response.has_header("Access-Control-Allow-Methods"):
            response = response.with_header("Access-Control-Allow-Methods", allow_value)
        response = response.with_header("Allow", allow_value)
        return self._to_wire(response, upgrade=False)

    def _handler_failure(self, exc: Exception) -> HttpResponse:
        response = internal_server_error()
        if self.config.debug:
            body = dict(response.body)  # type: ignore[arg-type]
            body["error"] = f"{type(exc).__name__}: {exc}"
            response = response.with_body(body)
        return response

    def _use_plugins(self, response: HttpResponse) -> HttpResponse:
        if self.cors_policy is not None:
            response = self.cors_policy.merge(response)
        return response

    def _to_wire(self, response: HttpResponse, *, upgrade: bool) -> RawHttpResponse:
        return RawHttpResponse.from_response(response, self.config).with_upgrade(upgrade)

"""Pluto application — the host-facing bootstrap.

Owns the route table holder and exposes the two entry points the host
calls: ``http_request`` (read-only) and ``http_request_update``
(state-mutating). ``post_upgrade`` rebuilds the table after a version
transition.
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from pluto.config import AppConfig
from pluto.cors import Cors
from pluto.http.wire import RawHttpRequest, RawHttpResponse
from pluto.routing.router import Router
from pluto.server.holder import RouterHolder
from pluto.server.serve import HttpServe
from pluto.static import use_static_files

logger = logging.getLogger("pluto.app")


class App:
    """The pluto application.

    *setup* builds a fresh ``Router``; it runs once at construction and
    again on every ``post_upgrade()``. A conflicting registration inside
    *setup* raises at construction time, before any request is served::

        def setup() -> Router:
            router = Router()
            router.get("/", hello)
            router.post("/items", create_item, upgrade=True)
            return router

        app = App(setup, cors=Cors().any_origin())

        # host glue
        async def http_request(req):
            return await app.http_request(req)

        async def http_request_update(req):
            return await app.http_request_update(req)

    Thread safety:
        Dispatches read the installed table without locking. Rebuilds
        construct the new table off to the side and swap it in through
        ``RouterHolder``.
    """

    __slots__ = ("_holder", "_setup", "config", "cors")

    def __init__(
        self,
        setup: Callable[[], Router],
        *,
        cors: Cors | None = None,
        config: AppConfig | None = None,
    ) -> None:
        self.config: AppConfig = config or AppConfig()
        self.cors: Cors | None = cors
        self._setup = setup
        self._holder = RouterHolder()
        self.post_upgrade()

    # -- Lifecycle --

    def _build(self) -> Router:
        router = self._setup()
        if self.config.static_dir is not None:
            use_static_files(router, self.config.static_dir, self.config.static_url)
        return router

    def post_upgrade(self) -> None:
        """Rebuild the route table and install it atomically."""
        version = self._holder.rebuild(self._build)
        logger.debug("post_upgrade complete, route table v%d", version)

    @property
    def router(self) -> Router:
        """The currently installed (frozen) route table."""
        return self._holder.current()

    @property
    def version(self) -> int:
        return self._holder.version

    # -- Entry points --

    def server(self, *, is_query: bool) -> HttpServe:
        """A dispatcher bound to the current table snapshot."""
        return HttpServe(
            self._holder.current(),
            is_query=is_query,
            cors=self.cors,
            config=self.config,
        )

    async def http_request(self, req: RawHttpRequest | Mapping[str, Any]) -> RawHttpResponse:
        """Read-only entry point."""
        return await self.server(is_query=True).serve(_coerce(req))

    async def http_request_update(self, req: RawHttpRequest | Mapping[str, Any]) -> RawHttpResponse:
        """State-mutating entry point."""
        return await self.server(is_query=False).serve(_coerce(req))


def _coerce(req: RawHttpRequest | Mapping[str, Any]) -> RawHttpRequest:
    if isinstance(req, RawHttpRequest):
        return req
    return RawHttpRequest.from_dict(req)

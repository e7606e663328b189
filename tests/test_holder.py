"""Tests for pluto.server.holder — the swappable route table."""

import threading

import pytest

from pluto.http.response import HttpResponse
from pluto.routing.router import Router
from pluto.server.holder import RouterHolder


def _router(body: str = "ok") -> Router:
    return Router().get("/", lambda req: HttpResponse(body=body))


class TestRouterHolder:
    def test_empty_holder(self) -> None:
        holder = RouterHolder()
        assert holder.version == 0
        with pytest.raises(RuntimeError, match="No route table"):
            holder.current()

    def test_install_freezes_and_bumps_version(self) -> None:
        holder = RouterHolder()
        router = _router()
        assert holder.install(router) == 1
        assert router.frozen
        assert holder.current() is router

    def test_constructor_installs(self) -> None:
        router = _router()
        holder = RouterHolder(router)
        assert holder.version == 1
        assert holder.current() is router

    def test_rebuild_replaces_wholesale(self) -> None:
        holder = RouterHolder(_router("a"))
        old = holder.current()
        holder.rebuild(lambda: _router("b"))
        assert holder.version == 2
        assert holder.current() is not old
        assert old.frozen

    def test_rebuild_failure_keeps_current(self) -> None:
        holder = RouterHolder(_router())
        current = holder.current()

        def broken() -> Router:
            raise ValueError("setup failed")

        with pytest.raises(ValueError, match="setup failed"):
            holder.rebuild(broken)
        assert holder.current() is current
        assert holder.version == 1

    def test_concurrent_installs_count_every_swap(self) -> None:
        holder = RouterHolder()

        def worker() -> None:
            for _ in range(50):
                holder.install(_router())

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert holder.version == 200

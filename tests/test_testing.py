"""Tests for pluto.testing — the in-process client."""

from pluto.app import App
from pluto.cors import Cors
from pluto.http.request import HttpRequest
from pluto.http.response import HttpResponse
from pluto.routing.router import Router
from pluto.testing import TestClient, decode_json


def _counter_app() -> tuple[App, dict[str, int]]:
    state = {"count": 0}

    def increment(req: HttpRequest) -> HttpResponse:
        state["count"] += 1
        return HttpResponse.json({"count": state["count"]})

    def setup() -> Router:
        return Router().post("/counter", increment, upgrade=True)

    return App(setup), state


class TestClientRequests:
    async def test_json_body_sets_content_type(self) -> None:
        async def echo(req: HttpRequest) -> HttpResponse:
            return HttpResponse.json({"type": req.content_type, "body": req.json()})

        client = TestClient(Router().post("/echo", echo))
        response = await client.post("/echo", json={"a": 1})
        assert decode_json(response) == {"type": "application/json", "body": {"a": 1}}

    async def test_explicit_headers_win(self) -> None:
        client = TestClient(Router().get("/", lambda req: HttpResponse(body=req.headers.get("x-token", ""))))
        response = await client.get("/", headers={"X-Token": "abc"})
        assert response.body == b"abc"

    async def test_router_with_cors(self) -> None:
        client = TestClient(Router().get("/", lambda req: HttpResponse()), cors=Cors().any_origin())
        response = await client.get("/")
        assert response.headers["Access-Control-Allow-Origin"] == "*"


class TestUpgrade:
    async def test_without_follow_returns_upgrade_flag(self) -> None:
        app, state = _counter_app()
        response = await TestClient(app).post("/counter")
        assert response.status_code == 500
        assert response.upgrade is True
        assert state["count"] == 0

    async def test_follow_upgrade_replays_as_update(self) -> None:
        app, state = _counter_app()
        response = await TestClient(app, follow_upgrade=True).post("/counter")
        assert response.status_code == 200
        assert decode_json(response) == {"count": 1}
        assert state["count"] == 1

    async def test_explicit_update(self) -> None:
        app, state = _counter_app()
        response = await TestClient(app).post("/counter", update=True)
        assert response.status_code == 200
        assert state["count"] == 1

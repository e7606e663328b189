"""Pluto — HTTP routing and dispatch for query/update entry points.

One handler table serves two entry points: a read-only ("query") call
and a state-mutating ("update") call. Routes declared with
``upgrade=True`` only run on the update call; on the query call the
response asks the host to replay the request.

Basic usage::

    from pluto import App, HttpResponse, Router

    def setup() -> Router:
        router = Router()
        router.get("/", lambda req: HttpResponse.json({"message": "Hello World"}))
        return router

    app = App(setup)
    response = await app.http_request({"method": "GET", "url": "/", "headers": [], "body": b""})

Views (kida templates)::

    from pluto.views import create_environment, render_view
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "BodyValidationError",
    "ConfigurationError",
    "Cors",
    "HttpRequest",
    "HttpResponse",
    "HttpServe",
    "MalformedMethod",
    "Method",
    "NoRoute",
    "PlutoError",
    "RawHttpRequest",
    "RawHttpResponse",
    "ResponseError",
    "RouteConflict",
    "Router",
    "RouterHolder",
    "UpgradeRequired",
    "bad_request_error",
    "internal_server_error",
    "not_found_error",
    "use_static_files",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import pluto`` fast while providing a clean top-level API.
    """
    if name == "App":
        from pluto.app import App

        return App

    if name == "AppConfig":
        from pluto.config import AppConfig

        return AppConfig

    if name == "Cors":
        from pluto.cors import Cors

        return Cors

    if name == "Method":
        from pluto.method import Method

        return Method

    if name == "Router":
        from pluto.routing.router import Router

        return Router

    if name == "HttpRequest":
        from pluto.http.request import HttpRequest

        return HttpRequest

    if name == "HttpResponse":
        from pluto.http.response import HttpResponse

        return HttpResponse

    if name in ("RawHttpRequest", "RawHttpResponse"):
        from pluto.http import wire as _wire

        return getattr(_wire, name)

    if name == "HttpServe":
        from pluto.server.serve import HttpServe

        return HttpServe

    if name == "RouterHolder":
        from pluto.server.holder import RouterHolder

        return RouterHolder

    if name in ("bad_request_error", "internal_server_error", "not_found_error"):
        from pluto.server import errors as _server_errors

        return getattr(_server_errors, name)

    if name == "use_static_files":
        from pluto.static import use_static_files

        return use_static_files

    if name in (
        "BodyValidationError",
        "ConfigurationError",
        "MalformedMethod",
        "NoRoute",
        "PlutoError",
        "ResponseError",
        "RouteConflict",
        "UpgradeRequired",
    ):
        from pluto import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)

"""Handler capability — the unit of application logic bound to a route.

A handler is either a callable taking the routed ``HttpRequest`` or an
object with a ``handle(request)`` method. It may be ``def`` or
``async def``. The outcome is a single ``HttpResponse``: success
responses are returned, error responses are returned too or raised
wrapped in ``ResponseError``. Both are valid HTTP responses.

Handlers are shared by every request that matches their route, so they
must not keep per-call state between invocations.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from pluto._internal.invoke import invoke
from pluto.errors import ResponseError

if TYPE_CHECKING:
    from pluto.http.request import HttpRequest
    from pluto.http.response import HttpResponse

type HandlerResult = HttpResponse | Awaitable[HttpResponse]
type HandlerFunc = Callable[[HttpRequest], HandlerResult]


@runtime_checkable
class HandlerObject(Protocol):
    """Class-based handler::

        class Echo:
            async def handle(self, request: HttpRequest) -> HttpResponse:
                return HttpResponse(body=request.body)
    """

    def handle(self, request: HttpRequest) -> HandlerResult: ...


type Handler = HandlerFunc | HandlerObject


def as_callable(handler: Handler) -> HandlerFunc:
    """Return the callable to invoke for *handler*.

    Raises ``TypeError`` for values that are neither callable nor carry
    a ``handle`` method.
    """
    if isinstance(handler, HandlerObject):
        return handler.handle
    if callable(handler):
        return handler
    msg = f"Handler must be callable or define handle(request), got {type(handler).__name__}"
    raise TypeError(msg)


async def call_handler(handler: Handler, request: HttpRequest) -> HttpResponse:
    """Run *handler* to completion and unwrap its outcome.

    ``ResponseError`` is the error channel and yields its response; any
    other exception propagates to the caller.
    """
    from pluto.http.response import HttpResponse

    try:
        result = await invoke(as_callable(handler), request)
    except ResponseError as exc:
        return exc.response

    if not isinstance(result, HttpResponse):
        msg = f"Handler returned {type(result).__name__}, expected HttpResponse"
        raise TypeError(msg)
    return result

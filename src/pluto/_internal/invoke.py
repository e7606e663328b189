"""Invoke helpers — call sync or async handlers uniformly.

A route handler is either ``def`` or ``async def``; the dispatcher
awaits both the same way::

    def health(request: HttpRequest) -> HttpResponse:
        return HttpResponse.json({"ok": True})

    async def lookup(request: HttpRequest) -> HttpResponse:
        return HttpResponse.json(await load(request.params["id"]))

    response = await invoke(health, request)
    response = await invoke(lookup, request)
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable.

    The caller resumes only after the awaited result has fully resolved.
    """
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result

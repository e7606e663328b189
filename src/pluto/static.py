"""Static files as ordinary GET routes.

Every file under a directory becomes ``GET <prefix>/<relative path>``.
Contents are read once, when the routes are registered, so the route
table stays a self-contained snapshot until the next rebuild.

Usage::

    def setup() -> Router:
        router = Router()
        router.get("/", index)
        use_static_files(router, "static")
        return router
"""

import logging
import mimetypes
from pathlib import Path
from urllib.parse import quote

from pluto.errors import ConfigurationError
from pluto.http.request import HttpRequest
from pluto.http.response import HttpResponse
from pluto.routing.router import Router

logger = logging.getLogger("pluto.routing")


class StaticFile:
    """Handler serving one file's contents."""

    __slots__ = ("_response",)

    def __init__(self, response: HttpResponse) -> None:
        self._response = response

    def handle(self, request: HttpRequest) -> HttpResponse:  # noqa: ARG002
        return self._response


def _is_text(content_type: str) -> bool:
    main, _, sub = content_type.partition("/")
    return main == "text" or sub == "json" or sub.endswith("+json")


def load_static_file(file_path: Path, *, cache_control: str | None = None) -> HttpResponse:
    """Read *file_path* into a response with its guessed ``Content-Type``.

    Text and JSON files become text bodies; everything else is sent as
    raw bytes.
    """
    content_type, _ = mimetypes.guess_type(str(file_path))
    if content_type is None:
        content_type = "application/octet-stream"

    data = file_path.read_bytes()
    body: str | bytes = data
    if _is_text(content_type):
        try:
            body = data.decode("utf-8")
        except UnicodeDecodeError:
            body = data

    headers = {"Content-Type": content_type}
    if cache_control:
        headers["Cache-Control"] = cache_control
    return HttpResponse(status_code=200, headers=headers, body=body)


def use_static_files(
    router: Router,
    directory: str | Path,
    prefix: str = "/static",
    *,
    cache_control: str | None = "public, max-age=3600",
) -> Router:
    """Register a GET route for every regular file under *directory*.

    Raises ``ConfigurationError`` if *directory* does not exist.
    """
    root = Path(directory).resolve()
    if not root.is_dir():
        msg = f"Static directory not found: {root}"
        raise ConfigurationError(msg)

    # Normalize prefix: leading slash, no trailing slash, root -> "".
    stripped = "/" + prefix.strip("/")
    base = stripped if stripped != "/" else ""

    count = 0
    for file_path in sorted(root.rglob("*")):
        if not file_path.is_file():
            continue
        relative = file_path.relative_to(root).as_posix()
        response = load_static_file(file_path, cache_control=cache_control)
        router.get(f"{base}/{quote(relative)}", StaticFile(response))
        count += 1

    logger.debug("registered %d static files from %s under %s/", count, root, base)
    return router

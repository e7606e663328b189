"""Route table with one trie per HTTP method.

Routes are registered during setup and frozen into a read-only lookup
structure before the first request is dispatched.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from urllib.parse import unquote

from pluto.errors import ConfigurationError, NoRoute, RouteConflict
from pluto.method import Method
from pluto.routing.handler import Handler, as_callable
from pluto.routing.route import PathSegment, Route, RouteMatch

logger = logging.getLogger("pluto.routing")

# A verb wrapper returns the router, or a decorator when no handler is given.
type Registration = Router | Callable[[Handler], Handler]


def parse_path(path: str) -> list[PathSegment]:
    """Parse a route pattern into segments.

    Examples::

        "/users"          -> [PathSegment("users")]
        "/users/:id"      -> [PathSegment("users"), PathSegment(":id", is_param=True, param_name="id")]
        "/"               -> []

    Literal segments are percent-decoded so they compare equal to the
    decoded segments of incoming paths.
    """
    segments: list[PathSegment] = []
    for part in path.split("/"):
        if not part:
            continue
        if part.startswith(":"):
            name = part[1:]
            if not name:
                msg = f"Parameter segment without a name in {path!r}"
                raise ConfigurationError(msg)
            segments.append(PathSegment(value=part, is_param=True, param_name=name))
        else:
            segments.append(PathSegment(value=unquote(part)))
    return segments


def split_path(path: str) -> list[str]:
    """Split a concrete request path into decoded segments.

    One leading and one trailing ``/`` are ignored. Interior empty
    segments are kept so that ``/users//42`` never matches ``/users/:id``.
    """
    path = path.removeprefix("/").removesuffix("/")
    if not path:
        return []
    return [unquote(part) for part in path.split("/")]


def strip_trailing_slash(path: str) -> str:
    """Drop one trailing ``/``; the root stays ``/``."""
    if len(path) > 1 and path.endswith("/"):
        return path[:-1]
    return path


class _TrieNode:
    """A node in one method's trie. Mutable until the router is frozen."""

    __slots__ = ("children", "param_child", "route")

    def __init__(self) -> None:
        # Static segment children: "users" -> node
        self.children: dict[str, _TrieNode] = {}
        # Single parameter child (only one parameter name per level)
        self.param_child: _ParamEdge | None = None
        # Route terminating at this node
        self.route: Route | None = None


class _ParamEdge:
    __slots__ = ("node", "param_name")

    def __init__(self, param_name: str) -> None:
        self.param_name = param_name
        self.node = _TrieNode()


def _insert(root: _TrieNode, route: Route) -> None:
    node = root
    for seg in parse_path(route.path):
        if seg.is_param:
            name = seg.param_name or ""
            if node.param_child is None:
                node.param_child = _ParamEdge(name)
            elif node.param_child.param_name != name:
                raise RouteConflict(
                    route.method,
                    route.path,
                    f"parameter ':{name}' conflicts with existing ':{node.param_child.param_name}'",
                )
            node = node.param_child.node
        else:
            node = node.children.setdefault(seg.value, _TrieNode())

    if node.route is not None:
        raise RouteConflict(
            route.method,
            route.path,
            f"already registered as {node.route.path!r}",
        )
    node.route = route


def _match(
    node: _TrieNode,
    parts: list[str],
    index: int,
    params: dict[str, str],
) -> tuple[Route, dict[str, str]] | None:
    """Recursively match path parts; literals first, then the parameter."""
    if index == len(parts):
        if node.route is not None:
            return node.route, params
        return None

    part = parts[index]

    child = node.children.get(part)
    if child is not None:
        result = _match(child, parts, index + 1, params)
        if result is not None:
            return result

    if node.param_child is not None and part:
        edge = node.param_child
        result = _match(edge.node, parts, index + 1, {**params, edge.param_name: part})
        if result is not None:
            return result

    return None


def _has_routes(node: _TrieNode) -> bool:
    if node.route is not None:
        return True
    if any(_has_routes(child) for child in node.children.values()):
        return True
    return node.param_child is not None and _has_routes(node.param_child.node)


class Router:
    """Method-indexed route table.

    Usage::

        router = Router()
        router.set_global_prefix("/api")
        router.get("/users", list_users)
        router.put("/users/:id", update_user, upgrade=True)
        match = router.lookup(Method.GET, "/api/users")

    Registration fails loudly: a pattern that is ambiguous with one
    already in the same method's trie raises ``RouteConflict``.
    """

    __slots__ = ("_frozen", "_prefix", "_trees", "global_options", "handle_options")

    def __init__(self, *, prefix: str = "", handle_options: bool = True) -> None:
        self._prefix = prefix
        self._trees: dict[Method, _TrieNode] = {}
        self._frozen = False
        self.handle_options = handle_options
        self.global_options: Route | None = None

    # -- Configuration --

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def frozen(self) -> bool:
        return self._frozen

    def set_global_prefix(self, prefix: str) -> Router:
        """Prefix applied to every pattern registered from now on."""
        self._check_not_frozen()
        self._prefix = prefix
        return self

    def set_handle_options(self, enabled: bool) -> Router:
        """Enable or disable automatic answers to unmatched OPTIONS requests."""
        self._check_not_frozen()
        self.handle_options = enabled
        return self

    def set_global_options(self, handler: Handler, *, upgrade: bool = False) -> Router:
        """Handler answering OPTIONS pre-flights that match no route."""
        self._check_not_frozen()
        as_callable(handler)
        self.global_options = Route(Method.OPTIONS, "*", handler, upgrade)
        return self

    def freeze(self) -> Router:
        """Make the table read-only. No more routes can be added."""
        self._frozen = True
        return self

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = "Cannot modify a router after it has been frozen."
            raise RuntimeError(msg)

    # -- Registration --

    def register(self, method: Method, path: str, upgrade: bool, handler: Handler) -> Router:
        """Register *handler* for *method* at *path*.

        Raises ``ConfigurationError`` if *path* does not start with ``/``
        and ``RouteConflict`` if it is ambiguous with an existing route.
        """
        self._check_not_frozen()
        if not path.startswith("/"):
            msg = f"expect path beginning with '/', found: {path!r}"
            raise ConfigurationError(msg)
        as_callable(handler)

        full_path = strip_trailing_slash(self._prefix + path)
        route = Route(method=method, path=full_path, handler=handler, upgrade=upgrade)
        _insert(self._trees.setdefault(method, _TrieNode()), route)
        logger.debug("registered %s %s (upgrade=%s)", method, full_path, upgrade)
        return self

    def route(
        self,
        method: Method,
        path: str,
        *,
        upgrade: bool = False,
    ) -> Callable[[Handler], Handler]:
        """Register a handler via decorator::

            @router.route(Method.POST, "/items", upgrade=True)
            async def create(request: HttpRequest) -> HttpResponse: ...
        """

        def decorator(func: Handler) -> Handler:
            self.register(method, path, upgrade, func)
            return func

        return decorator

    def _verb(
        self,
        method: Method,
        path: str,
        handler: Handler | None,
        upgrade: bool,
    ) -> Registration:
        """Register now, or return a decorator when *handler* is omitted."""
        if handler is None:
            return self.route(method, path, upgrade=upgrade)
        return self.register(method, path, upgrade, handler)

    def get(self, path: str, handler: Handler | None = None, *, upgrade: bool = False) -> Registration:
        return self._verb(Method.GET, path, handler, upgrade)

    def head(self, path: str, handler: Handler | None = None, *, upgrade: bool = False) -> Registration:
        return self._verb(Method.HEAD, path, handler, upgrade)

    def options(self, path: str, handler: Handler | None = None, *, upgrade: bool = False) -> Registration:
        return self._verb(Method.OPTIONS, path, handler, upgrade)

    def post(self, path: str, handler: Handler | None = None, *, upgrade: bool = False) -> Registration:
        return self._verb(Method.POST, path, handler, upgrade)

    def put(self, path: str, handler: Handler | None = None, *, upgrade: bool = False) -> Registration:
        return self._verb(Method.PUT, path, handler, upgrade)

    def patch(self, path: str, handler: Handler | None = None, *, upgrade: bool = False) -> Registration:
        return self._verb(Method.PATCH, path, handler, upgrade)

    def delete(self, path: str, handler: Handler | None = None, *, upgrade: bool = False) -> Registration:
        return self._verb(Method.DELETE, path, handler, upgrade)

    # -- Lookup --

    def lookup(self, method: Method, path: str) -> RouteMatch:
        """Resolve *method* and *path* to a route and its parameters.

        Raises ``NoRoute`` when there is no table for *method* or nothing
        in it matches. An empty *path* is looked up as ``/``.
        """
        path = path or "/"
        root = self._trees.get(method)
        if root is not None:
            result = _match(root, split_path(path), 0, {})
            if result is not None:
                route, params = result
                return RouteMatch(route=route, params=params, path=path)
        raise NoRoute(method, path)

    def allowed(self, path: str) -> list[str]:
        """Methods with a route matching *path*, plus OPTIONS if any.

        ``*`` asks for every method that has at least one route.
        """
        parts = split_path(path or "/")
        allow: list[str] = []
        for method in Method:
            if method is Method.OPTIONS:
                continue
            root = self._trees.get(method)
            if root is None:
                continue
            if path == "*":
                if _has_routes(root):
                    allow.append(method.value)
            elif _match(root, parts, 0, {}) is not None:
                allow.append(method.value)
        if allow:
            allow.append(Method.OPTIONS.value)
        return allow

    @property
    def routes(self) -> list[Route]:
        """Every registered route, grouped by method."""
        result: list[Route] = []
        for method in Method:
            root = self._trees.get(method)
            if root is not None:
                self._collect_routes(root, result)
        return result

    def _collect_routes(self, node: _TrieNode, result: list[Route]) -> None:
        if node.route is not None:
            result.append(node.route)
        for child in node.children.values():
            self._collect_routes(child, result)
        if node.param_child is not None:
            self._collect_routes(node.param_child.node, result)

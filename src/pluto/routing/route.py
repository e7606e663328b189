"""Route and RouteMatch frozen dataclasses."""

from dataclasses import dataclass

from pluto.method import Method
from pluto.routing.handler import Handler


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route path.

    Static:  ``/users``  (is_param=False)
    Param:   ``/:id``    (is_param=True, param_name="id")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None


@dataclass(frozen=True, slots=True)
class Route:
    """A registered handler record.

    ``path`` is the stored pattern (prefix applied, trailing slash
    stripped). ``upgrade`` marks a handler that may only run on the
    state-mutating entry point.
    """

    method: Method
    path: str
    handler: Handler
    upgrade: bool = False


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful lookup."""

    route: Route
    params: dict[str, str]
    path: str

    @property
    def upgrade(self) -> bool:
        return self.route.upgrade

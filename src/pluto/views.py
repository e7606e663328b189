"""HTML views rendered with kida.

Creates a kida Environment from pluto's AppConfig and turns rendered
templates into ``text/html`` responses.
"""

from typing import Any

from kida import Environment, FileSystemLoader

from pluto.config import AppConfig
from pluto.http.response import HttpResponse


def create_environment(config: AppConfig | None = None) -> Environment:
    """Create a kida Environment loading templates from ``config.template_dir``.

    Build it once, alongside the route table, and share it between
    handlers.
    """
    cfg = config or AppConfig()
    return Environment(
        loader=FileSystemLoader(str(cfg.template_dir)),
        autoescape=cfg.autoescape,
    )


def render_view(env: Environment, name: str, *, status_code: int = 200, **context: Any) -> HttpResponse:
    """Render template *name* with *context* into an HTML response::

        async def index(request: HttpRequest) -> HttpResponse:
            return render_view(env, "index.html", title="Home")
    """
    template = env.get_template(name)
    return HttpResponse(
        status_code=status_code,
        headers={"Content-Type": "text/html"},
        body=template.render(context),
    )

"""Application configuration.

AppConfig is a frozen dataclass holding the few knobs the wire layer and
the optional static/view helpers read.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(debug=True, static_dir="static")
    """

    # Wire responses
    powered_by: str = "Pluto"
    default_content_type: str = "application/json"

    # Include exception text in 500 bodies raised by handlers
    debug: bool = False

    # Static files (registered as GET routes on every table rebuild)
    static_dir: str | Path | None = None
    static_url: str = "/static"

    # Views
    template_dir: str | Path = "views"
    autoescape: bool = True

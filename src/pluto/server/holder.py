"""Versioned holder for the current route table.

The table itself is frozen and shared read-only by every dispatch; the
holder is the only mutable cell. ``install()`` swaps it wholesale under a
lock, ``current()`` is a plain attribute read.
"""

import logging
import threading
from collections.abc import Callable

from pluto.routing.router import Router

logger = logging.getLogger("pluto.server")


class RouterHolder:
    """Atomically swappable snapshot of a frozen ``Router``.

    Thread safety:
        Writers serialize on a lock so the version counter and the table
        always move together. Readers never lock: they take whatever
        snapshot is installed and keep it for the whole request.
    """

    __slots__ = ("_lock", "_router", "_version")

    def __init__(self, router: Router | None = None) -> None:
        self._lock = threading.Lock()
        self._router: Router | None = None
        self._version = 0
        if router is not None:
            self.install(router)

    def install(self, router: Router) -> int:
        """Freeze *router* and make it the current table. Returns the new version."""
        router.freeze()
        with self._lock:
            self._router = router
            self._version += 1
            version = self._version
        logger.info("route table v%d installed (%d routes)", version, len(router.routes))
        return version

    def rebuild(self, setup: Callable[[], Router]) -> int:
        """Build a fresh table with *setup* and install it.

        If *setup* raises, the current table stays in place and the
        error propagates.
        """
        return self.install(setup())

    def current(self) -> Router:
        router = self._router
        if router is None:
            msg = "No route table installed."
            raise RuntimeError(msg)
        return router

    @property
    def version(self) -> int:
        return self._version

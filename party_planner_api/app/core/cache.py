"""
Process-local cache of computed read views.

Read routes compute their payload through :meth:`ViewCache.get_or_compute`
keyed by the page path the view backs (``/``, ``/admin/services``,
``/admin/edit-service/<id>`` ...).  After a successful write the action
layer calls :meth:`ViewCache.revalidate` with the affected paths, which
drops the entries so the next read recomputes them from the database.
"""

import logging
import threading
from typing import Any, Awaitable, Callable, Dict, List

from fastapi import Request


logger = logging.getLogger(__name__)


class ViewCache:
    """Map of view path to its last computed value."""

    def __init__(self) -> None:
        self._entries: Dict[str, Any] = {}
        self._lock = threading.Lock()

    def get(self, path: str) -> Any:
        with self._lock:
            return self._entries.get(path)

    def is_cached(self, path: str) -> bool:
        with self._lock:
            return path in self._entries

    def set(self, path: str, value: Any) -> None:
        with self._lock:
            self._entries[path] = value

    async def get_or_compute(self, path: str, compute: Callable[[], Awaitable[Any]]) -> Any:
        """Return the cached view or compute, store and return it.

        Two concurrent misses may both compute; the last one stored wins.
        """
        with self._lock:
            if path in self._entries:
                return self._entries[path]
        value = await compute()
        self.set(path, value)
        return value

    def revalidate(self, *paths: str) -> List[str]:
        """Mark ``paths`` as stale and return them in the given order."""
        with self._lock:
            for path in paths:
                self._entries.pop(path, None)
        logger.debug("Revalidated views: %s", ", ".join(paths))
        return list(paths)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


def get_view_cache(request: Request) -> ViewCache:
    """FastAPI dependency returning the application's ``ViewCache``."""
    return request.app.state.view_cache

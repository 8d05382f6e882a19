"""Cache invalidation hooks for routes affected by a mutation."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

logger = logging.getLogger(__name__)

PathListener = Callable[[str], None]

_LISTENERS: list[PathListener] = []
_LOCK = threading.Lock()


def register_listener(listener: PathListener) -> None:
    with _LOCK:
        if listener not in _LISTENERS:
            _LISTENERS.append(listener)


def unregister_listener(listener: PathListener) -> None:
    with _LOCK:
        if listener in _LISTENERS:
            _LISTENERS.remove(listener)


def revalidate_path(path: str) -> None:
    """Notify listeners that cached views of ``path`` are stale."""
    with _LOCK:
        listeners = list(_LISTENERS)
    logger.debug("revalidate.path", extra={"event": "revalidate.path", "path": path})
    for listener in listeners:
        listener(path)

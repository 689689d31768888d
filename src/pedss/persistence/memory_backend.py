"""Process-local backend selected with ``PEDSS_PERSISTENCE_BACKEND=memory``."""

from __future__ import annotations

import logging

log = logging.getLogger(__name__)


class MemoryPersistenceBackend:
    """Keeps each ``pedss_*`` value in a dict; everything is lost on exit."""

    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    def save(self, key: str, data: str) -> None:
        self._values[key] = data
        log.debug("Stored %s (%d chars) in memory", key, len(data))

    def load(self, key: str) -> str:
        try:
            return self._values[key]
        except KeyError:
            raise KeyError(f"{key} has not been stored") from None

    def delete(self, key: str) -> None:
        self._values.pop(key, None)

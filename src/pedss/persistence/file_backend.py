"""File backend: one JSON file per ``pedss_*`` key in the store directory."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

log = logging.getLogger(__name__)


class FilePersistenceBackend:
    """Stores each key as a JSON file under *base_path*.

    Writes go to a temporary file that is then renamed over the target, so a
    reader never observes a partially written value.
    """

    def __init__(self, base_path: Path) -> None:
        self._base = Path(base_path)
        self._base.mkdir(parents=True, exist_ok=True)

    def _key_path(self, key: str) -> Path:
        safe_key = key.replace("/", "_").replace("\\", "_")
        if not safe_key.endswith(".json"):
            safe_key += ".json"
        return self._base / safe_key

    def save(self, key: str, data: str) -> None:
        path = self._key_path(key)
        fd, tmp_name = tempfile.mkstemp(dir=self._base, prefix=f".{path.stem}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(data)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        log.debug("Saved %s to %s", key, path)

    def load(self, key: str) -> str:
        path = self._key_path(key)
        if not path.is_file():
            raise KeyError(f"Not found: {key} (path: {path})")
        return path.read_text(encoding="utf-8")

    def delete(self, key: str) -> None:
        path = self._key_path(key)
        if path.is_file():
            path.unlink()

"""Settings and clinician profile stores.

Both are get/merge/put over a single key.  A missing record yields the
model defaults rather than an error.
"""

from __future__ import annotations

import logging
from typing import Any, Generic, Mapping, Optional, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from pedss.exceptions import SchemaError, StorageError, ValidationError
from pedss.models import Profile, Settings
from pedss.persistence import PROFILE_KEY, SETTINGS_KEY, IPersistenceBackend

log = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class _RecordStore(Generic[ModelT]):
    """One pydantic record persisted as JSON under a fixed key."""

    model: type[ModelT]
    key: str

    def __init__(self, backend: IPersistenceBackend) -> None:
        self._backend = backend

    async def get(self) -> ModelT:
        try:
            raw = self._backend.load(self.key)
        except KeyError:
            return self.model()
        except OSError as exc:
            raise StorageError(f"Failed to read {self.key}: {exc}") from exc
        try:
            return self.model.model_validate_json(raw)
        except PydanticValidationError as exc:
            raise SchemaError(f"Stored {self.key} failed validation: {exc}") from exc

    async def save(self, patch: Optional[Mapping[str, Any]] = None, **changes: Any) -> ModelT:
        """Merge *patch* into the stored record and persist the result."""
        current = await self.get()
        merged = {**current.model_dump(), **dict(patch or {}), **changes}
        try:
            updated = self.model.model_validate(merged)
        except PydanticValidationError as exc:
            fields = [".".join(str(p) for p in err["loc"]) for err in exc.errors()]
            raise ValidationError(f"Invalid {self.key} update: {exc}", fields=fields) from exc
        try:
            self._backend.save(self.key, updated.model_dump_json())
        except OSError as exc:
            raise StorageError(f"Failed to write {self.key}: {exc}") from exc
        log.info("Saved %s (%s)", self.key, ", ".join(sorted({**dict(patch or {}), **changes})))
        return updated


class SettingsStore(_RecordStore[Settings]):
    """User preference toggles."""

    model = Settings
    key = SETTINGS_KEY


class ProfileStore(_RecordStore[Profile]):
    """Clinician profile."""

    model = Profile
    key = PROFILE_KEY

"""Pluggable key-value persistence backends for assessments and preferences."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pedss.persistence.file_backend import FilePersistenceBackend
from pedss.persistence.memory_backend import MemoryPersistenceBackend
from pedss.persistence.protocols import IPersistenceBackend

if TYPE_CHECKING:
    from pedss.core.config import PersistenceConfig

# Stable keys in the local namespace.
ASSESSMENTS_KEY = "pedss_assessments"
SETTINGS_KEY = "pedss_settings"
PROFILE_KEY = "pedss_profile"
COUNTS_KEY = "pedss_assessment_counts"


def create_backend(config: PersistenceConfig) -> IPersistenceBackend:
    """Build the backend selected by ``PEDSS_PERSISTENCE_BACKEND``."""
    if config.backend == "memory":
        return MemoryPersistenceBackend()
    if config.backend == "file":
        return FilePersistenceBackend(config.store_path)
    raise ValueError(f"Unknown persistence backend: {config.backend!r}")


__all__ = [
    "IPersistenceBackend",
    "FilePersistenceBackend",
    "MemoryPersistenceBackend",
    "create_backend",
    "ASSESSMENTS_KEY",
    "SETTINGS_KEY",
    "PROFILE_KEY",
    "COUNTS_KEY",
]

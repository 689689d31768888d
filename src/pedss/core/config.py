"""Nested pydantic-settings configuration for pedss.

Each sub-config reads its own ``PEDSS_<GROUP>_*`` environment variables::

    export PEDSS_PERSISTENCE_BACKEND=memory
    export PEDSS_OBSERVABILITY_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings


class PersistenceConfig(BaseSettings):
    """Local storage configuration.

    Env vars use ``PEDSS_PERSISTENCE_`` prefix.
    """

    model_config = {"env_prefix": "PEDSS_PERSISTENCE_"}

    backend: Literal["file", "memory"] = "file"
    store_path: Path = Path("./pedss_data")


class ExportConfig(BaseSettings):
    """Export files and report footer.

    Env vars use ``PEDSS_EXPORT_`` prefix.
    """

    model_config = {"env_prefix": "PEDSS_EXPORT_"}

    directory: Path = Path("./exports")
    app_name: str = "PEDSS App"
    app_version: str = "1.0.0"
    institution: str = "AIIMS, New Delhi × IIIT Delhi"


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Env vars use ``PEDSS_OBSERVABILITY_`` prefix.  ``json_logs`` unset means
    JSON lines when stderr is not a TTY.
    """

    model_config = {"env_prefix": "PEDSS_OBSERVABILITY_"}

    log_level: str = "INFO"
    json_logs: Optional[bool] = None


class AppSettings(BaseSettings):
    """Top-level settings aggregating all sub-configs."""

    persistence: PersistenceConfig = PersistenceConfig()
    export: ExportConfig = ExportConfig()
    observability: ObservabilityConfig = ObservabilityConfig()

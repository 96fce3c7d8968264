"""Service configuration loaded from TABLEDECK_* environment variables."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class TabledeckSettings(BaseSettings):
    """Tabledeck settings.

    All fields are read from environment variables with the ``TABLEDECK_``
    prefix.  For example, ``TABLEDECK_LOG_LEVEL=DEBUG`` maps to ``log_level``.
    """

    model_config = SettingsConfigDict(
        env_prefix="TABLEDECK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # -- Logging ---------------------------------------------------------------
    log_level: str = "INFO"

    # -- Data storage ----------------------------------------------------------
    data_root: str = "./data"
    """Root directory for the workspace snapshot and its backups."""

    data_prefix: str | None = None
    """Optional namespace prefix inserted into all data paths.

    When set, all paths become ``{data_root}/{data_prefix}/...``.  Lets several
    independent workspace files share one data root.
    """

    snapshot_store: Literal["local", "s3"] = "local"

    # S3 (only when snapshot_store = "s3")
    s3_endpoint: str | None = None
    s3_bucket: str | None = None
    s3_region: str | None = None
    s3_access_key: str | None = None
    s3_secret_key: SecretStr | None = None
    s3_path_style: bool = False
    """Use path-style addressing (required by MinIO and some S3-compatible services)."""

    # -- Saving ----------------------------------------------------------------
    auto_backup_interval: int = 600
    """Minimum seconds between automatic backups taken on save.  0 disables them."""


def get_settings() -> TabledeckSettings:
    """Return a cached settings instance.

    Reads from environment variables and ``.env`` on first call, then returns
    the same object.  Call ``_get_settings_cached.cache_clear()`` in tests to
    force a re-read after overriding env vars.
    """
    return _get_settings_cached()


@lru_cache(maxsize=1)
def _get_settings_cached() -> TabledeckSettings:
    return TabledeckSettings()

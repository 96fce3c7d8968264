"""Snapshot store and archive implementations."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tabledeck.core.store.base import BackupInfo, SnapshotArchive, SnapshotStore
from tabledeck.core.store.local import LocalSnapshotArchive, LocalSnapshotStore

if TYPE_CHECKING:
    from tabledeck.core.settings import TabledeckSettings


def _s3_kwargs(settings: TabledeckSettings) -> dict:
    if not (settings.s3_endpoint and settings.s3_bucket and settings.s3_access_key and settings.s3_secret_key):
        msg = "S3 snapshot store requires TABLEDECK_S3_ENDPOINT, _BUCKET, _ACCESS_KEY and _SECRET_KEY"
        raise ValueError(msg)
    return {
        "bucket": settings.s3_bucket,
        "endpoint_url": settings.s3_endpoint,
        "access_key": settings.s3_access_key,
        "secret_key": settings.s3_secret_key.get_secret_value(),
        "prefix": settings.data_prefix,
        "region": settings.s3_region,
        "path_style": settings.s3_path_style,
    }


def create_store(settings: TabledeckSettings) -> SnapshotStore:
    """Build the configured snapshot store.  Raises ``ValueError`` on incomplete S3 config."""
    if settings.snapshot_store == "s3":
        from tabledeck.core.store.s3 import S3SnapshotStore

        return S3SnapshotStore(**_s3_kwargs(settings))
    return LocalSnapshotStore(settings.data_root, prefix=settings.data_prefix)


def create_archive(settings: TabledeckSettings) -> SnapshotArchive:
    """Build the configured backup archive.  Raises ``ValueError`` on incomplete S3 config."""
    if settings.snapshot_store == "s3":
        from tabledeck.core.store.s3 import S3SnapshotArchive

        return S3SnapshotArchive(**_s3_kwargs(settings))
    return LocalSnapshotArchive(settings.data_root, prefix=settings.data_prefix)


__all__ = [
    "BackupInfo",
    "LocalSnapshotArchive",
    "LocalSnapshotStore",
    "SnapshotArchive",
    "SnapshotStore",
    "create_archive",
    "create_store",
]

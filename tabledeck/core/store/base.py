"""Snapshot store and archive interfaces.

The command core never performs I/O.  Whoever owns the model persists it
through these two collaborators:

- ``SnapshotStore`` keeps the single, current copy of the whole model.
- ``SnapshotArchive`` keeps point-in-time backups of it.

Both are async so that local filesystem and remote (S3) backends share one
interface.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, runtime_checkable

from pydantic import BaseModel

from tabledeck.core.models import AppModel

BACKUP_PREFIX = "backup-"
BACKUP_SUFFIX = ".json"


class BackupInfo(BaseModel):
    """Archive entry metadata."""

    archive_id: str
    """Object/file name, e.g. ``backup-20250922-143012-000123.json``."""

    size: int = 0
    last_modified: datetime | None = None


@runtime_checkable
class SnapshotStore(Protocol):
    """Read/write the full-model snapshot.

    Storage layout:
        {root}/workspace.json
    """

    async def load(self) -> AppModel | None:
        """Read the snapshot.  Returns ``None`` if nothing was saved yet."""
        ...

    async def save(self, model: AppModel) -> None:
        """Replace the snapshot with ``model``."""
        ...


@runtime_checkable
class SnapshotArchive(Protocol):
    """Point-in-time backups of the model.

    Storage layout:
        {root}/backups/backup-YYYYMMDD-HHMMSS-ffffff.json
    """

    async def create(self, model: AppModel) -> BackupInfo:
        """Write a new backup of ``model``."""
        ...

    async def list(self) -> list[BackupInfo]:
        """All backups, newest first."""
        ...

    async def fetch(self, archive_id: str) -> AppModel:
        """Read one backup.  Raises ``FileNotFoundError`` if not found."""
        ...


def backup_name(now: datetime | None = None) -> str:
    """Archive id for a backup taken at ``now`` (local time)."""
    stamp = (now or datetime.now()).strftime("%Y%m%d-%H%M%S-%f")
    return f"{BACKUP_PREFIX}{stamp}{BACKUP_SUFFIX}"


def is_backup_name(name: str) -> bool:
    return name.startswith(BACKUP_PREFIX) and name.endswith(BACKUP_SUFFIX) and "/" not in name and "\\" not in name

"""Local filesystem snapshot store and archive.

Stores the model as JSON under a data root with optional namespace prefix::

    {data_root}/{prefix}/workspace.json
    {data_root}/{prefix}/backups/backup-20250922-143012-000123.json

When prefix is None, the paths collapse to::

    {data_root}/workspace.json
    {data_root}/backups/...

Uses ``anyio.to_thread.run_sync`` for non-blocking file I/O.

Writes are atomic: data is written to a temporary file in the same directory,
then renamed to the target path.  This prevents corrupt reads if the process
crashes mid-write.
"""

from __future__ import annotations

import contextlib
import os
import tempfile
from datetime import datetime
from functools import partial
from pathlib import Path

from anyio import to_thread

from tabledeck.core.models import AppModel
from tabledeck.core.store.base import BackupInfo, backup_name, is_backup_name

SNAPSHOT_FILE = "workspace.json"
BACKUPS_DIR = "backups"


def _base_dir(data_root: str | Path, prefix: str | None) -> Path:
    base = Path(data_root)
    if prefix:
        base = base / prefix
    return base


class LocalSnapshotStore:
    """Local filesystem implementation of the SnapshotStore protocol."""

    def __init__(self, data_root: str | Path, prefix: str | None = None) -> None:
        self._path = _base_dir(data_root, prefix) / SNAPSHOT_FILE

    @property
    def path(self) -> Path:
        return self._path

    async def load(self) -> AppModel | None:
        try:
            raw = await to_thread.run_sync(partial(_read_file, self._path))
        except FileNotFoundError:
            return None
        return AppModel.model_validate_json(raw)

    async def save(self, model: AppModel) -> None:
        data = model.model_dump_json(indent=2)
        await to_thread.run_sync(partial(_atomic_write, self._path, data))


class LocalSnapshotArchive:
    """Local filesystem implementation of the SnapshotArchive protocol."""

    def __init__(self, data_root: str | Path, prefix: str | None = None) -> None:
        self._dir = _base_dir(data_root, prefix) / BACKUPS_DIR

    # -- Write -----------------------------------------------------------------

    async def create(self, model: AppModel) -> BackupInfo:
        path = self._dir / backup_name()
        data = model.model_dump_json(indent=2)
        await to_thread.run_sync(partial(_atomic_write, path, data))
        return await to_thread.run_sync(partial(_stat, path))

    # -- Read ------------------------------------------------------------------

    async def list(self) -> list[BackupInfo]:
        return await to_thread.run_sync(partial(_list_backups, self._dir))

    async def fetch(self, archive_id: str) -> AppModel:
        if not is_backup_name(archive_id):
            msg = f"Backup not found: {archive_id}"
            raise FileNotFoundError(msg)
        raw = await to_thread.run_sync(partial(_read_file, self._dir / archive_id))
        return AppModel.model_validate_json(raw)


# -- Sync helpers (run in thread pool) -----------------------------------------


def _atomic_write(path: Path, data: str) -> None:
    """Write data atomically: temp file + rename.

    The temp file is created in the same directory so ``os.replace`` is
    atomic on POSIX.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(data)
        os.replace(tmp_path, path)
    except BaseException:
        # Clean up temp file on any failure.
        with contextlib.suppress(OSError):
            os.unlink(tmp_path)
        raise


def _read_file(path: Path) -> str:
    """Read file contents.  Raises ``FileNotFoundError`` if missing."""
    return path.read_text(encoding="utf-8")


def _stat(path: Path) -> BackupInfo:
    st = path.stat()
    return BackupInfo(archive_id=path.name, size=st.st_size, last_modified=datetime.fromtimestamp(st.st_mtime))


def _list_backups(directory: Path) -> list[BackupInfo]:
    if not directory.is_dir():
        return []
    infos = [_stat(p) for p in directory.iterdir() if p.is_file() and is_backup_name(p.name)]
    # Names embed the timestamp, so reverse name order is newest first.
    return sorted(infos, key=lambda b: b.archive_id, reverse=True)

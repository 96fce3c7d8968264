"""Workbench -- the single owner of the live model.

The command core is pure; something still has to hold the current model,
feed it through the executor and persist the result.  The Workbench does
that for one model, coordinating two collaborators:

- **SnapshotStore**: the current copy of the model
- **SnapshotArchive** (optional): point-in-time backups

Commands are applied strictly in call order; the Workbench is not meant to
be shared between concurrent writers.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from loguru import logger

from tabledeck.core.commands import execute, parse
from tabledeck.core.factories import make_default_model
from tabledeck.core.models import AppModel, SelectWorkspaceAction

if TYPE_CHECKING:
    from tabledeck.core.models import Action
    from tabledeck.core.store.base import BackupInfo, SnapshotArchive, SnapshotStore


class Workbench:
    """Holds the model between commands and persists it on ``save``.

    ``auto_backup_interval`` is the minimum number of seconds between
    automatic backups taken by ``save``; ``0`` disables them.
    """

    def __init__(
        self,
        store: SnapshotStore,
        archive: SnapshotArchive | None = None,
        *,
        auto_backup_interval: int = 600,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._store = store
        self._archive = archive
        self._auto_backup_interval = auto_backup_interval
        self._clock = clock
        self._model = AppModel()
        self._dirty = False
        self._last_backup_at: float | None = None

    @property
    def model(self) -> AppModel:
        return self._model

    @property
    def dirty(self) -> bool:
        """True if the model changed since it was last loaded or saved."""
        return self._dirty

    # -- Lifecycle -------------------------------------------------------------

    async def open(self) -> AppModel:
        """Load the stored model, seeding and saving a default one on first run.

        The seeded model starts with its workspace and table selected so that
        relative commands have somewhere to start.
        """
        loaded = await self._store.load()
        if loaded is None:
            logger.info("No stored workspace found, creating default model")
            seeded = make_default_model()
            loaded = execute(seeded, SelectWorkspaceAction(workspace_id=seeded.workspaces[0].id))
            await self._store.save(loaded)

        self._model = loaded
        self._dirty = False

        if self._archive is not None:
            latest = next(iter(await self._archive.list()), None)
            if latest is not None and latest.last_modified is not None:
                self._last_backup_at = latest.last_modified.timestamp()

        logger.info("Workbench opened ({} workspaces)", len(self._model.workspaces))
        return self._model

    # -- Commands --------------------------------------------------------------

    def apply(self, action: Action) -> AppModel:
        """Execute ``action`` against the current model and keep the result."""
        next_model = execute(self._model, action)
        if next_model != self._model:
            self._dirty = True
        self._model = next_model
        return next_model

    def run(self, raw: str) -> AppModel:
        """Parse and apply a raw command line."""
        return self.apply(parse(raw))

    # -- Persistence -----------------------------------------------------------

    async def save(self) -> None:
        """Persist the model, then take an automatic backup if one is due.

        A failed automatic backup is logged and does not fail the save.
        """
        await self._store.save(self._model)
        self._dirty = False
        logger.debug("Workbench saved")

        if not self._backup_due():
            return
        try:
            info = await self.backup()
        except Exception as exc:  # noqa: BLE001
            logger.warning("Auto-backup failed: {}", exc)
        else:
            logger.info("Auto-backup created: {}", info.archive_id)

    async def backup(self) -> BackupInfo:
        """Archive the current model.  Raises ``RuntimeError`` without an archive."""
        archive = self._require_archive()
        info = await archive.create(self._model)
        self._last_backup_at = self._clock()
        return info

    async def backups(self) -> list[BackupInfo]:
        return await self._require_archive().list()

    async def restore(self, archive_id: str) -> AppModel:
        """Replace the live model with a backup.  Raises ``FileNotFoundError`` if missing."""
        self._model = await self._require_archive().fetch(archive_id)
        self._dirty = True
        logger.info("Restored backup {}", archive_id)
        return self._model

    # -- Internal --------------------------------------------------------------

    def _backup_due(self) -> bool:
        if self._archive is None or self._auto_backup_interval <= 0:
            return False
        if self._last_backup_at is None:
            return True
        return self._clock() - self._last_backup_at >= self._auto_backup_interval

    def _require_archive(self) -> SnapshotArchive:
        if self._archive is None:
            msg = "No snapshot archive configured"
            raise RuntimeError(msg)
        return self._archive


"""Shared test fixtures.

Everything here runs without network or Docker.  Tests that need a real S3
endpoint are marked with ``@pytest.mark.s3`` and skipped unless configured.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from loguru import logger

from tabledeck.core.settings import _get_settings_cached


@pytest.fixture
def data_root(tmp_path, monkeypatch) -> Iterator[str]:
    """Point TABLEDECK_DATA_ROOT at a fresh temporary directory."""
    root = str(tmp_path / "data")
    monkeypatch.setenv("TABLEDECK_DATA_ROOT", root)
    monkeypatch.setenv("TABLEDECK_LOG_LEVEL", "WARNING")
    monkeypatch.delenv("TABLEDECK_DATA_PREFIX", raising=False)
    monkeypatch.delenv("TABLEDECK_SNAPSHOT_STORE", raising=False)
    _get_settings_cached.cache_clear()
    yield root
    _get_settings_cached.cache_clear()


@pytest.fixture(autouse=True)
def _reset_loguru() -> Iterator[None]:
    """Drop sinks added during a test (e.g. by the CLI) so they don't leak."""
    yield
    logger.remove()

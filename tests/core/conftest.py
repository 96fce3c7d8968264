"""Shared fixtures for core tests: a small model with stable ids."""

from __future__ import annotations

import pytest

from tabledeck.core.models import (
    AppModel,
    Column,
    ColumnKind,
    Cursor,
    NavigationState,
    Row,
    Table,
    Workspace,
)


def _build_model(**navigation: object) -> AppModel:
    """Two workspaces, four tables.

    Alpha
      1. Tasks    (Title, Status, Priority; 3 rows)
      2. Bugs
      3. Notes
    Beta
      1. Roadmap
    """
    tasks = Table(
        id="t-tasks",
        name="Tasks",
        columns=[
            # Declared out of order on purpose: display_order decides position.
            Column(id="c-priority", name="Priority", kind=ColumnKind.SELECT, options=["Low", "High"], display_order=2),
            Column(id="c-title", name="Title", display_order=0),
            Column(id="c-status", name="Status", kind=ColumnKind.SELECT, options=["Todo", "Doing", "Done"], display_order=1),
        ],
        rows=[
            Row(id="r-1", values={"c-title": "Write docs", "c-status": "Todo"}),
            Row(id="r-2", values={"c-title": "Fix bug", "c-status": "Done", "c-priority": "High"}),
            Row(id="r-3", values={"c-title": "Triage"}),
        ],
        column_widths={"c-title": 240},
    )
    alpha = Workspace(
        id="ws-alpha",
        name="Alpha",
        tables=[tasks, Table(id="t-bugs", name="Bugs"), Table(id="t-notes", name="Notes")],
    )
    beta = Workspace(id="ws-beta", name="Beta", tables=[Table(id="t-roadmap", name="Roadmap")])
    return AppModel(workspaces=[alpha, beta], navigation=NavigationState(**navigation))


def _at(model: AppModel, *, ws: str | None = None, table: str | None = None, row: int | None = None, col: int | None = None) -> AppModel:
    """Copy of ``model`` positioned at the given coordinates."""
    positioned = model.model_copy(deep=True)
    positioned.navigation.current_workspace_id = ws
    positioned.navigation.current_table_id = table
    positioned.navigation.cursor = Cursor(row=row, col=col)
    return positioned


@pytest.fixture
def model() -> AppModel:
    return _build_model()


@pytest.fixture
def build_model():
    """Factory for fresh copies of the sample model."""
    return _build_model


@pytest.fixture
def at():
    """Factory: ``at(model, ws=..., table=..., row=..., col=...)``."""
    return _at


@pytest.fixture
def in_tasks(model: AppModel) -> AppModel:
    """Positioned at Alpha:Tasks with no cursor."""
    return _at(model, ws="ws-alpha", table="t-tasks")

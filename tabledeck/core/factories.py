"""Entity factories.

The command core only selects among existing entities; everything that
creates a workspace, table, column or row goes through these helpers so that
ids are generated in one place.
"""

from __future__ import annotations

import uuid

from tabledeck.core.models import AppModel, Column, ColumnKind, Row, Table, Workspace


def new_id() -> str:
    return uuid.uuid4().hex


def make_column(
    name: str,
    kind: ColumnKind = ColumnKind.TEXT,
    *,
    options: list[str] | None = None,
    display_order: int = 0,
) -> Column:
    return Column(
        id=new_id(),
        name=name,
        kind=kind,
        options=list(options or []) if kind == ColumnKind.SELECT else [],
        display_order=display_order,
    )


def make_row(values: dict | None = None) -> Row:
    return Row(id=new_id(), values=dict(values or {}))


def make_table(name: str = "Tasks", *, seed: bool = False) -> Table:
    """Create a table.

    With ``seed=True`` the table gets the default task columns (Title,
    Status, Priority) and a single sample row; otherwise it is empty.
    """
    if not seed:
        return Table(id=new_id(), name=name)

    title = make_column("Title", display_order=0)
    status = make_column("Status", ColumnKind.SELECT, options=["Todo", "Doing", "Done"], display_order=1)
    priority = make_column("Priority", ColumnKind.SELECT, options=["Low", "Med", "High"], display_order=2)
    sample = make_row({title.id: "Sample task", status.id: "Todo", priority.id: "Med"})
    return Table(id=new_id(), name=name, columns=[title, status, priority], rows=[sample])


def make_workspace(name: str = "My Workspace", *, seed: bool = False) -> Workspace:
    """Create a workspace, optionally holding one seeded ``Tasks`` table."""
    tables = [make_table(seed=True)] if seed else []
    return Workspace(id=new_id(), name=name, tables=tables)


def make_default_model() -> AppModel:
    """First-run model: one seeded workspace, nothing selected."""
    return AppModel(workspaces=[make_workspace(seed=True)])

"""Workspace data model.

A workspace owns an ordered list of tables; a table owns its columns and
rows.  The whole tree, together with the navigation state and settings, forms
one ``AppModel`` snapshot that is persisted and restored as a unit.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from tabledeck.core.models.enums import ColumnKind, ViewMode

# -- Entities ----------------------------------------------------------------


class Column(BaseModel):
    """Column definition.  ``id`` is stable across renames and reorders."""

    id: str
    name: str
    kind: ColumnKind = ColumnKind.TEXT
    options: list[str] = Field(default_factory=list, description="Choices, only meaningful for kind=select")
    display_order: int = 0


class Row(BaseModel):
    id: str
    values: dict[str, Any] = Field(default_factory=dict, description="Cell values keyed by column id")


class Table(BaseModel):
    id: str
    name: str
    columns: list[Column] = Field(default_factory=list)
    rows: list[Row] = Field(default_factory=list)
    column_widths: dict[str, int] = Field(default_factory=dict, description="Pixel widths keyed by column id")


class Workspace(BaseModel):
    id: str
    name: str
    tables: list[Table] = Field(default_factory=list)


# -- Navigation --------------------------------------------------------------


class Cursor(BaseModel):
    """Positional (1-based) pointer into the current table.

    ``row`` and ``col`` are independent coordinates; neither is checked
    against the table's actual size when set.
    """

    row: int | None = None
    col: int | None = None


class NavigationState(BaseModel):
    current_workspace_id: str | None = None
    current_table_id: str | None = None
    cursor: Cursor = Field(default_factory=Cursor)
    view: ViewMode = ViewMode.TABLE
    group_by_column_id: str | None = None


# -- Snapshot ----------------------------------------------------------------


class AppSettings(BaseModel):
    is_sidebar_open: bool = True
    command_separator: Literal["\\", "|", "/"] = "\\"


class AppModel(BaseModel):
    """Full persisted snapshot: entity tree + navigation + settings."""

    workspaces: list[Workspace] = Field(default_factory=list)
    navigation: NavigationState = Field(default_factory=NavigationState)
    settings: AppSettings = Field(default_factory=AppSettings)

    def find_workspace(self, workspace_id: str | None) -> Workspace | None:
        if workspace_id is None:
            return None
        return next((w for w in self.workspaces if w.id == workspace_id), None)

    def find_table(self, workspace_id: str | None, table_id: str | None) -> Table | None:
        workspace = self.find_workspace(workspace_id)
        if workspace is None or table_id is None:
            return None
        return next((t for t in workspace.tables if t.id == table_id), None)

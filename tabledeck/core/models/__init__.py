"""Data models for the core."""

from tabledeck.core.models.actions import (
    Action,
    ActionAdapter,
    AddColumnAction,
    AddRowAction,
    AddTableAction,
    AddWorkspaceAction,
    ChangeViewAction,
    EditCellAction,
    PathFragment,
    RemoveColumnAction,
    RemoveRowAction,
    RemoveTableAction,
    RemoveWorkspaceAction,
    ResizeColumnAction,
    SelectAction,
    SelectTableAction,
    SelectWorkspaceAction,
    ToggleSidebarAction,
    UnknownAction,
)
from tabledeck.core.models.enums import ColumnKind, PathKind, ViewMode
from tabledeck.core.models.workspace import (
    AppModel,
    AppSettings,
    Column,
    Cursor,
    NavigationState,
    Row,
    Table,
    Workspace,
)

__all__ = [
    # Actions
    "Action",
    "ActionAdapter",
    # Enums
    "AddColumnAction",
    "AddRowAction",
    "AddTableAction",
    "AddWorkspaceAction",
    # Snapshot
    "AppModel",
    "AppSettings",
    "ChangeViewAction",
    # Entities
    "Column",
    "ColumnKind",
    # Navigation
    "Cursor",
    "EditCellAction",
    "NavigationState",
    "PathFragment",
    "PathKind",
    "RemoveColumnAction",
    "RemoveRowAction",
    "RemoveTableAction",
    "RemoveWorkspaceAction",
    "ResizeColumnAction",
    "Row",
    "SelectAction",
    "SelectTableAction",
    "SelectWorkspaceAction",
    "Table",
    "ToggleSidebarAction",
    "UnknownAction",
    "ViewMode",
    "Workspace",
]

"""Structural (CRUD) handlers.

Each handler mutates the private working copy handed in by the executor.
Table-level handlers act on the currently selected table and silently do
nothing when no table is selected or an id does not exist.

Removing a workspace or table that a navigation pointer references
collapses the pointer to the first remaining sibling (or unset) and resets
the cursor.
"""

from __future__ import annotations

from tabledeck.core.factories import make_column, make_row, make_table, make_workspace
from tabledeck.core.models import (
    AddColumnAction,
    AddTableAction,
    AddWorkspaceAction,
    AppModel,
    Cursor,
    EditCellAction,
    RemoveColumnAction,
    RemoveRowAction,
    RemoveTableAction,
    RemoveWorkspaceAction,
    ResizeColumnAction,
    Table,
)

MIN_COLUMN_WIDTH = 80

# -- Workspaces --------------------------------------------------------------


def add_workspace(model: AppModel, action: AddWorkspaceAction) -> None:
    model.workspaces.append(make_workspace(action.name, seed=action.seed))


def remove_workspace(model: AppModel, action: RemoveWorkspaceAction) -> None:
    if model.find_workspace(action.workspace_id) is None:
        return
    model.workspaces = [w for w in model.workspaces if w.id != action.workspace_id]

    nav = model.navigation
    if nav.current_workspace_id != action.workspace_id:
        return
    first = model.workspaces[0] if model.workspaces else None
    nav.current_workspace_id = first.id if first else None
    nav.current_table_id = first.tables[0].id if first and first.tables else None
    nav.cursor = Cursor()


# -- Tables ------------------------------------------------------------------


def add_table(model: AppModel, action: AddTableAction) -> None:
    """Append an empty table and select it."""
    workspace = model.find_workspace(action.workspace_id or model.navigation.current_workspace_id)
    if workspace is None:
        return
    table = make_table(action.name)
    workspace.tables.append(table)

    nav = model.navigation
    nav.current_workspace_id = workspace.id
    nav.current_table_id = table.id
    nav.cursor = Cursor()


def remove_table(model: AppModel, action: RemoveTableAction) -> None:
    workspace = model.find_workspace(action.workspace_id)
    if workspace is None or model.find_table(workspace.id, action.table_id) is None:
        return
    workspace.tables = [t for t in workspace.tables if t.id != action.table_id]

    nav = model.navigation
    if nav.current_table_id != action.table_id:
        return
    nav.current_table_id = workspace.tables[0].id if workspace.tables else None
    nav.cursor = Cursor()


# -- Rows --------------------------------------------------------------------


def add_row(model: AppModel) -> None:
    table = _current_table(model)
    if table is not None:
        table.rows.append(make_row())


def remove_row(model: AppModel, action: RemoveRowAction) -> None:
    table = _current_table(model)
    if table is not None:
        table.rows = [r for r in table.rows if r.id != action.row_id]


def edit_cell(model: AppModel, action: EditCellAction) -> None:
    """Set a cell value.  ``None`` clears the cell."""
    table = _current_table(model)
    if table is None or not _has_column(table, action.column_id):
        return
    row = next((r for r in table.rows if r.id == action.row_id), None)
    if row is None:
        return
    if action.value is None:
        row.values.pop(action.column_id, None)
    else:
        row.values[action.column_id] = action.value


# -- Columns -----------------------------------------------------------------


def add_column(model: AppModel, action: AddColumnAction) -> None:
    table = _current_table(model)
    if table is None:
        return
    order = max((c.display_order for c in table.columns), default=-1) + 1
    table.columns.append(make_column(action.name, action.column_kind, options=action.options, display_order=order))


def remove_column(model: AppModel, action: RemoveColumnAction) -> None:
    """Drop a column together with its cell values and width."""
    table = _current_table(model)
    if table is None or not _has_column(table, action.column_id):
        return
    table.columns = [c for c in table.columns if c.id != action.column_id]
    for row in table.rows:
        row.values.pop(action.column_id, None)
    table.column_widths.pop(action.column_id, None)

    if model.navigation.group_by_column_id == action.column_id:
        model.navigation.group_by_column_id = None


def resize_column(model: AppModel, action: ResizeColumnAction) -> None:
    table = _current_table(model)
    if table is None or not _has_column(table, action.column_id):
        return
    table.column_widths[action.column_id] = max(MIN_COLUMN_WIDTH, action.width)


# -- Helpers -----------------------------------------------------------------


def _current_table(model: AppModel) -> Table | None:
    nav = model.navigation
    return model.find_table(nav.current_workspace_id, nav.current_table_id)


def _has_column(table: Table, column_id: str) -> bool:
    return any(c.id == column_id for c in table.columns)

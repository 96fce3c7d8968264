"""Action executor -- the single state-transition function.

``execute(model, action)`` returns a new, fully independent ``AppModel``
reflecting the action.  The input model is never mutated, and no action
raises: an action that cannot be applied yields an unchanged copy.
"""

from __future__ import annotations

from typing import assert_never

from loguru import logger

from tabledeck.core.commands import structure
from tabledeck.core.commands.resolver import find_column, resolve
from tabledeck.core.commands.tokenizer import classify_path
from tabledeck.core.models import (
    Action,
    AddColumnAction,
    AddRowAction,
    AddTableAction,
    AddWorkspaceAction,
    AppModel,
    ChangeViewAction,
    Cursor,
    EditCellAction,
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
    ViewMode,
)


def execute(model: AppModel, action: Action) -> AppModel:
    """Apply ``action`` to a deep copy of ``model`` and return the copy."""
    next_model = model.model_copy(deep=True)

    match action:
        case SelectAction(path=path):
            # An empty path resolves to the root and clears everything.
            next_model.navigation = resolve(next_model, classify_path(path))
        case ChangeViewAction():
            _change_view(next_model, action)
        case SelectWorkspaceAction(workspace_id=workspace_id):
            _select_workspace(next_model, workspace_id)
        case SelectTableAction(workspace_id=workspace_id, table_id=table_id):
            _select_table(next_model, workspace_id, table_id)
        case UnknownAction():
            pass
        case AddWorkspaceAction():
            structure.add_workspace(next_model, action)
        case RemoveWorkspaceAction():
            structure.remove_workspace(next_model, action)
        case AddTableAction():
            structure.add_table(next_model, action)
        case RemoveTableAction():
            structure.remove_table(next_model, action)
        case AddRowAction():
            structure.add_row(next_model)
        case RemoveRowAction():
            structure.remove_row(next_model, action)
        case AddColumnAction():
            structure.add_column(next_model, action)
        case RemoveColumnAction():
            structure.remove_column(next_model, action)
        case EditCellAction():
            structure.edit_cell(next_model, action)
        case ResizeColumnAction():
            structure.resize_column(next_model, action)
        case ToggleSidebarAction():
            next_model.settings.is_sidebar_open = not next_model.settings.is_sidebar_open
        case _:
            assert_never(action)

    return next_model


# ---------------------------------------------------------------------------
# Navigation handlers
# ---------------------------------------------------------------------------


def _change_view(model: AppModel, action: ChangeViewAction) -> None:
    """Apply the optional path, switch the view, then resolve the group-by.

    The group-by token is resolved against the table that is current *after*
    the path was applied.  A token that matches no column keeps the previous
    group-by column.
    """
    if action.path and action.path.strip():
        model.navigation = resolve(model, classify_path(action.path))

    nav = model.navigation
    nav.view = action.mode

    if action.mode != ViewMode.KANBAN or not action.group_by:
        return
    table = model.find_table(nav.current_workspace_id, nav.current_table_id)
    column = find_column(table, action.group_by) if table is not None else None
    if column is None:
        logger.debug("Group-by {!r} matches no column, keeping {}", action.group_by, nav.group_by_column_id)
        return
    nav.group_by_column_id = column.id


def _select_workspace(model: AppModel, workspace_id: str) -> None:
    """Select a workspace together with its first table."""
    workspace = model.find_workspace(workspace_id)
    if workspace is None:
        return
    nav = model.navigation
    nav.current_workspace_id = workspace.id
    nav.current_table_id = workspace.tables[0].id if workspace.tables else None
    nav.cursor = Cursor()


def _select_table(model: AppModel, workspace_id: str, table_id: str) -> None:
    if model.find_table(workspace_id, table_id) is None:
        return
    nav = model.navigation
    nav.current_workspace_id = workspace_id
    nav.current_table_id = table_id
    nav.cursor = Cursor()

"""Executor action variants.

Every state change goes through one of these models.  They form a closed
tagged union (``Action``) discriminated on ``kind``, so a serialized action
can be validated back into the right variant with ``ActionAdapter``.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, TypeAdapter

from tabledeck.core.models.enums import ColumnKind, PathKind, ViewMode

# -- Path fragments ----------------------------------------------------------


class PathFragment(BaseModel):
    """A classified, unresolved path.

    Attributes
    ----------
    kind:
        ``root`` (empty path), ``absolute`` (``ws[:table[:row[:col]]]``),
        ``ascend`` (colons only) or ``descend`` (``:a[:b[:c]]``).
    segments:
        Raw tokens, passed through verbatim.  Empty for root and ascend, and
        for a malformed path with an empty inner segment.
    depth:
        Number of levels to climb (ascend only).
    """

    kind: PathKind
    segments: list[str] = Field(default_factory=list)
    depth: int = 0


# -- Navigation --------------------------------------------------------------


class SelectAction(BaseModel):
    kind: Literal["select"] = "select"
    path: str | None = None


class ChangeViewAction(BaseModel):
    kind: Literal["change_view"] = "change_view"
    mode: ViewMode = ViewMode.TABLE
    path: str | None = None
    group_by: str | None = Field(default=None, description="Column name or 1-based position (kanban only)")


class SelectWorkspaceAction(BaseModel):
    kind: Literal["select_workspace"] = "select_workspace"
    workspace_id: str


class SelectTableAction(BaseModel):
    kind: Literal["select_table"] = "select_table"
    workspace_id: str
    table_id: str


class UnknownAction(BaseModel):
    kind: Literal["unknown"] = "unknown"
    raw: str = ""


# -- Structure ---------------------------------------------------------------


class AddWorkspaceAction(BaseModel):
    kind: Literal["add_workspace"] = "add_workspace"
    name: str = "New Workspace"
    seed: bool = False


class RemoveWorkspaceAction(BaseModel):
    kind: Literal["remove_workspace"] = "remove_workspace"
    workspace_id: str


class AddTableAction(BaseModel):
    kind: Literal["add_table"] = "add_table"
    workspace_id: str | None = Field(default=None, description="Defaults to the current workspace")
    name: str = "New Table"


class RemoveTableAction(BaseModel):
    kind: Literal["remove_table"] = "remove_table"
    workspace_id: str
    table_id: str


class AddRowAction(BaseModel):
    kind: Literal["add_row"] = "add_row"


class RemoveRowAction(BaseModel):
    kind: Literal["remove_row"] = "remove_row"
    row_id: str


class AddColumnAction(BaseModel):
    kind: Literal["add_column"] = "add_column"
    name: str
    column_kind: ColumnKind = ColumnKind.TEXT
    options: list[str] = Field(default_factory=list)


class RemoveColumnAction(BaseModel):
    kind: Literal["remove_column"] = "remove_column"
    column_id: str


class EditCellAction(BaseModel):
    kind: Literal["edit_cell"] = "edit_cell"
    row_id: str
    column_id: str
    value: Any = None


class ResizeColumnAction(BaseModel):
    kind: Literal["resize_column"] = "resize_column"
    column_id: str
    width: int


# -- Settings ----------------------------------------------------------------


class ToggleSidebarAction(BaseModel):
    kind: Literal["toggle_sidebar"] = "toggle_sidebar"


Action = Annotated[
    SelectAction
    | ChangeViewAction
    | SelectWorkspaceAction
    | SelectTableAction
    | UnknownAction
    | AddWorkspaceAction
    | RemoveWorkspaceAction
    | AddTableAction
    | RemoveTableAction
    | AddRowAction
    | RemoveRowAction
    | AddColumnAction
    | RemoveColumnAction
    | EditCellAction
    | ResizeColumnAction
    | ToggleSidebarAction,
    Field(discriminator="kind"),
]

ActionAdapter: TypeAdapter[Action] = TypeAdapter(Action)

"""Read-only helpers over an ``AppModel`` for display layers."""

from __future__ import annotations

from pydantic import BaseModel, Field

from tabledeck.core.models import AppModel, Column, ColumnKind, Row, Table, Workspace

NO_VALUE = "(No value)"


class KanbanLane(BaseModel):
    title: str
    rows: list[Row] = Field(default_factory=list)


def current_workspace(model: AppModel) -> Workspace | None:
    return model.find_workspace(model.navigation.current_workspace_id)


def current_table(model: AppModel) -> Table | None:
    nav = model.navigation
    return model.find_table(nav.current_workspace_id, nav.current_table_id)


def ordered_columns(table: Table) -> list[Column]:
    return sorted(table.columns, key=lambda c: c.display_order)


def path_label(model: AppModel) -> str:
    """Compact address ``ws : table : row : col`` with ``-`` for unset levels."""
    workspace = current_workspace(model)
    table = current_table(model)
    cursor = model.navigation.cursor
    parts = [
        workspace.name if workspace else None,
        table.name if table else None,
        cursor.row,
        cursor.col,
    ]
    return " : ".join("-" if p is None else str(p) for p in parts)


def kanban_lanes(table: Table, column_id: str | None) -> list[KanbanLane]:
    """Partition ``table.rows`` into lanes by the values of one column.

    Lane order: the column's select options, then any other values in the
    order they first appear, then ``(No value)`` if some row has an empty
    cell.  Without a usable column, or with nothing to show, a single
    ``(No value)`` lane holds every row.
    """
    column = next((c for c in table.columns if c.id == column_id), None)
    if column is None:
        return [KanbanLane(title=NO_VALUE, rows=list(table.rows))]

    titles: list[str] = []
    if column.kind == ColumnKind.SELECT:
        titles.extend(o for o in column.options if o and o not in titles)

    has_empty = False
    for row in table.rows:
        key = _lane_key(row, column.id)
        if key is None:
            has_empty = True
        elif key not in titles:
            titles.append(key)
    if has_empty or not titles:
        titles.append(NO_VALUE)

    lanes = {title: KanbanLane(title=title) for title in titles}
    for row in table.rows:
        lanes[_lane_key(row, column.id) or NO_VALUE].rows.append(row)
    return list(lanes.values())


def _lane_key(row: Row, column_id: str) -> str | None:
    raw = row.values.get(column_id)
    if raw is None or str(raw).strip() == "":
        return None
    return str(raw)

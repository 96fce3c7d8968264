"""Path resolver -- maps a classified path onto a new navigation state.

Addressing is four levels deep (workspace -> table -> row -> column).
Workspaces and tables are matched by case-insensitive name or by 1-based
position; rows and columns are plain 1-based cursor coordinates.

Resolution is fail-closed: whenever a step cannot be resolved, the state
reached *before* that step is returned.  The one deliberate partial commit
is the absolute form ``ws:table``, where a resolved workspace is kept even if
the table does not resolve.

Resolution order for absolute paths:

1. A single token while a workspace is selected: workspace by exact name
   first, then table (name or index) in the current workspace.
2. Otherwise the first token is a workspace (name or index); a miss aborts.
3. The second token is a table of that workspace; a miss keeps the
   workspace selected with no table.
4. The third and fourth tokens set ``cursor.row`` / ``cursor.col`` when they
   are positive integers and are ignored otherwise.

Relative paths are documented on ``_ascend`` and ``_descend``.
"""

from __future__ import annotations

import re
from typing import TypeVar

from loguru import logger

from tabledeck.core.models import (
    AppModel,
    Column,
    Cursor,
    NavigationState,
    PathFragment,
    PathKind,
    Table,
    Workspace,
)

T = TypeVar("T")

_DIGITS_RE = re.compile(r"^[0-9]+$")

PLACEHOLDER = "_"
"""Segment meaning "keep this level", only valid in ``:_:col``."""


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def resolve(model: AppModel, fragment: PathFragment) -> NavigationState:
    """Resolve ``fragment`` against ``model.navigation``.

    Always returns a fresh ``NavigationState``; the model is never touched.
    A root fragment clears every pointer and the cursor.
    """
    nav = model.navigation.model_copy(deep=True)

    match fragment.kind:
        case PathKind.ROOT:
            nav.current_workspace_id = None
            nav.current_table_id = None
            nav.cursor = Cursor()
            return nav
        case PathKind.ASCEND:
            return _ascend(nav, fragment.depth)
        case PathKind.DESCEND:
            return _descend(model, nav, fragment.segments)
        case PathKind.ABSOLUTE:
            return _absolute(model, nav, fragment.segments)


def is_index(token: str) -> bool:
    """True if ``token`` is an all-ASCII-digit string."""
    return bool(_DIGITS_RE.match(token))


def find_workspace(model: AppModel, token: str) -> Workspace | None:
    """Workspace by 1-based position (digit tokens) or case-insensitive name."""
    if is_index(token):
        return _at_position(model.workspaces, token)
    return _workspace_by_name(model, token)


def find_table(workspace: Workspace, token: str) -> Table | None:
    """Table by 1-based position (digit tokens) or case-insensitive name."""
    if is_index(token):
        return _at_position(workspace.tables, token)
    key = token.lower()
    return next((t for t in workspace.tables if t.name.lower() == key), None)


def find_column(table: Table, token: str) -> Column | None:
    """Column by 1-based position in display order, or case-insensitive name."""
    columns = sorted(table.columns, key=lambda c: c.display_order)
    if is_index(token):
        return _at_position(columns, token)
    key = token.lower()
    return next((c for c in columns if c.name.lower() == key), None)


# ---------------------------------------------------------------------------
# Absolute paths
# ---------------------------------------------------------------------------


def _absolute(model: AppModel, nav: NavigationState, segments: list[str]) -> NavigationState:
    if not segments:
        return nav

    if len(segments) == 1 and nav.current_workspace_id is not None:
        return _single_token(model, nav, segments[0])

    workspace = find_workspace(model, segments[0])
    if workspace is None:
        logger.debug("Resolve: no workspace matches {!r}", segments[0])
        return nav
    _enter_workspace(nav, workspace)

    if len(segments) > 1:
        table = find_table(workspace, segments[1])
        if table is None:
            # Workspace stays selected.
            logger.debug("Resolve: no table {!r} in workspace {}", segments[1], workspace.id)
            return nav
        _enter_table(nav, table)

    if len(segments) > 2:
        nav.cursor.row = _position(segments[2])
    if len(segments) > 3:
        nav.cursor.col = _position(segments[3])
    return nav


def _single_token(model: AppModel, nav: NavigationState, token: str) -> NavigationState:
    """Workspace name wins over a table of the current workspace."""
    workspace = _workspace_by_name(model, token)
    if workspace is not None:
        _enter_workspace(nav, workspace)
        return nav

    current = model.find_workspace(nav.current_workspace_id)
    table = find_table(current, token) if current is not None else None
    if table is None:
        logger.debug("Resolve: {!r} is neither a workspace nor a table", token)
        return nav
    _enter_table(nav, table)
    return nav


# ---------------------------------------------------------------------------
# Relative paths
# ---------------------------------------------------------------------------


def _ascend(nav: NavigationState, depth: int) -> NavigationState:
    """Climb ``depth`` levels, clearing exactly one field per level.

    Order: cursor.col, cursor.row, table, workspace.  Levels above the root
    are no-ops.
    """
    for _ in range(depth):
        if nav.cursor.col is not None:
            nav.cursor.col = None
        elif nav.cursor.row is not None:
            nav.cursor.row = None
        elif nav.current_table_id is not None:
            nav.current_table_id = None
        elif nav.current_workspace_id is not None:
            nav.current_workspace_id = None
        else:
            break
    return nav


def _descend(model: AppModel, nav: NavigationState, segments: list[str]) -> NavigationState:
    """Target from the current position.

    ``:i``          -> cursor.row = i (column untouched)
    ``:table``      -> select table in the current workspace, reset cursor
    ``:i:j``        -> cursor.row = i, cursor.col = j
    ``:_:j``        -> cursor.col = j (row untouched)
    ``:table:i:j``  -> select table, then row/col as in absolute paths

    Needs a current workspace; anything that does not fit is a no-op.
    """
    workspace = model.find_workspace(nav.current_workspace_id)
    if workspace is None or not segments:
        return nav

    if len(segments) == 1:
        token = segments[0]
        if is_index(token):
            row = _position(token)
            if row is not None:
                nav.cursor.row = row
            return nav
        table = find_table(workspace, token)
        if table is not None:
            _enter_table(nav, table)
        return nav

    if len(segments) == 2:
        first, second = segments
        col = _position(second)
        if col is None:
            return nav
        if first == PLACEHOLDER:
            nav.cursor.col = col
            return nav
        row = _position(first)
        if row is not None:
            nav.cursor.row = row
            nav.cursor.col = col
        return nav

    table = find_table(workspace, segments[0])
    if table is None:
        return nav
    _enter_table(nav, table)
    nav.cursor.row = _position(segments[1])
    nav.cursor.col = _position(segments[2])
    return nav


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _enter_workspace(nav: NavigationState, workspace: Workspace) -> None:
    nav.current_workspace_id = workspace.id
    nav.current_table_id = None
    nav.cursor = Cursor()


def _enter_table(nav: NavigationState, table: Table) -> None:
    nav.current_table_id = table.id
    nav.cursor = Cursor()


def _workspace_by_name(model: AppModel, name: str) -> Workspace | None:
    key = name.lower()
    return next((w for w in model.workspaces if w.name.lower() == key), None)


def _position(token: str) -> int | None:
    """Positive 1-based integer from ``token``, or ``None``."""
    if not is_index(token):
        return None
    value = int(token)
    return value if value > 0 else None


def _at_position(items: list[T], token: str) -> T | None:
    position = _position(token)
    if position is None or position > len(items):
        return None
    return items[position - 1]

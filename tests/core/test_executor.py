"""Unit tests for the action executor (navigation and view actions)."""

from __future__ import annotations

from tabledeck.core.commands import execute, parse, run_command
from tabledeck.core.models import (
    AppModel,
    ChangeViewAction,
    Cursor,
    SelectAction,
    SelectTableAction,
    SelectWorkspaceAction,
    ToggleSidebarAction,
    UnknownAction,
    ViewMode,
    Workspace,
)

# ---------------------------------------------------------------------------
# Purity
# ---------------------------------------------------------------------------


def test_execute_returns_independent_copy(in_tasks: AppModel) -> None:
    before = in_tasks.model_copy(deep=True)
    result = execute(in_tasks, SelectAction(path="Beta:Roadmap"))

    assert in_tasks == before
    assert result is not in_tasks
    assert result.workspaces[0] is not in_tasks.workspaces[0]


def test_unknown_is_identity_copy(in_tasks: AppModel) -> None:
    result = execute(in_tasks, UnknownAction(raw="hello"))
    assert result == in_tasks
    assert result is not in_tasks
    assert result.navigation is not in_tasks.navigation


def test_sequential_calls_chain(model: AppModel) -> None:
    m = run_command(model, "/s Alpha")
    m = run_command(m, "/s :Bugs")
    m = run_command(m, "/s :3:2")
    assert m.navigation.current_table_id == "t-bugs"
    assert m.navigation.cursor == Cursor(row=3, col=2)


# ---------------------------------------------------------------------------
# Select
# ---------------------------------------------------------------------------


def test_select_root_is_idempotent(at, model: AppModel) -> None:
    start = at(model, ws="ws-alpha", table="t-tasks", row=2, col=2)
    once = execute(start, SelectAction(path=""))
    twice = execute(once, SelectAction(path=""))

    assert once == twice
    assert once.navigation.current_workspace_id is None
    assert once.navigation.current_table_id is None
    assert once.navigation.cursor == Cursor()


def test_select_none_path_goes_home(in_tasks: AppModel) -> None:
    result = run_command(in_tasks, "/s")
    assert result.navigation.current_workspace_id is None


def test_select_absolute_round_trip_from_any_state(at, model: AppModel) -> None:
    for start in (model, at(model, ws="ws-beta", table="t-roadmap", row=9, col=9), at(model, ws="ws-alpha")):
        nav = execute(start, SelectAction(path="Alpha:Notes")).navigation
        assert nav.current_workspace_id == "ws-alpha"
        assert nav.current_table_id == "t-notes"
        assert nav.cursor == Cursor()


def test_select_partial_commit(at, model: AppModel) -> None:
    start = at(model, ws="ws-beta", table="t-roadmap")
    nav = execute(start, SelectAction(path="Alpha:NoSuchTable")).navigation
    assert nav.current_workspace_id == "ws-alpha"
    assert nav.current_table_id is None


def test_select_name_before_index_both_branches(in_tasks: AppModel) -> None:
    # No workspace literally named "2": the table at position 2 wins.
    nav = execute(in_tasks, SelectAction(path="2")).navigation
    assert (nav.current_workspace_id, nav.current_table_id) == ("ws-alpha", "t-bugs")

    # A workspace named "2" exists: workspace selection wins.
    with_two = in_tasks.model_copy(deep=True)
    with_two.workspaces.append(Workspace(id="ws-two", name="2"))
    nav = execute(with_two, SelectAction(path="2")).navigation
    assert (nav.current_workspace_id, nav.current_table_id) == ("ws-two", None)


def test_select_column_only(at, model: AppModel) -> None:
    start = at(model, ws="ws-alpha", table="t-tasks", row=5)
    assert run_command(start, "/s :_:3").navigation.cursor == Cursor(row=5, col=3)


def test_select_failed_resolution_keeps_state(at, model: AppModel) -> None:
    start = at(model, ws="ws-alpha", table="t-tasks", row=2, col=1)
    for raw in ("/s Gamma:Tasks", "/s :Nope", "/s :x:y", "/s 42"):
        assert run_command(start, raw) == start


def test_select_with_empty_segment_keeps_state(at, model: AppModel) -> None:
    start = at(model, ws="ws-beta", table="t-roadmap")
    assert run_command(start, "/s Alpha::3") == start


# ---------------------------------------------------------------------------
# Change view
# ---------------------------------------------------------------------------


def test_view_sets_mode(in_tasks: AppModel) -> None:
    result = run_command(in_tasks, "/v kanban")
    assert result.navigation.view == ViewMode.KANBAN
    result = run_command(result, "/v")
    assert result.navigation.view == ViewMode.TABLE


def test_view_group_by_name(in_tasks: AppModel) -> None:
    result = run_command(in_tasks, "/v kanban by:status")
    assert result.navigation.view == ViewMode.KANBAN
    assert result.navigation.group_by_column_id == "c-status"


def test_view_group_by_position_follows_display_order(in_tasks: AppModel) -> None:
    result = run_command(in_tasks, "/v kanban by:3")
    assert result.navigation.group_by_column_id == "c-priority"


def test_view_group_by_miss_keeps_previous(in_tasks: AppModel) -> None:
    start = run_command(in_tasks, "/v kanban by:Status")
    result = execute(start, ChangeViewAction(mode=ViewMode.KANBAN, path=None, group_by="NoSuchColumn"))
    assert result.navigation.view == ViewMode.KANBAN
    assert result.navigation.group_by_column_id == "c-status"


def test_view_group_by_out_of_range_keeps_previous(in_tasks: AppModel) -> None:
    start = run_command(in_tasks, "/v kanban by:Status")
    result = run_command(start, "/v kanban by:9")
    assert result.navigation.group_by_column_id == "c-status"


def test_view_group_by_without_table_still_switches(at, model: AppModel) -> None:
    start = at(model, ws="ws-alpha")
    result = run_command(start, "/v kanban by:Status")
    assert result.navigation.view == ViewMode.KANBAN
    assert result.navigation.group_by_column_id is None


def test_view_group_by_ignored_for_table_mode(in_tasks: AppModel) -> None:
    result = execute(in_tasks, ChangeViewAction(mode=ViewMode.TABLE, group_by="Status"))
    assert result.navigation.group_by_column_id is None


def test_view_applies_path_before_group_by(model: AppModel) -> None:
    """The group-by token is looked up in the table the path selects."""
    result = run_command(model, "/v Alpha:Tasks kanban by:Priority")
    nav = result.navigation
    assert (nav.current_workspace_id, nav.current_table_id) == ("ws-alpha", "t-tasks")
    assert nav.group_by_column_id == "c-priority"


def test_view_relative_path(at, model: AppModel) -> None:
    start = at(model, ws="ws-alpha", table="t-bugs")
    result = run_command(start, "/v :Tasks kanban by:1")
    assert result.navigation.current_table_id == "t-tasks"
    assert result.navigation.group_by_column_id == "c-title"


def test_view_failed_path_still_switches_mode(in_tasks: AppModel) -> None:
    result = run_command(in_tasks, "/v Gamma:Nope kanban")
    assert result.navigation.current_table_id == "t-tasks"
    assert result.navigation.view == ViewMode.KANBAN


def test_view_blank_path_does_not_reset(in_tasks: AppModel) -> None:
    result = execute(in_tasks, ChangeViewAction(mode=ViewMode.KANBAN, path="   "))
    assert result.navigation.current_table_id == "t-tasks"


# ---------------------------------------------------------------------------
# Sidebar selection and settings
# ---------------------------------------------------------------------------


def test_select_workspace_picks_first_table(at, model: AppModel) -> None:
    start = at(model, ws="ws-beta", table="t-roadmap", row=1)
    nav = execute(start, SelectWorkspaceAction(workspace_id="ws-alpha")).navigation
    assert (nav.current_workspace_id, nav.current_table_id, nav.cursor) == ("ws-alpha", "t-tasks", Cursor())


def test_select_workspace_unknown_is_noop(in_tasks: AppModel) -> None:
    assert execute(in_tasks, SelectWorkspaceAction(workspace_id="nope")) == in_tasks


def test_select_table(model: AppModel) -> None:
    nav = execute(model, SelectTableAction(workspace_id="ws-beta", table_id="t-roadmap")).navigation
    assert (nav.current_workspace_id, nav.current_table_id) == ("ws-beta", "t-roadmap")


def test_select_table_from_other_workspace_is_noop(model: AppModel) -> None:
    assert execute(model, SelectTableAction(workspace_id="ws-alpha", table_id="t-roadmap")) == model


def test_toggle_sidebar(model: AppModel) -> None:
    closed = execute(model, ToggleSidebarAction())
    assert closed.settings.is_sidebar_open is False
    assert execute(closed, ToggleSidebarAction()).settings.is_sidebar_open is True


def test_parse_then_execute_unknown(in_tasks: AppModel) -> None:
    assert execute(in_tasks, parse("what")) == in_tasks

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TypeVar

import anyio
import click
from pydantic import ValidationError

from tabledeck.core.models import AppModel
from tabledeck.core.workbench import Workbench

T = TypeVar("T")


@click.group()
@click.option("--log-level", default=None, help="Log level (default: from TABLEDECK_LOG_LEVEL or INFO).")
def main(log_level: str | None) -> None:
    """Tabledeck - local-first table and kanban editor driven by a command language."""
    from tabledeck.core.log import setup_logging
    from tabledeck.core.settings import get_settings

    setup_logging(log_level or get_settings().log_level)


def _workbench() -> Workbench:
    from tabledeck.core.settings import get_settings
    from tabledeck.core.store import create_archive, create_store

    settings = get_settings()
    try:
        store = create_store(settings)
        archive = create_archive(settings)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from None
    return Workbench(store, archive, auto_backup_interval=settings.auto_backup_interval)


def _with_workbench(fn: Callable[[Workbench], Awaitable[T]]) -> T:
    """Open a workbench, run ``fn`` against it and save if anything changed."""

    async def _main() -> T:
        bench = _workbench()
        await bench.open()
        result = await fn(bench)
        if bench.dirty:
            await bench.save()
        return result

    return anyio.run(_main)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@main.command()
@click.argument("commands", nargs=-1, required=True)
def run(commands: tuple[str, ...]) -> None:
    """Run one or more commands, e.g. ``tabledeck run "/s Work:Tasks" "/v kanban by:Status"``."""
    from tabledeck.core.views import path_label

    async def _run(bench: Workbench) -> None:
        for command in commands:
            bench.run(command)
        click.echo(path_label(bench.model))

    _with_workbench(_run)


@main.command()
@click.argument("action_json")
def apply(action_json: str) -> None:
    """Apply a JSON-encoded action, e.g. ``'{"kind": "add_row"}'``."""
    from tabledeck.core.models import ActionAdapter
    from tabledeck.core.views import path_label

    try:
        action = ActionAdapter.validate_json(action_json)
    except ValidationError as exc:
        raise click.ClickException(f"Invalid action: {exc}") from None

    async def _apply(bench: Workbench) -> None:
        bench.apply(action)
        click.echo(path_label(bench.model))

    _with_workbench(_apply)


@main.command()
def show() -> None:
    """Print the current address and the selected table."""

    async def _show(bench: Workbench) -> None:
        click.echo(_render(bench.model))

    _with_workbench(_show)


@main.command()
def shell() -> None:
    """Interactive command loop.  Saves after every change; ``/q`` quits.

    The prompt loop stays synchronous; only store I/O goes through anyio.
    """
    from tabledeck.core.views import path_label

    bench = _workbench()
    anyio.run(bench.open)
    while True:
        click.echo(path_label(bench.model))
        try:
            line = click.prompt(">", prompt_suffix=" ", default="", show_default=False)
        except click.Abort:
            break
        if line.strip().lower() in ("/q", "/quit"):
            break
        bench.run(line)
        if bench.dirty:
            anyio.run(bench.save)


# ---------------------------------------------------------------------------
# Backups
# ---------------------------------------------------------------------------


@main.group()
def backup() -> None:
    """Backup archive commands."""


@backup.command("create")
def backup_create() -> None:
    """Archive the stored model."""

    async def _create(bench: Workbench) -> None:
        info = await bench.backup()
        click.echo(f"Backup created: {info.archive_id}")

    _with_workbench(_create)


@backup.command("list")
def backup_list() -> None:
    """List backups, newest first."""

    async def _list(bench: Workbench) -> None:
        infos = await bench.backups()
        if not infos:
            click.echo("No backups.")
        for info in infos:
            click.echo(f"{info.archive_id}\t{info.size}")

    _with_workbench(_list)


@backup.command("restore")
@click.argument("archive_id")
def backup_restore(archive_id: str) -> None:
    """Replace the stored model with a backup."""

    async def _restore(bench: Workbench) -> None:
        try:
            await bench.restore(archive_id)
        except FileNotFoundError:
            raise click.ClickException(f"Backup not found: {archive_id}") from None
        click.echo(f"Restored {archive_id}.")

    _with_workbench(_restore)


# ---------------------------------------------------------------------------
# Text output
# ---------------------------------------------------------------------------


def _render(model: AppModel) -> str:
    """Plain-text dump of the selected table (rows or kanban lanes)."""
    from tabledeck.core.models import ViewMode
    from tabledeck.core.views import current_table, kanban_lanes, ordered_columns, path_label

    lines = [path_label(model)]
    table = current_table(model)
    if table is None:
        lines.extend(f"{i}. {w.name} ({len(w.tables)} tables)" for i, w in enumerate(model.workspaces, 1))
        return "\n".join(lines)

    columns = ordered_columns(table)
    if model.navigation.view == ViewMode.KANBAN:
        title_col = columns[0].id if columns else None
        for lane in kanban_lanes(table, model.navigation.group_by_column_id):
            lines.append(f"[{lane.title}] ({len(lane.rows)})")
            lines.extend(f"  - {row.values.get(title_col, row.id)}" for row in lane.rows)
        return "\n".join(lines)

    lines.append("\t".join(["#", *(c.name for c in columns)]))
    for i, row in enumerate(table.rows, 1):
        cells = ["" if row.values.get(c.id) is None else str(row.values[c.id]) for c in columns]
        lines.append("\t".join([str(i), *cells]))
    return "\n".join(lines)


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
import logging
from typing import Optional

import typer
from rich.console import Console
from rich.text import Text

from . import __version__
from .commands import (
    handle_add_node,
    handle_add_task,
    handle_backups,
    handle_export,
    handle_fold,
    handle_remove,
    handle_rename,
    handle_restore,
    handle_search,
    handle_set_done,
    handle_show,
    handle_stats,
)
from .task_tree import GTaskError
from .utils.config import get_log_level, get_task_file_path, load_env_vars
from .utils.logger import configure_logging, get_logger

log = get_logger(__name__)
error_console = Console(stderr=True)

# Create app instance
app = typer.Typer(
    name="gtask",
    help="G-Task CLI - Hierarchical to-do lists of nodes and tasks, stored as XML.",
    no_args_is_help=True,
)


def _version_callback(value: bool):
    if value:
        print(f"gtask {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    file: Optional[str] = typer.Option(None, "--file", "-f", help="Path to the task file (defaults to GTASK_FILE or '<GTASK_HOME>/tasks.xml')."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log loading, backups and saves."),
    version: Optional[bool] = typer.Option(None, "--version", callback=_version_callback, is_eager=True, help="Show the version and exit."),
):
    """G-Task CLI - Hierarchical to-do lists of nodes and tasks, stored as XML."""
    load_env_vars()
    configure_logging(logging.DEBUG if verbose else get_log_level(), force=True)
    ctx.obj = {"file": get_task_file_path(file)}


def _run(handler, ctx: typer.Context, **fields):
    """Build the handler's args object and report tree/codec errors."""
    args = type('Args', (), {'file': ctx.obj["file"], **fields})
    try:
        handler(args)
    except GTaskError as e:
        log.debug("Command failed", exc_info=True)
        error_console.print(Text(f"Error: {e}", style="red"))
        raise typer.Exit(code=1)
    except OSError as e:
        error_console.print(Text(f"Error: could not access {e.filename or ctx.obj['file']}: {e.strerror}", style="red"))
        raise typer.Exit(code=1)


@app.command("show")
def show(
    ctx: typer.Context,
    show_all: bool = typer.Option(False, "--all", "-a", help="Show children of collapsed nodes too."),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format."),
):
    """Show the task tree with completion percentages."""
    _run(handle_show, ctx, show_all=show_all, json=json_output)


@app.command("stats")
def stats(
    ctx: typer.Context,
    item_id: Optional[int] = typer.Argument(None, help="Node ID (defaults to the root)."),
):
    """Show task totals and completion for a node."""
    _run(handle_stats, ctx, item_id=item_id)


@app.command("add-task")
def add_task_command(
    ctx: typer.Context,
    parent: Optional[int] = typer.Option(None, "--parent", "-p", help="ID of the node to add the task to (defaults to the root)."),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Name of the new task."),
):
    """Add a task to a node."""
    _run(handle_add_task, ctx, parent=parent, name=name)


@app.command("add-node")
def add_node_command(
    ctx: typer.Context,
    parent: Optional[int] = typer.Option(None, "--parent", "-p", help="ID of the node to add the node to (defaults to the root)."),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Name of the new node."),
):
    """Add a child node to a node."""
    _run(handle_add_node, ctx, parent=parent, name=name)


@app.command("rename")
def rename(
    ctx: typer.Context,
    item_id: int = typer.Argument(..., help="ID of the node or task to rename."),
    name: str = typer.Argument(..., help="New name."),
):
    """Rename a node or task."""
    _run(handle_rename, ctx, item_id=item_id, name=name)


@app.command("toggle")
def toggle(
    ctx: typer.Context,
    item_id: int = typer.Argument(..., help="ID of the task."),
):
    """Flip the done flag of a task."""
    _run(handle_set_done, ctx, item_id=item_id, done=None)


@app.command("done")
def done(
    ctx: typer.Context,
    item_id: int = typer.Argument(..., help="ID of the task."),
):
    """Mark a task as done."""
    _run(handle_set_done, ctx, item_id=item_id, done=True)


@app.command("undone")
def undone(
    ctx: typer.Context,
    item_id: int = typer.Argument(..., help="ID of the task."),
):
    """Mark a task as not done."""
    _run(handle_set_done, ctx, item_id=item_id, done=False)


@app.command("expand")
def expand(
    ctx: typer.Context,
    item_id: int = typer.Argument(..., help="ID of the node."),
):
    """Show the children of a node."""
    _run(handle_fold, ctx, item_id=item_id, expanded=True)


@app.command("collapse")
def collapse(
    ctx: typer.Context,
    item_id: int = typer.Argument(..., help="ID of the node."),
):
    """Hide the children of a node."""
    _run(handle_fold, ctx, item_id=item_id, expanded=False)


@app.command("fold")
def fold(
    ctx: typer.Context,
    item_id: int = typer.Argument(..., help="ID of the node."),
):
    """Flip the fold state of a node."""
    _run(handle_fold, ctx, item_id=item_id, expanded=None)


@app.command("remove")
def remove(
    ctx: typer.Context,
    item_id: int = typer.Argument(..., help="ID of the node or task to remove."),
):
    """Remove a node (with everything under it) or a task."""
    _run(handle_remove, ctx, item_id=item_id)


@app.command("search")
def search(
    ctx: typer.Context,
    query: str = typer.Argument(..., help="Text to fuzzy-match against node and task names."),
    limit: int = typer.Option(10, "--limit", "-l", help="Maximum number of matches."),
):
    """Search nodes and tasks by name and display their IDs."""
    _run(handle_search, ctx, query=query, limit=limit)


@app.command("backups")
def backups(ctx: typer.Context):
    """List backups of the task file, newest first."""
    _run(handle_backups, ctx)


@app.command("restore")
def restore(
    ctx: typer.Context,
    backup: str = typer.Argument(..., help="Backup path, file name, or number from 'gtask backups'."),
):
    """Restore the task file from a backup (the current file is backed up first)."""
    _run(handle_restore, ctx, backup=backup)


@app.command("export")
def export(ctx: typer.Context):
    """Print the task file as it will be written on the next save."""
    _run(handle_export, ctx)


if __name__ == "__main__":
    app()

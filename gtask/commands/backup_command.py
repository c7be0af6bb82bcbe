"""
Handles the 'backups' and 'restore' commands.
"""
from datetime import datetime
from pathlib import Path

from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..task_tree import GTaskError
from ..utils.storage import list_backups, restore_backup

console = Console()


def handle_backups(args):
    """List the backups of the task file, newest first."""
    backups = list_backups(args.file)
    if not backups:
        print(f"No backups found for {args.file}")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Backup", style="green")
    table.add_column("Modified", style="yellow")
    table.add_column("Size", justify="right")
    for index, backup in enumerate(backups, start=1):
        stat = backup.stat()
        modified = datetime.fromtimestamp(stat.st_mtime).strftime("%Y-%m-%d %H:%M:%S")
        table.add_row(str(index), Text(backup.name), modified, f"{stat.st_size} B")
    console.print(table)


def handle_restore(args):
    """Restore the task file from a backup (by path, file name or list number)."""
    backup = _resolve_backup(args.backup, Path(args.file))
    previous = restore_backup(backup, args.file)
    console.print(Text(f"Restored {Path(args.file).name} from {backup.name}", style="green"))
    if previous is not None:
        console.print(Text(f"Previous version kept as {previous.name}", style="dim"))


def _resolve_backup(value: str, task_file: Path) -> Path:
    if value.isdigit():
        backups = list_backups(task_file)
        index = int(value)
        if not 1 <= index <= len(backups):
            raise GTaskError(f"No backup number {index} (there are {len(backups)})")
        return backups[index - 1]
    candidate = Path(value).expanduser()
    if candidate.exists():
        return candidate
    sibling = task_file.parent / value
    if sibling.exists():
        return sibling
    raise GTaskError(f"Backup not found: {value}")

from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..task_tree import Task, TaskSession, completion_percent, format_percent

console = Console()


def handle_search(args):
    """
    Fuzzy-search node and task names and display their IDs.
    """
    with TaskSession(args.file) as session:
        matches = session.tree.search(args.query, limit=getattr(args, 'limit', 10))

    if not matches:
        print("No matching tasks found.")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Type")
    table.add_column("Status", style="magenta")
    table.add_column("Score", justify="right")

    for item_id, item, score in matches:
        if isinstance(item, Task):
            kind = "task"
            status = "✓" if item.done else " "
        else:
            kind = "node"
            status = f"{format_percent(completion_percent(item))}%"
        table.add_row(str(item_id), Text(item.name), kind, status, str(score))

    console.print(table)
    print(f"\nFound {len(matches)} matching items")

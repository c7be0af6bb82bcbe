"""
Handles the 'remove' command for nodes and tasks.
"""
from rich.console import Console
from rich.text import Text

from ..task_tree import TaskNode, TaskSession, total_children

console = Console()


def handle_remove(args):
    """Remove a node (with everything under it) or a task."""
    with TaskSession(args.file) as session:
        item = session.tree.remove(args.item_id)
        session.mark_dirty()
        if isinstance(item, TaskNode):
            count = total_children(item)
            console.print(Text(f"Removed node '{item.name}' and {count} task(s) under it."))
        else:
            console.print(Text(f"Removed task '{item.name}'."))

"""
Handles the in-place edit commands: rename, done flags and fold state.
"""
from rich.console import Console
from rich.text import Text

from ..task_tree import TaskSession

console = Console()


def handle_rename(args):
    """Change the label of a node or task."""
    with TaskSession(args.file) as session:
        item = session.tree.get(args.item_id)
        old_name = item.name
        session.tree.rename(args.item_id, args.name)
        session.mark_dirty()
        console.print(Text(f"Renamed '{old_name}' to '{args.name}'"))


def handle_set_done(args):
    """Set, clear or flip the done flag of a task.

    ``args.done`` is True/False to set the flag, None to toggle it.
    """
    with TaskSession(args.file) as session:
        done = getattr(args, 'done', None)
        if done is None:
            task = session.tree.toggle_done(args.item_id)
        else:
            task = session.tree.set_done(args.item_id, done)
        session.mark_dirty()
        mark = "✔" if task.done else "○"
        console.print(Text(f"{mark} {task.name}", style="green" if task.done else ""))


def handle_fold(args):
    """Expand, collapse or flip a node.

    ``args.expanded`` is True/False to set the state, None to toggle it.
    """
    with TaskSession(args.file) as session:
        expanded = getattr(args, 'expanded', None)
        if expanded is None:
            node = session.tree.toggle_expanded(args.item_id)
        else:
            node = session.tree.set_expanded(args.item_id, expanded)
        session.mark_dirty()
        state = "expanded" if node.expanded else "collapsed"
        console.print(Text(f"Node '{node.name}' {state}"))

"""
Handles the 'add-task' and 'add-node' commands.
"""
from rich.console import Console
from rich.text import Text

from ..task_tree import ROOT_ID, TaskSession

console = Console()


def _parent_id(args) -> int:
    parent = getattr(args, 'parent', None)
    return ROOT_ID if parent is None else parent


def handle_add_task(args):
    """Append a task to a node (the root by default)."""
    with TaskSession(args.file) as session:
        parent_id = _parent_id(args)
        new_id = session.tree.add_task(parent_id, getattr(args, 'name', None))
        session.mark_dirty()
        task = session.tree.get(new_id)
        parent = session.tree.get(parent_id)
        console.print(Text(f"✅ Added task '{task.name}' (ID: {new_id}) to '{parent.name}'"))


def handle_add_node(args):
    """Append a child node to a node (the root by default)."""
    with TaskSession(args.file) as session:
        parent_id = _parent_id(args)
        new_id = session.tree.add_node(parent_id, getattr(args, 'name', None))
        session.mark_dirty()
        node = session.tree.get(new_id)
        parent = session.tree.get(parent_id)
        console.print(Text(f"✅ Added node '{node.name}' (ID: {new_id}) to '{parent.name}'"))

"""
Handles the 'show', 'stats' and 'export' commands: rendering the task tree.
"""
import json
from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from ..task_tree import (
    ROOT_ID,
    Task,
    TaskNode,
    TaskSession,
    TaskTree,
    completion_percent,
    encode_text,
    format_percent,
    is_complete,
    total_children,
    total_done_children,
)

console = Console()

HEADER = "G-Task Viewer"


def _id_label(tree: TaskTree, item) -> Text:
    return Text(f"[{tree.id_of(item)}] ", style="dim")


def node_label(tree: TaskTree, node: TaskNode) -> Text:
    label = _id_label(tree, node)
    label.append("V " if node.expanded else "> ", style="bold")
    label.append(node.name, style="bold green" if is_complete(node) else "bold")
    label.append(f" ({format_percent(completion_percent(node))}%)")
    return label


def task_label(tree: TaskTree, task: Task) -> Text:
    label = _id_label(tree, task)
    label.append("[x] " if task.done else "[ ] ")
    label.append(task.name, style="green" if task.done else "")
    return label


def _add_children(branch: Tree, tree: TaskTree, node: TaskNode, show_all: bool) -> None:
    for child in node.child_nodes:
        child_branch = branch.add(node_label(tree, child))
        if child.expanded or show_all:
            _add_children(child_branch, tree, child, show_all)
    for task in node.tasks:
        branch.add(task_label(tree, task))


def build_rich_tree(tree: TaskTree, show_all: bool = False) -> Tree:
    """Render the whole tree; collapsed nodes hide their children unless ``show_all``."""
    root = tree.root
    rich_tree = Tree(node_label(tree, root), guide_style="dim")
    _add_children(rich_tree, tree, root, show_all)
    return rich_tree


def handle_show(args):
    """Print the task tree, or its JSON form with --json."""
    with TaskSession(args.file) as session:
        if getattr(args, 'json', False):
            print(json.dumps(session.tree.root.to_dict(), indent=2))
            return
        console.print(Text(HEADER, style="bold"))
        if session.document.version == 0:
            console.print(Text("(unversioned file, will be upgraded on next save)", style="dim"))
        console.print(build_rich_tree(session.tree, show_all=getattr(args, 'show_all', False)))


def handle_stats(args):
    """Print task totals and completion for a node (the root by default)."""
    item_id: Optional[int] = getattr(args, 'item_id', None)
    with TaskSession(args.file) as session:
        node = session.tree.get_node(ROOT_ID if item_id is None else item_id)
        total = total_children(node)
        done = total_done_children(node)

        table = Table(show_header=True, header_style="bold")
        table.add_column("Node", style="cyan")
        table.add_column("Tasks", justify="right")
        table.add_column("Done", justify="right", style="green")
        table.add_column("Complete", justify="right", style="magenta")
        table.add_row(Text(node.name), str(total), str(done), f"{format_percent(completion_percent(node))}%")
        console.print(table)


def handle_export(args):
    """Print the task file as it would be written on the next save."""
    with TaskSession(args.file) as session:
        print(encode_text(session.tree.root), end="")

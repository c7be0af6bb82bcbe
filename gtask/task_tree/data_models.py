"""
Data models for the task tree (nodes and tasks) and the recursive
queries the viewer needs: task counts, completion percentage and removal.
"""

from dataclasses import InitVar, dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

DEFAULT_NODE_NAME = "New Node"
DEFAULT_TASK_NAME = "New Task"


class NodeKind(str, Enum):
    ROOT = "root"
    CHILD = "child"


@dataclass(eq=False)
class Task:
    name: str = DEFAULT_TASK_NAME
    done: bool = False

    def to_dict(self):
        return {
            "name": self.name,
            "done": self.done,
        }


@dataclass(eq=False)
class TaskNode:
    """A container of tasks and child nodes.

    ``expanded`` is persisted as the ``folded`` attribute with the same
    polarity: ``folded="true"`` on disk means the children are shown.
    The kind (root or child) is fixed when the node is built.
    """
    name: str = DEFAULT_NODE_NAME
    expanded: bool = False
    tasks: List[Task] = field(default_factory=list)
    child_nodes: List["TaskNode"] = field(default_factory=list)
    root: InitVar[bool] = False

    def __post_init__(self, root: bool):
        self._kind = NodeKind.ROOT if root else NodeKind.CHILD

    @property
    def kind(self) -> NodeKind:
        return self._kind

    @property
    def is_root(self) -> bool:
        return self._kind is NodeKind.ROOT

    def to_dict(self) -> Dict[str, Any]:
        total = total_children(self)
        done = total_done_children(self)
        return {
            "name": self.name,
            "expanded": self.expanded,
            "root": self.is_root,
            "total": total,
            "done": done,
            "percent": completion_percent(self),
            "nodes": [child.to_dict() for child in self.child_nodes],
            "tasks": [task.to_dict() for task in self.tasks],
        }


TreeItem = Union[TaskNode, Task]


def create_node(name: str = DEFAULT_NODE_NAME, expanded: bool = False) -> TaskNode:
    return TaskNode(name=name, expanded=expanded)


def create_root(name: str = DEFAULT_NODE_NAME, expanded: bool = False) -> TaskNode:
    return TaskNode(name=name, expanded=expanded, root=True)


def create_task(name: str = DEFAULT_TASK_NAME, done: bool = False) -> Task:
    return Task(name=name, done=done)


def add_task(parent: TaskNode, task: Optional[Task] = None) -> Task:
    """Append ``task`` (or a fresh default task) to the end of ``parent.tasks``."""
    if task is None:
        task = create_task()
    parent.tasks.append(task)
    return task


def add_node(parent: TaskNode, node: Optional[TaskNode] = None) -> TaskNode:
    """Append ``node`` (or a fresh default node) to ``parent.child_nodes``.

    The caller must not pass a node that already lives elsewhere in the tree.
    """
    if node is None:
        node = create_node()
    parent.child_nodes.append(node)
    return node


def total_children(node: TaskNode) -> int:
    """Number of tasks in the subtree of ``node`` (nodes are not counted)."""
    children = len(node.tasks)
    for child in node.child_nodes:
        children += total_children(child)
    return children


def total_done_children(node: TaskNode) -> int:
    """Number of finished tasks in the subtree of ``node``."""
    children = sum(1 for task in node.tasks if task.done)
    for child in node.child_nodes:
        children += total_done_children(child)
    return children


def completion_percent(node: TaskNode) -> float:
    """Share of finished tasks in the subtree, 0-100 with two decimals.

    A subtree without any task reports 0.
    """
    total = total_children(node)
    if total == 0:
        return 0.0
    return round(total_done_children(node) / total * 100, 2)


def is_complete(node: TaskNode) -> bool:
    """True when the subtree has tasks and every one of them is done."""
    total = total_children(node)
    return total > 0 and total_done_children(node) == total


def format_percent(percent: float) -> str:
    return f"{percent:.2f}"


def _index_by_identity(items: List[Any], target: Any) -> int:
    for index, item in enumerate(items):
        if item is target:
            return index
    return -1


def remove(root: TaskNode, target: TreeItem) -> bool:
    """Remove ``target`` from wherever it sits under ``root``.

    Matching is by identity. Returns False when the target is not in the
    tree, which leaves the tree untouched.
    """
    if target is root:
        raise ValueError("The root node cannot be removed")
    collection = root.child_nodes if isinstance(target, TaskNode) else root.tasks
    index = _index_by_identity(collection, target)
    if index >= 0:
        del collection[index]
        return True
    for child in root.child_nodes:
        if remove(child, target):
            return True
    return False


def walk(node: TaskNode, depth: int = 0) -> Iterator[Tuple[int, TreeItem]]:
    """Yield ``(depth, item)`` pairs in file order.

    A node comes first, then its child nodes (recursively), then its tasks.
    """
    yield depth, node
    for child in node.child_nodes:
        yield from walk(child, depth + 1)
    for task in node.tasks:
        yield depth + 1, task

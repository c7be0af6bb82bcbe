"""Id-addressable index over a loaded task tree.

Every node and task of one load cycle gets an integer id (the root is 0)
and a parent pointer, so the CLI can select, edit and remove items by id.
Ids follow file order, which keeps them stable across a save and reload
of an unchanged tree.
"""
from typing import Dict, List, Optional, Tuple

from thefuzz import fuzz, process

from .data_models import (
    Task,
    TaskNode,
    TreeItem,
    add_node,
    add_task,
    create_node,
    create_task,
    walk,
)
from .exceptions import InvalidTargetError, ItemNotFoundError
from .xml_codec import illegal_character

ROOT_ID = 0


class TaskTree:
    def __init__(self, root: TaskNode):
        self.root = root
        self._items: Dict[int, TreeItem] = {}
        self._parents: Dict[int, int] = {}
        self._ids: Dict[int, int] = {}  # id(item) -> item id
        self._next_id = ROOT_ID
        self._register_subtree(root, None)

    # -------------------- registration --------------------
    def _register(self, item: TreeItem, parent_id: Optional[int]) -> int:
        item_id = self._next_id
        self._next_id += 1
        self._items[item_id] = item
        self._ids[id(item)] = item_id
        if parent_id is not None:
            self._parents[item_id] = parent_id
        return item_id

    def _register_subtree(self, node: TaskNode, parent_id: Optional[int]) -> int:
        node_id = self._register(node, parent_id)
        for child in node.child_nodes:
            self._register_subtree(child, node_id)
        for task in node.tasks:
            self._register(task, node_id)
        return node_id

    def _unregister_subtree(self, item: TreeItem) -> None:
        if isinstance(item, TaskNode):
            for child in item.child_nodes:
                self._unregister_subtree(child)
            for task in item.tasks:
                self._unregister_subtree(task)
        item_id = self._ids.pop(id(item))
        del self._items[item_id]
        self._parents.pop(item_id, None)

    # -------------------- lookups --------------------
    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item_id: int) -> bool:
        return item_id in self._items

    def get(self, item_id: int) -> TreeItem:
        try:
            return self._items[item_id]
        except KeyError:
            raise ItemNotFoundError(item_id) from None

    def get_node(self, item_id: int) -> TaskNode:
        item = self.get(item_id)
        if not isinstance(item, TaskNode):
            raise InvalidTargetError(f"ID {item_id} is a task, not a node")
        return item

    def get_task(self, item_id: int) -> Task:
        item = self.get(item_id)
        if not isinstance(item, Task):
            raise InvalidTargetError(f"ID {item_id} is a node, not a task")
        return item

    def id_of(self, item: TreeItem) -> int:
        try:
            return self._ids[id(item)]
        except KeyError:
            raise InvalidTargetError(f"{item!r} is not part of this tree") from None

    def parent_of(self, item_id: int) -> Optional[TaskNode]:
        self.get(item_id)
        parent_id = self._parents.get(item_id)
        return None if parent_id is None else self._items[parent_id]

    def depth_of(self, item_id: int) -> int:
        depth = 0
        current = self._parents.get(item_id)
        while current is not None:
            depth += 1
            current = self._parents.get(current)
        return depth

    def nodes(self) -> List[Tuple[int, TaskNode]]:
        return [(i, item) for i, item in self._items.items() if isinstance(item, TaskNode)]

    def tasks(self) -> List[Tuple[int, Task]]:
        return [(i, item) for i, item in self._items.items() if isinstance(item, Task)]

    def items(self) -> List[Tuple[int, int, TreeItem]]:
        """``(id, depth, item)`` triples in file order."""
        return [(self.id_of(item), depth, item) for depth, item in walk(self.root)]

    # -------------------- edits --------------------
    @staticmethod
    def _check_name(name: Optional[str]) -> None:
        bad = None if name is None else illegal_character(name)
        if bad is not None:
            raise InvalidTargetError(f"Names cannot contain U+{ord(bad):04X}, which XML cannot store")

    def add_task(self, parent_id: int = ROOT_ID, name: Optional[str] = None) -> int:
        self._check_name(name)
        parent = self.get_node(parent_id)
        task = add_task(parent, create_task() if name is None else create_task(name))
        return self._register(task, parent_id)

    def add_node(self, parent_id: int = ROOT_ID, name: Optional[str] = None) -> int:
        self._check_name(name)
        parent = self.get_node(parent_id)
        node = add_node(parent, create_node() if name is None else create_node(name))
        return self._register_subtree(node, parent_id)

    def remove(self, item_id: int) -> TreeItem:
        """Excise an item (and its subtree) and return it."""
        item = self.get(item_id)
        if item_id == ROOT_ID:
            raise InvalidTargetError("The root node cannot be removed")
        parent = self._items[self._parents[item_id]]
        collection = parent.child_nodes if isinstance(item, TaskNode) else parent.tasks
        for index, candidate in enumerate(collection):
            if candidate is item:
                del collection[index]
                break
        self._unregister_subtree(item)
        return item

    def rename(self, item_id: int, name: str) -> TreeItem:
        item = self.get(item_id)
        self._check_name(name)
        item.name = name
        return item

    def set_done(self, item_id: int, done: bool) -> Task:
        task = self.get_task(item_id)
        task.done = done
        return task

    def toggle_done(self, item_id: int) -> Task:
        task = self.get_task(item_id)
        task.done = not task.done
        return task

    def set_expanded(self, item_id: int, expanded: bool) -> TaskNode:
        node = self.get_node(item_id)
        node.expanded = expanded
        return node

    def toggle_expanded(self, item_id: int) -> TaskNode:
        node = self.get_node(item_id)
        node.expanded = not node.expanded
        return node

    # -------------------- search --------------------
    def search(self, query: str, limit: int = 10, min_score: int = 60) -> List[Tuple[int, TreeItem, int]]:
        """Fuzzy-match item names against ``query``, best matches first."""
        choices = {item_id: item.name for item_id, item in self._items.items()}
        if not choices or not query.strip():
            return []
        # process.extract returns (choice, score, key) for dict choices
        matches = process.extract(query, choices, scorer=fuzz.WRatio, limit=limit)
        return [
            (item_id, self._items[item_id], score)
            for _name, score, item_id in matches
            if score >= min_score
        ]

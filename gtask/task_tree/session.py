"""Load/save lifecycle around one editing pass over the task file."""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from ..utils.logger import get_logger
from ..utils.storage import load_tree, save_tree
from .tree import TaskTree
from .xml_codec import GTaskDocument

log = get_logger(__name__)


class TaskSession:
    """Context manager that loads the tree on enter and saves it on exit.

    The file is only rewritten (and backed up) when an edit marked the
    session dirty and the block finished without an exception.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.document: Optional[GTaskDocument] = None
        self.tree: Optional[TaskTree] = None
        self.dirty = False
        self.backup: Optional[Path] = None

    def open(self) -> TaskTree:
        document = load_tree(self.path)
        self.document = document
        self.tree = TaskTree(document.root)
        self.dirty = False
        if document.healed:
            log.info("Filled %d missing attribute(s) with defaults", len(document.healed))
        return self.tree

    def mark_dirty(self) -> None:
        self.dirty = True

    def save(self) -> Optional[Path]:
        if self.tree is None:
            raise RuntimeError("Session is not open")
        self.backup = save_tree(self.tree.root, self.path)
        self.dirty = False
        return self.backup

    def __enter__(self) -> "TaskSession":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None and self.dirty:
            self.save()
        elif exc_type is not None and self.dirty:
            log.warning("Discarding unsaved changes to %s after error", self.path)

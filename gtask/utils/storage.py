"""storage.py
Reading and writing the task file on disk.

• A missing task file is materialised as an empty document before loading.
• Every save first copies the current file to a timestamped sibling
  (tasks_backup_<date time>.xml). Backups are never pruned.

Usage:
    from gtask.utils.storage import load_tree, save_tree
    document = load_tree(path)
    save_tree(document.root, path)
"""
from __future__ import annotations

import shutil
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

from ..task_tree.data_models import TaskNode
from ..task_tree.xml_codec import EMPTY_DOCUMENT, GTaskDocument, decode_document, encode
from .logger import get_logger

log = get_logger(__name__)

BACKUP_TIMESTAMP_FORMAT = "%m/%d/%Y %H:%M:%S"

PathLike = Union[str, Path]


def ensure_task_file(path: PathLike) -> Path:
    """Write an empty task document at ``path`` if nothing is there yet."""
    path = Path(path)
    if not path.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(EMPTY_DOCUMENT, encoding="utf-8")
        log.info("Created empty task file at %s", path)
    return path


def load_tree(path: PathLike) -> GTaskDocument:
    """Load the task file at ``path``, creating an empty one first if needed."""
    path = ensure_task_file(path)
    data = path.read_bytes()
    log.debug("Input:\n%s", data.decode("utf-8", errors="replace"))
    document = decode_document(data)
    log.debug("GTask Version: %d", document.version)
    log.debug("Path: %s", path.resolve())
    return document


def backup_name(path: PathLike, now: Optional[datetime] = None) -> str:
    """File name of the backup taken at ``now`` (local time)."""
    stamp = (now or datetime.now()).strftime(BACKUP_TIMESTAMP_FORMAT)
    stamp = stamp.replace("/", "_").replace(":", "_")
    return f"{Path(path).stem}_backup_{stamp}.xml"


def backup_file(path: PathLike, now: Optional[datetime] = None) -> Optional[Path]:
    """Copy the task file to a timestamped sibling and return the copy's path."""
    path = Path(path)
    if not path.exists():
        log.debug("No task file at %s, nothing to back up", path)
        return None
    target = path.with_name(backup_name(path, now))
    counter = 1
    while target.exists():
        target = path.with_name(f"{Path(backup_name(path, now)).stem}_{counter}.xml")
        counter += 1
    shutil.copyfile(path, target)
    log.info("Backed up %s to %s", path.name, target.name)
    return target


def save_tree(root: TaskNode, path: PathLike, now: Optional[datetime] = None) -> Optional[Path]:
    """Back up the current file, then write ``root`` to ``path``."""
    path = Path(path)
    data = encode(root)
    backup = backup_file(path, now)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    log.info("Saved task file %s", path)
    return backup


def list_backups(path: PathLike) -> List[Path]:
    """Backups of the task file at ``path``, newest first."""
    path = Path(path)
    if not path.parent.exists():
        return []
    backups = path.parent.glob(f"{path.stem}_backup_*.xml")
    return sorted(backups, key=lambda p: p.stat().st_mtime, reverse=True)


def restore_backup(backup: PathLike, path: PathLike, now: Optional[datetime] = None) -> Optional[Path]:
    """Replace the task file with ``backup`` after backing up the current file.

    The backup must decode cleanly; the task file is left alone otherwise.
    """
    backup = Path(backup)
    decode_document(backup.read_bytes())
    previous = backup_file(path, now)
    shutil.copyfile(backup, path)
    log.info("Restored %s from %s", Path(path).name, backup.name)
    return previous

"""
Task tree package.
Implements the node/task model, its id index, the XML file format
and the load/save session.
"""

from .data_models import (
    NodeKind,
    Task,
    TaskNode,
    add_node,
    add_task,
    completion_percent,
    create_node,
    create_root,
    create_task,
    format_percent,
    is_complete,
    remove,
    total_children,
    total_done_children,
    walk,
)
from .exceptions import (
    GTaskError,
    InvalidTargetError,
    ItemNotFoundError,
    ParseError,
    UnknownElementError,
)
from .xml_codec import GTaskDocument, decode, decode_document, encode, encode_text
from .tree import ROOT_ID, TaskTree
from .session import TaskSession

__all__ = [
    'NodeKind',
    'Task',
    'TaskNode',
    'add_node',
    'add_task',
    'completion_percent',
    'create_node',
    'create_root',
    'create_task',
    'format_percent',
    'is_complete',
    'remove',
    'total_children',
    'total_done_children',
    'walk',
    'GTaskError',
    'InvalidTargetError',
    'ItemNotFoundError',
    'ParseError',
    'UnknownElementError',
    'GTaskDocument',
    'decode',
    'decode_document',
    'encode',
    'encode_text',
    'ROOT_ID',
    'TaskTree',
    'TaskSession',
]

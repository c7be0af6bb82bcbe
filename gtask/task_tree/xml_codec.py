"""Reading and writing the G-Task XML file format.

Layout::

    <GTask version="1"> <!-- comment -->
    	<Tasks name="..." folded="true|false">
    		<Node name="..." folded="true|false"> ... </Node>
    		<Task name="..." done="true|false"/>
    	</Tasks>
    </GTask>

Missing attributes are filled with defaults on read (without touching the
parsed element) and written back on the next save.
"""
from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from ..utils.logger import get_logger
from .data_models import (
    DEFAULT_NODE_NAME,
    DEFAULT_TASK_NAME,
    Task,
    TaskNode,
)
from .exceptions import ParseError, UnknownElementError

log = get_logger(__name__)

WRAPPER_TAG = "GTask"
ROOT_TAG = "Tasks"
NODE_TAG = "Node"
TASK_TAG = "Task"

FORMAT_VERSION = 1
EMPTY_DOCUMENT = "<GTask><Tasks></Tasks></GTask>"
GENERATED_COMMENT = "<!-- This is auto generated xml code, please do not modify -->"

# An ampersand that does not already start an entity or character reference.
_BARE_AMPERSAND = re.compile(r"&(?!(?:amp|lt|gt|quot|apos|#[0-9]+|#x[0-9a-fA-F]+);)")
_INTEGER = re.compile(r"[+-]?[0-9]+")
# Characters XML 1.0 cannot carry, not even as character references.
_ILLEGAL_XML_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")

_ATTRIBUTE_ENTITIES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("\t", "&#9;"),
    ("\n", "&#10;"),
    ("\r", "&#13;"),
)


@dataclass
class GTaskDocument:
    root: TaskNode
    version: int = 0
    healed: List[str] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Attribute helpers
# ---------------------------------------------------------------------------

def repair_ampersands(text: str) -> str:
    """Escape bare ``&`` characters left behind by older hand-edited files."""
    return _BARE_AMPERSAND.sub("&amp;", text)


def read_attribute(element: ET.Element, name: str, default: str) -> Tuple[str, bool]:
    """Return ``(value, used_default)``; the element itself is never modified."""
    value = element.get(name)
    if value is None:
        return default, True
    return value, False


def parse_bool(raw: str, name: str = "") -> bool:
    if raw == "true":
        return True
    if raw == "false":
        return False
    raise ParseError(f"Attribute {name!r} is not a boolean: {raw!r}", attribute=name, value=raw)


def parse_int(raw: str, name: str = "") -> int:
    if not _INTEGER.fullmatch(raw.strip()):
        raise ParseError(f"Attribute {name!r} is not an integer: {raw!r}", attribute=name, value=raw)
    return int(raw)


def format_bool(value: bool) -> str:
    return "true" if value else "false"


def illegal_character(value: str) -> Optional[str]:
    """Return the first character of ``value`` that XML cannot store, if any."""
    match = _ILLEGAL_XML_CHARS.search(value)
    return match.group() if match else None


def escape_attribute(value: str) -> str:
    """Escape ``value`` for a double-quoted attribute.

    Raises ValueError for characters XML cannot store at all.
    """
    bad = illegal_character(value)
    if bad is not None:
        raise ValueError(f"Name {value!r} contains a character XML cannot store: U+{ord(bad):04X}")
    for char, entity in _ATTRIBUTE_ENTITIES:
        value = value.replace(char, entity)
    return value


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

class _Decoder:
    def __init__(self):
        self.healed: List[str] = []

    def text(self, element: ET.Element, name: str, default: str, where: str) -> str:
        value, used_default = read_attribute(element, name, default)
        if used_default:
            self.healed.append(f"{where}@{name}")
        return value

    def boolean(self, element: ET.Element, name: str, default: bool, where: str) -> bool:
        return parse_bool(self.text(element, name, format_bool(default), where), name)

    def task(self, element: ET.Element, where: str) -> Task:
        name = self.text(element, "name", DEFAULT_TASK_NAME, where)
        done = self.boolean(element, "done", False, where)
        return Task(name=name, done=done)

    def node(self, element: ET.Element, where: str) -> TaskNode:
        is_root = element.tag == ROOT_TAG
        name = self.text(element, "name", DEFAULT_NODE_NAME, where)
        expanded = self.boolean(element, "folded", False, where)
        node = TaskNode(name=name, expanded=expanded, root=is_root)
        for index, child in enumerate(element):
            child_where = f"{where}/{child.tag}[{index}]"
            if child.tag == TASK_TAG:
                node.tasks.append(self.task(child, child_where))
            elif child.tag == NODE_TAG:
                node.child_nodes.append(self.node(child, child_where))
            else:
                raise UnknownElementError(child.tag)
        return node


def _to_text(data: Union[bytes, str]) -> str:
    if isinstance(data, bytes):
        try:
            return data.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise ParseError(f"Task file is not valid UTF-8: {e}") from e
    return data


def decode_document(data: Union[bytes, str]) -> GTaskDocument:
    """Parse a task file into its root node, format version and healed attributes."""
    text = repair_ampersands(_to_text(data)).strip()
    try:
        top = ET.fromstring(text)
    except ET.ParseError as e:
        raise ParseError(f"Malformed task file: {e}") from e

    decoder = _Decoder()
    if top.tag == WRAPPER_TAG:
        version = parse_int(decoder.text(top, "version", "0", WRAPPER_TAG), "version")
        tasks_element = top.find(ROOT_TAG)
        if tasks_element is None:
            decoder.healed.append(f"{WRAPPER_TAG}/{ROOT_TAG}")
            root = TaskNode(root=True)
        else:
            root = decoder.node(tasks_element, f"{WRAPPER_TAG}/{ROOT_TAG}")
    elif top.tag == ROOT_TAG:
        version = 0
        root = decoder.node(top, ROOT_TAG)
    else:
        raise UnknownElementError(top.tag)

    if version > FORMAT_VERSION:
        log.warning("Task file version %d is newer than supported version %d", version, FORMAT_VERSION)
    for path in decoder.healed:
        log.debug("Missing %s, using default", path)
    return GTaskDocument(root=root, version=version, healed=decoder.healed)


def decode(data: Union[bytes, str]) -> TaskNode:
    return decode_document(data).root


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------

def _tabs(depth: int) -> str:
    return "\t" * depth


def _write_task(task: Task, depth: int, lines: List[str]) -> None:
    lines.append(
        f'{_tabs(depth)}<{TASK_TAG} name="{escape_attribute(task.name)}" done="{format_bool(task.done)}"/>'
    )


def _write_node(node: TaskNode, depth: int, lines: List[str]) -> None:
    tag = ROOT_TAG if node.is_root else NODE_TAG
    lines.append(
        f'{_tabs(depth)}<{tag} name="{escape_attribute(node.name)}" folded="{format_bool(node.expanded)}">'
    )
    # nodes always precede tasks at the same depth
    for child in node.child_nodes:
        _write_node(child, depth + 1, lines)
    for task in node.tasks:
        _write_task(task, depth + 1, lines)
    lines.append(f"{_tabs(depth)}</{tag}>")


def encode_text(root: TaskNode) -> str:
    if not root.is_root:
        raise ValueError(f"Only a root node can be written as a task file, got {root.name!r}")
    lines = [f'<{WRAPPER_TAG} version="{FORMAT_VERSION}"> {GENERATED_COMMENT}']
    _write_node(root, 1, lines)
    lines.append(f"</{WRAPPER_TAG}>")
    return "\n".join(lines) + "\n"


def encode(root: TaskNode) -> bytes:
    return encode_text(root).encode("utf-8")

"""Errors raised by the task tree and its XML codec."""
from typing import Optional


class GTaskError(Exception):
    """Base class for every error raised by gtask."""


class ParseError(GTaskError):
    """A task document could not be parsed (bad literal or malformed XML)."""

    def __init__(self, message: str, attribute: Optional[str] = None, value: Optional[str] = None):
        super().__init__(message)
        self.attribute = attribute
        self.value = value


class UnknownElementError(GTaskError):
    """An element tag appeared where only nodes or tasks are allowed."""

    def __init__(self, tag: str):
        super().__init__(f"Unknown node name {tag}")
        self.tag = tag


class ItemNotFoundError(GTaskError):
    """No node or task is registered under the given id."""

    def __init__(self, item_id: int):
        super().__init__(f"No node or task with ID {item_id}")
        self.item_id = item_id


class InvalidTargetError(GTaskError):
    """The id exists but the requested operation does not apply to it."""

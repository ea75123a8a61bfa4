"""Minimal XML element tree and writer for EAGLE board files.

This module provides the in-memory document tree used to assemble board
files before they are written out. It supports:

- Element nodes with insertion-ordered attributes
- Ordered child nodes with exclusive ownership (each node has one parent)
- Inline text content, mutually exclusive with children
- Pretty-printing with configurable indentation and attribute separator

Attribute values are stored as given (int, float, Decimal, str, bool) and
only turned into text when the tree is written, so a value set twice is
rendered once with the last value.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

XmlValue = Union[str, int, float, Decimal, bool]

XML_DECLARATION = '<?xml version = "1.0" encoding = "UTF-8" ?>'
EAGLE_DOCTYPE = '<!DOCTYPE eagle SYSTEM "eagle.dtd">'

_TEXT_ESCAPE_MAP = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
}

_ATTR_ESCAPE_MAP = {
    **_TEXT_ESCAPE_MAP,
    '"': "&quot;",
}


class InvariantViolationError(RuntimeError):
    """Raised when a tree operation would break the node invariants.

    A node may hold children or text but never both, and a node can only
    be attached once, never beneath itself.
    """


class Node:
    """One element of the document tree.

    Attributes:
        name: Element tag name (read-only).
        attributes: Insertion-ordered attribute mapping.
        children: Child elements in document order.
        text: Optional inline text content.
        parent: Owning element, or None for a root.
    """

    __slots__ = ("_name", "_attributes", "_children", "_text", "_parent")

    def __init__(self, name: str) -> None:
        if not name:
            raise ValueError("Node name must be a non-empty string")
        self._name = name
        self._attributes: dict[str, XmlValue] = {}
        self._children: list[Node] = []
        self._text: str | None = None
        self._parent: Node | None = None

    def __repr__(self) -> str:
        return f"Node({self._name!r}, attributes={len(self._attributes)}, children={len(self._children)})"

    def __str__(self) -> str:
        return self.serialize(0)

    @property
    def name(self) -> str:
        return self._name

    @property
    def attributes(self) -> dict[str, XmlValue]:
        return dict(self._attributes)

    @property
    def children(self) -> tuple[Node, ...]:
        return tuple(self._children)

    @property
    def text(self) -> str | None:
        return self._text

    @property
    def parent(self) -> Node | None:
        return self._parent

    def get(self, key: str) -> XmlValue | None:
        return self._attributes.get(key)

    def set_attribute(self, key: str, value: XmlValue) -> Node:
        """Insert or overwrite one attribute and return the node."""
        if not key:
            raise ValueError("Attribute key must be a non-empty string")
        self._attributes[key] = value
        return self

    def set_text(self, value: str) -> Node:
        """Set inline text content.

        Raises:
            InvariantViolationError: If the node already has children.
        """
        if self._children:
            raise InvariantViolationError(f"<{self._name}> already has children; cannot set text")
        self._text = value
        return self

    def add_child(self, child: Node) -> Node:
        """Append a child and take ownership of it. Returns the child.

        Raises:
            InvariantViolationError: If this node has text, if the child is
                already attached elsewhere, or if attaching it would create
                a cycle.
        """
        if self._text is not None:
            raise InvariantViolationError(f"<{self._name}> has text content; cannot add children")
        if child._parent is not None:
            raise InvariantViolationError(f"<{child.name}> is already attached to <{child._parent.name}>")
        if child is self or child in self.ancestors():
            raise InvariantViolationError(f"Attaching <{child.name}> to <{self._name}> would create a cycle")
        child._parent = self
        self._children.append(child)
        return child

    def extend(self, children: Iterable[Node]) -> Node:
        """Append several children in order and return this node."""
        for child in children:
            self.add_child(child)
        return self

    def ancestors(self) -> Iterator[Node]:
        node = self._parent
        while node is not None:
            yield node
            node = node._parent

    def iter(self, name: str | None = None) -> Iterator[Node]:
        """Depth-first walk over this node and its descendants."""
        if name is None or self._name == name:
            yield self
        for child in self._children:
            yield from child.iter(name)

    def serialize(self, level: int = 0) -> str:
        """Return the indented text form of this node at the given depth."""
        return _DEFAULT_WRITER.write(self, level)


@dataclass(frozen=True)
class XmlWriter:
    """Configurable XML writer with pretty-printing.

    Attributes:
        indent: Number of spaces per indentation level.
        attribute_separator: Text placed between an attribute key and its
            quoted value.
    """

    indent: int = 2
    attribute_separator: str = " = "

    def write(self, node: Node, level: int = 0) -> str:
        """Write a node and its descendants to a string.

        Every emitted line, including the last, ends with a newline.
        """
        lines: list[str] = []
        self._write_node(node, level, lines)
        return "\n".join(lines) + "\n"

    def _write_node(self, node: Node, depth: int, lines: list[str]) -> None:
        prefix = " " * (depth * self.indent)
        tag = prefix + "<" + node.name + self._format_attributes(node)
        if node.children:
            lines.append(tag + ">")
            for child in node.children:
                self._write_node(child, depth + 1, lines)
            lines.append(f"{prefix}</{node.name}>")
        elif node.text is not None:
            lines.append(f"{tag}>{escape_text(node.text)}</{node.name}>")
        else:
            lines.append(tag + " />")

    def _format_attributes(self, node: Node) -> str:
        return "".join(
            f' {key}{self.attribute_separator}"{escape_attribute(format_value(value))}"'
            for key, value in node.attributes.items()
        )


_DEFAULT_WRITER = XmlWriter()


def format_value(value: XmlValue) -> str:
    """Format an attribute value for output.

    Args:
        value: Attribute value (bool, int, float, Decimal, or string).

    Returns:
        Text form; booleans become EAGLE's ``yes``/``no`` tokens.
    """
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, Decimal):
        return format_decimal(value)
    if isinstance(value, float):
        # Use Decimal for consistent formatting
        return format_decimal(Decimal(str(value)))
    return str(value)


def format_decimal(value: Decimal) -> str:
    """Format a Decimal value, removing trailing zeros.

    Args:
        value: Decimal value.

    Returns:
        Formatted string without unnecessary trailing zeros.
    """
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("", "-0"):
        return "0"
    return text


def escape_text(value: str) -> str:
    return "".join(_TEXT_ESCAPE_MAP.get(c, c) for c in value)


def escape_attribute(value: str) -> str:
    return "".join(_ATTR_ESCAPE_MAP.get(c, c) for c in value)


def dump(node: Node, *, indent: int = 2, attribute_separator: str = " = ") -> str:
    """Dump a tree to a formatted string.

    Args:
        node: Root node to dump.
        indent: Spaces per indentation level.
        attribute_separator: Text between attribute keys and values.

    Returns:
        Formatted XML fragment.
    """
    writer = XmlWriter(indent=indent, attribute_separator=attribute_separator)
    return writer.write(node)


def document_text(root: Node, writer: XmlWriter | None = None) -> str:
    """Render a complete EAGLE document: declaration, doctype, then the tree."""
    body = (writer or _DEFAULT_WRITER).write(root)
    return f"{XML_DECLARATION}\n{EAGLE_DOCTYPE}\n{body}"

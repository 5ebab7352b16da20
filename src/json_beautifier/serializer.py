"""Pretty-printing serializer for document trees."""

import json
import logging
from typing import BinaryIO, Iterator, List, Optional

from .models import (
    ArrayValue,
    BooleanValue,
    IntegerValue,
    MapValue,
    NullValue,
    RealValue,
    StringValue,
    Value,
)
from .types import ErrorType, ProcessingError

DEFAULT_INDENT = "    "


class _Frame:
    """An open container being written."""

    __slots__ = ("children", "depth", "closer", "is_map", "first")

    def __init__(self, children: Iterator, depth: int, closer: str, is_map: bool):
        self.children = children
        self.depth = depth
        self.closer = closer
        self.is_map = is_map
        self.first = True


def format_string(text: str) -> str:
    """Quote a string with JSON escaping; non-ASCII characters pass through."""
    return json.dumps(text, ensure_ascii=False)


def format_real(number: float) -> str:
    """Format a finite float so it reads back as the same float."""
    text = repr(number)
    if text.lstrip("-").isdigit():
        text += ".0"
    return text


class JSONSerializer:
    """
    Serializer rendering a document tree as indented JSON text.

    Non-empty containers put every child on its own line, indented one level
    deeper than the container, with the closing bracket on a line of its own.
    Empty containers are written as ``[]`` and ``{}``.
    """

    def __init__(self, indent: str = DEFAULT_INDENT, sort_keys: bool = False,
                 final_newline: bool = True, logger: Optional[logging.Logger] = None):
        """
        Initialize the serializer.

        Args:
            indent: String written once per nesting level
            sort_keys: Write map entries ordered by key instead of insertion order
            final_newline: Terminate the output with a newline
            logger: Optional logger instance
        """
        self.indent = indent
        self.sort_keys = sort_keys
        self.final_newline = final_newline
        self.logger = logger or logging.getLogger(__name__)

    def render(self, value: Value) -> bytes:
        """
        Render a tree to UTF-8 bytes.

        Args:
            value: Root of the tree

        Returns:
            Formatted JSON bytes

        Raises:
            ProcessingError: If the tree holds a value JSON cannot express
        """
        parts = self._render_parts(value)
        output = "".join(parts).encode("utf-8", "surrogatepass")
        self.logger.debug(f"Rendered {value.kind.value} root to {len(output)} bytes")
        return output

    def render_to(self, value: Value, sink: BinaryIO) -> int:
        """
        Render a tree and write it to a binary sink.

        The whole document is rendered before the sink is touched. Write
        errors from the sink propagate unchanged.

        Returns:
            Number of bytes written
        """
        output = self.render(value)
        sink.write(output)
        return len(output)

    def _render_parts(self, root: Value) -> List[str]:
        parts: List[str] = []
        stack: List[_Frame] = []

        def emit(node: Value, depth: int) -> None:
            if isinstance(node, MapValue):
                if not node.entries:
                    parts.append("{}")
                    return
                entries = sorted(node.entries.items()) if self.sort_keys else node.entries.items()
                parts.append("{")
                stack.append(_Frame(iter(entries), depth + 1, "}", True))
            elif isinstance(node, ArrayValue):
                if not node.items:
                    parts.append("[]")
                    return
                parts.append("[")
                stack.append(_Frame(iter(node.items), depth + 1, "]", False))
            else:
                parts.append(self._format_scalar(node))

        emit(root, 0)
        while stack:
            frame = stack[-1]
            child = next(frame.children, None)
            if child is None:
                stack.pop()
                parts.append("\n" + self.indent * (frame.depth - 1) + frame.closer)
                continue

            parts.append(("\n" if frame.first else ",\n") + self.indent * frame.depth)
            frame.first = False
            if frame.is_map:
                key, child = child
                parts.append(format_string(key) + ": ")
            emit(child, frame.depth)

        if self.final_newline:
            parts.append("\n")
        return parts

    def _format_scalar(self, node: Value) -> str:
        if isinstance(node, NullValue):
            return "null"
        elif isinstance(node, BooleanValue):
            return "true" if node.value else "false"
        elif isinstance(node, IntegerValue):
            return str(node.value)
        elif isinstance(node, RealValue):
            if not node.is_finite():
                raise ProcessingError(f"Cannot serialize non-finite number {node.value!r}",
                                      ErrorType.SERIALIZATION)
            return format_real(node.value)
        elif isinstance(node, StringValue):
            return format_string(node.value)
        raise ProcessingError(f"Cannot serialize {type(node).__name__}", ErrorType.SERIALIZATION)

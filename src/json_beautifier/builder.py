"""Tree builder driven by lexical JSON events."""

import logging
from typing import Any, Iterable, List, Optional, Tuple, Union

from .models import ArrayValue, Container, MapValue, Value, is_container, make_container, make_scalar
from .types import ErrorType, EventType, ProcessingError, ValueKind

_SCALAR_EVENTS = {
    EventType.NULL: ValueKind.NULL,
    EventType.BOOLEAN: ValueKind.BOOLEAN,
    EventType.INTEGER: ValueKind.INTEGER,
    EventType.REAL: ValueKind.REAL,
    EventType.STRING: ValueKind.STRING,
}

_OPEN_EVENTS = {
    EventType.START_MAP: ValueKind.MAP,
    EventType.START_ARRAY: ValueKind.ARRAY,
}

_CLOSE_EVENTS = {
    EventType.END_MAP: ValueKind.MAP,
    EventType.END_ARRAY: ValueKind.ARRAY,
}


class TreeBuilder:
    """
    State machine turning a stream of lexical events into a document tree.

    The builder owns the root value. Its stack only refers to containers that
    live inside that tree and tracks which container receives the next value.
    A map key event is held as the pending key until the next value consumes it.
    """

    def __init__(self, max_depth: Optional[int] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the tree builder.

        Args:
            max_depth: Optional limit on container nesting depth
            logger: Optional logger instance
        """
        self.max_depth = max_depth
        self.logger = logger or logging.getLogger(__name__)
        self.reset()

    def reset(self) -> None:
        """Discard any partially built tree."""
        self.root: Optional[Value] = None
        self.stack: List[Container] = []
        self.pending_key: Optional[str] = None
        self.duplicate_keys = 0

    def feed(self, event: Union[EventType, str], value: Any = None) -> None:
        """
        Apply a single event.

        Args:
            event: Event type, or its ijson name
            value: Scalar payload or map key; ignored for container events

        Raises:
            ProcessingError: If the event is not valid in the current state
        """
        if not isinstance(event, EventType):
            try:
                event = EventType(event)
            except ValueError:
                raise ProcessingError(f"Unknown event: {event!r}", ErrorType.STRUCTURE) from None

        if event is EventType.MAP_KEY:
            if not isinstance(value, str):
                raise ProcessingError(
                    f"map_key event carries a {type(value).__name__} key, expected str",
                    ErrorType.STRUCTURE
                )
            self.pending_key = value
        elif event in _SCALAR_EVENTS:
            try:
                node = make_scalar(value)
            except ValueError as e:
                raise ProcessingError(str(e), ErrorType.STRUCTURE, context={"event": event.value}) from e
            if node.kind is not _SCALAR_EVENTS[event]:
                raise ProcessingError(
                    f"{event.value} event carries a {node.kind.value} payload",
                    ErrorType.STRUCTURE
                )
            self._emit(node)
        elif event in _OPEN_EVENTS:
            if self.max_depth is not None and len(self.stack) >= self.max_depth:
                raise ProcessingError(
                    f"Maximum nesting depth of {self.max_depth} exceeded",
                    ErrorType.STRUCTURE,
                    context={"depth": len(self.stack) + 1}
                )
            self._emit(make_container(_OPEN_EVENTS[event]))
        else:
            self._close(_CLOSE_EVENTS[event])

    def _emit(self, node: Value) -> None:
        if self.root is None:
            self.root = node
        elif not self.stack:
            raise ProcessingError(
                f"Unexpected {node.kind.value} after the top-level value was complete",
                ErrorType.STRUCTURE
            )
        else:
            current = self.stack[-1]
            if isinstance(current, ArrayValue):
                current.append(node)
            elif isinstance(current, MapValue):
                if self.pending_key is None:
                    raise ProcessingError(
                        f"Unexpected {node.kind.value} inside a map without a key",
                        ErrorType.STRUCTURE
                    )
                key, self.pending_key = self.pending_key, None
                if not current.insert(key, node):
                    self.duplicate_keys += 1
                    self.logger.warning(f"Duplicate key {key!r} ignored, keeping the first value")

        if is_container(node):
            self.stack.append(node)

    def _close(self, kind: ValueKind) -> None:
        if not self.stack:
            raise ProcessingError(
                f"Unexpected end of {kind.value} with no open container",
                ErrorType.STRUCTURE
            )
        if self.stack[-1].kind is not kind:
            raise ProcessingError(
                f"Unexpected end of {kind.value} while a {self.stack[-1].kind.value} is open",
                ErrorType.STRUCTURE
            )
        self.stack.pop()

    @property
    def depth(self) -> int:
        """Number of containers currently open."""
        return len(self.stack)

    def is_complete(self) -> bool:
        return self.root is not None and not self.stack

    def finish(self) -> Value:
        """
        Check the terminal condition and hand over the root.

        Returns:
            The root value of the document

        Raises:
            ProcessingError: If no value was built or containers are still open
        """
        if self.root is None:
            raise ProcessingError("Empty document", ErrorType.STRUCTURE)
        if self.stack:
            raise ProcessingError(
                f"Incomplete document: {len(self.stack)} container(s) left open",
                ErrorType.STRUCTURE,
                context={"depth": len(self.stack)}
            )
        root = self.root
        self.logger.debug(f"Built {root.kind.value} root, {self.duplicate_keys} duplicate key(s) dropped")
        self.reset()
        return root

    def build(self, events: Iterable[Tuple[Union[EventType, str], Any]]) -> Value:
        """
        Build a tree from a complete event stream.

        Args:
            events: Iterable of (event, value) pairs

        Returns:
            The root value

        Raises:
            ProcessingError: On any structural failure; no partial tree is kept
        """
        self.reset()
        try:
            for event, value in events:
                self.feed(event, value)
            return self.finish()
        except ProcessingError:
            self.reset()
            raise

"""Lexical event source backed by ijson."""

import io
import logging
from typing import Any, Iterator, Optional, Tuple

import ijson

from .models.value import INT64_MAX, INT64_MIN
from .types import ErrorType, EventType, ProcessingError

READ_BUFSIZE = 64 * 1024

_PASSTHROUGH_EVENTS = {event.value: event for event in EventType}
# older ijson backends report integer and double separately, newer ones only number
_NUMBER_EVENTS = {"number", "integer", "double"}


def _number_event(value: Any) -> Tuple[EventType, Any]:
    if isinstance(value, int):
        if not INT64_MIN <= value <= INT64_MAX:
            raise ProcessingError("integer overflow", ErrorType.LEXICAL, context={"value": str(value)})
        return EventType.INTEGER, value
    return EventType.REAL, float(value)


def backend_name() -> str:
    """Name of the ijson backend in use, e.g. ``yajl2_c`` or ``python``."""
    backend = getattr(ijson, "backend", "")
    if not isinstance(backend, str):
        backend = getattr(backend, "backend_name", getattr(backend, "__name__", ""))
    return backend.rsplit(".", 1)[-1]


def comments_supported() -> bool:
    """Whether the ijson backend can skip comments; only the yajl ones can."""
    return backend_name().startswith("yajl")


def iter_events(data: bytes, allow_comments: bool = False,
                buf_size: int = READ_BUFSIZE,
                logger: Optional[logging.Logger] = None) -> Iterator[Tuple[EventType, Any]]:
    """
    Tokenize a JSON document into builder events.

    Args:
        data: Raw JSON bytes
        allow_comments: Accept ``/* */`` and ``//`` comments (yajl backends only)
        buf_size: Read size used by ijson
        logger: Optional logger instance

    Yields:
        Tuples of (event_type, value)

    Raises:
        ProcessingError: With ``ErrorType.LEXICAL`` carrying the lexer's message
    """
    logger = logger or logging.getLogger(__name__)
    config = {"use_float": True}
    if allow_comments:
        config["allow_comments"] = True

    logger.debug(f"Tokenizing {len(data)} bytes with ijson backend {backend_name()}")
    try:
        for event, value in ijson.basic_parse(io.BytesIO(data), buf_size=buf_size, **config):
            if event in _NUMBER_EVENTS:
                yield _number_event(value)
            else:
                yield _PASSTHROUGH_EVENTS[event], value
    except ijson.JSONError as e:
        raise ProcessingError(str(e), ErrorType.LEXICAL) from e
    except UnicodeDecodeError as e:
        raise ProcessingError(f"invalid UTF-8 in input: {e.reason}", ErrorType.LEXICAL,
                              context={"offset": e.start}) from e
    except ValueError as e:
        # the pure python backend rejects allow_comments this way
        if not (allow_comments and "comment" in str(e).lower()):
            raise
        raise ProcessingError(str(e), ErrorType.LEXICAL,
                              context={"backend": backend_name()}) from e

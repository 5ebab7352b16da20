"""
JSON Beautifier - Event-driven JSON pretty printer.

Builds an in-memory document tree from lexical JSON events and renders it
back as consistently indented JSON text.
"""

__version__ = "1.0.0"

from .builder import TreeBuilder
from .json_beautifier import JSONBeautifier
from .serializer import JSONSerializer
from .types import BeautifyResult, ErrorType, EventType, ProcessingError, ValueKind

__all__ = [
    "JSONBeautifier",
    "TreeBuilder",
    "JSONSerializer",
    "BeautifyResult",
    "ErrorType",
    "EventType",
    "ProcessingError",
    "ValueKind",
]

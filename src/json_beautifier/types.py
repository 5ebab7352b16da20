"""Core type definitions for the JSON Beautifier."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional


class ValueKind(Enum):
    """Enumeration of value variants in a document tree."""
    NULL = "null"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    REAL = "real"
    STRING = "string"
    MAP = "map"
    ARRAY = "array"


class EventType(Enum):
    """Enumeration of lexical events delivered to the tree builder."""
    NULL = "null"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    REAL = "double"
    STRING = "string"
    START_MAP = "start_map"
    MAP_KEY = "map_key"
    END_MAP = "end_map"
    START_ARRAY = "start_array"
    END_ARRAY = "end_array"


class ErrorType(Enum):
    """Enumeration of error types."""
    LEXICAL = "lexical"
    STRUCTURE = "structure"
    SERIALIZATION = "serialization"
    FILESYSTEM = "filesystem"
    USAGE = "usage"


@dataclass
class BeautifyResult:
    """Result of a beautify operation."""
    success: bool
    output: bytes
    errors: Optional[List[str]] = None
    error_type: Optional[ErrorType] = None


@dataclass
class ValidationError:
    """Validation error details."""
    type: ErrorType
    message: str
    location: Optional[str] = None


@dataclass
class ValidationResult:
    """Result of input validation."""
    is_valid: bool
    errors: List[ValidationError]
    warnings: List[str]


@dataclass
class ErrorResponse:
    """Response for error handling."""
    can_recover: bool
    suggested_action: str


class ProcessingError(Exception):
    """Custom exception for processing errors."""

    def __init__(self, message: str, error_type: ErrorType, context: Optional[Any] = None):
        super().__init__(message)
        self.error_type = error_type
        self.context = context


# Abstract base classes for interfaces

class JSONBeautifierInterface(ABC):
    """Abstract interface for the JSON Beautifier."""

    @abstractmethod
    def parse(self, data: bytes) -> Any:
        """Build a document tree from raw JSON bytes."""
        pass

    @abstractmethod
    def render(self, value: Any) -> bytes:
        """Render a document tree as formatted JSON bytes."""
        pass

    @abstractmethod
    def beautify(self, data: bytes) -> BeautifyResult:
        """Parse raw JSON bytes and render them formatted."""
        pass


class ErrorHandlerInterface(ABC):
    """Abstract interface for error handling."""

    @abstractmethod
    def validate_input(self, input_data: bytes) -> ValidationResult:
        """Validate input data."""
        pass

    @abstractmethod
    def handle_processing_error(self, error: ProcessingError) -> ErrorResponse:
        """Handle processing errors."""
        pass

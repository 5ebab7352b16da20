"""Main JSON Beautifier implementation."""

import logging
from typing import Optional

from .builder import TreeBuilder
from .error_handler import ErrorHandler
from .lexer import iter_events
from .models import Value
from .profiler import PerformanceProfiler
from .serializer import JSONSerializer
from .types import BeautifyResult, JSONBeautifierInterface, ProcessingError


class JSONBeautifier(JSONBeautifierInterface):
    """
    Main implementation of the JSON Beautifier interface.

    Tokenizes raw JSON with ijson, builds a document tree from the events and
    renders the tree back as indented JSON text.
    """

    def __init__(self, indent: int = 4,
                 sort_keys: bool = False,
                 allow_comments: bool = False,
                 max_depth: Optional[int] = None,
                 enable_profiling: bool = False,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the JSON Beautifier.

        Args:
            indent: Spaces per nesting level
            sort_keys: Write map entries sorted by key
            allow_comments: Accept comments in the input (yajl ijson backends only)
            max_depth: Optional limit on container nesting depth
            enable_profiling: Record performance metrics for each beautify call
            logger: Optional logger instance

        Raises:
            ValueError: If indent or max_depth is invalid
        """
        self.logger = logger or logging.getLogger(__name__)
        self.error_handler = ErrorHandler(self.logger)

        for validation in (self.error_handler.validate_indent(indent),
                           self.error_handler.validate_max_depth(max_depth)):
            if not validation.is_valid:
                raise ValueError("; ".join(error.message for error in validation.errors))
            for warning in validation.warnings:
                self.logger.warning(warning)

        self.allow_comments = allow_comments
        self.builder = TreeBuilder(max_depth=max_depth, logger=self.logger)
        self.serializer = JSONSerializer(indent=" " * indent, sort_keys=sort_keys, logger=self.logger)
        self.profiler = PerformanceProfiler(self.logger) if enable_profiling else None

    def parse(self, data: bytes) -> Value:
        """
        Build a document tree from raw JSON bytes.

        Args:
            data: Raw JSON bytes

        Returns:
            Root value of the document

        Raises:
            ProcessingError: On lexical or structural failure
        """
        events = iter_events(data, allow_comments=self.allow_comments, logger=self.logger)
        return self.builder.build(events)

    def render(self, value: Value) -> bytes:
        """Render a document tree as indented JSON bytes."""
        return self.serializer.render(value)

    def beautify(self, data: bytes) -> BeautifyResult:
        """
        Parse raw JSON bytes and render them formatted.

        Args:
            data: Raw JSON bytes

        Returns:
            BeautifyResult; failures are reported in it rather than raised
        """
        validation = self.error_handler.validate_input(data)
        for warning in validation.warnings:
            self.logger.warning(warning)
        if not validation.is_valid:
            return BeautifyResult(
                success=False,
                output=b"",
                errors=[error.message for error in validation.errors],
                error_type=validation.errors[0].type
            )

        if self.profiler is None:
            return self._beautify(data)

        with self.profiler.profile_operation("beautify", len(data)) as profiler:
            result = self._beautify(data)
            profiler.output_size = len(result.output)
        return result

    def _beautify(self, data: bytes) -> BeautifyResult:
        try:
            root = self.parse(data)
            if self.profiler is not None:
                self.profiler.sample_performance()
            output = self.render(root)
        except ProcessingError as e:
            self.logger.debug(f"Beautify failed: {e.error_type.value} - {e}")
            return BeautifyResult(
                success=False,
                output=b"",
                errors=[str(e)],
                error_type=e.error_type
            )

        self.logger.info(f"Beautified {len(data)} bytes into {len(output)} bytes")
        return BeautifyResult(success=True, output=output)

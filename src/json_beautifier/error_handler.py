"""Error handling implementation for the JSON Beautifier."""

import logging
from typing import Optional

from .types import (
    ErrorHandlerInterface,
    ErrorResponse,
    ErrorType,
    ProcessingError,
    ValidationError,
    ValidationResult,
)


class ErrorHandler(ErrorHandlerInterface):
    """
    Error handler for JSON Beautifier operations.

    Validates inputs and options before a conversion starts and turns
    processing errors into user-facing suggestions. Nothing is retried: every
    failure ends the current conversion.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the error handler.

        Args:
            logger: Optional logger instance for error reporting
        """
        self.logger = logger or logging.getLogger(__name__)

    def validate_input(self, input_data: bytes) -> ValidationResult:
        """
        Validate raw input bytes before tokenizing.

        Args:
            input_data: Raw JSON bytes

        Returns:
            ValidationResult with validation details
        """
        errors = []
        warnings = []

        if not input_data.strip():
            errors.append(ValidationError(
                type=ErrorType.LEXICAL,
                message="Input is empty",
                location="input"
            ))
        elif input_data.startswith(b"\xef\xbb\xbf"):
            warnings.append("Input starts with a UTF-8 byte order mark")

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )

    def validate_indent(self, indent: int) -> ValidationResult:
        """
        Validate the indentation width.

        Args:
            indent: Number of spaces per nesting level

        Returns:
            ValidationResult with validation details
        """
        errors = []
        warnings = []

        if indent < 0:
            errors.append(ValidationError(
                type=ErrorType.USAGE,
                message="Indent must not be negative",
                location="indent"
            ))
        elif indent == 0:
            warnings.append("Indent is 0, nested values will not be indented")
        elif indent > 16:
            warnings.append(f"Indent of {indent} spaces is unusually wide")

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )

    def validate_max_depth(self, max_depth: Optional[int]) -> ValidationResult:
        """Validate the nesting depth limit."""
        errors = []
        if max_depth is not None and max_depth < 1:
            errors.append(ValidationError(
                type=ErrorType.USAGE,
                message="Maximum depth must be at least 1",
                location="max_depth"
            ))
        return ValidationResult(is_valid=len(errors) == 0, errors=errors, warnings=[])

    def handle_processing_error(self, error: ProcessingError) -> ErrorResponse:
        """
        Handle processing errors and provide a suggested action.

        Args:
            error: ProcessingError to handle

        Returns:
            ErrorResponse with recovery information
        """
        self.logger.error(f"Processing error: {error.error_type.value} - {error}")

        if error.error_type == ErrorType.LEXICAL:
            return ErrorResponse(
                can_recover=False,
                suggested_action="Fix the JSON syntax at the reported position and run again."
            )
        elif error.error_type == ErrorType.STRUCTURE:
            return ErrorResponse(
                can_recover=False,
                suggested_action="The event stream is unbalanced or has content after the "
                                 "top-level value. Check the event source."
            )
        elif error.error_type == ErrorType.SERIALIZATION:
            return ErrorResponse(
                can_recover=False,
                suggested_action="Remove values JSON cannot express, such as NaN or Infinity."
            )
        elif error.error_type == ErrorType.FILESYSTEM:
            return ErrorResponse(
                can_recover=True,
                suggested_action="Check that the path exists, file permissions and available disk space."
            )
        elif error.error_type == ErrorType.USAGE:
            return ErrorResponse(
                can_recover=True,
                suggested_action="Check the command line arguments."
            )
        else:
            return ErrorResponse(
                can_recover=False,
                suggested_action="Unknown error type. Please check logs and retry."
            )

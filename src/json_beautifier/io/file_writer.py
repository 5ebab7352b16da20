"""File writer for formatted JSON output."""

import logging
import sys
from typing import Optional

from ..types import ErrorType, ProcessingError
from .file_reader import STDIO_PATH


class FileWriter:
    """
    Writer for formatted JSON output.

    ``-`` writes to standard output. The target is opened only when there is
    output to write, so a failed conversion never truncates an existing file.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the file writer.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def write(self, path: str, data: bytes) -> int:
        """
        Write bytes to a file, or standard output for ``-``.

        Args:
            path: File path or ``-``
            data: Bytes to write

        Returns:
            Number of bytes written

        Raises:
            ProcessingError: If the file cannot be opened or written
        """
        try:
            if path == STDIO_PATH:
                sys.stdout.flush()
                sys.stdout.buffer.write(data)
                sys.stdout.buffer.flush()
            else:
                with open(path, "wb") as stream:
                    stream.write(data)
        except OSError as e:
            raise ProcessingError(
                f"{path}: {e.strerror or e}",
                ErrorType.FILESYSTEM,
                context={"path": path}
            ) from e

        self.logger.debug(f"Wrote {len(data)} bytes to {path}")
        return len(data)

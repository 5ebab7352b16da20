"""File reader loading whole JSON documents into memory."""

import logging
import sys
from typing import BinaryIO, Optional

from ..types import ErrorType, ProcessingError

STDIO_PATH = "-"
READ_BUFSIZE = 4096


class FileReader:
    """
    Reader for JSON input files.

    The whole input is read into memory before tokenizing starts. ``-`` reads
    standard input in binary mode.
    """

    def __init__(self, chunk_size: int = READ_BUFSIZE,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the file reader.

        Args:
            chunk_size: Bytes requested per read call
            logger: Optional logger instance
        """
        self.chunk_size = chunk_size
        self.logger = logger or logging.getLogger(__name__)

    def read(self, path: str) -> bytes:
        """
        Read a whole file, or standard input for ``-``.

        Args:
            path: File path or ``-``

        Returns:
            File contents

        Raises:
            ProcessingError: If the file cannot be opened or read
        """
        try:
            if path == STDIO_PATH:
                data = self.read_stream(sys.stdin.buffer)
            else:
                with open(path, "rb") as stream:
                    data = self.read_stream(stream)
        except OSError as e:
            raise ProcessingError(
                f"{path}: {e.strerror or e}",
                ErrorType.FILESYSTEM,
                context={"path": path}
            ) from e

        self.logger.debug(f"Read {len(data)} bytes from {path}")
        return data

    def read_stream(self, stream: BinaryIO) -> bytes:
        """Read a binary stream in fixed-size chunks until a short read."""
        buffer = bytearray()
        while True:
            chunk = stream.read(self.chunk_size)
            buffer.extend(chunk)
            if len(chunk) < self.chunk_size:
                break
        return bytes(buffer)

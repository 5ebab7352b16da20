"""File I/O operations for the JSON Beautifier."""

from .file_reader import STDIO_PATH, FileReader
from .file_writer import FileWriter

__all__ = ["FileReader", "FileWriter", "STDIO_PATH"]

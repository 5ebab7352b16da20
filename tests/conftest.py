"""Pytest configuration and fixtures."""

import pytest
import tempfile
from pathlib import Path


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def sample_document():
    """Compact JSON document mixing every value kind."""
    return (
        b'{"name":"Alice","age":30,"height":1.68,"active":true,"spouse":null,'
        b'"tags":["admin","dev"],"address":{"city":"New York","zip":"10001"},'
        b'"history":[],"extra":{}}'
    )


@pytest.fixture
def sample_events():
    """Event stream for {"a": 1, "b": [2, 3]}."""
    return [
        ("start_map", None),
        ("map_key", "a"),
        ("integer", 1),
        ("map_key", "b"),
        ("start_array", None),
        ("integer", 2),
        ("integer", 3),
        ("end_array", None),
        ("end_map", None),
    ]


@pytest.fixture
def input_file(temp_dir):
    """Write a small compact JSON file and return its path."""
    path = temp_dir / "input.json"
    path.write_bytes(b'{"a":1,"b":[2,3]}')
    return path

"""Tests for the event-driven tree builder."""

import pytest
from json_beautifier.builder import TreeBuilder
from json_beautifier.models import (
    ArrayValue,
    BooleanValue,
    IntegerValue,
    MapValue,
    NullValue,
    RealValue,
    StringValue,
    to_python,
)
from json_beautifier.types import ErrorType, EventType, ProcessingError


class TestTreeBuilder:
    """Tests for TreeBuilder class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.builder = TreeBuilder()

    def test_build_example_document(self, sample_events):
        """Test the map with nested array example."""
        root = self.builder.build(sample_events)

        assert root == MapValue({
            "a": IntegerValue(1),
            "b": ArrayValue([IntegerValue(2), IntegerValue(3)]),
        })

    def test_build_with_event_enum(self):
        """Test events may be given as EventType members."""
        root = self.builder.build([
            (EventType.START_ARRAY, None),
            (EventType.REAL, 0.5),
            (EventType.STRING, "x"),
            (EventType.BOOLEAN, False),
            (EventType.NULL, None),
            (EventType.END_ARRAY, None),
        ])

        assert root == ArrayValue([RealValue(0.5), StringValue("x"), BooleanValue(False), NullValue()])

    def test_scalar_root(self):
        """Test a lone scalar becomes the root."""
        root = self.builder.build([("string", "hello")])

        assert root == StringValue("hello")

    def test_stack_empty_after_build(self, sample_events):
        """Test the builder ends with an empty stack."""
        for event, value in sample_events:
            self.builder.feed(event, value)

        assert self.builder.is_complete()
        assert self.builder.depth == 0
        assert self.builder.finish() is not None

    def test_depth_tracks_open_containers(self):
        """Test depth follows container opens and closes."""
        self.builder.feed("start_array")
        self.builder.feed("start_map")
        assert self.builder.depth == 2

        self.builder.feed("end_map")
        assert self.builder.depth == 1
        assert not self.builder.is_complete()

    def test_duplicate_key_first_value_wins(self):
        """Test a repeated key keeps its first value."""
        root = self.builder.build([
            ("start_map", None),
            ("map_key", "a"),
            ("integer", 1),
            ("map_key", "a"),
            ("integer", 2),
            ("end_map", None),
        ])

        assert root == MapValue({"a": IntegerValue(1)})
        assert self.builder.duplicate_keys == 0  # reset after finish

    def test_duplicate_key_with_container_value(self):
        """Test a discarded duplicate container swallows its children."""
        root = self.builder.build([
            ("start_map", None),
            ("map_key", "a"),
            ("start_array", None),
            ("integer", 1),
            ("end_array", None),
            ("map_key", "a"),
            ("start_array", None),
            ("integer", 2),
            ("integer", 3),
            ("end_array", None),
            ("map_key", "b"),
            ("boolean", True),
            ("end_map", None),
        ])

        assert to_python(root) == {"a": [1], "b": True}

    def test_duplicate_key_logs_warning(self, caplog):
        """Test duplicates are reported in the log."""
        with caplog.at_level("WARNING"):
            self.builder.build([
                ("start_map", None),
                ("map_key", "k"),
                ("null", None),
                ("map_key", "k"),
                ("null", None),
                ("end_map", None),
            ])

        assert "Duplicate key 'k'" in caplog.text

    def test_map_key_overwrites_pending_key(self):
        """Test a second key event replaces an unconsumed key."""
        root = self.builder.build([
            ("start_map", None),
            ("map_key", "first"),
            ("map_key", "second"),
            ("integer", 1),
            ("end_map", None),
        ])

        assert root == MapValue({"second": IntegerValue(1)})

    def test_close_before_open_fails(self):
        """Test an array end with nothing open is a structural failure."""
        with pytest.raises(ProcessingError) as exc_info:
            self.builder.build([("end_array", None)])

        assert exc_info.value.error_type == ErrorType.STRUCTURE
        assert self.builder.root is None

    def test_close_after_root_complete_fails(self):
        """Test an extra close after the document is done."""
        with pytest.raises(ProcessingError, match="no open container"):
            self.builder.build([("start_map", None), ("end_map", None), ("end_map", None)])

    def test_mismatched_close_fails(self):
        """Test closing a map with an array end."""
        with pytest.raises(ProcessingError, match="while a map is open"):
            self.builder.build([("start_map", None), ("end_array", None)])

    def test_value_after_closed_root_fails(self):
        """Test content after the top-level container was closed."""
        with pytest.raises(ProcessingError, match="after the top-level value") as exc_info:
            self.builder.build([
                ("start_array", None),
                ("end_array", None),
                ("integer", 1),
            ])

        assert exc_info.value.error_type == ErrorType.STRUCTURE

    def test_value_after_scalar_root_fails(self):
        """Test a second value after a scalar root."""
        with pytest.raises(ProcessingError):
            self.builder.build([("integer", 1), ("integer", 2)])

    def test_map_value_without_key_fails(self):
        """Test a value inside a map needs a preceding key."""
        with pytest.raises(ProcessingError, match="without a key"):
            self.builder.build([("start_map", None), ("integer", 1)])

    def test_pending_key_consumed(self):
        """Test each key pairs with exactly one value."""
        with pytest.raises(ProcessingError, match="without a key"):
            self.builder.build([
                ("start_map", None),
                ("map_key", "a"),
                ("integer", 1),
                ("integer", 2),
            ])

    def test_incomplete_document_fails(self):
        """Test a stream ending with open containers."""
        with pytest.raises(ProcessingError, match="Incomplete document"):
            self.builder.build([("start_array", None), ("start_map", None), ("end_map", None)])

    def test_empty_stream_fails(self):
        """Test an empty event stream has no root."""
        with pytest.raises(ProcessingError, match="Empty document"):
            self.builder.build([])

    def test_unknown_event_fails(self):
        """Test unknown event names are rejected."""
        with pytest.raises(ProcessingError, match="Unknown event"):
            self.builder.feed("start_tuple")

    def test_bad_scalar_payload_fails(self):
        """Test a scalar event with an unusable payload."""
        with pytest.raises(ProcessingError) as exc_info:
            self.builder.feed("integer", 2 ** 64)

        assert exc_info.value.error_type == ErrorType.STRUCTURE

    def test_payload_must_match_event(self):
        """Test a scalar event with a payload of another kind."""
        with pytest.raises(ProcessingError, match="string event carries a null payload"):
            self.builder.feed("string", None)

    def test_map_key_must_be_string(self):
        """Test a non-string map key is a structural failure."""
        with pytest.raises(ProcessingError, match="carries a int key") as exc_info:
            self.builder.build([
                ("start_map", None),
                ("map_key", 5),
                ("integer", 1),
                ("end_map", None),
            ])

        assert exc_info.value.error_type == ErrorType.STRUCTURE
        assert self.builder.root is None

    def test_failed_build_discards_state(self):
        """Test no partial tree survives a failed build."""
        with pytest.raises(ProcessingError):
            self.builder.build([("start_array", None), ("integer", 1)])

        assert self.builder.root is None
        assert self.builder.stack == []
        assert self.builder.pending_key is None

    def test_builder_reusable(self, sample_events):
        """Test one builder builds several documents."""
        first = self.builder.build(sample_events)
        second = self.builder.build(sample_events)

        assert first == second
        assert first is not second


class TestTreeBuilderMaxDepth:
    """Tests for the nesting depth limit."""

    def test_within_limit(self):
        """Test nesting up to the limit is accepted."""
        builder = TreeBuilder(max_depth=2)
        root = builder.build([
            ("start_array", None),
            ("start_array", None),
            ("integer", 1),
            ("end_array", None),
            ("end_array", None),
        ])

        assert to_python(root) == [[1]]

    def test_exceeding_limit(self):
        """Test nesting past the limit fails."""
        builder = TreeBuilder(max_depth=2)

        with pytest.raises(ProcessingError, match="Maximum nesting depth of 2 exceeded"):
            builder.build([("start_array", None)] * 3)

"""Document tree value model.

Every JSON value is represented by exactly one of the variant classes below.
A variant only carries its own payload field, so reading the payload of the
wrong variant fails with an ``AttributeError`` instead of returning garbage.
"""

import math
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Union

from ..types import ValueKind

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


@dataclass
class NullValue:
    """The JSON ``null`` literal."""

    kind: ClassVar[ValueKind] = ValueKind.NULL


@dataclass
class BooleanValue:
    """A JSON boolean."""

    value: bool
    kind: ClassVar[ValueKind] = ValueKind.BOOLEAN

    def __post_init__(self):
        if not isinstance(self.value, bool):
            raise ValueError(f"boolean payload must be bool, got {type(self.value).__name__}")


@dataclass
class IntegerValue:
    """A JSON integer limited to the signed 64-bit range."""

    value: int
    kind: ClassVar[ValueKind] = ValueKind.INTEGER

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError(f"integer payload must be int, got {type(self.value).__name__}")
        if not INT64_MIN <= self.value <= INT64_MAX:
            raise ValueError(f"integer {self.value} does not fit in 64 bits")


@dataclass
class RealValue:
    """A JSON number with a fractional part or exponent."""

    value: float
    kind: ClassVar[ValueKind] = ValueKind.REAL

    def __post_init__(self):
        if not isinstance(self.value, float):
            raise ValueError(f"real payload must be float, got {type(self.value).__name__}")

    def is_finite(self) -> bool:
        return math.isfinite(self.value)


@dataclass
class StringValue:
    """A JSON string."""

    value: str
    kind: ClassVar[ValueKind] = ValueKind.STRING

    def __post_init__(self):
        if not isinstance(self.value, str):
            raise ValueError(f"string payload must be str, got {type(self.value).__name__}")


@dataclass
class ArrayValue:
    """An ordered sequence of values. Duplicates are allowed."""

    items: List["Value"] = field(default_factory=list)
    kind: ClassVar[ValueKind] = ValueKind.ARRAY

    def append(self, value: "Value") -> None:
        self.items.append(value)

    def __len__(self) -> int:
        return len(self.items)


@dataclass
class MapValue:
    """
    A mapping from string keys to values.

    Keys are unique and iterate in insertion order. Inserting a key that is
    already present leaves the existing entry untouched.
    """

    entries: Dict[str, "Value"] = field(default_factory=dict)
    kind: ClassVar[ValueKind] = ValueKind.MAP

    def insert(self, key: str, value: "Value") -> bool:
        """
        Insert ``value`` under ``key`` unless the key already exists.

        Returns:
            True if the entry was stored, False if the key was a duplicate
        """
        if key in self.entries:
            return False
        self.entries[key] = value
        return True

    def __len__(self) -> int:
        return len(self.entries)


Value = Union[NullValue, BooleanValue, IntegerValue, RealValue, StringValue, ArrayValue, MapValue]
Container = Union[ArrayValue, MapValue]

_CONTAINER_TYPES = {
    ValueKind.ARRAY: ArrayValue,
    ValueKind.MAP: MapValue,
}


def make_scalar(payload: Any) -> Value:
    """
    Construct a scalar value from a concrete Python scalar.

    Args:
        payload: None, bool, int, float or str

    Returns:
        The matching scalar variant

    Raises:
        ValueError: If the payload has no scalar variant
    """
    if payload is None:
        return NullValue()
    # bool is checked before int since bool subclasses int
    if isinstance(payload, bool):
        return BooleanValue(payload)
    if isinstance(payload, int):
        return IntegerValue(payload)
    if isinstance(payload, float):
        return RealValue(payload)
    if isinstance(payload, str):
        return StringValue(payload)
    raise ValueError(f"Unsupported scalar payload: {type(payload).__name__}")


def make_container(kind: ValueKind) -> Container:
    """Construct an empty array or map."""
    try:
        return _CONTAINER_TYPES[kind]()
    except KeyError:
        raise ValueError(f"{kind.value} is not a container kind") from None


def is_container(value: Value) -> bool:
    return isinstance(value, (ArrayValue, MapValue))


def to_python(value: Value) -> Any:
    """
    Convert a document tree into plain Python objects.

    Maps become dicts, arrays become lists and scalars their payloads. The
    walk keeps its own stack so deep trees do not hit the recursion limit.
    """
    def convert(node: Value) -> Any:
        if isinstance(node, ArrayValue):
            return []
        if isinstance(node, MapValue):
            return {}
        if isinstance(node, NullValue):
            return None
        return node.value

    result = convert(value)
    pending = [(value, result)]
    while pending:
        node, target = pending.pop()
        if isinstance(node, ArrayValue):
            for child in node.items:
                converted = convert(child)
                target.append(converted)
                if is_container(child):
                    pending.append((child, converted))
        elif isinstance(node, MapValue):
            for key, child in node.entries.items():
                converted = convert(child)
                target[key] = converted
                if is_container(child):
                    pending.append((child, converted))
    return result

"""Data models for the JSON Beautifier."""

from .value import (
    ArrayValue,
    BooleanValue,
    Container,
    IntegerValue,
    MapValue,
    NullValue,
    RealValue,
    StringValue,
    Value,
    is_container,
    make_container,
    make_scalar,
    to_python,
)

__all__ = [
    "ArrayValue",
    "BooleanValue",
    "Container",
    "IntegerValue",
    "MapValue",
    "NullValue",
    "RealValue",
    "StringValue",
    "Value",
    "is_container",
    "make_container",
    "make_scalar",
    "to_python",
]

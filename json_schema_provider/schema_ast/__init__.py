"""
Schema node tree module.

Contains the schema node definitions and the parser that builds them.
"""

from __future__ import annotations

from .nodes import (
    AnyNode,
    ArrayNode,
    EnumNode,
    PrimitiveNode,
    RecordNode,
    RefNode,
    SchemaNode,
    UnionNode,
)
from .parser import SchemaParser, escape_pointer_token

__all__ = [
    "SchemaNode",
    "PrimitiveNode",
    "RecordNode",
    "ArrayNode",
    "UnionNode",
    "EnumNode",
    "RefNode",
    "AnyNode",
    "SchemaParser",
    "escape_pointer_token",
]

"""
Node definitions for a compiled JSON Schema.

A schema is parsed once into a tree of these nodes. Every node keeps the
subschema it was parsed from so that the validation engine can be run
against any single node (e.g. one alternative of a union).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class SchemaNode:
    """Base class for all schema nodes."""

    # JSON pointer of this node in the schema source (for error messages)
    source_path: str = "#"

    # The subschema this node was parsed from
    schema: Any = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class PrimitiveNode(SchemaNode):
    """Represents a primitive type (null, boolean, number, integer, string)."""

    type_name: str = ""


@dataclass(frozen=True)
class EnumNode(SchemaNode):
    """Represents a closed enumeration of literal values."""

    values: tuple[Any, ...] = ()


@dataclass(frozen=True)
class RefNode(SchemaNode):
    """Represents a local $ref, resolved lazily through the owning schema."""

    ref_path: str = ""


@dataclass(frozen=True)
class ArrayNode(SchemaNode):
    """Represents an array type."""

    items: SchemaNode | None = None

    # Positional item schemas (prefixItems, or the legacy list form of items)
    prefix_items: tuple[SchemaNode, ...] = ()

    def item_node(self, index: int) -> SchemaNode | None:
        if index < len(self.prefix_items):
            return self.prefix_items[index]
        return self.items


@dataclass(frozen=True)
class RecordNode(SchemaNode):
    """Represents an object type with declared properties."""

    properties: dict[str, SchemaNode] = field(default_factory=dict, hash=False)
    required: tuple[str, ...] = ()

    # False when additionalProperties is false (closed property set)
    additional_properties: bool = True

    # Schema applied to undeclared properties when additionalProperties is a schema
    additional_node: SchemaNode | None = None


@dataclass(frozen=True)
class UnionNode(SchemaNode):
    """Represents a oneOf, anyOf or type-list union."""

    variants: tuple[SchemaNode, ...] = ()
    union_type: str = "oneOf"  # "oneOf", "anyOf" or "typeArray"

    @property
    def exactly_one(self) -> bool:
        return self.union_type == "oneOf"


@dataclass(frozen=True)
class AnyNode(SchemaNode):
    """Represents a schema with no shape of its own; values pass through unchanged."""

    pass

"""
JSON Schema parser that builds the schema node tree.

Only the shape-bearing keywords are interpreted here (type, properties,
additionalProperties, items, oneOf/anyOf, enum, $ref). Value constraints
such as minimum or maxLength are left to the validation engine.
"""

from __future__ import annotations

from typing import Any

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


def escape_pointer_token(token: str) -> str:
    """Escape a single JSON pointer reference token (RFC 6901)."""
    return token.replace("~", "~0").replace("/", "~1")


class SchemaParser:
    """Parses a JSON Schema into a tree of SchemaNodes."""

    # Primitive type names
    PRIMITIVE_TYPES = {"null", "boolean", "number", "integer", "string"}

    def __init__(self):
        self.index: dict[str, SchemaNode] = {}

    def parse(self, schema: Any) -> SchemaNode:
        """
        Parse a JSON Schema into its root node.

        Args:
            schema: The JSON Schema (a dict, or a boolean schema)

        Returns:
            The root SchemaNode; every parsed node is also recorded in
            ``self.index`` under its source path
        """
        self.index = {}
        root = self._parse_schema_node(schema, "#")

        # Definitions are parsed so that $ref targets are indexed
        for key in ("$defs", "definitions"):
            definitions = schema.get(key) if isinstance(schema, dict) else None
            if isinstance(definitions, dict):
                for name, def_schema in definitions.items():
                    self._parse_schema_node(def_schema, f"#/{key}/{escape_pointer_token(name)}")

        return root

    def _register(self, node: SchemaNode) -> SchemaNode:
        self.index[node.source_path] = node
        return node

    def _parse_schema_node(self, schema: Any, path: str) -> SchemaNode:
        """
        Parse a schema node recursively.

        Args:
            schema: The schema dictionary (or boolean schema)
            path: Current path in schema (for error messages)

        Returns:
            Appropriate SchemaNode subclass
        """
        if not isinstance(schema, dict):
            return self._register(AnyNode(source_path=path, schema=schema))

        # Handle $ref
        if "$ref" in schema:
            ref_path = schema["$ref"]
            if isinstance(ref_path, str) and ref_path.startswith("#"):
                return self._register(RefNode(ref_path=ref_path, source_path=path, schema=schema))
            # Remote references are left to the validation engine
            return self._register(AnyNode(source_path=path, schema=schema))

        # Handle oneOf/anyOf
        if "oneOf" in schema or "anyOf" in schema:
            return self._parse_union_node(schema, path)

        # Handle enum
        if "enum" in schema:
            return self._register(EnumNode(values=tuple(schema["enum"]), source_path=path, schema=schema))

        # Handle type-based parsing
        if "type" in schema:
            return self._parse_type_node(schema, path)

        # Handle object with properties but no type
        if "properties" in schema or "additionalProperties" in schema:
            return self._parse_record_node(schema, path)

        # Fallback: no shape of its own ({}, allOf, const, ...)
        return self._register(AnyNode(source_path=path, schema=schema))

    def _parse_union_node(self, schema: dict[str, Any], path: str) -> UnionNode:
        """Parse a oneOf or anyOf union node."""
        union_type = "oneOf" if "oneOf" in schema else "anyOf"

        variants = []
        for i, variant in enumerate(schema[union_type]):
            variants.append(self._parse_schema_node(variant, f"{path}/{union_type}/{i}"))

        node = UnionNode(variants=tuple(variants), union_type=union_type, source_path=path, schema=schema)
        return self._register(node)

    def _parse_type_node(self, schema: dict[str, Any], path: str) -> SchemaNode:
        """Parse a type-based node."""
        type_value = schema["type"]

        # Handle array of types (union)
        if isinstance(type_value, list):
            # Single-element type array is not a union
            if len(type_value) == 1:
                type_value = type_value[0]
            else:
                return self._parse_type_union(schema, type_value, path)

        if type_value == "array":
            return self._parse_array_node(schema, path)

        if type_value == "object":
            return self._parse_record_node(schema, path)

        if type_value in self.PRIMITIVE_TYPES:
            return self._register(PrimitiveNode(type_name=type_value, source_path=path, schema=schema))

        return self._register(AnyNode(source_path=path, schema=schema))

    def _parse_type_union(self, schema: dict[str, Any], types: list[str], path: str) -> UnionNode:
        """Parse a union of types (e.g., ["string", "null"])."""
        variants = []
        for t in types:
            # Each variant keeps the sibling constraints (minimum, items, ...)
            variant_schema = {**schema, "type": t}
            variants.append(self._parse_schema_node(variant_schema, f"{path}/type/{t}"))

        node = UnionNode(variants=tuple(variants), union_type="typeArray", source_path=path, schema=schema)
        return self._register(node)

    def _parse_array_node(self, schema: dict[str, Any], path: str) -> ArrayNode:
        """Parse an array type node."""
        items_schema = schema.get("items")
        prefix_schemas = schema.get("prefixItems")
        items = None
        prefix_items: list[SchemaNode] = []

        if isinstance(items_schema, list):
            # Tuple type (draft 4-2019-09 form)
            prefix_items = [self._parse_schema_node(item, f"{path}/items/{i}") for i, item in enumerate(items_schema)]
            additional = schema.get("additionalItems")
            if additional is not None:
                items = self._parse_schema_node(additional, f"{path}/additionalItems")
        else:
            if isinstance(prefix_schemas, list):
                prefix_items = [self._parse_schema_node(item, f"{path}/prefixItems/{i}") for i, item in enumerate(prefix_schemas)]
            if items_schema is not None:
                items = self._parse_schema_node(items_schema, f"{path}/items")

        node = ArrayNode(items=items, prefix_items=tuple(prefix_items), source_path=path, schema=schema)
        return self._register(node)

    def _parse_record_node(self, schema: dict[str, Any], path: str) -> RecordNode:
        """Parse an object type node."""
        properties = {}
        for prop_name, prop_schema in schema.get("properties", {}).items():
            prop_path = f"{path}/properties/{escape_pointer_token(prop_name)}"
            properties[prop_name] = self._parse_schema_node(prop_schema, prop_path)

        additional = schema.get("additionalProperties", True)
        additional_node = None
        if isinstance(additional, dict):
            additional_node = self._parse_schema_node(additional, f"{path}/additionalProperties")

        node = RecordNode(
            properties=properties,
            required=tuple(schema.get("required", ())),
            additional_properties=additional is not False,
            additional_node=additional_node,
            source_path=path,
            schema=schema,
        )
        return self._register(node)

"""
Conversion between JSON documents and schema-conformant values.

to_object validates a whole document and then rebuilds it node by node,
resolving every union to its single matching alternative. to_json
serializes a value (a document or a typed wrapper) into canonical JSON
text without consulting any schema.
"""

from __future__ import annotations

import dataclasses
import json
import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any

from .config import DEFAULT_CONFIG, ProviderConfig
from .document import document_depth
from .errors import DepthExceeded, UnionAmbiguousError, UnionNoMatchError, ValidationFailed
from .schema import JsonSchema, SchemaSource
from .schema_ast import ArrayNode, EnumNode, PrimitiveNode, RecordNode, SchemaNode, UnionNode, escape_pointer_token
from .union_resolver import UnionResolver
from .violations import ViolationSet

logger = logging.getLogger(__name__)


class Converter:
    """Validates documents against one schema and converts them."""

    def __init__(self, schema: JsonSchema):
        self.schema = schema
        self.resolver = UnionResolver(schema)
        self.max_depth = schema.config.max_depth

    def to_object(self, document: Any) -> Any:
        """
        Validate ``document`` and return its schema-conformant copy.

        Raises:
            DepthExceeded: If the document nests deeper than the configured limit
            ValidationFailed: If the document does not satisfy the schema
                (UnionNoMatchError / UnionAmbiguousError when a union is at fault)
        """
        depth = document_depth(document)
        if depth > self.max_depth:
            raise DepthExceeded(self.max_depth, depth)

        violations = self.schema.validate(document)
        if violations:
            raise self._failure(violations)

        return self._convert(document, self.schema.root, "", 0)

    def _failure(self, violations: ViolationSet) -> ValidationFailed:
        """Build the error for a failed validation, specialized when a oneOf union is at fault."""
        logger.debug("Document rejected by '%s' with %d violation(s)", self.schema.name, len(violations))
        for violation in violations.by_keyword("oneOf"):
            node = self.schema.node_at(violation.schema_path.removesuffix("/oneOf"))
            if not isinstance(node, UnionNode):
                continue
            try:
                self.resolver.resolve(violation.actual, node, violation.path)
            except UnionNoMatchError as e:
                return UnionNoMatchError(violations, e.pointer, e.attempts)
            except UnionAmbiguousError as e:
                return UnionAmbiguousError(violations, e.pointer, e.matches)
        return ValidationFailed(violations)

    def _convert(self, value: Any, node: SchemaNode, pointer: str, depth: int) -> Any:
        if depth > self.max_depth:
            raise DepthExceeded(self.max_depth)

        node = self.schema.resolve(node)

        if isinstance(node, PrimitiveNode):
            if node.type_name == "null":
                return None
            return value

        if isinstance(node, EnumNode):
            return value

        if isinstance(node, UnionNode):
            resolution = self.resolver.resolve(value, node, pointer)
            return self._convert(value, resolution.node, pointer, depth)

        if isinstance(node, RecordNode) and isinstance(value, Mapping):
            result = {}
            # Document order, not declaration order
            for key, item in value.items():
                child = node.properties.get(key, node.additional_node)
                child_pointer = f"{pointer}/{escape_pointer_token(key)}"
                if child is None:
                    result[key] = _copy(item)
                else:
                    result[key] = self._convert(item, child, child_pointer, depth + 1)
            return result

        if isinstance(node, ArrayNode) and isinstance(value, (list, tuple)):
            result = []
            for index, item in enumerate(value):
                child = node.item_node(index)
                if child is None:
                    result.append(_copy(item))
                else:
                    result.append(self._convert(item, child, f"{pointer}/{index}", depth + 1))
            return result

        # No shape to enforce
        return _copy(value)


def _copy(value: Any) -> Any:
    """Rebuild containers so the result never shares structure with the input."""
    if isinstance(value, Mapping):
        return {key: _copy(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_copy(item) for item in value]
    return value


def to_object(document: Any, schema: JsonSchema | SchemaSource) -> Any:
    """Validate ``document`` against ``schema`` and return the conformant value.

    ``null`` under a null schema converts to None; integers stay ints and
    fractional numbers stay floats.
    """
    if not isinstance(schema, JsonSchema):
        schema = JsonSchema(schema)
    return Converter(schema).to_object(document)


def _encode_typed(value: Any) -> Any:
    """json.dumps fallback for typed wrappers."""
    if isinstance(value, Enum):
        return value.value
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
    if isinstance(value, Mapping):
        return dict(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def to_json(value: Any, config: ProviderConfig | None = None) -> str:
    """
    Serialize a value into canonical JSON text.

    Key order is preserved as encountered; no schema is consulted.

    Raises:
        TypeError: If the value contains something that is not a JSON value or typed wrapper
        ValueError: If the value contains NaN or an infinity
    """
    config = config or DEFAULT_CONFIG
    separators = (",", ":") if config.indent is None else (",", ": ")
    return json.dumps(
        value,
        default=_encode_typed,
        separators=separators,
        indent=config.indent,
        ensure_ascii=config.ensure_ascii,
        allow_nan=False,
    )

"""
Compiled JSON Schema.

A JsonSchema is built once from schema source, checked against its
meta-schema, parsed into a node tree and then shared freely: it is never
mutated after construction.
"""

from __future__ import annotations

import copy
import functools
import json
import logging
from collections.abc import Iterable, Mapping
from typing import Any
from urllib.parse import unquote

from jsonschema import FormatChecker
from jsonschema.exceptions import SchemaError, ValidationError
from jsonschema.validators import extend, validator_for
from referencing.exceptions import Unresolvable

from .config import DEFAULT_CONFIG, ProviderConfig
from .document import parse_document
from .errors import MalformedDocumentError, SchemaCompilationError
from .schema_ast import AnyNode, RefNode, SchemaNode, SchemaParser
from .violations import ViolationSet

logger = logging.getLogger(__name__)

SchemaSource = str | bytes | bytearray | Mapping[str, Any] | bool


@functools.cache
def _document_validator(validator_cls: type) -> type:
    """Extend a draft validator so tuples count as arrays and any Mapping as an object."""
    type_checker = validator_cls.TYPE_CHECKER.redefine_many(
        {
            "array": lambda checker, instance: isinstance(instance, (list, tuple)),
            "object": lambda checker, instance: isinstance(instance, Mapping),
        }
    )
    return extend(validator_cls, type_checker=type_checker)


def _lookup_pointer(schema: Any, ref_path: str) -> Any:
    """Resolve a local "#/..." reference against the schema document.

    Raises:
        LookupError: If the pointer does not lead anywhere
    """
    pointer = unquote(ref_path[1:])
    target = schema
    if not pointer:
        return target
    for token in pointer[1:].split("/"):
        token = token.replace("~1", "/").replace("~0", "~")
        if isinstance(target, dict) and token in target:
            target = target[token]
        elif isinstance(target, list) and token.isdigit() and int(token) < len(target):
            target = target[int(token)]
        else:
            raise LookupError(f"'{token}' not found")
    return target


class JsonSchema:
    """A compiled JSON Schema.

    Args:
        schema_source: JSON text, bytes, a parsed schema mapping, or a boolean schema
        config: Provider configuration (draft, format checking, ...)

    Raises:
        SchemaCompilationError: If the source is not JSON or not a valid schema
    """

    TYPE = "JSON"

    def __init__(self, schema_source: SchemaSource, config: ProviderConfig | None = None):
        self._config = config or DEFAULT_CONFIG
        self._schema = self._load(schema_source)

        validator_cls = validator_for(self._schema, default=self._config.validator_class)
        try:
            validator_cls.check_schema(self._schema)
        except SchemaError as e:
            raise SchemaCompilationError(f"Invalid JSON Schema: {e.message}") from e

        format_checker = FormatChecker() if self._config.check_formats else None
        self._validator = _document_validator(validator_cls)(self._schema, format_checker=format_checker)

        parser = SchemaParser()
        self._root = parser.parse(self._schema)
        self._index = parser.index
        self._check_references()
        self._canonical = json.dumps(self._schema, separators=(",", ":"), ensure_ascii=False)

        logger.debug("Compiled %s schema '%s' (%d nodes)", validator_cls.__name__, self.name, len(self._index))

    @staticmethod
    def _load(schema_source: SchemaSource) -> Any:
        if isinstance(schema_source, bool):
            return schema_source
        if isinstance(schema_source, Mapping):
            return copy.deepcopy(dict(schema_source))
        if isinstance(schema_source, (str, bytes, bytearray)):
            try:
                schema = parse_document(schema_source)
            except MalformedDocumentError as e:
                raise SchemaCompilationError(f"Schema source is not valid JSON: {e}") from e
            if not isinstance(schema, (dict, bool)):
                raise SchemaCompilationError(f"A schema must be an object or a boolean, got {type(schema).__name__}")
            return schema
        raise SchemaCompilationError(f"Unsupported schema source type: {type(schema_source).__name__}")

    def _check_references(self):
        """Fail compilation on local $refs that point nowhere."""
        for node in self._index.values():
            if not isinstance(node, RefNode) or node.ref_path in self._index:
                continue
            if not node.ref_path.startswith("#/"):
                # Anchors are left to the validation engine
                continue
            try:
                _lookup_pointer(self._schema, node.ref_path)
            except LookupError as e:
                raise SchemaCompilationError(f"Unresolvable $ref '{node.ref_path}' at {node.source_path}: {e}") from e

    @staticmethod
    def _collect(errors: Iterable[ValidationError], *args: Any) -> ViolationSet:
        try:
            return ViolationSet.from_errors(errors, *args)
        except Unresolvable as e:
            raise SchemaCompilationError(f"Unresolvable reference in schema: {e}") from e

    @property
    def config(self) -> ProviderConfig:
        return self._config

    @property
    def root(self) -> SchemaNode:
        """Root node of the parsed schema tree."""
        return self._root

    @property
    def schema_type(self) -> str:
        return self.TYPE

    @property
    def name(self) -> str:
        """The schema title, falling back to the root type."""
        if isinstance(self._schema, dict):
            if isinstance(self._schema.get("title"), str):
                return self._schema["title"]
            type_name = self._schema.get("type")
            if type_name == "object" or "properties" in self._schema:
                return "record"
            if isinstance(type_name, str):
                return type_name
        return "record"

    def canonical_string(self) -> str:
        """Compact JSON text of the schema, key order preserved."""
        return self._canonical

    def to_dict(self) -> Any:
        """A copy of the schema source."""
        return copy.deepcopy(self._schema)

    def node_at(self, source_path: str) -> SchemaNode | None:
        """Return the node parsed from the given schema pointer, if any."""
        return self._index.get(source_path)

    def resolve(self, node: SchemaNode) -> SchemaNode:
        """Follow local $ref chains to the referenced node."""
        # References into subschemas without a node of their own (allOf, not, ...) pass values through
        seen = set()
        while isinstance(node, RefNode):
            if node.ref_path in seen:
                # Reference cycle with no shape: nothing to descend into
                return AnyNode(source_path=node.source_path, schema=node.schema)
            seen.add(node.ref_path)
            target = self._index.get(node.ref_path)
            if target is None:
                return AnyNode(source_path=node.source_path, schema=node.schema)
            node = target
        return node

    def validate(self, document: Any) -> ViolationSet:
        """Validate a whole document; an empty result means it conforms."""
        violations = self._collect(self._validator.iter_errors(document))
        logger.debug("Validated document against '%s': %d violation(s)", self.name, len(violations))
        return violations

    def validate_node(self, value: Any, node: SchemaNode, pointer: str = "", alternative: int | None = None) -> ViolationSet:
        """
        Validate a value against the subschema of a single node.

        Args:
            value: The value to validate
            node: A node of this schema's tree
            pointer: Document pointer of the value, used to locate violations
            alternative: Union alternative index to tag violations with

        Returns:
            The violations found, located relative to the whole document
        """
        validator = self._validator.evolve(schema=node.schema)
        return self._collect(validator.iter_errors(value), alternative, pointer, node.source_path)

    def is_valid(self, document: Any) -> bool:
        return self.validate(document).ok

    def __eq__(self, other):
        if not isinstance(other, JsonSchema):
            return NotImplemented
        return self._canonical == other._canonical

    def __hash__(self):
        return hash(self._canonical)

    def __repr__(self):
        return f"JsonSchema({self._canonical})"

    def __str__(self):
        return self._canonical


def compile_schema(schema_source: SchemaSource, config: ProviderConfig | None = None) -> JsonSchema:
    """Compile schema source into a JsonSchema."""
    return JsonSchema(schema_source, config)

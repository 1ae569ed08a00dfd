"""JSON Schema Provider

Validates JSON documents against JSON Schemas, converts them into
schema-conformant values (resolving oneOf unions to their single
matching alternative) and serializes values back into canonical JSON.
"""

__version__ = "1.0.0"

from .config import ProviderConfig
from .converter import Converter, to_json, to_object
from .document import JsonKind, kind_of, parse_document
from .errors import (
    DepthExceeded,
    JsonSchemaProviderError,
    MalformedDocumentError,
    SchemaCompilationError,
    UnionAmbiguousError,
    UnionNoMatchError,
    ValidationFailed,
)
from .schema import JsonSchema, compile_schema
from .union_resolver import UnionResolution, UnionResolver
from .violations import Violation, ViolationSet

__all__ = [
    "JsonSchema",
    "compile_schema",
    "Converter",
    "to_object",
    "to_json",
    "UnionResolver",
    "UnionResolution",
    "Violation",
    "ViolationSet",
    "ProviderConfig",
    "JsonKind",
    "kind_of",
    "parse_document",
    "JsonSchemaProviderError",
    "SchemaCompilationError",
    "MalformedDocumentError",
    "ValidationFailed",
    "UnionNoMatchError",
    "UnionAmbiguousError",
    "DepthExceeded",
]

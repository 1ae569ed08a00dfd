"""
JSON document model.

Documents are the plain values produced by the standard json module
(None, bool, int, float, str, list, dict). This module adds kind-tagged
access, strict parsing and depth measurement on top of them.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from enum import Enum
from typing import Any

from .errors import MalformedDocumentError


class JsonKind(str, Enum):
    """Kind of a JSON value node."""

    NULL = "null"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"

    @property
    def is_container(self) -> bool:
        return self in (JsonKind.ARRAY, JsonKind.OBJECT)

    @property
    def is_number(self) -> bool:
        return self in (JsonKind.INTEGER, JsonKind.FLOAT)


def kind_of(value: Any) -> JsonKind:
    """Return the JSON kind of a document value.

    Raises:
        TypeError: If the value is not a JSON value
    """
    if value is None:
        return JsonKind.NULL
    # bool must be tested before int
    if isinstance(value, bool):
        return JsonKind.BOOLEAN
    if isinstance(value, int):
        return JsonKind.INTEGER
    if isinstance(value, float):
        return JsonKind.FLOAT
    if isinstance(value, str):
        return JsonKind.STRING
    if isinstance(value, (list, tuple)):
        return JsonKind.ARRAY
    if isinstance(value, Mapping):
        for key in value:
            if not isinstance(key, str):
                raise TypeError(f"JSON object keys must be strings, got {type(key).__name__}")
        return JsonKind.OBJECT
    raise TypeError(f"Not a JSON value: {type(value).__name__}")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"'{name}' is not a valid JSON value")


def _unique_object(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    obj: dict[str, Any] = {}
    for key, value in pairs:
        if key in obj:
            raise ValueError(f"Duplicate object key '{key}'")
        obj[key] = value
    return obj


def parse_document(text: str | bytes | bytearray) -> Any:
    """Parse strict JSON text into a document.

    NaN/Infinity literals and duplicate object keys are rejected.

    Raises:
        MalformedDocumentError: If the text is not well-formed JSON
    """
    if isinstance(text, (bytes, bytearray)):
        try:
            text = text.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedDocumentError(f"Document is not valid UTF-8: {e}") from e

    try:
        return json.loads(text, object_pairs_hook=_unique_object, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise MalformedDocumentError(f"Malformed JSON document: {e.msg}", line=e.lineno, column=e.colno) from e
    except ValueError as e:
        raise MalformedDocumentError(f"Malformed JSON document: {e}") from e
    except RecursionError as e:
        raise MalformedDocumentError("Malformed JSON document: nesting too deep to parse") from e


def document_depth(value: Any) -> int:
    """Return the nesting depth of a document (scalars are 0, [] is 1)."""
    deepest = 0
    stack = [(value, 0)]
    while stack:
        node, depth = stack.pop()
        if isinstance(node, Mapping):
            children = node.values()
        elif isinstance(node, (list, tuple)):
            children = node
        else:
            deepest = max(deepest, depth)
            continue
        depth += 1
        deepest = max(deepest, depth)
        stack.extend((child, depth) for child in children)
    return deepest

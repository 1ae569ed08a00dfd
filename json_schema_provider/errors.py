"""
Error taxonomy for schema compilation, document parsing, validation and conversion.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .violations import ViolationSet


class JsonSchemaProviderError(Exception):
    """Base class for every error raised by this package."""

    pass


class SchemaCompilationError(JsonSchemaProviderError):
    """Raised when the schema source is not valid JSON or not a valid JSON Schema."""

    pass


class MalformedDocumentError(JsonSchemaProviderError):
    """Raised when a document is not well-formed JSON.

    Attributes:
        line: 1-based line of the failure, when known
        column: 1-based column of the failure, when known
    """

    def __init__(self, message: str, line: int | None = None, column: int | None = None):
        super().__init__(message)
        self.line = line
        self.column = column


class ValidationFailed(JsonSchemaProviderError):
    """Raised when a document does not satisfy its schema.

    Attributes:
        violations: The full, ordered set of violations found
    """

    # Number of violations quoted in the exception message
    MAX_REPORTED = 5

    def __init__(self, violations: ViolationSet, message: str | None = None):
        self.violations = violations
        super().__init__(message or self._describe(violations))

    @classmethod
    def _describe(cls, violations: ViolationSet) -> str:
        messages = violations.messages()
        text = "; ".join(messages[: cls.MAX_REPORTED])
        if len(messages) > cls.MAX_REPORTED:
            text += f" (and {len(messages) - cls.MAX_REPORTED} more)"
        return f"Document failed validation: {text}"


class UnionNoMatchError(ValidationFailed):
    """Raised when a value matches none of the alternatives of a union.

    Attributes:
        pointer: JSON pointer of the union value in the document
        attempts: One ViolationSet per alternative, in declaration order
    """

    def __init__(self, violations: ViolationSet, pointer: str, attempts: tuple[ViolationSet, ...]):
        self.pointer = pointer
        self.attempts = attempts
        reasons = []
        for index, attempt in enumerate(attempts):
            reasons.append(f"[{index}] " + ", ".join(attempt.messages()))
        message = f"Value at '{pointer}' matches none of {len(attempts)} alternatives: " + "; ".join(reasons)
        super().__init__(violations, message)


class UnionAmbiguousError(ValidationFailed):
    """Raised when a value matches more than one alternative of a oneOf union.

    Attributes:
        pointer: JSON pointer of the union value in the document
        matches: Indices of every matching alternative
    """

    def __init__(self, violations: ViolationSet, pointer: str, matches: tuple[int, ...]):
        self.pointer = pointer
        self.matches = matches
        indices = ", ".join(str(i) for i in matches)
        super().__init__(violations, f"Value at '{pointer}' matches more than one alternative ({indices})")


class DepthExceeded(JsonSchemaProviderError):
    """Raised when a document is nested deeper than the configured limit."""

    def __init__(self, limit: int, depth: int | None = None):
        self.limit = limit
        self.depth = depth
        found = f" (found {depth})" if depth is not None else ""
        super().__init__(f"Document nesting exceeds the maximum depth of {limit}{found}")

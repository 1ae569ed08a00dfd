"""
Structured validation outcomes.

A ViolationSet is the result of validating a document: empty when the
document conforms, otherwise an ordered collection of Violations, each
locating one failed constraint in the document.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, replace
from typing import Any

from jsonschema.exceptions import ValidationError

from .schema_ast import escape_pointer_token


def to_pointer(parts: Iterable[Any], root: str = "") -> str:
    """Build a JSON pointer from path parts, relative to ``root``."""
    return root + "".join("/" + escape_pointer_token(str(part)) for part in parts)


@dataclass(frozen=True)
class Violation:
    """One failed constraint.

    Attributes:
        path: JSON pointer of the offending value in the document ("" for the root)
        keyword: The schema keyword that failed (type, enum, minimum, ...)
        message: Human readable description
        expected: The keyword's value in the schema
        actual: The offending value
        schema_path: JSON pointer of the failed keyword in the schema
        causes: Nested violations for combinator keywords (oneOf, anyOf, ...)
        alternative: Index of the union alternative that produced this violation
    """

    path: str
    keyword: str
    message: str
    expected: Any = None
    actual: Any = None
    schema_path: str = "#"
    causes: tuple[Violation, ...] = ()
    alternative: int | None = None

    @classmethod
    def from_error(
        cls,
        error: ValidationError,
        alternative: int | None = None,
        root: str = "",
        schema_root: str = "#",
    ) -> Violation:
        """Convert a jsonschema ValidationError.

        Args:
            error: The error reported by the validation engine
            alternative: Union alternative index the error belongs to, if any
            root: Document pointer the validated value was found at
            schema_root: Schema pointer of the subschema that was validated against
        """
        causes = []
        for sub in error.context or ():
            branch = sub.relative_schema_path[0] if sub.relative_schema_path else None
            causes.append(cls.from_error(sub, branch if isinstance(branch, int) else None, root, schema_root))

        return cls(
            path=to_pointer(error.absolute_path, root),
            keyword=str(error.validator) if error.validator is not None else "false",
            message=error.message,
            expected=error.validator_value,
            actual=error.instance,
            schema_path=to_pointer(error.absolute_schema_path, schema_root),
            causes=tuple(causes),
            alternative=alternative,
        )

    def prefixed(self, pointer: str) -> Violation:
        """Return this violation relocated under ``pointer``."""
        if not pointer:
            return self
        return replace(
            self,
            path=pointer + self.path,
            causes=tuple(cause.prefixed(pointer) for cause in self.causes),
        )

    def __str__(self):
        return f"{self.path or '/'}: {self.message}"


@dataclass(frozen=True)
class ViolationSet:
    """Immutable, ordered set of violations; falsy when empty."""

    violations: tuple[Violation, ...] = ()

    @classmethod
    def from_errors(
        cls,
        errors: Iterable[ValidationError],
        alternative: int | None = None,
        root: str = "",
        schema_root: str = "#",
    ) -> ViolationSet:
        return cls(tuple(Violation.from_error(error, alternative, root, schema_root) for error in errors))

    @property
    def ok(self) -> bool:
        return not self.violations

    def __bool__(self):
        return bool(self.violations)

    def __len__(self):
        return len(self.violations)

    def __iter__(self) -> Iterator[Violation]:
        return iter(self.violations)

    def __getitem__(self, index: int) -> Violation:
        return self.violations[index]

    def merged(self, other: ViolationSet) -> ViolationSet:
        return ViolationSet(self.violations + other.violations)

    def prefixed(self, pointer: str) -> ViolationSet:
        return ViolationSet(tuple(v.prefixed(pointer) for v in self.violations))

    def for_alternative(self, index: int) -> ViolationSet:
        """Violations (at any nesting level) produced by union alternative ``index``."""
        found = []
        pending = list(self.violations)
        while pending:
            violation = pending.pop(0)
            if violation.alternative == index:
                found.append(violation)
            else:
                pending.extend(violation.causes)
        return ViolationSet(tuple(found))

    def messages(self) -> list[str]:
        return [str(v) for v in self.violations]

    def by_keyword(self, keyword: str) -> ViolationSet:
        return ViolationSet(tuple(v for v in self.violations if v.keyword == keyword))


EMPTY = ViolationSet()

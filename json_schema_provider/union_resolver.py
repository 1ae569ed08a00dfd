"""
Resolution of union (oneOf / anyOf) schema nodes.

Given a value and a union node, the resolver validates the value against
every alternative in declaration order and picks the single branch the
value belongs to. Zero matches, and more than one match under oneOf, are
reported as errors carrying the per-alternative violations.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .errors import UnionAmbiguousError, UnionNoMatchError
from .schema_ast import SchemaNode, UnionNode
from .violations import Violation, ViolationSet

if TYPE_CHECKING:
    from .schema import JsonSchema

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UnionResolution:
    """Outcome of a successful union resolution.

    Attributes:
        index: Index of the matching alternative
        node: The matching alternative's schema node
        attempts: One ViolationSet per alternative tried (empty for matches)
    """

    index: int
    node: SchemaNode
    attempts: tuple[ViolationSet, ...]


class UnionResolver:
    """Resolves union nodes of one compiled schema."""

    def __init__(self, schema: JsonSchema):
        self.schema = schema

    def resolve(self, value: Any, node: UnionNode, pointer: str = "") -> UnionResolution:
        """
        Determine the alternative of ``node`` that ``value`` satisfies.

        Args:
            value: The value found at ``pointer``
            node: The union node
            pointer: JSON pointer of the value in the document

        Returns:
            The resolution for the single matching alternative

        Raises:
            UnionNoMatchError: If no alternative matches
            UnionAmbiguousError: If a oneOf union has more than one match
        """
        attempts = []
        matches = []
        for index, variant in enumerate(node.variants):
            attempt = self.schema.validate_node(value, variant, pointer, alternative=index)
            attempts.append(attempt)
            if attempt.ok:
                matches.append(index)
                if not node.exactly_one:
                    # anyOf: the first match is the answer
                    break

        if not matches:
            aggregated = ViolationSet()
            for attempt in attempts:
                aggregated = aggregated.merged(attempt)
            logger.debug("No alternative of %s matches value at '%s'", node.source_path, pointer)
            raise UnionNoMatchError(aggregated, pointer, tuple(attempts))

        if len(matches) > 1:
            violation = Violation(
                path=pointer,
                keyword=node.union_type,
                message=f"{value!r} is valid under more than one of the given schemas",
                expected=node.schema.get(node.union_type) if isinstance(node.schema, dict) else None,
                actual=value,
                schema_path=f"{node.source_path}/{node.union_type}",
            )
            logger.debug("Alternatives %s of %s all match value at '%s'", matches, node.source_path, pointer)
            raise UnionAmbiguousError(ViolationSet((violation,)), pointer, tuple(matches))

        index = matches[0]
        logger.debug("Resolved %s to alternative %d for value at '%s'", node.source_path, index, pointer)
        return UnionResolution(index=index, node=node.variants[index], attempts=tuple(attempts))

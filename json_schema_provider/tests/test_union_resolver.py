"""
Unit tests for union resolution.
"""

import unittest

from json_schema_provider import JsonSchema, UnionAmbiguousError, UnionNoMatchError, UnionResolver
from json_schema_provider.schema_ast import UnionNode


class TestUnionResolver(unittest.TestCase):
    def setUp(self):
        self.schema = JsonSchema(
            {
                "oneOf": [
                    {"type": "string", "maxLength": 5},
                    {"type": "number", "minimum": 0},
                ]
            }
        )
        self.resolver = UnionResolver(self.schema)
        self.node = self.schema.root

    def test_root_is_union(self):
        self.assertIsInstance(self.node, UnionNode)
        self.assertTrue(self.node.exactly_one)

    def test_resolves_each_alternative(self):
        self.assertEqual(self.resolver.resolve("test", self.node).index, 0)
        self.assertEqual(self.resolver.resolve(12, self.node).index, 1)
        self.assertEqual(self.resolver.resolve(0.5, self.node).index, 1)

    def test_every_alternative_is_attempted(self):
        resolution = self.resolver.resolve("test", self.node)
        self.assertEqual(len(resolution.attempts), 2)
        self.assertTrue(resolution.attempts[0].ok)
        self.assertFalse(resolution.attempts[1].ok)
        self.assertIs(resolution.node, self.node.variants[0])

    def test_resolution_is_deterministic(self):
        first = self.resolver.resolve(3, self.node)
        second = self.resolver.resolve(3, self.node)
        self.assertEqual(first, second)

    def test_resolution_is_logged(self):
        with self.assertLogs("json_schema_provider.union_resolver", level="DEBUG") as cm:
            self.resolver.resolve(12, self.node, "/n")
        self.assertIn("to alternative 1 for value at '/n'", cm.output[0])

    def test_no_match_aggregates_attempts(self):
        with self.assertRaises(UnionNoMatchError) as cm:
            self.resolver.resolve(-1, self.node, "/value")
        error = cm.exception
        self.assertEqual(error.pointer, "/value")
        self.assertEqual(len(error.violations), 2)
        self.assertEqual([v.alternative for v in error.violations], [0, 1])
        self.assertEqual(error.violations.for_alternative(1)[0].keyword, "minimum")
        self.assertEqual(error.violations[1].schema_path, "#/oneOf/1/minimum")
        self.assertIn("matches none of 2 alternatives", str(error))

    def test_ambiguous(self):
        schema = JsonSchema({"oneOf": [{"type": "integer"}, {"minimum": 0}, {"type": "string"}]})
        with self.assertRaises(UnionAmbiguousError) as cm:
            UnionResolver(schema).resolve(4, schema.root)
        self.assertEqual(cm.exception.matches, (0, 1))
        self.assertEqual(cm.exception.violations[0].keyword, "oneOf")

    def test_anyof_stops_at_first_match(self):
        schema = JsonSchema({"anyOf": [{"type": "integer"}, {"minimum": 0}]})
        resolution = UnionResolver(schema).resolve(4, schema.root)
        self.assertEqual(resolution.index, 0)
        self.assertEqual(len(resolution.attempts), 1)

    def test_alternatives_keep_reference_resolution(self):
        schema = JsonSchema(
            {
                "$defs": {"positive": {"type": "integer", "minimum": 1}},
                "oneOf": [{"$ref": "#/$defs/positive"}, {"type": "string"}],
            }
        )
        resolver = UnionResolver(schema)
        self.assertEqual(resolver.resolve(3, schema.root).index, 0)
        with self.assertRaises(UnionNoMatchError):
            resolver.resolve(0, schema.root)


if __name__ == "__main__":
    unittest.main()

"""
Conversion scenarios for primitive, record, array, union and enum schemas,
in both directions.
"""

import json
import unittest
from pathlib import Path

from json_schema_provider import (
    JsonSchema,
    UnionNoMatchError,
    ValidationFailed,
    parse_document,
    to_json,
    to_object,
)

SCHEMAS = Path(__file__).parent / "test_data" / "schemas"


def load_schema(name: str) -> JsonSchema:
    with open(SCHEMAS / f"{name}.schema.json") as f:
        return JsonSchema(f.read())


def create_primitive_schema(type_name: str) -> JsonSchema:
    return JsonSchema(f'{{"type" : "{type_name}"}}')


RECORD_JSON = """{
    "null": null,
    "boolean": true,
    "number": 12,
    "string": "string"
}"""


class TestToObject(unittest.TestCase):
    """Documents converted through a schema"""

    @classmethod
    def setUpClass(cls):
        cls.record_schema = load_schema("record")
        cls.array_schema = load_schema("array")
        cls.union_schema = load_schema("union")
        cls.enum_schema = load_schema("enum")

    def test_primitive_types(self):
        self.assertIsNone(to_object(None, create_primitive_schema("null")))
        self.assertIs(to_object(parse_document("true"), create_primitive_schema("boolean")), True)
        self.assertIs(to_object(parse_document("false"), create_primitive_schema("boolean")), False)

        result = to_object(parse_document("12"), create_primitive_schema("number"))
        self.assertEqual(result, 12)
        self.assertIsInstance(result, int)

        result = to_object(parse_document("23.2"), create_primitive_schema("number"))
        self.assertAlmostEqual(result, 23.2)
        self.assertIsInstance(result, float)

        self.assertEqual(to_object(parse_document('"a string"'), create_primitive_schema("string")), "a string")

    def test_record(self):
        result = to_object(parse_document(RECORD_JSON), self.record_schema)
        self.assertIsNone(result["null"])
        self.assertIs(result["boolean"], True)
        self.assertEqual(result["number"], 12)
        self.assertEqual(result["string"], "string")

    def test_record_keeps_document_key_order(self):
        document = {"string": "s", "number": 1, "null": None}
        result = to_object(document, self.record_schema)
        self.assertEqual(list(result), ["string", "number", "null"])

    def test_invalid_record(self):
        document = parse_document(RECORD_JSON)
        document["badString"] = "string"
        with self.assertRaises(ValidationFailed) as cm:
            to_object(document, self.record_schema)
        keywords = [v.keyword for v in cm.exception.violations]
        self.assertEqual(keywords, ["additionalProperties"])

    def test_array(self):
        result = to_object(parse_document('["one", "two", "three"]'), self.array_schema)
        self.assertEqual(result, ["one", "two", "three"])

    def test_union(self):
        self.assertEqual(to_object(parse_document('"test"'), self.union_schema), "test")
        self.assertEqual(to_object(parse_document("12"), self.union_schema), 12)

        with self.assertRaises(UnionNoMatchError) as cm:
            to_object(parse_document("-1"), self.union_schema)
        attempts = cm.exception.attempts
        self.assertEqual(len(attempts), 2)
        self.assertEqual([v.keyword for v in attempts[0]], ["type"])
        self.assertEqual([v.keyword for v in attempts[1]], ["minimum"])

    def test_union_string_too_long(self):
        with self.assertRaises(UnionNoMatchError) as cm:
            to_object("too long", self.union_schema)
        self.assertEqual([v.keyword for v in cm.exception.attempts[0]], ["maxLength"])
        self.assertEqual([v.keyword for v in cm.exception.attempts[1]], ["type"])

    def test_enum(self):
        self.assertEqual(to_object(parse_document('"red"'), self.enum_schema), "red")

        with self.assertRaises(ValidationFailed) as cm:
            to_object(parse_document('"yellow"'), self.enum_schema)
        self.assertEqual(cm.exception.violations[0].keyword, "enum")

    def test_enum_is_case_sensitive(self):
        with self.assertRaises(ValidationFailed):
            to_object("Red", self.enum_schema)


class TestToJson(unittest.TestCase):
    """Values serialized without a schema"""

    def test_primitive_types(self):
        result = json.loads(to_json(0))
        self.assertIsInstance(result, int)

        result = json.loads(to_json(0.1))
        self.assertIsInstance(result, float)
        self.assertEqual(result, 0.1)

        self.assertIs(json.loads(to_json(True)), True)
        self.assertEqual(json.loads(to_json("abcdefg")), "abcdefg")
        self.assertEqual(to_json(None), "null")

    def test_record(self):
        data = parse_document(RECORD_JSON)
        result = json.loads(to_json(data))
        self.assertIsInstance(result, dict)
        self.assertIsNone(result["null"])
        self.assertIs(result["boolean"], True)
        self.assertIsInstance(result["number"], int)
        self.assertEqual(result["number"], 12)
        self.assertEqual(result["string"], "string")
        self.assertEqual(list(result), ["null", "boolean", "number", "string"])

    def test_array(self):
        data = parse_document('["one", "two", "three"]')
        result = json.loads(to_json(data))
        self.assertEqual(result, ["one", "two", "three"])

    def test_round_trip_through_schema(self):
        record_schema = load_schema("record")
        first = to_object(parse_document(RECORD_JSON), record_schema)
        second = to_object(parse_document(to_json(first)), record_schema)
        self.assertEqual(first, second)
        self.assertEqual(to_json(first), to_json(second))


if __name__ == "__main__":
    unittest.main()

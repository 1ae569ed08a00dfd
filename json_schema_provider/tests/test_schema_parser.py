"""
Tests for the schema node tree built by SchemaParser.
"""

from json_schema_provider.schema_ast import (
    AnyNode,
    ArrayNode,
    EnumNode,
    PrimitiveNode,
    RecordNode,
    RefNode,
    SchemaParser,
    UnionNode,
)


def parse(schema):
    parser = SchemaParser()
    return parser.parse(schema), parser.index


def test_primitives():
    for type_name in ("null", "boolean", "number", "integer", "string"):
        node, _ = parse({"type": type_name})
        assert isinstance(node, PrimitiveNode)
        assert node.type_name == type_name


def test_record():
    node, index = parse(
        {
            "properties": {"a": {"type": "string"}, "b": {"type": "array", "items": {"type": "number"}}},
            "required": ["a"],
            "additionalProperties": False,
        }
    )
    assert isinstance(node, RecordNode)
    assert list(node.properties) == ["a", "b"]
    assert node.required == ("a",)
    assert node.additional_properties is False
    assert isinstance(node.properties["b"], ArrayNode)
    assert index["#/properties/b/items"] is node.properties["b"].items


def test_record_additional_schema():
    node, _ = parse({"type": "object", "additionalProperties": {"type": "integer"}})
    assert node.additional_properties is True
    assert isinstance(node.additional_node, PrimitiveNode)


def test_union_and_enum():
    node, _ = parse({"oneOf": [{"enum": ["red", "green"]}, {"type": "null"}]})
    assert isinstance(node, UnionNode)
    assert node.exactly_one
    assert isinstance(node.variants[0], EnumNode)
    assert node.variants[0].source_path == "#/oneOf/0"
    assert node.variants[0].values == ("red", "green")


def test_type_list_keeps_sibling_constraints():
    node, _ = parse({"type": ["string", "number"], "minimum": 3})
    assert isinstance(node, UnionNode)
    assert node.union_type == "typeArray"
    assert not node.exactly_one
    assert node.variants[1].schema == {"type": "number", "minimum": 3}


def test_single_type_list():
    node, _ = parse({"type": ["string"]})
    assert isinstance(node, PrimitiveNode)


def test_tuple_items():
    node, _ = parse({"type": "array", "items": [{"type": "string"}], "additionalItems": {"type": "null"}})
    assert isinstance(node.item_node(0), PrimitiveNode)
    assert node.item_node(0).type_name == "string"
    assert node.item_node(5).type_name == "null"


def test_references_and_definitions():
    node, index = parse({"$ref": "#/definitions/x", "definitions": {"x": {"type": "string"}}})
    assert isinstance(node, RefNode)
    assert node.ref_path == "#/definitions/x"
    assert isinstance(index["#/definitions/x"], PrimitiveNode)


def test_fallbacks():
    assert isinstance(parse({})[0], AnyNode)
    assert isinstance(parse(True)[0], AnyNode)
    assert isinstance(parse({"allOf": [{"type": "string"}]})[0], AnyNode)
    assert isinstance(parse({"$ref": "https://example.com/schema"})[0], AnyNode)

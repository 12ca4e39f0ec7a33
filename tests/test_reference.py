"""Tests for JSON Pointer and href resolution."""

import pytest

from go_hyperschema_generator.errors import (
    MissingReferenceTarget,
    UnresolvableReference,
    UnsupportedReferenceForm,
)
from go_hyperschema_generator.generator.template_engine import GoTemplateEngine
from go_hyperschema_generator.parser.reference import (
    decode_segment,
    encode_segment,
    href_parameter_name,
    resolve_href,
    resolve_node,
    resolve_reference,
)
from go_hyperschema_generator.parser.schema import HRef, Link, Reference, Schema
from go_hyperschema_generator.utils.string_case import GoIdentifierCase


@pytest.fixture
def uuid_document() -> Schema:
    return Schema.from_dict(
        {
            "definitions": {
                "uuid": {"type": "string", "format": "uuid"},
                "struct": {
                    "definitions": {
                        "uuid": {"$ref": "#/definitions/uuid"},
                        "name": {"type": "string"},
                    },
                    "properties": {"uuid": {"$ref": "#/definitions/struct/definitions/uuid"}},
                },
                "a/b": {"type": "integer"},
            },
            "links": [{"href": "/structs", "schema": {"type": "boolean"}}],
        }
    )


class TestResolveReference:
    """Test class for pointer resolution."""

    def test_top_level_definition(self, uuid_document: Schema) -> None:
        """Test that a definition is found by its pointer."""
        node = resolve_reference("#/definitions/uuid", uuid_document)
        assert node is uuid_document.definitions["uuid"]
        assert node.format == "uuid"

    def test_nested_reference_is_not_followed(self, uuid_document: Schema) -> None:
        """Test that a pointer returns the node it names, even if that node is a reference."""
        node = resolve_reference(Reference("#/definitions/struct/definitions/uuid"), uuid_document)
        assert node.is_reference
        assert resolve_node(node, uuid_document) is uuid_document.definitions["uuid"]

    def test_escaped_segment(self, uuid_document: Schema) -> None:
        """Test that ``~1`` in a segment stands for ``/``."""
        node = resolve_reference("#/definitions/a~1b", uuid_document)
        assert node.types() == ["integer"]

    def test_link_schema(self, uuid_document: Schema) -> None:
        """Test that link schemas are reachable by index."""
        node = resolve_reference("#/links/0/schema", uuid_document)
        assert node is uuid_document.links[0].schema

    def test_root(self, uuid_document: Schema) -> None:
        assert resolve_reference("#", uuid_document) is uuid_document

    def test_non_fragment_reference(self, uuid_document: Schema) -> None:
        with pytest.raises(UnsupportedReferenceForm):
            resolve_reference("other.json#/definitions/uuid", uuid_document)

    def test_missing_key(self, uuid_document: Schema) -> None:
        with pytest.raises(MissingReferenceTarget, match="can't find 'missing'") as exc_info:
            resolve_reference("#/definitions/missing", uuid_document)
        assert exc_info.value.reference == "#/definitions/missing"

    def test_missing_field(self, uuid_document: Schema) -> None:
        with pytest.raises(MissingReferenceTarget):
            resolve_reference("#/bogus/uuid", uuid_document)

    def test_missing_index(self, uuid_document: Schema) -> None:
        with pytest.raises(MissingReferenceTarget):
            resolve_reference("#/links/3/schema", uuid_document)

    def test_pointer_into_scalar(self, uuid_document: Schema) -> None:
        with pytest.raises(UnresolvableReference):
            resolve_reference("#/links/0/schema/items/type", uuid_document)

    def test_pointer_ending_on_container(self, uuid_document: Schema) -> None:
        with pytest.raises(UnresolvableReference, match="does not designate a schema"):
            resolve_reference("#/definitions", uuid_document)


class TestResolveNode:
    """Test class for alias and union dereferencing."""

    def test_concrete_node_is_unchanged(self, uuid_document: Schema) -> None:
        node = uuid_document.definitions["uuid"]
        assert resolve_node(node, uuid_document) is node

    def test_idempotent(self, uuid_document: Schema) -> None:
        alias = uuid_document.definitions["struct"].properties["uuid"]
        once = resolve_node(alias, uuid_document)
        assert resolve_node(once, uuid_document) is once

    def test_first_alternative_wins(self) -> None:
        root = Schema.from_dict(
            {
                "definitions": {
                    "id": {"type": "string", "format": "uuid"},
                    "name": {"type": "string"},
                    "identity": {"anyOf": [{"$ref": "#/definitions/id"}, {"$ref": "#/definitions/name"}]},
                    "either": {"oneOf": [{"$ref": "#/definitions/name"}, {"$ref": "#/definitions/id"}]},
                }
            }
        )
        assert resolve_node(root.definitions["identity"], root) is root.definitions["id"]
        assert resolve_node(root.definitions["either"], root) is root.definitions["name"]

    def test_alias_cycle(self) -> None:
        root = Schema.from_dict(
            {
                "definitions": {
                    "a": {"$ref": "#/definitions/b"},
                    "b": {"$ref": "#/definitions/a"},
                }
            }
        )
        with pytest.raises(UnresolvableReference, match="circular reference"):
            resolve_node(root.definitions["a"], root)


class TestSegments:
    """Test class for pointer segment escaping."""

    @pytest.mark.parametrize(("raw", "encoded"), [("a/b", "a~1b"), ("m~n", "m~0n"), ("~1", "~01")])
    def test_escaping(self, raw: str, encoded: str) -> None:
        assert encode_segment(raw) == encoded
        assert decode_segment(encoded) == raw


class TestHRef:
    """Test class for href template parameters."""

    @pytest.fixture
    def naming(self) -> GoIdentifierCase:
        return GoIdentifierCase()

    @pytest.mark.parametrize(
        ("pointer", "expected"),
        [
            ("#/definitions/struct/definitions/uuid", "structUUID"),
            ("#/definitions/app/definitions/identity", "appIdentity"),
            ("#/definitions/identity", "identity"),
        ],
    )
    def test_parameter_name(self, naming: GoIdentifierCase, pointer: str, expected: str) -> None:
        """Test that the owning definition prefixes the field name."""
        assert href_parameter_name(pointer, naming) == expected

    def test_resolve_href(self, uuid_document: Schema, naming: GoIdentifierCase) -> None:
        """Test that placeholders are decoded and resolved in order."""
        href = HRef(
            "/structs/{(%23%2Fdefinitions%2Fstruct%2Fdefinitions%2Fuuid)}"
            "/names/{(%23%2Fdefinitions%2Fstruct%2Fdefinitions%2Fname)}"
        )
        schemas = resolve_href(href, uuid_document, naming)

        assert href.order == ["structUUID", "structName"]
        assert schemas["structUUID"] is uuid_document.definitions["uuid"]
        assert schemas["structName"] is uuid_document.definitions["struct"].definitions["name"]
        assert href.format_string() == "/structs/%v/names/%v"

    def test_repeated_placeholder(self, uuid_document: Schema, naming: GoIdentifierCase) -> None:
        """Test that a parameter used twice is declared once but passed twice."""
        pointer = "{(%23%2Fdefinitions%2Fuuid)}"
        href = HRef(f"/a/{pointer}/b/{pointer}")
        resolve_href(href, uuid_document, naming)
        assert href.order == ["uuid"]
        assert href.arguments == ["uuid", "uuid"]
        assert href.format_string().count("%v") == len(href.arguments)

        link = Link(href=href)
        assert GoTemplateEngine().operations.path_expression(link) == 'fmt.Sprintf("/a/%v/b/%v", uuid, uuid)'

    def test_plain_href(self, uuid_document: Schema, naming: GoIdentifierCase) -> None:
        href = HRef("/structs")
        assert resolve_href(href, uuid_document, naming) == {}
        assert str(href) == "/structs"

"""Tests for error messages."""

from go_hyperschema_generator.errors import (
    BrokenReference,
    DuplicateLinkTitle,
    MissingReferenceTarget,
    ReferenceResolutionError,
    SchematicError,
    describe_element,
)
from go_hyperschema_generator.parser.schema import Link, Schema


class TestSchematicError:
    """Test class for the error hierarchy."""

    def test_reason_only(self) -> None:
        error = SchematicError("type not found")
        assert str(error) == "type not found"
        assert error.element is None

    def test_element_is_described(self) -> None:
        error = SchematicError("type not found", Schema(title="App", type=["null"]))
        assert str(error) == (
            "Error processing schema element:\n"
            "    {\n"
            '      "title": "App",\n'
            '      "type": [\n'
            '        "null"\n'
            "      ]\n"
            "    }\n"
            "\n"
            "Failed with: type not found"
        )

    def test_hierarchy(self) -> None:
        error = MissingReferenceTarget("can't find 'app' key", "#/definitions/app")
        assert isinstance(error, BrokenReference)
        assert isinstance(error, ReferenceResolutionError)
        assert isinstance(error, SchematicError)
        assert error.reference == "#/definitions/app"

    def test_duplicate_link_title(self) -> None:
        error = DuplicateLinkTitle("app", "Create")
        assert str(error) == (
            "Duplicate app.links.title 'Create' detected in the schema. Links must have distinct titles."
        )


def test_describe_recursive_element() -> None:
    """Test that a self-referential node serializes in finite space."""
    node = Schema(title="Post", type="object")
    node.properties["parent"] = node
    node.links.append(Link(title="Info", schema=node))

    text = describe_element(node)

    assert '"parent": {\n' in text
    assert '"title": "Post"' in text

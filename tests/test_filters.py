"""Tests for the Go syntax filters."""

import pytest

from go_hyperschema_generator.analyzer.types import Field, TypeDescriptor, TypeKind
from go_hyperschema_generator.generator.filters import (
    GoTypeRenderer,
    as_comment,
    field_tag,
    go_string,
    package_name,
    tidy_source,
)
from go_hyperschema_generator.utils.string_case import GoIdentifierCase


class TestAsComment:
    """Test class for comment wrapping."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            (
                "This is a multi-line\ncomment, it contains multiple\nlines.",
                "// This is a multi-line\n// comment, it contains multiple\n// lines.\n",
            ),
            (
                "This is a fairly long comment line, it should be over seventy characters.",
                "// This is a fairly long comment line, it should be over seventy\n// characters.\n",
            ),
            (
                "散りぬべき時知りてこそ世の中の花も花なれ人も人なれ",
                "// 散りぬべき時知りてこそ世の中の花も花なれ人も人なれ\n",
            ),
            ("", ""),
            (None, ""),
        ],
    )
    def test_as_comment(self, text: str | None, expected: str) -> None:
        assert as_comment(text) == expected

    def test_indent(self) -> None:
        assert as_comment("unique name", "\t") == "\t// unique name\n"

    def test_unbroken_long_word(self) -> None:
        """Test that a line without spaces is cut at the limit."""
        comment = as_comment("x" * 75)
        assert comment == "// " + "x" * 70 + "\n// " + "x" * 5 + "\n"


class TestTags:
    """Test class for struct tags and literals."""

    @pytest.mark.parametrize(
        ("name", "required", "expected"),
        [
            ("name", True, '`json:"name" url:"name,key"`'),
            ("name", False, '`json:"name,omitempty" url:"name,omitempty,key"`'),
        ],
    )
    def test_field_tag(self, name: str, required: bool, expected: str) -> None:  # noqa: FBT001
        assert field_tag(name, required) == expected

    def test_go_string(self) -> None:
        assert go_string('say "hi"\n') == '"say \\"hi\\"\\n"'

    @pytest.mark.parametrize(
        ("title", "expected"),
        [
            ("Heroku Platform API", "heroku"),
            ("Acme-Cloud API", "acmecloud"),
            ("", "api"),
            (None, "api"),
            ("42 API", "api"),
        ],
    )
    def test_package_name(self, title: str | None, expected: str) -> None:
        assert package_name(title) == expected

    def test_tidy_source(self) -> None:
        assert tidy_source("\n\npackage a  \n\n\n\nfunc f() {}\t\n\n") == "package a\n\nfunc f() {}\n"


class TestGoTypeRenderer:
    """Test class for rendering descriptors."""

    @pytest.fixture
    def renderer(self) -> GoTypeRenderer:
        return GoTypeRenderer(GoIdentifierCase())

    @pytest.mark.parametrize(
        ("descriptor", "expected"),
        [
            (TypeDescriptor(TypeKind.BOOL), "bool"),
            (TypeDescriptor(TypeKind.INTEGER, optional=True), "*int"),
            (TypeDescriptor(TypeKind.FLOAT), "float64"),
            (TypeDescriptor(TypeKind.TIMESTAMP, optional=True), "*time.Time"),
            (TypeDescriptor(TypeKind.ANY), "interface{}"),
            (TypeDescriptor.array_of(TypeDescriptor(TypeKind.STRING)), "[]string"),
            (TypeDescriptor(TypeKind.MAP, item=TypeDescriptor(TypeKind.STRING, optional=True)), "map[string]*string"),
            (TypeDescriptor(TypeKind.RECORD), "struct{}"),
            (TypeDescriptor.named("ListRange", optional=True), "*ListRange"),
        ],
    )
    def test_render(self, renderer: GoTypeRenderer, descriptor: TypeDescriptor, expected: str) -> None:
        assert renderer.render(descriptor) == expected

    def test_nested_struct(self, renderer: GoTypeRenderer) -> None:
        """Test that nested records are indented and field comments kept."""
        owner = TypeDescriptor(
            TypeKind.RECORD,
            optional=True,
            fields=(Field("id", TypeDescriptor(TypeKind.STRING), required=True, description="unique identifier"),),
        )
        app = TypeDescriptor(TypeKind.RECORD, fields=(Field("owner", owner, required=False),))

        assert renderer.render(app) == (
            "struct {\n"
            "\tOwner *struct {\n"
            "\t\t// unique identifier\n"
            '\t\tID string `json:"id" url:"id,key"`\n'
            '\t} `json:"owner,omitempty" url:"owner,omitempty,key"`\n'
            "}"
        )

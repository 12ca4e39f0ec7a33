"""
Jinja2 filters for Go code generation.

This module turns type descriptors and schema text into Go syntax: type
expressions, struct tags, doc comments and string literals. The analyzers
decide *what* a type is; these filters only decide how Go spells it.
"""

from __future__ import annotations

import re
from typing import Final

from go_hyperschema_generator.analyzer.types import TypeDescriptor, TypeKind
from go_hyperschema_generator.utils.string_case import GoIdentifierCase

# Maximum comment line length before wrapping
_COMMENT_MAX_LENGTH: Final = 70
_COMMENT_PREFIX: Final = "// "
_INDENT: Final = "\t"

_GO_PRIMITIVES: Final = {
    TypeKind.BOOL: "bool",
    TypeKind.INTEGER: "int",
    TypeKind.FLOAT: "float64",
    TypeKind.STRING: "string",
    TypeKind.TIMESTAMP: "time.Time",
    TypeKind.ANY: "interface{}",
}

_TRAILING_WHITESPACE_PATTERN: Final = re.compile(r"[ \t]+$", re.MULTILINE)
_BLANK_LINES_PATTERN: Final = re.compile(r"\n{3,}")
_PACKAGE_NAME_PATTERN: Final = re.compile(r"[^a-z0-9_]")
_DEFAULT_PACKAGE_NAME: Final = "api"


def as_comment(text: str | None, indent: str = "") -> str:
    """Convert text to Go line comments.

    Lines longer than 70 characters are wrapped at their last space; line
    breaks already present in the text are kept.

    Args:
        text: The text to convert.
        indent: Prefix written before every comment line.

    Returns:
        Comment lines, each terminated by a newline, or an empty string.

    Example:
        >>> as_comment("List existing apps.")
        '// List existing apps.\\n'
    """
    if not text:
        return ""

    lines: list[str] = []
    remaining = text
    while remaining:
        line = remaining
        if len(line) < _COMMENT_MAX_LENGTH:
            lines.append(line)
            break
        line = line[:_COMMENT_MAX_LENGTH]
        space = line.rfind(" ")
        if space != -1:
            line = line[:space]
        lines.append(line)
        remaining = remaining[len(line) :]
        if space != -1:
            remaining = remaining[1:]

    prefix = f"{indent}{_COMMENT_PREFIX}"
    return "".join(prefix + line.replace("\n", "\n" + prefix) + "\n" for line in lines)


def json_tag(name: str, required: bool) -> str:  # noqa: FBT001
    """Struct tag controlling JSON encoding of a field."""
    options = [name] if required else [name, "omitempty"]
    return f'json:"{",".join(options)}"'


def url_tag(name: str, required: bool) -> str:  # noqa: FBT001
    """Struct tag controlling query-string encoding of a field."""
    options = [name] if required else [name, "omitempty"]
    options.append("key")
    return f'url:"{",".join(options)}"'


def field_tag(name: str, required: bool) -> str:  # noqa: FBT001
    """Complete struct tag literal for a field.

    Example:
        >>> field_tag("name", False)
        '`json:"name,omitempty" url:"name,omitempty,key"`'
    """
    return f"`{json_tag(name, required)} {url_tag(name, required)}`"


def go_string(text: str) -> str:
    """Format text as a Go interpreted string literal."""
    escape_map = {
        "\\": "\\\\",
        '"': '\\"',
        "\n": "\\n",
        "\t": "\\t",
    }
    result = text
    for char, escaped in escape_map.items():
        result = result.replace(char, escaped)
    return f'"{result}"'


def package_name(title: str | None) -> str:
    """Go package name derived from the first word of the schema title.

    Examples:
        >>> package_name("Heroku Platform API")
        'heroku'
        >>> package_name("")
        'api'
    """
    words = (title or "").split()
    name = _PACKAGE_NAME_PATTERN.sub("", words[0].lower()) if words else ""
    if not name or name[0].isdigit():
        return _DEFAULT_PACKAGE_NAME
    return name


def tidy_source(source: str) -> str:
    """Strip trailing whitespace and collapse the blank lines templates leave behind."""
    source = _TRAILING_WHITESPACE_PATTERN.sub("", source)
    source = _BLANK_LINES_PATTERN.sub("\n\n", source)
    return source.strip("\n") + "\n"


class GoTypeRenderer:
    """Renders type descriptors as Go type expressions.

    Args:
        naming: Identifier casing for struct field names.
    """

    def __init__(self, naming: GoIdentifierCase) -> None:
        self.naming = naming

    def render(self, descriptor: TypeDescriptor, depth: int = 0) -> str:
        """Go spelling of ``descriptor``.

        Optional values become pointers; records become anonymous structs
        indented for ``depth`` levels of nesting.
        """
        match descriptor.kind:
            case TypeKind.ARRAY:
                body = "[]" + self._render_item(descriptor, depth)
            case TypeKind.MAP:
                body = "map[string]" + self._render_item(descriptor, depth)
            case TypeKind.RECORD:
                body = self._render_struct(descriptor, depth)
            case TypeKind.NAMED:
                body = descriptor.name
            case _:
                body = _GO_PRIMITIVES[descriptor.kind]
        return f"*{body}" if descriptor.optional else body

    def _render_item(self, descriptor: TypeDescriptor, depth: int) -> str:
        if descriptor.item is None:
            return _GO_PRIMITIVES[TypeKind.ANY]
        return self.render(descriptor.item, depth)

    def _render_struct(self, descriptor: TypeDescriptor, depth: int) -> str:
        if not descriptor.fields:
            return "struct{}"
        indent = _INDENT * (depth + 1)
        lines = ["struct {"]
        for field in descriptor.fields:
            comment = as_comment(field.description, indent)
            if comment:
                lines.append(comment.rstrip("\n"))
            lines.append(
                f"{indent}{self.naming.initial_cap(field.name)} "
                f"{self.render(field.type, depth + 1)} {field_tag(field.name, field.required)}"
            )
        lines.append(f"{_INDENT * depth}}}")
        return "\n".join(lines)


# Register filters that will be available in Jinja templates
FILTERS = {
    "as_comment": as_comment,
    "field_tag": field_tag,
    "go_string": go_string,
    "json_tag": json_tag,
    "package_name": package_name,
    "url_tag": url_tag,
}

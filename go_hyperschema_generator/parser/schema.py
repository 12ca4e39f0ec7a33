"""
JSON Hyper-Schema document model.

This module deserializes a Hyper-Schema document into a tree of
:class:`Schema` and :class:`Link` nodes. The tree is built once, mutated in
place by the resolve pass, and read by the analyzers afterwards.

Nodes compare by identity: a resolved document is a graph with cycles, so
structural equality would never terminate.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any, Final

# Placeholder holding a percent-encoded JSON Pointer inside an href template
HREF_PLACEHOLDER_PATTERN: Final = re.compile(r"\{\(([^)]+)\)\}")

# JSON Pointer segment -> attribute holding the child container on a Schema
_SCHEMA_POINTER_SEGMENTS: Final = {
    "definitions": "definitions",
    "properties": "properties",
    "patternProperties": "pattern_properties",
    "items": "items",
    "links": "links",
    "oneOf": "one_of",
    "anyOf": "any_of",
    "allOf": "all_of",
    "not": "not_",
}

# JSON Pointer segment -> attribute holding the child schema on a Link
_LINK_POINTER_SEGMENTS: Final = {
    "schema": "schema",
    "targetSchema": "target_schema",
}

MISSING: Final = object()


@dataclass(frozen=True)
class Reference:
    """A JSON Pointer (``#/definitions/app``) naming a node of the document."""

    pointer: str

    def __str__(self) -> str:
        return self.pointer


@dataclass(eq=False)
class HRef:
    """A link's URI template.

    The remaining fields are filled in when the href is resolved. ``order``
    holds the distinct synthesized parameter names in left-to-right order and
    ``schemas`` the schema each name designates. ``arguments`` names every
    placeholder occurrence, repeats included, one per ``%v`` verb.
    """

    template: str
    order: list[str] = field(default_factory=list)
    arguments: list[str] = field(default_factory=list)
    schemas: dict[str, Schema] = field(default_factory=dict)

    def pointers(self) -> list[str]:
        """Percent-encoded pointers embedded in the template, in order."""
        return HREF_PLACEHOLDER_PATTERN.findall(self.template)

    def format_string(self) -> str:
        """The template with every placeholder replaced by ``%v``."""
        return HREF_PLACEHOLDER_PATTERN.sub("%v", self.template)

    def __str__(self) -> str:
        return self.format_string()


@dataclass(eq=False)
class Link:
    """A hypermedia link: one API operation of a resource."""

    title: str = ""
    description: str = ""
    href: HRef | None = None
    rel: str = ""
    method: str = ""
    schema: Schema | None = None
    target_schema: Schema | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Link:
        href = data.get("href")
        return cls(
            title=data.get("title", ""),
            description=data.get("description", ""),
            href=HRef(href) if href is not None else None,
            rel=data.get("rel", ""),
            method=data.get("method", ""),
            schema=_optional_schema(data.get("schema")),
            target_schema=_optional_schema(data.get("targetSchema")),
        )

    def pointer_child(self, segment: str) -> Any:  # noqa: ANN401
        """Child reached by one JSON Pointer segment, or ``MISSING``."""
        attribute = _LINK_POINTER_SEGMENTS.get(segment)
        return MISSING if attribute is None else getattr(self, attribute)

    def to_dict(self, _seen: set[int] | None = None) -> dict[str, Any]:
        seen = set() if _seen is None else _seen
        data: dict[str, Any] = {}
        for key, value in (
            ("title", self.title),
            ("description", self.description),
            ("rel", self.rel),
            ("method", self.method),
        ):
            if value:
                data[key] = value
        if self.href is not None:
            data["href"] = self.href.template
        if self.schema is not None:
            data["schema"] = self.schema.to_dict(seen)
        if self.target_schema is not None:
            data["targetSchema"] = self.target_schema.to_dict(seen)
        return data


@dataclass(eq=False)
class Schema:
    """A JSON Schema node.

    ``type`` is either a single tag or a list of tags; a list containing
    ``"null"`` marks the value as nullable.
    """

    id: str = ""
    title: str = ""
    description: str = ""
    version: str = ""
    type: str | list[str] | None = None
    format: str = ""
    ref: Reference | None = None
    default: Any = None
    example: Any = None
    read_only: bool = False
    pattern: str = ""
    enum: list[Any] = field(default_factory=list)
    definitions: dict[str, Schema] = field(default_factory=dict)
    properties: dict[str, Schema] = field(default_factory=dict)
    pattern_properties: dict[str, Schema] = field(default_factory=dict)
    additional_properties: bool | Schema | None = None
    required: list[str] = field(default_factory=list)
    items: Schema | None = None
    one_of: list[Schema] = field(default_factory=list)
    any_of: list[Schema] = field(default_factory=list)
    all_of: list[Schema] = field(default_factory=list)
    not_: Schema | None = None
    links: list[Link] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Schema:
        """Build a schema tree from a decoded JSON document.

        Args:
            data: The JSON object describing the schema.

        Returns:
            The root node of the tree.

        Raises:
            TypeError: If ``data`` is not a JSON object.
        """
        if not isinstance(data, dict):
            msg = f"schema must be a JSON object, got {type(data).__name__}"
            raise TypeError(msg)

        additional = data.get("additionalProperties")
        ref = data.get("$ref")
        return cls(
            id=data.get("id", ""),
            title=data.get("title", ""),
            description=data.get("description", ""),
            version=data.get("version", ""),
            type=data.get("type"),
            format=data.get("format", ""),
            ref=Reference(ref) if ref is not None else None,
            default=data.get("default"),
            example=data.get("example"),
            read_only=data.get("readOnly", False),
            pattern=data.get("pattern", ""),
            enum=list(data.get("enum", [])),
            definitions=_schema_map(data.get("definitions")),
            properties=_schema_map(data.get("properties")),
            pattern_properties=_schema_map(data.get("patternProperties")),
            additional_properties=cls.from_dict(additional) if isinstance(additional, dict) else additional,
            required=list(data.get("required", [])),
            items=_optional_schema(data.get("items")),
            one_of=[cls.from_dict(s) for s in data.get("oneOf", [])],
            any_of=[cls.from_dict(s) for s in data.get("anyOf", [])],
            all_of=[cls.from_dict(s) for s in data.get("allOf", [])],
            not_=_optional_schema(data.get("not")),
            links=[Link.from_dict(link) for link in data.get("links", [])],
        )

    def pointer_child(self, segment: str) -> Any:  # noqa: ANN401
        """Child reached by one JSON Pointer segment, or ``MISSING``."""
        attribute = _SCHEMA_POINTER_SEGMENTS.get(segment)
        return MISSING if attribute is None else getattr(self, attribute)

    def types(self) -> list[str]:
        """Type tags declared by this schema, without inference."""
        if isinstance(self.type, str):
            return [self.type]
        if isinstance(self.type, list) and all(isinstance(tag, str) for tag in self.type):
            return list(self.type)
        return []

    @property
    def is_reference(self) -> bool:
        return self.ref is not None

    def is_custom_type(self) -> bool:
        """True if the schema declares properties of its own."""
        return len(self.properties) > 0

    def url(self) -> str:
        """Base URL taken from the first ``self`` link."""
        for link in self.links:
            if link.rel == "self" and link.href is not None:
                return link.href.format_string()
        return ""

    def to_dict(self, _seen: set[int] | None = None) -> dict[str, Any]:
        """Serialize back to JSON-like data.

        A node met a second time is written as ``{"title": ...}`` so that
        recursive documents serialize in finite space.
        """
        seen = set() if _seen is None else _seen
        if id(self) in seen:
            return {"title": self.title or "(recursive)"}
        seen.add(id(self))

        data: dict[str, Any] = {}
        for key, value in (
            ("id", self.id),
            ("title", self.title),
            ("description", self.description),
            ("version", self.version),
            ("type", self.type),
            ("format", self.format),
            ("default", self.default),
            ("example", self.example),
            ("readOnly", self.read_only),
            ("pattern", self.pattern),
            ("enum", self.enum),
            ("required", self.required),
        ):
            if value:
                data[key] = value
        if self.ref is not None:
            data["$ref"] = self.ref.pointer
        for key, children in (
            ("definitions", self.definitions),
            ("properties", self.properties),
            ("patternProperties", self.pattern_properties),
        ):
            if children:
                data[key] = {name: child.to_dict(seen) for name, child in children.items()}
        if isinstance(self.additional_properties, Schema):
            data["additionalProperties"] = self.additional_properties.to_dict(seen)
        elif self.additional_properties is not None:
            data["additionalProperties"] = self.additional_properties
        if self.items is not None:
            data["items"] = self.items.to_dict(seen)
        for key, alternatives in (("oneOf", self.one_of), ("anyOf", self.any_of), ("allOf", self.all_of)):
            if alternatives:
                data[key] = [alternative.to_dict(seen) for alternative in alternatives]
        if self.not_ is not None:
            data["not"] = self.not_.to_dict(seen)
        if self.links:
            data["links"] = [link.to_dict(seen) for link in self.links]
        return data


def _schema_map(data: dict[str, Any] | None) -> dict[str, Schema]:
    return {name: Schema.from_dict(child) for name, child in (data or {}).items()}


def _optional_schema(data: dict[str, Any] | None) -> Schema | None:
    return Schema.from_dict(data) if data is not None else None


def load_schema(text: str) -> Schema:
    """Decode a JSON Hyper-Schema document into an unresolved schema tree.

    Raises:
        json.JSONDecodeError: If ``text`` is not valid JSON.
        TypeError: If the document is not a JSON object.
    """
    return Schema.from_dict(json.loads(text))

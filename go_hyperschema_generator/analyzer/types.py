"""
Type inference for resolved schema nodes.

The :class:`TypeMapper` turns a schema node into a :class:`TypeDescriptor`:
a language-neutral description of the value (primitive, timestamp, array,
map, record or named type) plus whether it is optional. The emitter renders
descriptors into Go syntax; nothing here knows Go spelling.

Nullability follows Go's conventions: arrays, maps and untyped values are
already nil-able and are never marked optional, while scalars and records
are optional when the schema allows ``null`` or the field is not required.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Final

from go_hyperschema_generator.errors import AmbiguousOrMissingType, RecursiveTypeError, UnknownTypeTag
from go_hyperschema_generator.parser.schema import Schema
from go_hyperschema_generator.utils.string_case import GoIdentifierCase

NULL_TAG: Final = "null"
DATE_TIME_FORMAT: Final = "date-time"


class TypeKind(Enum):
    BOOL = "bool"
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    TIMESTAMP = "timestamp"
    ANY = "any"
    ARRAY = "array"
    MAP = "map"
    RECORD = "record"
    NAMED = "named"


# Schema type tags that map straight to a primitive kind
_PRIMITIVE_TAGS: Final = {
    "boolean": TypeKind.BOOL,
    "integer": TypeKind.INTEGER,
    "number": TypeKind.FLOAT,
    "any": TypeKind.ANY,
}

# Kinds that can already be nil and never take the optional wrapper
_NILABLE_KINDS: Final = frozenset({TypeKind.ANY, TypeKind.ARRAY, TypeKind.MAP})


@dataclass(frozen=True)
class Field:
    """One member of a record type."""

    name: str
    type: TypeDescriptor
    required: bool
    description: str = ""


@dataclass(frozen=True)
class TypeDescriptor:
    """Inferred type of a schema node.

    Attributes:
        kind: Shape of the value.
        optional: Whether the value may be absent.
        item: Element type of an array, or value type of a map.
        fields: Members of a record, sorted by name.
        name: Declared type name, for ``NAMED`` descriptors.
    """

    kind: TypeKind
    optional: bool = False
    item: TypeDescriptor | None = None
    fields: tuple[Field, ...] = ()
    name: str = ""

    @classmethod
    def named(cls, name: str, *, optional: bool = False) -> TypeDescriptor:
        return cls(TypeKind.NAMED, optional=optional, name=name)

    @classmethod
    def array_of(cls, item: TypeDescriptor) -> TypeDescriptor:
        return cls(TypeKind.ARRAY, item=item)

    @property
    def is_nilable(self) -> bool:
        """True for kinds that are empty-able without an optional wrapper."""
        return self.kind in _NILABLE_KINDS

    def as_optional(self) -> TypeDescriptor:
        return self if self.is_nilable or self.optional else replace(self, optional=True)

    def as_required(self) -> TypeDescriptor:
        return replace(self, optional=False) if self.optional else self


class TypeMapper:
    """Infers type descriptors for resolved schema nodes.

    A node reached again while its own type is still being inferred is
    referred to by its declared type name instead of being expanded; see
    :meth:`declare_resources`.

    Args:
        naming: Identifier casing used for declared type names.
    """

    def __init__(self, naming: GoIdentifierCase | None = None) -> None:
        self.naming = naming or GoIdentifierCase()
        self._declared: dict[int, tuple[Schema, str]] = {}
        self._in_progress: set[int] = set()

    def declare_resources(self, root: Schema) -> None:
        """Record the Go type name declared for each resource of ``root``."""
        self._declared = {}
        for name, resource in declared_resources(root):
            declared = resource.items if resource.items is not None else resource
            self._declared[id(declared)] = (declared, self.naming.initial_cap(name))

    def declared_name(self, node: Schema) -> str | None:
        entry = self._declared.get(id(node))
        return entry[1] if entry is not None and entry[0] is node else None

    def type_tags(self, node: Schema) -> list[str]:
        """Type tags of ``node``, inferred from its shape when undeclared.

        Raises:
            AmbiguousOrMissingType: If the node declares no usable tag and
                has neither properties nor items to classify it by.
        """
        tags = node.types()
        if tags:
            return tags
        if node.type is not None:
            msg = f"unknown type {node.type!r}"
            raise AmbiguousOrMissingType(msg, node)
        if node.properties or node.pattern_properties:
            return ["object"]
        if node.items is not None:
            return ["array"]
        msg = "type not found: the schema declares no type"
        raise AmbiguousOrMissingType(msg, node)

    def type_of(self, node: Schema, required: bool = True, force: bool = True) -> TypeDescriptor:  # noqa: FBT001, FBT002
        """Infer the type of a schema node.

        Args:
            node: Resolved schema node.
            required: Whether the value is required where it is used.
            force: Treat every nested field as required, as named top-level
                declarations do.

        Returns:
            The type descriptor.

        Raises:
            AmbiguousOrMissingType: If no non-null type tag is found.
            UnknownTypeTag: If a tag is outside the JSON Schema vocabulary.
            RecursiveTypeError: If the node contains itself and is not a
                declared resource.
        """
        if id(node) in self._in_progress:
            return self._recursive_reference(node)

        tags = self.type_tags(node)
        descriptor: TypeDescriptor | None = None
        self._in_progress.add(id(node))
        try:
            # With several non-null tags the last one wins
            for tag in tags:
                match tag:
                    case "null":
                        continue
                    case "string":
                        kind = TypeKind.TIMESTAMP if node.format == DATE_TIME_FORMAT else TypeKind.STRING
                        descriptor = TypeDescriptor(kind)
                    case "array":
                        item = self.type_of(node.items, required, force) if node.items is not None else None
                        descriptor = TypeDescriptor.array_of(_element(item or TypeDescriptor(TypeKind.ANY)))
                    case "object":
                        descriptor = self._object_type(node, force=force)
                    case _ if tag in _PRIMITIVE_TAGS:
                        descriptor = TypeDescriptor(_PRIMITIVE_TAGS[tag])
                    case _:
                        msg = f"unknown type {tag}"
                        raise UnknownTypeTag(msg, node)
        finally:
            self._in_progress.discard(id(node))

        if descriptor is None:
            msg = f"type not found: {tags}"
            raise AmbiguousOrMissingType(msg, node)

        if NULL_TAG in tags or not (required or force):
            return descriptor.as_optional()
        return descriptor

    def _object_type(self, node: Schema, *, force: bool) -> TypeDescriptor:
        if node.pattern_properties:
            # Only the first pattern is honored; several patterns are not supported.
            value_schema = next(iter(node.pattern_properties.values()))
            return TypeDescriptor(TypeKind.MAP, item=_element(self.go_type(value_schema)))

        fields = []
        for name, child in resolved_properties(node):
            field_required = name in node.required or force
            fields.append(
                Field(
                    name=name,
                    type=self.type_of(child, field_required, force),
                    required=field_required,
                    description=child.description,
                )
            )
        return TypeDescriptor(TypeKind.RECORD, fields=tuple(fields))

    def _recursive_reference(self, node: Schema) -> TypeDescriptor:
        name = self.declared_name(node)
        if name is None:
            msg = "recursive type: the schema contains itself and is not a declared resource"
            raise RecursiveTypeError(msg, node)
        # Fields hold a pointer to the declared type; array and map elements drop it
        return TypeDescriptor.named(name, optional=True)

    def go_type(self, node: Schema) -> TypeDescriptor:
        """Type of a named declaration: required, with every field present."""
        return self.type_of(node, required=True, force=True)


def resolved_properties(resource: Schema) -> list[tuple[str, Schema]]:
    """Properties of a resolved resource, sorted by name."""
    return sorted(resource.properties.items())


def declared_resources(root: Schema) -> list[tuple[str, Schema]]:
    """Resources of ``root`` that get a Go type declaration.

    Definitions reachable only through references have neither links nor
    properties and are skipped.
    """
    return [(name, resource) for name, resource in resolved_properties(root) if resource.links or resource.properties]


def _element(descriptor: TypeDescriptor) -> TypeDescriptor:
    # Recursive references are the only named descriptors
    return descriptor.as_required() if descriptor.kind is TypeKind.NAMED else descriptor

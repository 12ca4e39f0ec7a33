"""
Operation analysis for hypermedia links.

For every link of a resource the :class:`LinkAnalyzer` derives the ordered
parameter list of the generated method (href parameters, request body,
pagination range) and the shape of its return value. The link relation is
mapped once onto the closed :class:`Relation` enum and dispatched on here,
so the emitter never compares relation strings.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final

from go_hyperschema_generator.analyzer.types import TypeDescriptor, TypeMapper
from go_hyperschema_generator.errors import AmbiguousOrMissingType, DuplicateLinkTitle, MissingHRef
from go_hyperschema_generator.parser.reference import resolve_href
from go_hyperschema_generator.parser.schema import Link, Schema
from go_hyperschema_generator.utils.string_case import GoIdentifierCase

BODY_PARAMETER: Final = "o"
RANGE_PARAMETER: Final = "lr"
LIST_RANGE_TYPE: Final = "ListRange"


class Relation(Enum):
    SELF = "self"
    CREATE = "create"
    UPDATE = "update"
    DESTROY = "destroy"
    INSTANCES = "instances"
    EMPTY = "empty"
    DEFAULT = "default"

    @classmethod
    def from_tag(cls, tag: str) -> Relation:
        """Relation for a link ``rel``; unknown tags read as ``DEFAULT``."""
        try:
            return cls(tag)
        except ValueError:
            return cls.DEFAULT


# Relations whose operations return nothing unless a target schema says otherwise
_EMPTY_RELATIONS: Final = frozenset({Relation.DESTROY, Relation.EMPTY})


class ReturnKind(Enum):
    EMPTY = "empty"
    VALUE = "value"
    RECORD = "record"
    COLLECTION = "collection"


@dataclass(frozen=True)
class Parameter:
    """One parameter of a generated operation."""

    name: str
    type: TypeDescriptor


@dataclass(frozen=True)
class ReturnDescriptor:
    """What a generated operation returns besides its error.

    Attributes:
        kind: ``EMPTY`` (error only), ``VALUE`` (returned as is), ``RECORD``
            (returned by reference) or ``COLLECTION`` (a slice of ``type``).
        type: The returned type, or the element type of a collection.
        declaration: Body of the result type to declare under ``type.name``,
            when the link's target schema needs a type of its own.
    """

    kind: ReturnKind
    type: TypeDescriptor | None = None
    declaration: TypeDescriptor | None = None

    @property
    def is_empty(self) -> bool:
        return self.kind is ReturnKind.EMPTY


EMPTY_RESULT: Final = ReturnDescriptor(ReturnKind.EMPTY)


class LinkAnalyzer:
    """Derives signatures of the operations described by links.

    Args:
        type_mapper: Type inference for parameter and result schemas.
        naming: Identifier casing for synthesized type names.
    """

    def __init__(self, type_mapper: TypeMapper | None = None, naming: GoIdentifierCase | None = None) -> None:
        self.naming = naming or GoIdentifierCase()
        self.type_mapper = type_mapper or TypeMapper(self.naming)

    @staticmethod
    def relation(link: Link) -> Relation:
        return Relation.from_tag(link.rel)

    def parameters(self, resource_name: str, link: Link, root: Schema | None = None) -> list[Parameter]:
        """Ordered parameters of the operation a link describes.

        Href parameters come first in template order, then the request body
        ``o`` when the link declares a schema, then the ``lr`` list range for
        ``instances`` links fetched with GET.

        Args:
            resource_name: Name of the resource owning the link.
            link: A link of a resolved document.
            root: Document root; when given the href is resolved again
                against it instead of relying on the resolve pass.

        Raises:
            MissingHRef: If the link declares no href.
        """
        if link.href is None:
            msg = f"no href property declared for {link.title!r}"
            raise MissingHRef(msg, link)
        if root is not None:
            resolve_href(link.href, root, self.naming)

        params = [
            Parameter(name, self.type_mapper.go_type(schema)) for name, schema in link.href.schemas.items()
        ]

        if link.schema is not None:
            body, required = self.body_type(link)
            if self.accepts_custom_type(link):
                body = TypeDescriptor.named(self.options_type_name(resource_name, link))
            params.append(Parameter(BODY_PARAMETER, body if required else body.as_optional()))

        if self.relation(link) is Relation.INSTANCES and link.method.upper() == "GET":
            params.append(Parameter(RANGE_PARAMETER, TypeDescriptor.named(LIST_RANGE_TYPE, optional=True)))

        return params

    def body_type(self, link: Link) -> tuple[TypeDescriptor, bool]:
        """Request body type, with its optional flag split off as ``required``."""
        if link.schema is None:
            msg = f"link {link.title!r} declares no request schema"
            raise ValueError(msg)
        body = self.type_mapper.type_of(link.schema, required=True, force=False)
        return body.as_required(), not body.optional

    @staticmethod
    def accepts_custom_type(link: Link) -> bool:
        """True if the request body declares properties of its own."""
        return link.schema is not None and link.schema.is_custom_type()

    def options_type_name(self, resource_name: str, link: Link) -> str:
        return self.naming.initial_cap(f"{resource_name}-{link.title}-Opts")

    def result_type_name(self, resource_name: str, link: Link) -> str:
        return self.naming.initial_cap(f"{resource_name}-{link.title}-Result")

    def options_type(self, link: Link) -> TypeDescriptor | None:
        """Body of the ``Opts`` type to declare for a custom request body."""
        if not self.accepts_custom_type(link):
            return None
        body, _ = self.body_type(link)
        return body

    def return_shape(self, resource_name: str, resource: Schema, link: Link) -> ReturnDescriptor:
        """Classify what the operation of a link returns.

        Args:
            resource_name: Name of the resource as declared in the schema.
            resource: The resolved resource schema owning the link.
            link: The link to classify.

        Returns:
            The return descriptor; ``declaration`` is set when a
            ``<Resource><Title>Result`` type has to be generated.
        """
        target = link.target_schema
        if target is None and self.relation(link) in _EMPTY_RELATIONS:
            return EMPTY_RESULT

        subject = target if target is not None else resource
        if self.is_empty_result(subject):
            return EMPTY_RESULT

        resource_type = TypeDescriptor.named(self.naming.initial_cap(resource_name))
        if target is not None:
            if target.items is resource:
                return ReturnDescriptor(ReturnKind.COLLECTION, resource_type)
            if target.items is not None and target.items.is_custom_type():
                return ReturnDescriptor(
                    ReturnKind.COLLECTION,
                    TypeDescriptor.named(self.result_type_name(resource_name, link)),
                    declaration=self.type_mapper.go_type(target.items),
                )
            if target.is_custom_type():
                return ReturnDescriptor(
                    ReturnKind.RECORD,
                    TypeDescriptor.named(self.result_type_name(resource_name, link)),
                    declaration=self.type_mapper.go_type(target),
                )
            return ReturnDescriptor(ReturnKind.VALUE, self.type_mapper.go_type(target))

        if resource.is_custom_type():
            if self.relation(link) is Relation.INSTANCES:
                return ReturnDescriptor(ReturnKind.COLLECTION, resource_type)
            return ReturnDescriptor(ReturnKind.RECORD, resource_type)
        return ReturnDescriptor(ReturnKind.VALUE, resource_type)

    def is_empty_result(self, schema: Schema) -> bool:
        """True if ``schema`` only admits ``null``, or declares no type at all."""
        try:
            tags = self.type_mapper.type_tags(schema)
        except AmbiguousOrMissingType:
            return True
        return set(tags) == {"null"}

    @staticmethod
    def are_title_links_unique(resource: Schema) -> bool:
        """True if no two links of ``resource`` share a case-insensitive title."""
        titles = [link.title.lower() for link in resource.links]
        return len(set(titles)) == len(titles)

    def check_unique_titles(self, resource_name: str, resource: Schema) -> None:
        """Ensure generated ``Opts``/``Result`` names cannot collide.

        Raises:
            DuplicateLinkTitle: If two links share a case-insensitive title.
        """
        seen: set[str] = set()
        for link in resource.links:
            title = link.title.lower()
            if title in seen:
                raise DuplicateLinkTitle(resource_name, link.title, link)
            seen.add(title)


def links_of(resource: Schema) -> list[Link]:
    """Links of a resource, in declaration order."""
    return list(resource.links)

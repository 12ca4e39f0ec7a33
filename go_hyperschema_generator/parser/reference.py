"""
JSON Pointer and href template resolution.

A reference is followed segment by segment from the document root, using
each node's declared pointer segments. Resolution always ends on a
dereference-free :class:`Schema`: references, and the first alternative of
``oneOf``/``anyOf``, are followed until none is left.
"""

from __future__ import annotations

from typing import Any, Final
from urllib.parse import unquote_plus

from go_hyperschema_generator.errors import (
    MissingReferenceTarget,
    UnresolvableReference,
    UnsupportedReferenceForm,
)
from go_hyperschema_generator.parser.schema import MISSING, HRef, Reference, Schema
from go_hyperschema_generator.utils.string_case import GoIdentifierCase

FRAGMENT: Final = "#"
SEPARATOR: Final = "/"


def encode_segment(segment: str) -> str:
    """Escape a key for use as a JSON Pointer segment."""
    return segment.replace("~", "~0").replace("/", "~1")


def decode_segment(segment: str) -> str:
    """Undo JSON Pointer escaping (``~1`` is ``/``, ``~0`` is ``~``)."""
    return segment.replace("~1", "/").replace("~0", "~")


def resolve_reference(reference: Reference | str, root: Schema) -> Schema:
    """Return the node a fragment-local JSON Pointer designates.

    The node is returned as found: if it is itself a reference it is not
    followed further (see :func:`resolve_node`).

    Args:
        reference: Pointer such as ``#/definitions/app/definitions/id``.
        root: Document root the pointer starts from.

    Returns:
        The designated schema node.

    Raises:
        UnsupportedReferenceForm: If the pointer does not start with ``#``.
        MissingReferenceTarget: If a segment names a key absent from its container.
        UnresolvableReference: If a segment steps into a non-container, or the
            pointer does not end on a schema.
    """
    pointer = str(reference)
    if not pointer.startswith(FRAGMENT):
        msg = f"non-fragment references are not supported: {pointer}"
        raise UnsupportedReferenceForm(msg)

    node: Any = root
    for raw_segment in pointer.split(SEPARATOR)[1:]:
        segment = decode_segment(raw_segment)
        node = _step(node, segment, pointer)

    if not isinstance(node, Schema):
        msg = f"{pointer} does not designate a schema"
        raise UnresolvableReference(msg, pointer)
    return node


def _step(node: Any, segment: str, pointer: str) -> Any:  # noqa: ANN401
    if hasattr(node, "pointer_child"):
        child = node.pointer_child(segment)
        if child is MISSING:
            msg = f"can't find '{segment}' field in {pointer}"
            raise MissingReferenceTarget(msg, pointer)
        return child

    if isinstance(node, dict):
        if segment not in node:
            msg = f"can't find '{segment}' key in {pointer}"
            raise MissingReferenceTarget(msg, pointer)
        return node[segment]

    if isinstance(node, list) and segment.isdigit():
        index = int(segment)
        if index >= len(node):
            msg = f"can't find index {index} in {pointer}"
            raise MissingReferenceTarget(msg, pointer)
        return node[index]

    msg = f"can't follow pointer: {pointer} (stopped at '{segment}')"
    raise UnresolvableReference(msg, pointer)


def resolve_node(node: Schema, root: Schema) -> Schema:
    """Follow references and first alternatives until a concrete node is reached.

    A node that is already dereference-free is returned unchanged, which
    makes resolution idempotent.

    Args:
        node: Schema that may be a reference or a ``oneOf``/``anyOf`` union.
        root: Document root used to resolve pointers.

    Returns:
        The terminal, dereference-free schema node.

    Raises:
        UnresolvableReference: If the alias chain loops back on itself.
    """
    chain: set[int] = set()
    while True:
        if node.ref is not None:
            target = resolve_reference(node.ref, root)
        elif node.one_of:
            target = node.one_of[0]
        elif node.any_of:
            target = node.any_of[0]
        else:
            return node

        if id(node) in chain:
            pointer = str(node.ref) if node.ref is not None else ""
            msg = "circular reference chain never reaches a schema definition"
            raise UnresolvableReference(msg, pointer, node)
        chain.add(id(node))
        node = target


def href_parameter_name(pointer: str, naming: GoIdentifierCase) -> str:
    """Synthesize a parameter name from a decoded pointer.

    The owning definition is combined with the field name so that ``id``
    fields of different resources stay distinct:
    ``#/definitions/app/definitions/id`` becomes ``appID``.
    """
    segments = [decode_segment(s) for s in pointer.split(SEPARATOR)[1:]]
    if len(segments) >= 3:  # noqa: PLR2004
        return naming.initial_low(f"{segments[-3]}-{segments[-1]}")
    return naming.initial_low(segments[-1])


def resolve_href(href: HRef, root: Schema, naming: GoIdentifierCase) -> dict[str, Schema]:
    """Resolve the pointers embedded in an href template.

    Fills ``href.order``, ``href.arguments`` and ``href.schemas`` and
    returns the mapping from parameter name to the resolved schema, in
    left-to-right order.
    """
    schemas: dict[str, Schema] = {}
    arguments: list[str] = []
    for encoded in href.pointers():
        pointer = unquote_plus(encoded)
        name = href_parameter_name(pointer, naming)
        arguments.append(name)
        if name not in schemas:
            schemas[name] = resolve_node(resolve_reference(pointer, root), root)

    href.order = list(schemas)
    href.arguments = arguments
    href.schemas = schemas
    return schemas

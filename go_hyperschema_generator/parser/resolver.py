"""
Resolve pass over a Hyper-Schema document.

One depth-first traversal replaces every definition, property, pattern
property, array item and link schema by its dereferenced node, in place.
Each node is descended into at most once per pass, which is what makes
self-referential and mutually-referential resources terminate.
"""

from __future__ import annotations

import logging

from go_hyperschema_generator.parser.reference import resolve_href, resolve_node
from go_hyperschema_generator.parser.schema import Link, Schema
from go_hyperschema_generator.utils.string_case import GoIdentifierCase

logger = logging.getLogger(__name__)


class ResolvedSet:
    """Identity set of the nodes already resolved during one pass.

    Nodes are keyed by ``id()``; the set keeps a reference to each node so
    identities stay valid for the lifetime of the pass.
    """

    def __init__(self) -> None:
        self._nodes: dict[int, Schema] = {}

    def insert(self, node: Schema) -> None:
        self._nodes[id(node)] = node

    def __contains__(self, node: object) -> bool:
        return id(node) in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)


class SchemaResolver:
    """Runs resolve passes over a document.

    Args:
        naming: Identifier casing used to name href parameters.
    """

    def __init__(self, naming: GoIdentifierCase | None = None) -> None:
        self.naming = naming or GoIdentifierCase()

    def resolve(self, schema: Schema, root: Schema | None = None, resolved: ResolvedSet | None = None) -> Schema:
        """Resolve ``schema`` and everything reachable from it.

        Args:
            schema: Node to resolve.
            root: Document root for pointers; ``schema`` itself when omitted.
            resolved: Nodes already resolved in this pass; a fresh set when omitted.

        Returns:
            The effective node, which differs from ``schema`` when ``schema``
            was a reference.
        """
        if root is None:
            root = schema
        if resolved is None:
            resolved = ResolvedSet()

        node = resolve_node(schema, root)
        if node in resolved:
            return node
        resolved.insert(node)

        for children in (node.definitions, node.properties, node.pattern_properties):
            for name, child in children.items():
                children[name] = self.resolve(child, root, resolved)
        if node.items is not None:
            node.items = self.resolve(node.items, root, resolved)
        for link in node.links:
            self.resolve_link(link, root, resolved)
        return node

    def resolve_link(self, link: Link, root: Schema, resolved: ResolvedSet) -> None:
        """Resolve a link's request and target schemas and its href."""
        if link.schema is not None:
            link.schema = self.resolve(link.schema, root, resolved)
        if link.target_schema is not None:
            link.target_schema = self.resolve(link.target_schema, root, resolved)
        if link.href is not None:
            resolve_href(link.href, root, self.naming)


def resolve_schema(root: Schema, naming: GoIdentifierCase | None = None) -> Schema:
    """Run one complete resolve pass over a document.

    Args:
        root: The document root.
        naming: Identifier casing for href parameter names.

    Returns:
        The effective root of the resolved document.
    """
    resolved = ResolvedSet()
    logger.debug("Resolving schema %r", root.title or root.id)
    effective_root = SchemaResolver(naming).resolve(root, resolved=resolved)
    logger.debug("Resolved %d schema nodes", len(resolved))
    return effective_root

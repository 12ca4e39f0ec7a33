"""
Hyper-Schema Parser Module for Go Client Generation

This module deserializes JSON Hyper-Schema documents and resolves their
JSON Pointer references into a fully dereferenced schema graph.
"""

from .reference import (
    decode_segment,
    encode_segment,
    href_parameter_name,
    resolve_href,
    resolve_node,
    resolve_reference,
)
from .resolver import ResolvedSet, SchemaResolver, resolve_schema
from .schema import HRef, Link, Reference, Schema, load_schema

__all__ = [
    "HRef",
    "Link",
    "Reference",
    "ResolvedSet",
    "Schema",
    "SchemaResolver",
    "decode_segment",
    "encode_segment",
    "href_parameter_name",
    "load_schema",
    "resolve_href",
    "resolve_node",
    "resolve_reference",
    "resolve_schema",
]

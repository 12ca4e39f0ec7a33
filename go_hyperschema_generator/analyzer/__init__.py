"""
Schema Analysis Module for Go Client Generation

This module infers field types and operation signatures from a resolved
Hyper-Schema document.
"""

from .links import (
    BODY_PARAMETER,
    LIST_RANGE_TYPE,
    RANGE_PARAMETER,
    LinkAnalyzer,
    Parameter,
    Relation,
    ReturnDescriptor,
    ReturnKind,
    links_of,
)
from .types import Field, TypeDescriptor, TypeKind, TypeMapper, resolved_properties

__all__ = [
    "BODY_PARAMETER",
    "LIST_RANGE_TYPE",
    "RANGE_PARAMETER",
    "Field",
    "LinkAnalyzer",
    "Parameter",
    "Relation",
    "ReturnDescriptor",
    "ReturnKind",
    "TypeDescriptor",
    "TypeKind",
    "TypeMapper",
    "links_of",
    "resolved_properties",
]

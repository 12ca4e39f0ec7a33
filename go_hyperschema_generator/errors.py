"""Exceptions raised while resolving and typing a Hyper-Schema document.

Every failure is fatal to the generation run: the document is malformed or
self-contradictory, so the error names the offending schema element and the
violated rule for the schema author to fix.
"""

from __future__ import annotations

import json
from typing import Any


class SchematicError(Exception):
    """Base class for all generation errors.

    Attributes:
        reason: What went wrong.
        element: The schema element (``Schema``, ``Link``, or any JSON value)
            being processed when the failure happened, if known.
    """

    def __init__(self, reason: str, element: Any = None) -> None:  # noqa: ANN401
        self.reason = reason
        self.element = element
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.element is None:
            return self.reason
        return f"Error processing schema element:\n    {describe_element(self.element)}\n\nFailed with: {self.reason}"


class ReferenceResolutionError(SchematicError):
    """Base class for JSON Pointer failures."""


class UnsupportedReferenceForm(ReferenceResolutionError):
    """Raised for references that are not fragment-local (``#/...``)."""


class BrokenReference(ReferenceResolutionError):
    """Raised when a pointer path cannot be followed to completion."""

    def __init__(self, reason: str, reference: str, element: Any = None) -> None:  # noqa: ANN401
        self.reference = reference
        super().__init__(reason, element)


class MissingReferenceTarget(BrokenReference):
    """Raised when a pointer segment names a key or field that does not exist."""


class UnresolvableReference(BrokenReference):
    """Raised when a pointer steps into something that is not a container, or never reaches a schema."""


class TypeInferenceError(SchematicError):
    """Base class for type classification failures."""


class AmbiguousOrMissingType(TypeInferenceError):
    """Raised when a schema node has no classifiable type tag."""


class UnknownTypeTag(TypeInferenceError):
    """Raised for a type tag outside the recognized vocabulary."""


class RecursiveTypeError(TypeInferenceError):
    """Raised when a schema node contains itself and has no declared name to refer to."""


class LinkError(SchematicError):
    """Base class for link analysis failures."""


class DuplicateLinkTitle(LinkError):
    """Raised when two links of one resource share a case-insensitive title."""

    def __init__(self, resource_name: str, title: str, element: Any = None) -> None:  # noqa: ANN401
        self.resource_name = resource_name
        self.title = title
        super().__init__(
            f"Duplicate {resource_name}.links.title {title!r} detected in the schema. "
            "Links must have distinct titles.",
            element,
        )


class MissingHRef(LinkError):
    """Raised when a link needs path-parameter extraction but declares no href."""


class GoFormatError(SchematicError):
    """Raised when gofmt rejects the generated source.

    Attributes:
        source: The unformatted source, kept so it can be inspected.
    """

    def __init__(self, reason: str, source: str) -> None:
        self.source = source
        super().__init__(f"gofmt rejected the generated source: {reason}")


def describe_element(element: Any) -> str:  # noqa: ANN401
    """Serialize a schema element for error messages."""
    value = element.to_dict() if hasattr(element, "to_dict") else element
    try:
        text = json.dumps(value, indent=2, sort_keys=True, default=repr)
    except (TypeError, ValueError):
        text = repr(value)
    return text.replace("\n", "\n    ")

"""
Utilities Module for Go Client Generation

This module provides identifier case conversion and output writing helpers
shared by the parser, the analyzers and the emitter.
"""

from .file_utils import read_schema_source, write_output
from .string_case import (
    DEFAULT_ACRONYMS,
    GO_KEYWORDS,
    GoIdentifierCase,
    capitalcase,
    escape_go_keyword,
    is_go_keyword,
)

__all__ = [
    "DEFAULT_ACRONYMS",
    "GO_KEYWORDS",
    "GoIdentifierCase",
    "capitalcase",
    "escape_go_keyword",
    "is_go_keyword",
    "read_schema_source",
    "write_output",
]

"""
Go Code Generator Module

This module provides Jinja2-based code generation for Go API clients
from resolved JSON Hyper-Schema documents.
"""

from .formatter import find_gofmt, format_go_source
from .template_engine import GoCodeGenerator, GoTemplateEngine, OperationFormatter

__all__ = [
    "GoCodeGenerator",
    "GoTemplateEngine",
    "OperationFormatter",
    "find_gofmt",
    "format_go_source",
]

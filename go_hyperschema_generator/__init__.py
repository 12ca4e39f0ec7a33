"""
Go Hyper-Schema Client Generator

A Jinja2-based generator that produces Go API clients from JSON Hyper-Schema
documents. References are resolved into a schema graph, types are inferred
from the resolved nodes, and every link becomes one client method.
"""

from .errors import SchematicError
from .generator import GoCodeGenerator, GoTemplateEngine
from .parser import Schema, load_schema, resolve_schema

__version__ = "1.0.0"

__all__ = [
    "GoCodeGenerator",
    "GoTemplateEngine",
    "Schema",
    "SchematicError",
    "load_schema",
    "resolve_schema",
]

"""
Go Template Engine for Hyper-Schema Client Generation

This module uses Jinja2 templates to generate a Go API client from a
resolved JSON Hyper-Schema document. Type inference and operation analysis
are delegated to the analyzers; templates only lay out the Go source.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Final

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from go_hyperschema_generator.analyzer.links import (
    BODY_PARAMETER,
    RANGE_PARAMETER,
    LinkAnalyzer,
    ReturnDescriptor,
    ReturnKind,
    links_of,
)
from go_hyperschema_generator.analyzer.types import (
    TypeDescriptor,
    TypeMapper,
    declared_resources,
    resolved_properties,
)
from go_hyperschema_generator.generator.filters import FILTERS, GoTypeRenderer, go_string, package_name, tidy_source
from go_hyperschema_generator.generator.formatter import format_go_source
from go_hyperschema_generator.parser.resolver import resolve_schema
from go_hyperschema_generator.parser.schema import Link, Schema
from go_hyperschema_generator.utils.string_case import GoIdentifierCase, escape_go_keyword

logger = logging.getLogger(__name__)

# Packages the embedded client runtime depends on
RUNTIME_IMPORTS: Final = (
    "bytes",
    "encoding/json",
    "fmt",
    "io",
    "net/http",
    "reflect",
    "runtime",
    "github.com/google/go-querystring/query",
)
TIME_IMPORT: Final = "time"


class OperationFormatter:
    """Spells link signatures and calls in Go."""

    def __init__(self, link_analyzer: LinkAnalyzer, renderer: GoTypeRenderer, naming: GoIdentifierCase) -> None:
        self.link_analyzer = link_analyzer
        self.renderer = renderer
        self.naming = naming

    def identifier(self, name: str) -> str:
        return escape_go_keyword(self.naming.initial_low(name))

    def method_name(self, resource_name: str, link: Link) -> str:
        return self.naming.initial_cap(f"{resource_name}-{link.title}")

    def params(self, resource_name: str, link: Link) -> str:
        """Parameter list of the generated method (``appID string, o AppUpdateOpts``)."""
        return ", ".join(
            f"{self.identifier(param.name)} {self.renderer.render(param.type)}"
            for param in self.link_analyzer.parameters(resource_name, link)
        )

    def values(self, shape: ReturnDescriptor) -> str:
        """Result list of the generated method."""
        if shape.kind is ReturnKind.EMPTY or shape.type is None:
            return "error"
        type_name = self.renderer.render(shape.type)
        match shape.kind:
            case ReturnKind.RECORD:
                return f"*{type_name}, error"
            case ReturnKind.COLLECTION:
                return f"[]{type_name}, error"
            case _:
                return f"{type_name}, error"

    def result_var_type(self, shape: ReturnDescriptor) -> str:
        """Type of the variable the response is decoded into."""
        if shape.type is None:
            return ""
        type_name = self.renderer.render(shape.type)
        return f"[]{type_name}" if shape.kind is ReturnKind.COLLECTION else type_name

    def request_params(self, resource_name: str, link: Link) -> str:
        """Trailing arguments for the runtime's request method.

        DELETE takes none; other methods take the body (or ``nil``), and GET
        additionally takes the list range (or ``nil``).
        """
        method = link.method.upper()
        if method == "DELETE":
            return ""
        names = {param.name for param in self.link_analyzer.parameters(resource_name, link)}
        args = [BODY_PARAMETER if BODY_PARAMETER in names else "nil"]
        if RANGE_PARAMETER in names:
            args.append(RANGE_PARAMETER)
        elif method == "GET":
            args.append("nil")
        return "".join(f", {arg}" for arg in args)

    @staticmethod
    def href_format(link: Link) -> str:
        """The link href as a Go format string literal."""
        return go_string(link.href.format_string() if link.href is not None else "")

    def href_args(self, link: Link) -> str:
        """Href arguments, comma separated, one per placeholder occurrence."""
        if link.href is None:
            return ""
        return ", ".join(self.identifier(name) for name in link.href.arguments)

    def path_expression(self, link: Link) -> str:
        """Go expression building the request path from the href parameters."""
        args = self.href_args(link)
        if not args:
            return self.href_format(link)
        return f"fmt.Sprintf({self.href_format(link)}, {args})"


class GoTemplateEngine:
    """Template engine for generating Go code."""

    def __init__(
        self,
        template_dir: Path | None = None,
        naming: GoIdentifierCase | None = None,
        type_mapper: TypeMapper | None = None,
    ) -> None:
        """Initialize the template engine."""
        if template_dir is None:
            current_dir = Path(__file__).parent
            template_dir = current_dir.parent / "templates"

        self.template_dir = Path(template_dir)
        self.naming = naming or GoIdentifierCase()
        self.type_mapper = type_mapper or TypeMapper(self.naming)
        self.link_analyzer = LinkAnalyzer(self.type_mapper, self.naming)
        self.renderer = GoTypeRenderer(self.naming)
        self.operations = OperationFormatter(self.link_analyzer, self.renderer, self.naming)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )

        self._register_filters()
        self._register_globals()

    def _register_filters(self) -> None:
        """Register custom Jinja2 filters for Go code generation."""
        builtin_filters = {
            "initial_cap": self.naming.initial_cap,
            "initial_low": self.naming.initial_low,
            "method_cap": self.naming.method_cap,
            "go_type": self.go_type,
            "schema_go_type": self.schema_go_type,
        }

        self.env.filters.update(builtin_filters)
        self.env.filters.update(FILTERS)

    def _register_globals(self) -> None:
        """Register global functions available in templates."""
        analyzer = self.link_analyzer
        operations = self.operations

        globals_map: dict[str, Any] = {
            # Schema queries
            "links_of": links_of,
            "resolved_properties": resolved_properties,
            # Link analysis
            "return_shape": analyzer.return_shape,
            "options_type": analyzer.options_type,
            "options_type_name": analyzer.options_type_name,
            # Go spelling of operations
            "method_name": operations.method_name,
            "params": operations.params,
            "values": operations.values,
            "result_var_type": operations.result_var_type,
            "request_params": operations.request_params,
            "href_format": operations.href_format,
            "href_args": operations.href_args,
            "path_expression": operations.path_expression,
            "var_name": operations.identifier,
            "is_record": lambda shape: shape.kind is ReturnKind.RECORD,
        }

        self.env.globals.update(globals_map)

    def go_type(self, descriptor: TypeDescriptor) -> str:
        return self.renderer.render(descriptor)

    def schema_go_type(self, schema: Schema) -> str:
        return self.renderer.render(self.type_mapper.go_type(schema))

    def render_template(self, template_name: str, context: dict[str, Any]) -> str:
        """Render a template with the given context."""
        template = self.env.get_template(template_name)
        return template.render(**context)


class GoCodeGenerator:
    """Main code generator for Go clients.

    Args:
        template_engine: Engine used for rendering; a default one is built when omitted.
        template_dir: Directory of replacement templates for the default engine.
        package_name: Go package name; derived from the schema title when omitted.
        format_source: Run the result through gofmt when it is available.
    """

    def __init__(
        self,
        template_engine: GoTemplateEngine | None = None,
        *,
        template_dir: Path | None = None,
        package_name: str | None = None,
        format_source: bool = True,
    ) -> None:
        self.template_engine = template_engine or GoTemplateEngine(template_dir)
        self.package_name = package_name
        self.format_source = format_source

    def generate(self, schema: Schema) -> str:
        """Generate the Go client source for a Hyper-Schema document.

        The document is resolved in place first.

        Raises:
            SchematicError: If the document cannot be resolved or typed, or
                if a resource has links with duplicate titles.
        """
        engine = self.template_engine
        root = resolve_schema(schema, engine.naming)
        name = self.package_name or package_name(root.title)
        context: dict[str, Any] = {"root": root, "package_name": name}

        body = [engine.render_template("service.go.j2", context)]
        engine.type_mapper.declare_resources(root)
        for resource_name, resource in declared_resources(root):
            engine.link_analyzer.check_unique_titles(resource_name, resource)
            logger.debug("Generating %s with %d links", resource_name, len(resource.links))

            resource_context = {**context, "name": resource_name, "definition": resource}
            body.append(engine.render_template("struct.go.j2", resource_context))
            body.append(engine.render_template("funcs.go.j2", resource_context))

        rendered_body = "\n".join(body)
        imports = list(RUNTIME_IMPORTS)
        if "time.Time" in rendered_body:
            imports.append(TIME_IMPORT)

        source = "\n".join(
            [
                engine.render_template("package.go.j2", context),
                engine.render_template("imports.go.j2", {**context, "imports": sorted(imports)}),
                rendered_body,
            ]
        )
        source = tidy_source(source)
        if self.format_source:
            source = format_go_source(source)
        return source

"""Utilities for parsing, rendering, routing, and writing rho site pages."""

from .frontmatter import parse_frontmatter
from .layout import JinjaLayoutProvider, compose_page
from .models import (
    BuildError,
    BuildHooks,
    BuildOptions,
    BuildResult,
    ContentForm,
    Document,
    DocumentError,
    DocumentKind,
    LayoutCompositionError,
    MetadataParseError,
    RouteCollisionError,
    UnsupportedContentForm,
    WriteError,
)
from .renderer import HtmlContentRenderer
from .routes import output_location, resolve_route
from .site_builder import SiteBuilder

__all__ = [
    "BuildError",
    "BuildHooks",
    "BuildOptions",
    "BuildResult",
    "ContentForm",
    "Document",
    "DocumentError",
    "DocumentKind",
    "HtmlContentRenderer",
    "JinjaLayoutProvider",
    "LayoutCompositionError",
    "MetadataParseError",
    "RouteCollisionError",
    "SiteBuilder",
    "UnsupportedContentForm",
    "WriteError",
    "compose_page",
    "output_location",
    "parse_frontmatter",
    "resolve_route",
]

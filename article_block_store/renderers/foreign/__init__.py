"""Renderer for content imported from the external document tool."""

from .components import DEFAULT_COMPONENTS, ForeignComponent, RenderContext, UnsupportedComponent
from .diagram import DIAGRAM_LANGUAGES, is_diagram, render_diagram
from .renderer import EMPTY_MARKUP, ForeignRenderer, group_units
from .rich_text import COLOR_MAP, render_rich_text, render_run, run_style

__all__ = [
    "COLOR_MAP",
    "DEFAULT_COMPONENTS",
    "DIAGRAM_LANGUAGES",
    "EMPTY_MARKUP",
    "ForeignComponent",
    "ForeignRenderer",
    "RenderContext",
    "UnsupportedComponent",
    "group_units",
    "is_diagram",
    "render_diagram",
    "render_rich_text",
    "render_run",
    "run_style",
]

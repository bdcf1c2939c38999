"""Markdown export for native article blocks."""

from .components import DEFAULT_COMPONENTS, RenderContext
from .renderer import MarkdownRenderer

__all__ = ["DEFAULT_COMPONENTS", "MarkdownRenderer", "RenderContext"]

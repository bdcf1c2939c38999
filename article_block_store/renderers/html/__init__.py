"""HTML rendering for native article blocks."""

from .components import DEFAULT_COMPONENTS, RenderContext
from .renderer import HtmlRenderer

__all__ = ["DEFAULT_COMPONENTS", "HtmlRenderer", "RenderContext"]

"""Renderers for native blocks and imported foreign content."""

from .article import render_article_body
from .base import BlockTree, RenderOptions, Renderer, RendererComponent
from .foreign import ForeignRenderer
from .html import HtmlRenderer
from .markdown import MarkdownRenderer

__all__ = [
    "BlockTree",
    "ForeignRenderer",
    "HtmlRenderer",
    "MarkdownRenderer",
    "RenderOptions",
    "Renderer",
    "RendererComponent",
    "render_article_body",
]

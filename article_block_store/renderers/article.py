"""Pick the renderer that matches how an article's body is stored."""

from __future__ import annotations

from collections.abc import Sequence

from article_block_store.models.article import Article
from article_block_store.models.blocks import Block

from .base import RenderOptions
from .foreign import ForeignRenderer
from .html import HtmlRenderer

_NATIVE = HtmlRenderer()
_FOREIGN = ForeignRenderer()


def render_article_body(
    article: Article,
    blocks: Sequence[Block] = (),
    *,
    options: RenderOptions | None = None,
) -> str:
    """Render the foreign tree when the article carries one, else its native blocks."""
    if article.notion_content is not None:
        return _FOREIGN.render(article.notion_content.blocks, options=options)
    return _NATIVE.render(blocks, options=options)


__all__ = ["render_article_body"]

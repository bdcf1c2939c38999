"""Public article list and article view."""

from __future__ import annotations

from nicegui import ui

from article_block_store.models.article import Article
from article_block_store.renderers import render_article_body

from ..layout import page_frame, tag_chips
from ..state import get_context


@ui.page("/")
def articles_page() -> None:  # pragma: no cover - UI wiring
    ctx = get_context()
    articles = ctx.app.articles.list_published()

    with page_frame(current="/", title="Articles", subtitle="Notes, write-ups and experiments."):
        if not articles:
            ui.label("No articles published yet.").classes("text-slate-500")
            return
        for article in articles:
            _article_card(article)


@ui.page("/articles/{slug}")
def article_view_page(slug: str) -> None:  # pragma: no cover - UI wiring
    ctx = get_context()
    article = ctx.app.articles.get_published(slug)
    if article is None:
        with page_frame(current="/", title="Article not found"):
            ui.link("Back to articles", "/")
        return

    blocks = [] if article.notion_content is not None else ctx.app.articles.list_article_blocks(article.id)
    with page_frame(current="/", title=article.title, subtitle=article.excerpt or None):
        if article.cover_image:
            ui.image(article.cover_image).classes("w-full rounded")
        tag_chips(article.tags)
        ui.html(render_article_body(article, blocks)).classes("prose max-w-none w-full")


def _article_card(article: Article) -> None:
    created = article.created_at.strftime("%Y-%m-%d") if article.created_at else ""
    with ui.card().classes("w-full shadow-sm p-4"):
        ui.link(article.title, f"/articles/{article.slug}").classes("text-lg font-semibold no-underline")
        if article.excerpt:
            ui.label(article.excerpt).classes("text-slate-600")
        with ui.row().classes("text-xs text-slate-500 gap-4 items-center"):
            if created:
                ui.label(created)
            tag_chips(article.tags)


__all__ = ["article_view_page", "articles_page"]

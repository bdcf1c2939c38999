"""Admin dashboard: article management and contact inbox."""

from __future__ import annotations

from nicegui import events, ui

from article_block_store.models.article import Article, Contact
from article_block_store.repositories.block_repository import RepositoryError
from article_block_store.store import ArticleStoreError

from ..layout import page_frame
from ..state import EditorAppContext, get_context


@ui.page("/admin")
def admin_page() -> None:  # pragma: no cover - UI wiring
    ctx = get_context()

    with page_frame(current="/admin", title="Admin", subtitle="Drafts, published articles and messages."):
        with ui.row().classes("gap-3 items-center"):
            ui.button("New article", on_click=lambda: _new_article(ctx))
            ui.upload(
                label="Import Markdown",
                auto_upload=True,
                on_upload=lambda e: _handle_markdown_upload(e, ctx, article_list.refresh),
            ).props("accept=.md,text/markdown")

        with ui.tabs() as tabs:
            articles_tab = ui.tab("Articles")
            contacts_tab = ui.tab("Messages")
        with ui.tab_panels(tabs, value=articles_tab).classes("w-full"):
            with ui.tab_panel(articles_tab):

                @ui.refreshable
                def article_list() -> None:
                    articles = ctx.app.articles.list_articles(ctx.identity)
                    if not articles:
                        ui.label("No articles yet.").classes("text-slate-500")
                    for article in articles:
                        _article_row(ctx, article, article_list.refresh)

                article_list()

            with ui.tab_panel(contacts_tab):

                @ui.refreshable
                def contact_list() -> None:
                    contacts = ctx.app.articles.list_contacts(ctx.identity)
                    if not contacts:
                        ui.label("No messages.").classes("text-slate-500")
                    for contact in contacts:
                        _contact_row(ctx, contact, contact_list.refresh)

                contact_list()


def _article_row(ctx: EditorAppContext, article: Article, refresh) -> None:
    with ui.card().classes("w-full p-3"):
        with ui.row().classes("w-full items-center justify-between"):
            with ui.column().classes("gap-0"):
                ui.label(article.title).classes("font-semibold")
                source = "imported" if article.notion_content is not None else "blocks"
                status = "published" if article.published else "draft"
                ui.label(f"/{article.slug} · {status} · {source}").classes("text-xs text-slate-500")
            with ui.row().classes("gap-2"):
                if article.notion_content is None:
                    ui.button("Edit", on_click=lambda _, a=article: ui.navigate.to(f"/admin/articles/{a.id}"))
                ui.button(
                    "Unpublish" if article.published else "Publish",
                    on_click=lambda _, a=article: _toggle_publish(ctx, a, refresh),
                ).props("outline")
                ui.button("Delete", on_click=lambda _, a=article: _confirm_delete(ctx, a, refresh)).props(
                    "outline color=negative"
                )


def _contact_row(ctx: EditorAppContext, contact: Contact, refresh) -> None:
    with ui.card().classes("w-full p-3" + ("" if contact.read else " border-l-4 border-blue-500")):
        with ui.row().classes("w-full items-center justify-between"):
            ui.label(f"{contact.name} <{contact.email}>").classes("font-semibold")
            ui.switch(
                "Read",
                value=contact.read,
                on_change=lambda e, c=contact: _set_read(ctx, c, bool(e.value), refresh),
            )
        ui.label(contact.message).classes("text-slate-600 whitespace-pre-wrap")


def _new_article(ctx: EditorAppContext) -> None:
    article = ctx.app.articles.create_draft(ctx.identity)
    ui.navigate.to(f"/admin/articles/{article.id}")


def _toggle_publish(ctx: EditorAppContext, article: Article, refresh) -> None:
    try:
        ctx.app.articles.toggle_publish(ctx.identity, article.id)
    except (ArticleStoreError, RepositoryError) as exc:
        ui.notify(f"Could not update article: {exc}", color="negative")
        return
    refresh()


def _confirm_delete(ctx: EditorAppContext, article: Article, refresh) -> None:
    with ui.dialog() as dialog, ui.card():
        ui.label(f"Delete '{article.title}'? This cannot be undone.")
        with ui.row():
            ui.button("Cancel", on_click=dialog.close).props("flat")

            def delete() -> None:
                dialog.close()
                try:
                    ctx.app.articles.delete_article(ctx.identity, article.id)
                except RepositoryError as exc:
                    ui.notify(f"Delete failed: {exc}", color="negative")
                    return
                ui.notify("Article deleted", color="positive")
                refresh()

            ui.button("Delete", on_click=delete).props("color=negative")
    dialog.open()


def _set_read(ctx: EditorAppContext, contact: Contact, read: bool, refresh) -> None:
    ctx.app.articles.toggle_contact_read(ctx.identity, contact.id, read)
    refresh()


def _handle_markdown_upload(event: events.UploadEventArguments, ctx: EditorAppContext, refresh) -> None:
    try:
        content = event.content.read().decode("utf-8")
    except UnicodeDecodeError as exc:  # pragma: no cover - user I/O
        ui.notify(f"Upload failed: {exc}", color="negative")
        return
    article = ctx.app.articles.import_markdown(ctx.identity, content)
    ui.notify(f"Imported '{article.title}'", color="positive")
    refresh()


__all__ = ["admin_page"]

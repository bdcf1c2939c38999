"""Block editor page for one native article."""

from __future__ import annotations

import logging
from uuid import UUID

from nicegui import ui

from article_block_store.editor import EditingSession
from article_block_store.editor.blocks import (
    CALLOUT_VARIANTS,
    COMMON_SYMBOLS,
    LANGUAGES,
    BlockEditor,
    CalloutEditor,
    CodeEditor,
    DividerEditor,
    HeadingEditor,
    ImageEditor,
    MathEditor,
    QuoteEditor,
    StaticEditor,
    TextEditor,
    ToggleEditor,
)
from article_block_store.models.article import Article, ArticleMetadata
from article_block_store.models.blocks import BlockType
from article_block_store.renderers import HtmlRenderer
from article_block_store.repositories.block_repository import RepositoryError
from article_block_store.slugs import slugify
from article_block_store.store import ArticleStoreError, BlockStoreError, SaveError, StoreEvent

from ..layout import page_frame
from ..state import EditorAppContext, get_context

logger = logging.getLogger(__name__)

_PREVIEW = HtmlRenderer()


@ui.page("/admin/articles/{article_id}")
def editor_page(article_id: str) -> None:  # pragma: no cover - UI wiring
    ctx = get_context()
    try:
        article = ctx.app.articles.get_article(UUID(article_id))
        store = ctx.app.articles.open_block_store(ctx.identity, article.id)
    except (ValueError, ArticleStoreError, RepositoryError, BlockStoreError) as exc:
        with page_frame(current="/admin", title="Cannot edit article"):
            ui.label(str(exc)).classes("text-red-600")
            ui.link("Back to admin", "/admin")
        return

    session = EditingSession(store, autosave_delay=ctx.app.settings.autosave_delay)

    with page_frame(current="/admin", title="Edit article"):
        _metadata_form(ctx, article)

        with ui.row().classes("w-full items-center justify-between"):
            status = ui.label(session.status_text()).classes("text-sm text-slate-500")
            with ui.row().classes("gap-2"):
                ui.button("Add block", on_click=lambda: open_palette_at_end())
                ui.button("Save", on_click=lambda: _save(session))
        ui.timer(1.0, lambda: status.set_text(session.status_text()))

        @ui.refreshable
        def palette() -> None:
            _palette(session)

        @ui.refreshable
        def block_list() -> None:
            if not store.blocks:
                ui.label("Empty article. Use 'Add block' or type '/' in a paragraph.").classes("text-slate-500")
            for editor in session.editors:
                _block_row(session, editor, palette.refresh)

        @ui.refreshable
        def preview() -> None:
            ui.html(_PREVIEW.render(store.blocks)).classes("prose max-w-none w-full")

        def open_palette_at_end() -> None:
            session.open_palette(len(store.blocks))
            palette.refresh()

        palette()
        block_list()

        def on_store_event(event: StoreEvent) -> None:
            if event in (StoreEvent.LOADED, StoreEvent.CHANGED):
                block_list.refresh()
                palette.refresh()
                preview.refresh()

        unsubscribe = store.subscribe(on_store_event)

        def teardown() -> None:
            unsubscribe()
            try:
                session.close()
            except SaveError:
                logger.exception("Unsaved changes lost for article %s", article.id)

        ui.context.client.on_disconnect(teardown)

        with ui.expansion("Preview").classes("w-full"):
            preview()


def _metadata_form(ctx: EditorAppContext, article: Article) -> None:
    with ui.card().classes("w-full p-4 gap-2"):
        title = ui.input("Title", value=article.title).classes("w-full")
        slug = ui.input("Slug", value=article.slug).classes("w-full")
        excerpt = ui.textarea("Excerpt", value=article.excerpt).classes("w-full")
        cover = ui.input("Cover image URL", value=article.cover_image or "").classes("w-full")
        tags = ui.input("Tags (comma separated)", value=", ".join(article.tags)).classes("w-full")
        published = ui.switch("Published", value=article.published)

        ui.button("Generate slug", on_click=lambda: slug.set_value(slugify(title.value or ""))).props("flat")

        def save_metadata() -> None:
            metadata = ArticleMetadata(
                title=title.value or "",
                slug=slug.value or "",
                excerpt=excerpt.value or "",
                cover_image=cover.value or None,
                published=bool(published.value),
                tags=tuple(tag.strip() for tag in (tags.value or "").split(",")),
            )
            try:
                ctx.app.articles.update_metadata(ctx.identity, article.id, metadata)
            except (ArticleStoreError, RepositoryError) as exc:
                ui.notify(str(exc), color="negative")
                return
            ui.notify("Article details saved", color="positive")

        ui.button("Save details", on_click=save_metadata)


def _palette(session: EditingSession) -> None:
    palette = session.palette
    if not palette.is_open:
        return
    with ui.card().classes("w-full p-3 border border-slate-300"):
        query = ui.input("Insert block", value=palette.query).props("autofocus").classes("w-full")
        results = ui.column().classes("gap-1 w-full")

        def render_results() -> None:
            results.clear()
            with results:
                selected = palette.selected
                for command in palette.filtered:
                    classes = "w-full justify-start"
                    if command is selected:
                        classes += " bg-blue-100"
                    ui.button(
                        f"{command.icon}  {command.label}",
                        on_click=lambda _, c=command: palette.select(c.block_type),
                    ).props("flat").classes(classes)
                if not palette.filtered:
                    ui.label("No matching blocks").classes("text-slate-500")

        def on_query(value: str) -> None:
            palette.set_query(value or "")
            render_results()

        def on_key(key: str) -> None:
            if session.handle_key(key):
                render_results()

        query.on_value_change(lambda e: on_query(e.value))
        query.on("keydown", lambda e: on_key(e.args.get("key", "")), ["key"])
        render_results()


def _block_row(session: EditingSession, editor: BlockEditor, refresh_palette) -> None:
    block = editor.block
    with ui.row().classes("w-full items-start gap-2 no-wrap"):
        with ui.column().classes("grow gap-1"):
            _editor_widget(session, editor, refresh_palette)
        with ui.column().classes("gap-0"):
            ui.button(icon="arrow_upward", on_click=lambda _, b=block: _move(session, b.position, -1)).props(
                "flat dense"
            )
            ui.button(icon="arrow_downward", on_click=lambda _, b=block: _move(session, b.position, 1)).props(
                "flat dense"
            )
            ui.button(icon="delete", on_click=lambda _, b=block: session.delete_block(b.id)).props(
                "flat dense color=negative"
            )


def _buffered(element, editor: BlockEditor, field: str):
    """Feed ``element`` into the editor buffer and commit on blur."""
    element.on_value_change(lambda e: editor.change(**{field: e.value or ""}))
    element.on("blur", lambda _: editor.blur())
    return element


def _editor_widget(session: EditingSession, editor: BlockEditor, refresh_palette) -> None:
    def text_field(element) -> None:
        def on_change(value: str) -> None:
            editor.change(text=value or "")
            if session.palette.is_open:
                refresh_palette()

        def on_key(args: dict) -> None:
            session.handle_key(args.get("key", ""), block_id=editor.block_id, shift=bool(args.get("shiftKey")))

        element.on_value_change(lambda e: on_change(e.value))
        element.on("blur", lambda _: editor.blur())
        element.on("keydown", lambda e: on_key(e.args), ["key", "shiftKey"])

    buffer = editor.buffer
    if isinstance(editor, HeadingEditor):
        size = {1: "text-3xl", 2: "text-2xl", 3: "text-xl"}.get(editor.level, "text-lg")
        text_field(ui.input(placeholder=f"Heading {editor.level}", value=buffer["text"]).classes(f"w-full {size}"))
    elif isinstance(editor, QuoteEditor):
        text_field(ui.textarea(placeholder="Quote", value=buffer["text"]).props("autogrow").classes("w-full italic"))
        _buffered(ui.input("Author", value=buffer["author"]).classes("w-1/2"), editor, "author")
    elif isinstance(editor, TextEditor):
        marker = {BlockType.BULLET_LIST: "• ", BlockType.NUMBERED_LIST: "1. "}.get(editor.block.type, "")
        placeholder = "Type '/' for commands" if editor.block.type is BlockType.PARAGRAPH else "List item"
        with ui.row().classes("w-full items-start no-wrap"):
            if marker:
                ui.label(marker).classes("pt-4")
            text_field(ui.textarea(placeholder=placeholder, value=buffer["text"]).props("autogrow").classes("w-full"))
    elif isinstance(editor, CodeEditor):
        with ui.row().classes("w-full gap-2"):
            ui.select(list(LANGUAGES), value=buffer["language"], on_change=lambda e: editor.set_language(e.value))
            _buffered(ui.input("Filename", value=buffer["filename"]), editor, "filename")
        _buffered(ui.textarea(value=buffer["code"]).props("autogrow").classes("w-full font-mono"), editor, "code")
    elif isinstance(editor, MathEditor):
        latex = _buffered(ui.textarea("LaTeX", value=buffer["latex"]).classes("w-full font-mono"), editor, "latex")

        def insert(snippet: str) -> None:
            editor.insert_symbol(snippet)
            latex.set_value(editor.buffer["latex"])

        with ui.row().classes("gap-1"):
            for symbol, snippet in COMMON_SYMBOLS:
                ui.button(symbol, on_click=lambda _, s=snippet: insert(s)).props("flat dense")
        ui.select(
            {"block": "Block", "inline": "Inline"},
            value=buffer["display"],
            on_change=lambda e: (editor.change(display=e.value), editor.blur()),
        )
    elif isinstance(editor, CalloutEditor):
        options = {color: f"{icon} {label}" for color, (label, icon) in CALLOUT_VARIANTS.items()}
        current = buffer["color"] if buffer["color"] in options else None
        ui.select(options, value=current, on_change=lambda e: editor.set_variant(e.value))
        _buffered(ui.textarea(value=buffer["text"]).props("autogrow").classes("w-full"), editor, "text")
    elif isinstance(editor, ToggleEditor):
        with ui.row().classes("w-full items-center"):
            ui.switch(value=buffer["is_open"], on_change=lambda e: editor.set_open(bool(e.value)))
            _buffered(ui.input("Summary", value=buffer["summary"]).classes("grow"), editor, "summary")
    elif isinstance(editor, ImageEditor):
        for field in ("url", "alt", "caption"):
            _buffered(ui.input(field.capitalize(), value=buffer[field]).classes("w-full"), editor, field)
        if buffer["url"]:
            ui.image(buffer["url"]).classes("max-w-md")
    elif isinstance(editor, DividerEditor):
        ui.separator()
    elif isinstance(editor, StaticEditor):
        if editor.placeholder:
            ui.label(editor.placeholder).classes("text-amber-700")
        else:
            ui.html(_PREVIEW.render([editor.block]))


def _move(session: EditingSession, position: int, offset: int) -> None:
    target = position + offset
    if 0 <= target < len(session.store.blocks):
        session.store.reorder_blocks(position, target)


def _save(session: EditingSession) -> None:
    try:
        session.save()
    except SaveError as exc:
        ui.notify(f"Save failed: {exc}", color="negative")
        return
    ui.notify("Saved", color="positive")


__all__ = ["editor_page"]

"""Public contact form."""

from __future__ import annotations

from nicegui import ui

from article_block_store.store import ArticleValidationError

from ..layout import page_frame
from ..state import get_context


@ui.page("/contact")
def contact_page() -> None:  # pragma: no cover - UI wiring
    ctx = get_context()

    with page_frame(current="/contact", title="Get in touch"):
        name = ui.input("Name").classes("w-full")
        email = ui.input("Email").classes("w-full")
        message = ui.textarea("Message").classes("w-full")

        def submit() -> None:
            try:
                ctx.app.articles.submit_contact(name.value or "", email.value or "", message.value or "")
            except ArticleValidationError as exc:
                ui.notify(str(exc), color="negative")
                return
            name.value = email.value = message.value = ""
            ui.notify("Thanks! Your message has been sent.", color="positive")

        ui.button("Send", on_click=submit)


__all__ = ["contact_page"]

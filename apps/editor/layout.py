"""Reusable layout helpers for the article editor app."""

from __future__ import annotations

from contextlib import contextmanager

from nicegui import ui

_NAV_LINKS = [
    ("Articles", "/"),
    ("Contact", "/contact"),
    ("Admin", "/admin"),
]


def _nav_bar(current: str) -> None:
    with ui.header().classes("bg-slate-900 text-white shadow-sm"):
        with ui.row().classes("w-full items-center justify-between px-6 py-3"):
            ui.link(text="Articles", target="/").classes("text-lg font-semibold no-underline text-white")
            with ui.row().classes("gap-4"):
                for label, href in _NAV_LINKS:
                    is_current = href == current
                    classes = "text-white no-underline"
                    if not is_current:
                        classes = "text-white/70 hover:text-white no-underline"
                    ui.link(text=label, target=href).classes(classes + (" font-semibold" if is_current else ""))


@contextmanager
def page_frame(
    *,
    current: str,
    title: str,
    subtitle: str | None = None,
):
    """Render shared navigation and yield a central content column."""

    _nav_bar(current)
    with ui.column().classes("max-w-4xl mx-auto w-full gap-4 py-8 px-4"):
        ui.label(title).classes("text-3xl font-semibold text-slate-900")
        if subtitle:
            ui.label(subtitle).classes("text-slate-500")
        yield


def tag_chips(tags: tuple[str, ...]) -> None:
    with ui.row().classes("gap-1"):
        for tag in tags:
            ui.badge(tag).props("outline")


__all__ = ["page_frame", "tag_chips"]

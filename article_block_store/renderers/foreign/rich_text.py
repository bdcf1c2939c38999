"""Styled inline text runs for foreign blocks."""

from __future__ import annotations

from html import escape
from typing import Sequence

from article_block_store.models.foreign import RichTextRun

COLOR_MAP: dict[str, str] = {
    "gray": "#9B9A97",
    "brown": "#64473A",
    "orange": "#D9730D",
    "yellow": "#DFAB01",
    "green": "#0F7B6C",
    "blue": "#0B6E99",
    "purple": "#6940A5",
    "pink": "#AD1A72",
    "red": "#E03E3E",
    "gray_background": "rgba(241, 241, 239, 0.6)",
    "brown_background": "rgba(244, 238, 238, 0.6)",
    "orange_background": "rgba(251, 236, 221, 0.6)",
    "yellow_background": "rgba(251, 243, 219, 0.6)",
    "green_background": "rgba(237, 243, 236, 0.6)",
    "blue_background": "rgba(231, 243, 248, 0.6)",
    "purple_background": "rgba(244, 240, 247, 0.6)",
    "pink_background": "rgba(249, 238, 243, 0.6)",
    "red_background": "rgba(253, 235, 236, 0.6)",
}


def run_style(run: RichTextRun) -> str:
    """Inline CSS for a run; styles are additive."""
    annotations = run.annotations
    declarations: list[str] = []
    if annotations.bold:
        declarations.append("font-weight: 600")
    if annotations.italic:
        declarations.append("font-style: italic")
    decorations = [
        name
        for name, enabled in (("line-through", annotations.strikethrough), ("underline", annotations.underline))
        if enabled
    ]
    if decorations:
        declarations.append(f"text-decoration: {' '.join(decorations)}")
    color = annotations.color
    if color and color != "default" and color in COLOR_MAP:
        if "background" in color:
            declarations.append(f"background-color: {COLOR_MAP[color]}")
            declarations.append("padding: 0.2em 0.4em")
            declarations.append("border-radius: 3px")
        else:
            declarations.append(f"color: {COLOR_MAP[color]}")
    return "; ".join(declarations)


def render_run(run: RichTextRun) -> str:
    """Render one run: inline code, then link, then equation, then a styled span."""
    style = run_style(run)
    style_attr = f' style="{escape(style)}"' if style else ""
    text = escape(run.plain_text)
    if run.annotations.code:
        return f'<code class="inline-code"{style_attr}>{text}</code>'
    if run.href:
        return (
            f'<a href="{escape(run.href)}" target="_blank" rel="noopener noreferrer" '
            f'class="notion-link"{style_attr}>{text}</a>'
        )
    if run.type == "equation":
        expression = run.equation.expression if run.equation is not None else run.plain_text
        return f'<span class="math math-inline">\\({escape(expression)}\\)</span>'
    return f"<span{style_attr}>{text}</span>"


def render_rich_text(runs: Sequence[RichTextRun]) -> str:
    return "".join(render_run(run) for run in runs)


__all__ = ["COLOR_MAP", "render_rich_text", "render_run", "run_style"]

"""Components for blocks imported from the external document tool."""

from __future__ import annotations

import json
from dataclasses import dataclass
from html import escape
from typing import Any, Mapping, Sequence, TYPE_CHECKING

from article_block_store.models.foreign import ForeignBlock, RichTextRun
from article_block_store.renderers.base import RenderOptions

from .diagram import is_diagram, render_diagram
from .rich_text import COLOR_MAP, render_rich_text

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from .renderer import ForeignRenderer


@dataclass(slots=True)
class RenderContext:
    engine: "ForeignRenderer"
    options: RenderOptions
    extra: Mapping[str, Any]

    def render_children(self, block: ForeignBlock) -> str:
        if not self.options.recursive or not block.children:
            return ""
        return self.engine.render_sequence(block.children, options=self.options, extra=self.extra)


class ForeignComponent:
    def render(
        self,
        block: ForeignBlock,
        *,
        engine: "ForeignRenderer",
        options: RenderOptions,
        extra: Mapping[str, Any],
    ) -> str:
        ctx = RenderContext(engine=engine, options=options, extra=extra)
        return self.render_block(block, ctx)

    def render_block(self, block: ForeignBlock, ctx: RenderContext) -> str:  # pragma: no cover - abstract
        raise NotImplementedError


# ---------------------------------------------------------------------------
# Text blocks


class ParagraphComponent(ForeignComponent):
    def render_block(self, block: ForeignBlock, ctx: RenderContext) -> str:
        runs = block.rich_text()
        body = render_rich_text(runs) if runs else "&nbsp;"
        return f"<p>{body}</p>{ctx.render_children(block)}"


class HeadingComponent(ForeignComponent):
    def __init__(self, level: int):
        self.level = level

    def render_block(self, block: ForeignBlock, ctx: RenderContext) -> str:
        return f"<h{self.level}>{render_rich_text(block.rich_text())}</h{self.level}>{ctx.render_children(block)}"


class ListItemComponent(ForeignComponent):
    def render_block(self, block: ForeignBlock, ctx: RenderContext) -> str:
        return f"<li>{render_rich_text(block.rich_text())}{ctx.render_children(block)}</li>"


class TodoComponent(ForeignComponent):
    def render_block(self, block: ForeignBlock, ctx: RenderContext) -> str:
        checked = bool(block.payload.get("checked"))
        state = " checked" if checked else ""
        css = "todo todo-checked" if checked else "todo"
        return (
            f'<div class="{css}"><input type="checkbox" disabled{state} />'
            f"<span>{render_rich_text(block.rich_text())}</span></div>{ctx.render_children(block)}"
        )


class ToggleComponent(ForeignComponent):
    def render_block(self, block: ForeignBlock, ctx: RenderContext) -> str:
        children = ctx.render_children(block)
        body = f'<div class="toggle-children">{children}</div>' if children else ""
        return f'<details class="toggle"><summary>{render_rich_text(block.rich_text())}</summary>{body}</details>'


class QuoteComponent(ForeignComponent):
    def render_block(self, block: ForeignBlock, ctx: RenderContext) -> str:
        return f"<blockquote>{render_rich_text(block.rich_text())}{ctx.render_children(block)}</blockquote>"


class CalloutComponent(ForeignComponent):
    def render_block(self, block: ForeignBlock, ctx: RenderContext) -> str:
        icon = (block.payload.get("icon") or {}).get("emoji") or "💡"
        color = block.payload.get("color") or "gray_background"
        if color not in COLOR_MAP or "background" not in color:
            color = "gray_background"
        return (
            f'<div class="callout" data-color="{escape(color)}" style="background: {COLOR_MAP[color]}">'
            f'<span class="callout-icon">{escape(icon)}</span>'
            f'<div class="callout-text">{render_rich_text(block.rich_text())}{ctx.render_children(block)}</div>'
            "</div>"
        )


class DividerComponent(ForeignComponent):
    def render_block(self, block: ForeignBlock, ctx: RenderContext) -> str:  # noqa: ARG002
        return "<hr />"


# ---------------------------------------------------------------------------
# Code & math


class CodeComponent(ForeignComponent):
    def render_block(self, block: ForeignBlock, ctx: RenderContext) -> str:  # noqa: ARG002
        code = block.plain_text()
        language = block.payload.get("language") or "text"
        if is_diagram(language):
            return render_diagram(code)
        language = escape(language)
        return (
            f'<div class="code-block" data-language="{language}">'
            f'<div class="code-language">{language}</div>'
            f'<pre><code class="language-{language}">{escape(code)}</code></pre></div>'
        )


class EquationComponent(ForeignComponent):
    def render_block(self, block: ForeignBlock, ctx: RenderContext) -> str:  # noqa: ARG002
        expression = block.payload.get("expression") or ""
        return f'<div class="math math-display">\\[{escape(expression)}\\]</div>'


# ---------------------------------------------------------------------------
# Media & embeds


def _file_url(payload: Mapping[str, Any]) -> str:
    for key in ("file", "external"):
        source = payload.get(key)
        if isinstance(source, Mapping) and source.get("url"):
            return str(source["url"])
    return ""


class ImageComponent(ForeignComponent):
    def render_block(self, block: ForeignBlock, ctx: RenderContext) -> str:  # noqa: ARG002
        caption = block.plain_text("caption")
        figcaption = f"<figcaption>{escape(caption)}</figcaption>" if caption else ""
        return (
            f'<figure class="image"><img src="{escape(_file_url(block.payload))}" '
            f'alt="{escape(caption)}" loading="lazy" />{figcaption}</figure>'
        )


class VideoComponent(ForeignComponent):
    def render_block(self, block: ForeignBlock, ctx: RenderContext) -> str:  # noqa: ARG002
        return f'<video controls><source src="{escape(_file_url(block.payload))}" /></video>'


class FileComponent(ForeignComponent):
    def render_block(self, block: ForeignBlock, ctx: RenderContext) -> str:  # noqa: ARG002
        name = block.payload.get("name") or "Download file"
        return f'<a class="file" href="{escape(_file_url(block.payload))}" download>📎 {escape(name)}</a>'


class BookmarkComponent(ForeignComponent):
    def render_block(self, block: ForeignBlock, ctx: RenderContext) -> str:  # noqa: ARG002
        url = block.payload.get("url") or ""
        caption = block.plain_text("caption") or url
        return (
            f'<a class="bookmark" href="{escape(url)}" target="_blank" rel="noopener noreferrer">'
            f"🔖 {escape(caption)}</a>"
        )


class EmbedComponent(ForeignComponent):
    def render_block(self, block: ForeignBlock, ctx: RenderContext) -> str:  # noqa: ARG002
        url = block.payload.get("url") or ""
        return f'<div class="embed"><iframe src="{escape(url)}" title="Embedded content"></iframe></div>'


class LinkPreviewComponent(ForeignComponent):
    def render_block(self, block: ForeignBlock, ctx: RenderContext) -> str:  # noqa: ARG002
        url = escape(block.payload.get("url") or "")
        return f'<a class="link-preview" href="{url}" target="_blank" rel="noopener noreferrer">{url}</a>'


# ---------------------------------------------------------------------------
# Layout & tables


class ColumnListComponent(ForeignComponent):
    def render_block(self, block: ForeignBlock, ctx: RenderContext) -> str:
        return f'<div class="column-list">{ctx.render_children(block)}</div>'


class ColumnComponent(ForeignComponent):
    def render_block(self, block: ForeignBlock, ctx: RenderContext) -> str:
        return f'<div class="column">{ctx.render_children(block)}</div>'


def _cell_runs(cell: Any) -> list[RichTextRun]:
    return [RichTextRun.model_validate(run) for run in cell or ()]


def render_table(table: ForeignBlock | None, rows: Sequence[ForeignBlock]) -> str:
    """One table unit from a table node and its collected rows."""
    if not rows:
        return ""
    has_header = bool(table.payload.get("has_column_header")) if table is not None else False
    parts: list[str] = []
    for index, row in enumerate(rows):
        cells = row.payload.get("cells") or []
        tag = "th" if has_header and index == 0 else "td"
        rendered = "".join(f"<{tag}>{render_rich_text(_cell_runs(cell))}</{tag}>" for cell in cells)
        parts.append(f"<tr>{rendered}</tr>")
    return f'<div class="table-wrapper"><table><tbody>{"".join(parts)}</tbody></table></div>'


class UnsupportedComponent(ForeignComponent):
    def render_block(self, block: ForeignBlock, ctx: RenderContext) -> str:
        if not ctx.options.placeholders:
            return ""
        dump = json.dumps(block.model_dump(mode="json"), indent=2, ensure_ascii=False)
        return (
            '<details class="unsupported-block">'
            f"<summary>⚠️ Unsupported block type: <code>{escape(block.type)}</code></summary>"
            f"<pre>{escape(dump)}</pre></details>"
        )


_LIST_ITEM = ListItemComponent()

DEFAULT_COMPONENTS: dict[str, ForeignComponent] = {
    "paragraph": ParagraphComponent(),
    "heading_1": HeadingComponent(1),
    "heading_2": HeadingComponent(2),
    "heading_3": HeadingComponent(3),
    "bulleted_list_item": _LIST_ITEM,
    "numbered_list_item": _LIST_ITEM,
    "to_do": TodoComponent(),
    "toggle": ToggleComponent(),
    "quote": QuoteComponent(),
    "callout": CalloutComponent(),
    "divider": DividerComponent(),
    "code": CodeComponent(),
    "equation": EquationComponent(),
    "image": ImageComponent(),
    "video": VideoComponent(),
    "file": FileComponent(),
    "bookmark": BookmarkComponent(),
    "embed": EmbedComponent(),
    "link_preview": LinkPreviewComponent(),
    "column_list": ColumnListComponent(),
    "column": ColumnComponent(),
}


__all__ = [
    "DEFAULT_COMPONENTS",
    "ForeignComponent",
    "RenderContext",
    "UnsupportedComponent",
    "render_table",
]

"""HTML renderer component implementations for native blocks."""

from __future__ import annotations

from dataclasses import dataclass
from html import escape
from typing import Any, Mapping, Sequence, TYPE_CHECKING

from article_block_store.models.blocks import Block, BlockType, HeadingBlock
from article_block_store.renderers.base import BlockTree, RenderOptions, RendererComponent, list_runs

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from .renderer import HtmlRenderer


# ---------------------------------------------------------------------------
# Rendering context & base component


@dataclass(slots=True)
class RenderContext:
    engine: "HtmlRenderer"
    options: RenderOptions
    tree: BlockTree
    extra: Mapping[str, Any]

    def render_block(self, block: Block) -> str:
        return self.engine.render_block(block, tree=self.tree, options=self.options, extra=self.extra)

    def render_sequence(self, blocks: Sequence[Block]) -> str:
        """Render siblings, wrapping each run of list items in one list element."""
        parts: list[str] = []
        for list_type, run in list_runs(blocks):
            if list_type is None:
                parts.extend(self.render_block(block) for block in run)
                continue
            tag = "ol" if list_type is BlockType.NUMBERED_LIST else "ul"
            items = "".join(self.render_block(block) for block in run)
            parts.append(f"<{tag}>{items}</{tag}>")
        return "".join(part for part in parts if part)

    def render_children(self, block: Block) -> str:
        if not self.options.recursive:
            return ""
        return self.render_sequence(self.tree.children(block))


class BaseComponent(RendererComponent):
    def render(
        self,
        block: Block,
        *,
        engine: "HtmlRenderer",
        options: RenderOptions,
        extra: Mapping[str, Any],
    ) -> str:
        ctx = RenderContext(engine=engine, options=options, tree=extra["tree"], extra=extra)
        return self.render_block(block, ctx)

    def render_block(self, block: Block, ctx: RenderContext) -> str:  # pragma: no cover - abstract
        raise NotImplementedError


# ---------------------------------------------------------------------------
# Component implementations


class ParagraphComponent(BaseComponent):
    def render_block(self, block: Block, ctx: RenderContext) -> str:
        return f"<p>{text_html(block.content.text)}</p>{ctx.render_children(block)}"


class HeadingComponent(BaseComponent):
    def render_block(self, block: Block, ctx: RenderContext) -> str:
        level = block.level if isinstance(block, HeadingBlock) else 2
        content = block.content
        anchor = f' id="{escape(content.anchor)}"' if content.anchor else ""
        return f"<h{level}{anchor}>{escape(content.text)}</h{level}>{ctx.render_children(block)}"


class ListItemComponent(BaseComponent):
    """One ``<li>``; the enclosing list element comes from the run grouping."""

    def render_block(self, block: Block, ctx: RenderContext) -> str:
        return f"<li>{text_html(block.content.text)}{ctx.render_children(block)}</li>"


class ToggleComponent(BaseComponent):
    def render_block(self, block: Block, ctx: RenderContext) -> str:
        content = block.content
        open_attr = " open" if content.is_open else ""
        return (
            f'<details class="toggle"{open_attr}>'
            f"<summary>{escape(content.summary)}</summary>"
            f"{ctx.render_children(block)}</details>"
        )


class QuoteComponent(BaseComponent):
    def render_block(self, block: Block, ctx: RenderContext) -> str:
        content = block.content
        anchor = f' id="{escape(content.anchor)}"' if content.anchor else ""
        author = f"<footer>{escape(content.author)}</footer>" if content.author else ""
        return (
            f"<blockquote{anchor}><p>{text_html(content.text)}</p>{author}"
            f"{ctx.render_children(block)}</blockquote>"
        )


class CalloutComponent(BaseComponent):
    def render_block(self, block: Block, ctx: RenderContext) -> str:
        content = block.content
        color = escape(content.color)
        return (
            f'<div class="callout callout-{color}" data-color="{color}">'
            f'<span class="callout-icon">{escape(content.icon)}</span>'
            f'<div class="callout-text">{text_html(content.text)}{ctx.render_children(block)}</div>'
            "</div>"
        )


class DividerComponent(BaseComponent):
    def render_block(self, block: Block, ctx: RenderContext) -> str:  # noqa: ARG002
        return "<hr />"


class CodeComponent(BaseComponent):
    def render_block(self, block: Block, ctx: RenderContext) -> str:
        content = block.content
        language = escape(content.language)
        attrs = [
            'class="code-block"',
            f'data-language="{language}"',
            f'data-line-numbers="{"true" if content.show_line_numbers else "false"}"',
        ]
        if content.filename:
            attrs.append(f'data-filename="{escape(content.filename)}"')
        if content.highlight_lines:
            lines = ",".join(str(line) for line in content.highlight_lines)
            attrs.append(f'data-highlight-lines="{lines}"')
        caption = f"<figcaption>{escape(content.filename)}</figcaption>" if content.filename else ""
        code_class = f' class="language-{language}"' if language else ""
        return (
            f"<figure {' '.join(attrs)}>{caption}"
            f"<pre><code{code_class}>{escape(content.code)}</code></pre></figure>"
            f"{ctx.render_children(block)}"
        )


class MathComponent(BaseComponent):
    def render_block(self, block: Block, ctx: RenderContext) -> str:
        content = block.content
        latex = escape(content.latex)
        if content.display == "inline":
            body = f'<span class="math math-inline">\\({latex}\\)</span>'
        else:
            body = f'<div class="math math-display">\\[{latex}\\]</div>'
        if content.description:
            body += f'<p class="math-description">{escape(content.description)}</p>'
        return body + ctx.render_children(block)


class ImageComponent(BaseComponent):
    def render_block(self, block: Block, ctx: RenderContext) -> str:
        content = block.content
        attrs = [f'src="{escape(content.url)}"', f'alt="{escape(content.alt)}"']
        if content.width is not None:
            attrs.append(f'width="{content.width}"')
        if content.height is not None:
            attrs.append(f'height="{content.height}"')
        caption = f"<figcaption>{escape(content.caption)}</figcaption>" if content.caption else ""
        return f'<figure class="image"><img {" ".join(attrs)} />{caption}</figure>{ctx.render_children(block)}'


class TableComponent(BaseComponent):
    def render_block(self, block: Block, ctx: RenderContext) -> str:
        content = block.content
        head = ""
        if content.headers:
            cells = "".join(f"<th>{escape(str(cell))}</th>" for cell in content.headers)
            head = f"<thead><tr>{cells}</tr></thead>"
        rows = "".join(
            "<tr>" + "".join(f"<td>{escape(str(cell))}</td>" for cell in row) + "</tr>"
            for row in content.rows
        )
        return f"<table>{head}<tbody>{rows}</tbody></table>{ctx.render_children(block)}"


class MindmapComponent(BaseComponent):
    def render_block(self, block: Block, ctx: RenderContext) -> str:
        content = block.content
        mindmap_id = escape(content.mindmap_id or "")
        thumbnail = (
            f'<img src="{escape(content.thumbnail)}" alt="{escape(content.title)}" />'
            if content.thumbnail
            else ""
        )
        return (
            f'<div class="mindmap" data-mindmap-id="{mindmap_id}">{thumbnail}'
            f"<span>{escape(content.title)}</span></div>"
        )


class UnsupportedComponent(BaseComponent):
    def render_block(self, block: Block, ctx: RenderContext) -> str:
        if not ctx.options.placeholders:
            return ""
        type_name = escape(block.type_name)
        return f'<div class="unsupported-block" data-type="{type_name}">Unsupported block type: {type_name}</div>'


def text_html(text: str) -> str:
    return escape(text).replace("\n", "<br />")


_LIST_ITEM = ListItemComponent()
_HEADING = HeadingComponent()

DEFAULT_COMPONENTS: dict[BlockType, RendererComponent] = {
    BlockType.PARAGRAPH: ParagraphComponent(),
    BlockType.HEADING1: _HEADING,
    BlockType.HEADING2: _HEADING,
    BlockType.HEADING3: _HEADING,
    BlockType.HEADING4: _HEADING,
    BlockType.BULLET_LIST: _LIST_ITEM,
    BlockType.NUMBERED_LIST: _LIST_ITEM,
    BlockType.TOGGLE: ToggleComponent(),
    BlockType.QUOTE: QuoteComponent(),
    BlockType.CALLOUT: CalloutComponent(),
    BlockType.DIVIDER: DividerComponent(),
    BlockType.CODE: CodeComponent(),
    BlockType.MATH: MathComponent(),
    BlockType.IMAGE: ImageComponent(),
    BlockType.TABLE: TableComponent(),
    BlockType.MINDMAP: MindmapComponent(),
}

_missing = set(BlockType) - DEFAULT_COMPONENTS.keys()
if _missing:  # pragma: no cover - guards new enum members
    raise RuntimeError(f"Block types without an HTML component: {sorted(t.value for t in _missing)}")


__all__ = [
    "BaseComponent",
    "DEFAULT_COMPONENTS",
    "RenderContext",
    "UnsupportedComponent",
    "text_html",
]

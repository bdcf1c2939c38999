"""Markdown renderer component implementations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence, TYPE_CHECKING

from article_block_store.models.blocks import Block, BlockType, HeadingBlock
from article_block_store.renderers.base import BlockTree, RenderOptions, RendererComponent, list_runs

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from .renderer import MarkdownRenderer


# ---------------------------------------------------------------------------
# Rendering context & base component


@dataclass(slots=True)
class RenderContext:
    engine: "MarkdownRenderer"
    options: RenderOptions
    tree: BlockTree
    extra: Mapping[str, Any]

    def render_block(self, block: Block, **extra: Any) -> str:
        return self.engine.render_block(
            block,
            tree=self.tree,
            options=self.options,
            extra={**self.extra, **extra},
        )

    def render_sequence(self, blocks: Sequence[Block]) -> str:
        sections: list[str] = []
        for list_type, run in list_runs(blocks):
            if list_type is None:
                sections.extend(self.render_block(block) for block in run)
                continue
            # Numbering restarts with every run of numbered items.
            items = [self.render_block(block, list_index=index) for index, block in enumerate(run, start=1)]
            sections.append("\n".join(item for item in items if item))
        return self.join(sections)

    def render_children(self, block: Block) -> str:
        if not self.options.recursive:
            return ""
        return self.render_sequence(self.tree.children(block))

    def join(self, sections: Sequence[str]) -> str:
        cleaned = [section.strip("\n") for section in sections if section and section.strip()]
        if not cleaned:
            return ""
        output = cleaned[0]
        for section in cleaned[1:]:
            separator = "\n\n"
            prev_kind = _section_kind(output.splitlines()[-1])
            next_kind = _section_kind(section.splitlines()[0])
            if prev_kind and prev_kind == next_kind and prev_kind in {"bullet", "numbered"}:
                separator = "\n"
            output = f"{output}{separator}{section}"
        return output

    def indent(self, text: str, *, spaces: int = 4) -> str:
        indent = " " * spaces
        return "\n".join(f"{indent}{line}" if line else line for line in text.splitlines())

    def quote(self, text: str) -> str:
        lines = text.splitlines() or [""]
        quoted = [f"> {line}" if line else ">" for line in lines]
        return "\n".join(quoted)


class BaseComponent(RendererComponent):
    def render(
        self,
        block: Block,
        *,
        engine: "MarkdownRenderer",
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
        return ctx.join([block.content.text, ctx.render_children(block)])


class HeadingComponent(BaseComponent):
    def render_block(self, block: Block, ctx: RenderContext) -> str:
        level = block.level if isinstance(block, HeadingBlock) else 2
        text = block.content.text
        if not text:
            return ""
        return ctx.join([f"{'#' * level} {text}", ctx.render_children(block)])


class ListItemComponent(BaseComponent):
    def render_block(self, block: Block, ctx: RenderContext) -> str:
        if block.type is BlockType.NUMBERED_LIST:
            marker = f"{ctx.extra.get('list_index', 1)}."
        else:
            marker = "-"
        lines = [f"{marker} {block.content.text.strip()}".rstrip()]
        children = ctx.render_children(block)
        if children:
            lines.append(ctx.indent(children))
        return "\n".join(lines)


class ToggleComponent(BaseComponent):
    def render_block(self, block: Block, ctx: RenderContext) -> str:
        content = block.content
        opening = "<details open>" if content.is_open else "<details>"
        sections = [f"{opening}\n<summary>{content.summary}</summary>", ctx.render_children(block), "</details>"]
        return ctx.join(sections)


class QuoteComponent(BaseComponent):
    def render_block(self, block: Block, ctx: RenderContext) -> str:
        content = block.content
        body = content.text
        if content.author:
            body = f"{body}\n\n-- {content.author}" if body else f"-- {content.author}"
        if not body:
            return ""
        return ctx.join([ctx.quote(body), ctx.render_children(block)])


class CalloutComponent(BaseComponent):
    def render_block(self, block: Block, ctx: RenderContext) -> str:
        content = block.content
        return ctx.join([ctx.quote(f"{content.icon} {content.text}".strip()), ctx.render_children(block)])


class DividerComponent(BaseComponent):
    def render_block(self, block: Block, ctx: RenderContext) -> str:  # noqa: ARG002
        return "---"


class CodeComponent(BaseComponent):
    def render_block(self, block: Block, ctx: RenderContext) -> str:
        content = block.content
        fence = f"```{content.language}" if content.language else "```"
        section = "\n".join([fence, content.code, "```"])
        return ctx.join([section, ctx.render_children(block)])


class MathComponent(BaseComponent):
    def render_block(self, block: Block, ctx: RenderContext) -> str:
        content = block.content
        if content.display == "inline":
            section = f"${content.latex}$"
        else:
            section = "\n".join(["$$", content.latex, "$$"])
        return ctx.join([section, content.description, ctx.render_children(block)])


class ImageComponent(BaseComponent):
    def render_block(self, block: Block, ctx: RenderContext) -> str:
        content = block.content
        if not content.url:
            return ""
        title = f' "{content.caption}"' if content.caption else ""
        return ctx.join([f"![{content.alt}]({content.url}{title})", ctx.render_children(block)])


class TableComponent(BaseComponent):
    def render_block(self, block: Block, ctx: RenderContext) -> str:
        content = block.content
        width = len(content.headers) or max((len(row) for row in content.rows), default=0)
        if width == 0:
            return ""
        lines = [
            format_table_row(content.headers, width),
            format_table_row(["---"] * width, width),
            *(format_table_row(row, width) for row in content.rows),
        ]
        return ctx.join(["\n".join(lines), ctx.render_children(block)])


class MindmapComponent(BaseComponent):
    def render_block(self, block: Block, ctx: RenderContext) -> str:  # noqa: ARG002
        return f"*{block.content.title}*"


class UnsupportedComponent(BaseComponent):
    def render_block(self, block: Block, ctx: RenderContext) -> str:
        return "[unsupported content]" if ctx.options.placeholders else ""


# ---------------------------------------------------------------------------
# Table helpers


def format_table_row(values: Sequence[Any], width: int) -> str:
    """One pipe-delimited row, padded or cut to ``width`` cells."""
    cells = [str(value).replace("|", "\\|") for value in values[:width]]
    cells += [""] * (width - len(cells))
    return "| " + " | ".join(cells) + " |"


def _section_kind(line: str) -> str | None:
    stripped = line.lstrip()
    if not stripped:
        return None
    if stripped[0] in "-*+" and (len(stripped) == 1 or stripped[1].isspace()):
        return "bullet"
    number_prefix = stripped.split(" ", 1)[0]
    if number_prefix.endswith(".") and number_prefix[:-1].isdigit():
        return "numbered"
    return None


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
    raise RuntimeError(f"Block types without a Markdown component: {sorted(t.value for t in _missing)}")


__all__ = [
    "BaseComponent",
    "DEFAULT_COMPONENTS",
    "RenderContext",
    "UnsupportedComponent",
    "format_table_row",
]

"""Markdown → native block conversion over Mistune's AST."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable
from uuid import UUID

import mistune

from article_block_store.models.blocks import Block, BlockType
from article_block_store.models.factory import create_block

MarkdownAst = list[dict[str, Any]]
AddBlock = Callable[..., UUID]

_DEFAULT_PLUGINS: tuple[str, ...] = ("table", "math")

_HEADING_TYPES = {
    1: BlockType.HEADING1,
    2: BlockType.HEADING2,
    3: BlockType.HEADING3,
    4: BlockType.HEADING4,
}

_AUTHOR_PREFIX = "-- "


def parse_markdown(source: str) -> MarkdownAst:
    """Return Mistune's AST for the provided Markdown source."""
    markdown = mistune.create_markdown(renderer="ast", plugins=_DEFAULT_PLUGINS)
    return markdown(source)


def markdown_to_blocks(source: str, *, timestamp: datetime | None = None) -> list[Block]:
    """Convert Markdown source into an article's flat block list."""
    return ast_to_blocks(parse_markdown(source), timestamp=timestamp)


def load_markdown_path(path: str | Path, *, timestamp: datetime | None = None) -> list[Block]:
    """Read Markdown from disk and convert to blocks."""
    content = Path(path).read_text(encoding="utf-8")
    return markdown_to_blocks(content, timestamp=timestamp)


def ast_to_blocks(tokens: MarkdownAst, *, timestamp: datetime | None = None) -> list[Block]:
    """Convert a pre-computed Markdown AST into blocks.

    Blocks come out in document order with positions ``0..n-1``. Nested list
    items point at their parent item through ``parent_id``.
    """
    timestamp = timestamp or datetime.now(timezone.utc)
    blocks: list[Block] = []

    def add_block(block_type: BlockType, parent_id: UUID | None = None, **content: Any) -> UUID:
        block = create_block(
            block_type,
            content,
            position=len(blocks),
            parent_id=parent_id,
            timestamp=timestamp,
        )
        blocks.append(block)
        return block.id

    _process_tokens(tokens, add_block)
    return blocks


def _process_tokens(tokens: MarkdownAst, add_block: AddBlock, parent_id: UUID | None = None) -> None:
    for token in tokens:
        token_type = token.get("type")
        if token_type in {"blank_line", "linebreak", "softbreak"}:
            continue

        if token_type == "heading":
            _append_heading(add_block, parent_id, token)
        elif token_type == "paragraph":
            _append_paragraph(add_block, parent_id, token)
        elif token_type == "list":
            _emit_list(add_block, parent_id, token)
        elif token_type == "block_code":
            _append_code(add_block, parent_id, token)
        elif token_type == "block_math":
            latex = (token.get("raw") or "").strip()
            if latex:
                add_block(BlockType.MATH, parent_id, latex=latex, display="block")
        elif token_type == "block_quote":
            _append_quote(add_block, parent_id, token)
        elif token_type == "thematic_break":
            add_block(BlockType.DIVIDER, parent_id)
        elif token_type == "table":
            _append_table(add_block, parent_id, token)
        else:
            fallback = _extract_text(token).strip()
            if fallback:
                add_block(BlockType.PARAGRAPH, parent_id, text=fallback)


def _append_heading(add_block: AddBlock, parent_id: UUID | None, token: dict[str, Any]) -> None:
    level = int(token.get("attrs", {}).get("level", 1))
    text = _extract_text(token).strip()
    if not text:
        return
    add_block(_HEADING_TYPES.get(level, BlockType.HEADING4), parent_id, text=text)


def _append_paragraph(add_block: AddBlock, parent_id: UUID | None, token: dict[str, Any]) -> None:
    children = [child for child in token.get("children", []) if not _is_blank_inline(child)]
    if len(children) == 1:
        only = children[0]
        if only.get("type") == "image":
            attrs = only.get("attrs", {})
            add_block(
                BlockType.IMAGE,
                parent_id,
                url=attrs.get("url") or "",
                alt="".join(_extract_text(child) for child in only.get("children", [])).strip(),
                caption=attrs.get("title") or "",
            )
            return
        if only.get("type") == "inline_math":
            add_block(BlockType.MATH, parent_id, latex=(only.get("raw") or "").strip(), display="inline")
            return
    text = _extract_text(token).strip()
    if text:
        add_block(BlockType.PARAGRAPH, parent_id, text=text)


def _emit_list(add_block: AddBlock, parent_id: UUID | None, token: dict[str, Any]) -> None:
    ordered = bool(token.get("attrs", {}).get("ordered", False))
    item_type = BlockType.NUMBERED_LIST if ordered else BlockType.BULLET_LIST

    for item in token.get("children", []):
        if item.get("type") != "list_item":
            continue
        children = item.get("children", [])
        lead = next(
            (child for child in children if child.get("type") in {"block_text", "paragraph"}),
            None,
        )
        text = _extract_text(lead).strip() if lead is not None else ""
        item_id = add_block(item_type, parent_id, text=text)
        for child in children:
            if child is lead:
                continue
            if child.get("type") == "list":
                _emit_list(add_block, item_id, child)
            else:
                _process_tokens([child], add_block, item_id)


def _append_code(add_block: AddBlock, parent_id: UUID | None, token: dict[str, Any]) -> None:
    info = (token.get("attrs", {}).get("info") or "").strip()
    raw_text = (token.get("raw") or "").rstrip("\n")
    if not raw_text and not info:
        return
    language = info.split()[0] if info else ""
    add_block(BlockType.CODE, parent_id, language=language, code=raw_text)


def _append_quote(add_block: AddBlock, parent_id: UUID | None, token: dict[str, Any]) -> None:
    paragraphs = [
        _extract_text(child).strip()
        for child in token.get("children", [])
        if child.get("type") not in {"blank_line"}
    ]
    paragraphs = [text for text in paragraphs if text]
    author = ""
    if paragraphs and paragraphs[-1].startswith(_AUTHOR_PREFIX):
        author = paragraphs.pop()[len(_AUTHOR_PREFIX):].strip()
    add_block(BlockType.QUOTE, parent_id, text="\n\n".join(paragraphs), author=author)


def _append_table(add_block: AddBlock, parent_id: UUID | None, token: dict[str, Any]) -> None:
    headers: list[str] = []
    rows: list[list[str]] = []

    for section in token.get("children", []):
        section_type = section.get("type")
        if section_type == "table_head":
            header_rows = _table_section_rows(section)
            headers = header_rows[0] if header_rows else []
        elif section_type == "table_body":
            rows.extend(_table_section_rows(section))

    add_block(BlockType.TABLE, parent_id, headers=headers, rows=rows)


def _table_section_rows(section: dict[str, Any]) -> list[list[str]]:
    children = section.get("children", [])
    # The head section holds its cells directly; body sections hold rows.
    if children and children[0].get("type") == "table_cell":
        return [[_extract_text(cell).strip() for cell in children]]
    return [
        [_extract_text(cell).strip() for cell in row.get("children", [])]
        for row in children
        if row.get("type") == "table_row"
    ]


def _is_blank_inline(token: dict[str, Any]) -> bool:
    if token.get("type") in {"softbreak", "linebreak"}:
        return True
    return token.get("type") == "text" and not (token.get("raw") or "").strip()


def _extract_text(token: dict[str, Any]) -> str:
    """Flatten a token to text, keeping inline Markdown markers."""
    token_type = token.get("type")
    if token_type in {"softbreak", "linebreak"}:
        return "\n"
    if token_type == "codespan":
        return f"`{token.get('raw', '')}`"
    if token_type == "inline_math":
        return f"${token.get('raw', '')}$"

    inner = "".join(_extract_text(child) for child in token.get("children", []))
    if token_type == "strong":
        return f"**{inner}**"
    if token_type == "emphasis":
        return f"*{inner}*"
    if token_type == "link":
        return f"[{inner}]({token.get('attrs', {}).get('url', '')})"
    if token_type == "image":
        return f"![{inner}]({token.get('attrs', {}).get('url', '')})"

    raw = token.get("raw")
    if isinstance(raw, str) and not token.get("children"):
        return raw
    return inner


__all__ = [
    "MarkdownAst",
    "ast_to_blocks",
    "load_markdown_path",
    "markdown_to_blocks",
    "parse_markdown",
]

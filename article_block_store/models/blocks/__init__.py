"""Typed block exports and helpers."""

from __future__ import annotations

from .base import HEADING_LEVELS, Block, BlockContent, BlockType
from .callout import CalloutBlock, CalloutContent
from .code import CodeBlock, CodeContent
from .divider import DividerBlock, DividerContent
from .heading import HeadingBlock, HeadingContent
from .image import ImageBlock, ImageContent
from .list_item import BulletListBlock, ListItemContent, NumberedListBlock
from .math import MathBlock, MathContent
from .mindmap import MindmapBlock, MindmapContent
from .paragraph import ParagraphBlock, ParagraphContent
from .quote import QuoteBlock, QuoteContent
from .table import TableBlock, TableContent
from .toggle import ToggleBlock, ToggleContent
from .unsupported import UnsupportedBlock, UnsupportedContent

BLOCK_CLASS_MAP: dict[BlockType, type[Block]] = {
    BlockType.PARAGRAPH: ParagraphBlock,
    BlockType.HEADING1: HeadingBlock,
    BlockType.HEADING2: HeadingBlock,
    BlockType.HEADING3: HeadingBlock,
    BlockType.HEADING4: HeadingBlock,
    BlockType.BULLET_LIST: BulletListBlock,
    BlockType.NUMBERED_LIST: NumberedListBlock,
    BlockType.TOGGLE: ToggleBlock,
    BlockType.QUOTE: QuoteBlock,
    BlockType.CALLOUT: CalloutBlock,
    BlockType.DIVIDER: DividerBlock,
    BlockType.CODE: CodeBlock,
    BlockType.MATH: MathBlock,
    BlockType.IMAGE: ImageBlock,
    BlockType.TABLE: TableBlock,
    BlockType.MINDMAP: MindmapBlock,
}

CONTENT_CLASS_MAP: dict[BlockType, type[BlockContent]] = {
    BlockType.PARAGRAPH: ParagraphContent,
    BlockType.HEADING1: HeadingContent,
    BlockType.HEADING2: HeadingContent,
    BlockType.HEADING3: HeadingContent,
    BlockType.HEADING4: HeadingContent,
    BlockType.BULLET_LIST: ListItemContent,
    BlockType.NUMBERED_LIST: ListItemContent,
    BlockType.TOGGLE: ToggleContent,
    BlockType.QUOTE: QuoteContent,
    BlockType.CALLOUT: CalloutContent,
    BlockType.DIVIDER: DividerContent,
    BlockType.CODE: CodeContent,
    BlockType.MATH: MathContent,
    BlockType.IMAGE: ImageContent,
    BlockType.TABLE: TableContent,
    BlockType.MINDMAP: MindmapContent,
}

_unmapped = set(BlockType) - BLOCK_CLASS_MAP.keys() | set(BlockType) - CONTENT_CLASS_MAP.keys()
if _unmapped:  # pragma: no cover - guards new enum members
    raise RuntimeError(f"Block types without a model: {sorted(t.value for t in _unmapped)}")


def block_class_for(block_type: BlockType | str) -> type[Block]:
    normalized = BlockType(block_type) if not isinstance(block_type, BlockType) else block_type
    return BLOCK_CLASS_MAP[normalized]


def content_model_for(block_type: BlockType | str) -> type[BlockContent]:
    normalized = BlockType(block_type) if not isinstance(block_type, BlockType) else block_type
    return CONTENT_CLASS_MAP[normalized]


__all__ = [
    "Block",
    "BlockContent",
    "BlockType",
    "HEADING_LEVELS",
    "ParagraphBlock",
    "ParagraphContent",
    "HeadingBlock",
    "HeadingContent",
    "BulletListBlock",
    "NumberedListBlock",
    "ListItemContent",
    "ToggleBlock",
    "ToggleContent",
    "QuoteBlock",
    "QuoteContent",
    "CalloutBlock",
    "CalloutContent",
    "DividerBlock",
    "DividerContent",
    "CodeBlock",
    "CodeContent",
    "MathBlock",
    "MathContent",
    "ImageBlock",
    "ImageContent",
    "TableBlock",
    "TableContent",
    "MindmapBlock",
    "MindmapContent",
    "UnsupportedBlock",
    "UnsupportedContent",
    "block_class_for",
    "content_model_for",
]

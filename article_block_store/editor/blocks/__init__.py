"""Per-type block editors and the exhaustive type-to-editor dispatch."""

from __future__ import annotations

from article_block_store.models.blocks import Block, BlockType, UnsupportedBlock

from .base import BlockEditor, EditorHost
from .callout import CALLOUT_VARIANTS, CalloutEditor
from .code import LANGUAGES, CodeEditor
from .image import ImageEditor
from .math import COMMON_SYMBOLS, MathEditor
from .static import DividerEditor, StaticEditor
from .text import AnchoredTextEditor, HeadingEditor, QuoteEditor, TextEditor
from .toggle import ToggleEditor

EDITOR_MAP: dict[BlockType, type[BlockEditor]] = {
    BlockType.PARAGRAPH: TextEditor,
    BlockType.BULLET_LIST: TextEditor,
    BlockType.NUMBERED_LIST: TextEditor,
    BlockType.HEADING1: HeadingEditor,
    BlockType.HEADING2: HeadingEditor,
    BlockType.HEADING3: HeadingEditor,
    BlockType.HEADING4: HeadingEditor,
    BlockType.QUOTE: QuoteEditor,
    BlockType.TOGGLE: ToggleEditor,
    BlockType.CALLOUT: CalloutEditor,
    BlockType.DIVIDER: DividerEditor,
    BlockType.CODE: CodeEditor,
    BlockType.MATH: MathEditor,
    BlockType.IMAGE: ImageEditor,
    BlockType.TABLE: StaticEditor,
    BlockType.MINDMAP: StaticEditor,
}

_missing = set(BlockType) - EDITOR_MAP.keys()
if _missing:  # pragma: no cover - guards new enum members
    raise RuntimeError(f"Block types without an editor: {sorted(t.value for t in _missing)}")


def editor_for(block: Block, host: EditorHost) -> BlockEditor:
    if isinstance(block, UnsupportedBlock):
        return StaticEditor(block, host)
    return EDITOR_MAP[block.type](block, host)


__all__ = [
    "AnchoredTextEditor",
    "BlockEditor",
    "CALLOUT_VARIANTS",
    "COMMON_SYMBOLS",
    "CalloutEditor",
    "CodeEditor",
    "DividerEditor",
    "EDITOR_MAP",
    "EditorHost",
    "HeadingEditor",
    "ImageEditor",
    "LANGUAGES",
    "MathEditor",
    "QuoteEditor",
    "StaticEditor",
    "TextEditor",
    "ToggleEditor",
    "editor_for",
]

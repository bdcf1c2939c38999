"""Paragraph block definition."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field

from .base import Block, BlockContent, BlockType


class ParagraphContent(BlockContent):
    text: str = ""
    marks: list[dict[str, Any]] = Field(default_factory=list)


class ParagraphBlock(Block):
    type: Literal[BlockType.PARAGRAPH] = BlockType.PARAGRAPH
    content: ParagraphContent = Field(default_factory=ParagraphContent)


__all__ = ["ParagraphBlock", "ParagraphContent"]

"""Divider block definition."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from .base import Block, BlockContent, BlockType


class DividerContent(BlockContent):
    pass


class DividerBlock(Block):
    type: Literal[BlockType.DIVIDER] = BlockType.DIVIDER
    content: DividerContent = Field(default_factory=DividerContent)


__all__ = ["DividerBlock", "DividerContent"]

"""Toggle block definition."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from .base import Block, BlockContent, BlockType


class ToggleContent(BlockContent):
    summary: str = "Toggle"
    is_open: bool = Field(default=False, alias="isOpen")


class ToggleBlock(Block):
    type: Literal[BlockType.TOGGLE] = BlockType.TOGGLE
    content: ToggleContent = Field(default_factory=ToggleContent)


__all__ = ["ToggleBlock", "ToggleContent"]

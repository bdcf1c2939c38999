"""List item block definitions."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field

from .base import Block, BlockContent, BlockType


class ListItemContent(BlockContent):
    text: str = ""
    marks: list[dict[str, Any]] = Field(default_factory=list)


class BulletListBlock(Block):
    type: Literal[BlockType.BULLET_LIST] = BlockType.BULLET_LIST
    content: ListItemContent = Field(default_factory=ListItemContent)


class NumberedListBlock(Block):
    type: Literal[BlockType.NUMBERED_LIST] = BlockType.NUMBERED_LIST
    content: ListItemContent = Field(default_factory=ListItemContent)


__all__ = ["BulletListBlock", "NumberedListBlock", "ListItemContent"]

"""Mind map reference block definition."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from .base import Block, BlockContent, BlockType


class MindmapContent(BlockContent):
    mindmap_id: str | None = Field(default=None, alias="mindmapId")
    title: str = "Mind Map"
    thumbnail: str | None = None


class MindmapBlock(Block):
    type: Literal[BlockType.MINDMAP] = BlockType.MINDMAP
    content: MindmapContent = Field(default_factory=MindmapContent)


__all__ = ["MindmapBlock", "MindmapContent"]

"""Image block definition."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from .base import Block, BlockContent, BlockType


class ImageContent(BlockContent):
    url: str = ""
    alt: str = ""
    caption: str = ""
    width: int | None = None
    height: int | None = None


class ImageBlock(Block):
    type: Literal[BlockType.IMAGE] = BlockType.IMAGE
    content: ImageContent = Field(default_factory=ImageContent)


__all__ = ["ImageBlock", "ImageContent"]

"""Table block definition."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from .base import Block, BlockContent, BlockType


class TableContent(BlockContent):
    headers: list[str] = Field(default_factory=list)
    rows: list[list[str]] = Field(default_factory=list)


class TableBlock(Block):
    type: Literal[BlockType.TABLE] = BlockType.TABLE
    content: TableContent = Field(default_factory=TableContent)


__all__ = ["TableBlock", "TableContent"]

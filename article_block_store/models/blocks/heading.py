"""Heading block definition."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field, model_validator

from article_block_store.slugs import generate_anchor

from .base import HEADING_LEVELS, Block, BlockContent, BlockType


class HeadingContent(BlockContent):
    text: str = ""
    anchor: str = ""

    @model_validator(mode="before")
    @classmethod
    def _derive_anchor(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("anchor"):
            text = data.get("text")
            data = {**data, "anchor": generate_anchor(text if isinstance(text, str) else "")}
        return data


class HeadingBlock(Block):
    type: Literal[
        BlockType.HEADING1,
        BlockType.HEADING2,
        BlockType.HEADING3,
        BlockType.HEADING4,
    ]
    content: HeadingContent = Field(default_factory=HeadingContent)

    @property
    def level(self) -> int:
        return HEADING_LEVELS[self.type]


__all__ = ["HeadingBlock", "HeadingContent"]

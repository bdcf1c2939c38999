"""Quote block definition."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field, model_validator

from article_block_store.slugs import generate_anchor

from .base import Block, BlockContent, BlockType


class QuoteContent(BlockContent):
    text: str = ""
    author: str = ""
    anchor: str = ""

    @model_validator(mode="before")
    @classmethod
    def _derive_anchor(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("anchor"):
            text = data.get("text")
            data = {**data, "anchor": generate_anchor(text if isinstance(text, str) else "")}
        return data


class QuoteBlock(Block):
    type: Literal[BlockType.QUOTE] = BlockType.QUOTE
    content: QuoteContent = Field(default_factory=QuoteContent)


__all__ = ["QuoteBlock", "QuoteContent"]

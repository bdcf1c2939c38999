"""Callout block definition."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from .base import Block, BlockContent, BlockType


class CalloutContent(BlockContent):
    icon: str = "💡"
    color: str = "blue"
    text: str = ""


class CalloutBlock(Block):
    type: Literal[BlockType.CALLOUT] = BlockType.CALLOUT
    content: CalloutContent = Field(default_factory=CalloutContent)


__all__ = ["CalloutBlock", "CalloutContent"]

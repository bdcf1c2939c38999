"""Math (LaTeX equation) block definition."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from .base import Block, BlockContent, BlockType


class MathContent(BlockContent):
    latex: str = ""
    display: Literal["block", "inline"] = "block"
    description: str = ""


class MathBlock(Block):
    type: Literal[BlockType.MATH] = BlockType.MATH
    content: MathContent = Field(default_factory=MathContent)


__all__ = ["MathBlock", "MathContent"]

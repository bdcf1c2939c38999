"""Code block definition."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from .base import Block, BlockContent, BlockType


class CodeContent(BlockContent):
    language: str = "javascript"
    code: str = ""
    filename: str = ""
    show_line_numbers: bool = Field(default=True, alias="showLineNumbers")
    highlight_lines: list[int] = Field(default_factory=list, alias="highlightLines")


class CodeBlock(Block):
    type: Literal[BlockType.CODE] = BlockType.CODE
    content: CodeContent = Field(default_factory=CodeContent)


__all__ = ["CodeBlock", "CodeContent"]

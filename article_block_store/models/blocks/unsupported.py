"""Placeholder for stored rows that no longer fit the block vocabulary."""

from __future__ import annotations

from typing import Any

from pydantic import ConfigDict, Field

from .base import Block, BlockContent


class UnsupportedContent(BlockContent):
    model_config = ConfigDict(extra="allow", frozen=True)


class UnsupportedBlock(Block):
    """Carries the raw stored type and content so a save writes them back untouched."""

    type: str  # type: ignore[assignment]
    content: UnsupportedContent = Field(default_factory=UnsupportedContent)
    # Non-object content exactly as stored; ``content`` holds it under "value".
    raw_content: Any = None

    @property
    def type_name(self) -> str:
        return self.type


__all__ = ["UnsupportedBlock", "UnsupportedContent"]

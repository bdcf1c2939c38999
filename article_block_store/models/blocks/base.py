"""Shared building blocks for typed article blocks."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class BlockType(str, Enum):
    PARAGRAPH = "paragraph"
    HEADING1 = "heading1"
    HEADING2 = "heading2"
    HEADING3 = "heading3"
    HEADING4 = "heading4"
    BULLET_LIST = "bulletList"
    NUMBERED_LIST = "numberedList"
    TOGGLE = "toggle"
    QUOTE = "quote"
    CALLOUT = "callout"
    DIVIDER = "divider"
    CODE = "code"
    MATH = "math"
    IMAGE = "image"
    TABLE = "table"
    MINDMAP = "mindmap"


HEADING_LEVELS: dict[BlockType, int] = {
    BlockType.HEADING1: 1,
    BlockType.HEADING2: 2,
    BlockType.HEADING3: 3,
    BlockType.HEADING4: 4,
}


class BlockContent(BaseModel):
    """Base class for typed block content.

    Unknown keys are rejected so a payload that does not fit its block type
    fails at construction. Field aliases carry the camelCase keys used by the
    stored JSON.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)


class Block(BaseModel):
    """Immutable representation of one block in an article."""

    id: UUID
    type: BlockType
    position: int = Field(default=0, ge=0)
    parent_id: UUID | None = None
    content: BlockContent
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def type_name(self) -> str:
        return self.type.value


__all__ = ["Block", "BlockContent", "BlockType", "HEADING_LEVELS"]

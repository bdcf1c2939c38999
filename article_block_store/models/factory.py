"""Block construction and structural validation."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any
from uuid import UUID, uuid4

from pydantic import ValidationError

from .blocks import (
    Block,
    BlockContent,
    BlockType,
    UnsupportedBlock,
    block_class_for,
    content_model_for,
)


class BlockValidationError(ValueError):
    """Raised when a block type or content payload does not fit the block vocabulary."""


def normalise_block_type(block_type: BlockType | str) -> BlockType:
    if isinstance(block_type, BlockType):
        return block_type
    try:
        return BlockType(block_type)
    except ValueError:
        raise BlockValidationError(f"Unknown block type {block_type!r}.") from None


def coerce_content(
    block_type: BlockType | str,
    content: Mapping[str, Any] | BlockContent | None = None,
) -> BlockContent:
    """Return ``content`` as the typed content model for ``block_type``.

    Missing keys take the type's defaults and ``None`` values count as missing.
    """
    normalized = normalise_block_type(block_type)
    content_cls = content_model_for(normalized)
    if isinstance(content, content_cls):
        return content
    if isinstance(content, BlockContent):
        content = content.model_dump(by_alias=True)
    payload = {key: value for key, value in (content or {}).items() if value is not None}
    try:
        return content_cls.model_validate(payload)
    except ValidationError as exc:
        raise BlockValidationError(
            f"Invalid content for {normalized.value} block: {exc.errors(include_url=False)}"
        ) from exc


def create_block(
    block_type: BlockType | str,
    content: Mapping[str, Any] | BlockContent | None = None,
    position: int = 0,
    *,
    parent_id: UUID | None = None,
    block_id: UUID | None = None,
    timestamp: datetime | None = None,
) -> Block:
    """Build a new block with every content field filled for its type."""
    normalized = normalise_block_type(block_type)
    if position < 0:
        raise BlockValidationError("Block position must be non-negative.")
    typed_content = coerce_content(normalized, content)
    now = timestamp or datetime.now(timezone.utc)
    block_cls = block_class_for(normalized)
    return block_cls(
        id=block_id or uuid4(),
        type=normalized,
        position=position,
        parent_id=parent_id,
        content=typed_content,
        created_at=now,
        updated_at=now,
    )


def validate_block(block: Block | Mapping[str, Any]) -> bool:
    """Structural check: id, type and content present and type in the vocabulary.

    Content shape is not inspected here; the factory owns that at construction.
    """
    if isinstance(block, UnsupportedBlock):
        return False
    if isinstance(block, Block):
        return isinstance(block.type, BlockType) and block.content is not None
    if not block.get("id") or not block.get("type") or block.get("content") is None:
        return False
    try:
        BlockType(block["type"])
    except ValueError:
        return False
    return True


__all__ = [
    "BlockValidationError",
    "coerce_content",
    "create_block",
    "normalise_block_type",
    "validate_block",
]

"""Conversion between in-memory blocks and storage rows.

Rows are plain mappings shaped ``{id, position, parent_id, type, content}``
with JSON-ready values. Reading a row whose type left the vocabulary, or whose
content no longer fits its type, yields an ``UnsupportedBlock`` that carries
the raw values so a later replace-all save writes them back unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any
from uuid import UUID

from article_block_store.models.blocks import (
    Block,
    BlockType,
    UnsupportedBlock,
    UnsupportedContent,
    block_class_for,
)
from article_block_store.models.factory import BlockValidationError, coerce_content

logger = logging.getLogger(__name__)

ROW_FIELDS = ("id", "position", "parent_id", "type", "content")


def block_to_row(block: Block, *, include_timestamps: bool = False) -> dict[str, Any]:
    row: dict[str, Any] = {
        "id": str(block.id),
        "position": block.position,
        "parent_id": str(block.parent_id) if block.parent_id else None,
        "type": block.type_name,
        "content": _stored_content(block),
    }
    if include_timestamps:
        row["created_at"] = block.created_at
        row["updated_at"] = block.updated_at
    return row


def row_to_block(row: Mapping[str, Any]) -> Block:
    raw_type = row.get("type")
    raw_content = row.get("content")
    common = {
        "id": _as_uuid(row["id"]),
        "position": int(row.get("position") or 0),
        "parent_id": _as_uuid(row["parent_id"]) if row.get("parent_id") else None,
        "created_at": _as_datetime(row.get("created_at")),
        "updated_at": _as_datetime(row.get("updated_at")),
    }
    try:
        block_type = BlockType(raw_type)
    except ValueError:
        logger.warning("Block %s has unknown type %r; keeping it as unsupported.", row["id"], raw_type)
        return _unsupported(common, raw_type, raw_content)

    if raw_content is not None and not isinstance(raw_content, Mapping):
        logger.warning("Block %s has non-object content; keeping it as unsupported.", row["id"])
        return _unsupported(common, raw_type, raw_content)
    try:
        content = coerce_content(block_type, raw_content)
    except BlockValidationError as exc:
        logger.warning("Block %s content does not fit %s: %s", row["id"], block_type.value, exc)
        return _unsupported(common, raw_type, raw_content)

    block_cls = block_class_for(block_type)
    return block_cls(type=block_type, content=content, **common)


def serialize_blocks(blocks: Iterable[Block]) -> list[dict[str, Any]]:
    """Project blocks onto storage rows; timestamps are left to storage."""
    return [block_to_row(block) for block in blocks]


def deserialize_blocks(rows: Iterable[Mapping[str, Any]]) -> list[Block]:
    """Rebuild blocks from rows, keeping every field including timestamps."""
    return [row_to_block(row) for row in rows]


def _stored_content(block: Block) -> Any:
    if isinstance(block, UnsupportedBlock) and block.raw_content is not None:
        return block.raw_content
    return block.content.model_dump(mode="json", by_alias=True)


def _unsupported(common: dict[str, Any], raw_type: Any, raw_content: Any) -> UnsupportedBlock:
    if isinstance(raw_content, Mapping):
        return UnsupportedBlock(
            type=str(raw_type), content=UnsupportedContent.model_validate(dict(raw_content)), **common
        )
    if raw_content is None:
        return UnsupportedBlock(type=str(raw_type), **common)
    return UnsupportedBlock(
        type=str(raw_type),
        content=UnsupportedContent.model_validate({"value": raw_content}),
        raw_content=raw_content,
        **common,
    )


def _as_uuid(value: Any) -> UUID:
    return value if isinstance(value, UUID) else UUID(str(value))


def _as_datetime(value: Any) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


__all__ = [
    "ROW_FIELDS",
    "block_to_row",
    "deserialize_blocks",
    "row_to_block",
    "serialize_blocks",
]

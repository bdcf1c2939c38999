"""Shared behaviour for per-type block editors.

An editor seeds a local buffer from the block's persisted content. Typing only
touches the buffer; ``blur`` commits it through the host when it differs from
what is persisted.
"""

from __future__ import annotations

from typing import Any, Protocol
from uuid import UUID

from article_block_store.models.blocks import Block, BlockContent, BlockType


class EditorHost(Protocol):
    """What an editor may ask of its owning session."""

    def update_block(self, block_id: UUID, content: dict[str, Any]) -> Block | None: ...

    def delete_block(self, block_id: UUID) -> bool: ...

    def add_block(self, block_type: BlockType, position: int) -> Block: ...

    def open_palette(self, position: int) -> None: ...


class BlockEditor:
    """Base editor: buffered fields, commit on blur, no key handling."""

    def __init__(self, block: Block, host: EditorHost):
        self.block = block
        self.host = host
        self.buffer = self._seed(block.content)

    @property
    def block_id(self) -> UUID:
        return self.block.id

    @property
    def is_modified(self) -> bool:
        return self.buffer != self._seed(self.block.content)

    def change(self, **fields: Any) -> None:
        unknown = set(fields) - set(self.buffer)
        if unknown:
            raise ValueError(f"{type(self).__name__} has no fields {sorted(unknown)}")
        self.buffer.update(fields)

    def blur(self) -> Block | None:
        """Commit the buffer when it differs from the persisted content."""
        if not self.is_modified:
            return None
        return self._commit()

    def key_down(self, key: str, *, shift: bool = False) -> bool:
        """Handle a key press; returns True when the editor consumed it."""
        return False

    def refresh(self, block: Block) -> None:
        """Re-seed from a newer persisted version of the block."""
        self.block = block
        self.buffer = self._seed(block.content)

    def _commit(self) -> Block | None:
        updated = self.host.update_block(self.block.id, self._payload())
        if updated is not None:
            self.refresh(updated)
        return updated

    def _payload(self) -> dict[str, Any]:
        return dict(self.buffer)

    @staticmethod
    def _seed(content: BlockContent) -> dict[str, Any]:
        return content.model_dump()


__all__ = ["BlockEditor", "EditorHost"]

"""Editors for blocks without a text editing surface."""

from __future__ import annotations

from typing import Any

from article_block_store.models.blocks import UnsupportedBlock

from .base import BlockEditor


class DividerEditor(BlockEditor):
    """A divider has nothing to edit; Backspace removes it."""

    def key_down(self, key: str, *, shift: bool = False) -> bool:
        if key in {"Backspace", "Delete"}:
            self.host.delete_block(self.block.id)
            return True
        return False


class StaticEditor(BlockEditor):
    """Read-only surface for table, mind map and unsupported blocks."""

    def change(self, **fields: Any) -> None:
        raise ValueError(f"{self.block.type_name} blocks cannot be edited inline.")

    def blur(self) -> None:
        return None

    @property
    def placeholder(self) -> str | None:
        if isinstance(self.block, UnsupportedBlock):
            return f"Unsupported block type: {self.block.type_name}"
        return None


__all__ = ["DividerEditor", "StaticEditor"]

"""Toggle block editor."""

from __future__ import annotations

from article_block_store.models.blocks import Block

from .base import BlockEditor


class ToggleEditor(BlockEditor):
    def set_open(self, is_open: bool) -> Block | None:
        """Open state is committed immediately, summary edits wait for blur."""
        self.buffer["is_open"] = is_open
        return self._commit()


__all__ = ["ToggleEditor"]

"""One article's editing session: store, palette, editors and autosave."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from article_block_store.config import DEFAULT_AUTOSAVE_DELAY
from article_block_store.models.blocks import Block, BlockContent, BlockType
from article_block_store.store.autosave import Autosave, TimerFactory
from article_block_store.store.block_store import BlockStore, StoreEvent

from .blocks import BlockEditor, editor_for
from .commands import CommandPalette

logger = logging.getLogger(__name__)


def format_last_saved(last_saved: datetime | None, now: datetime | None = None) -> str:
    if last_saved is None:
        return "Never"
    now = now or datetime.now(timezone.utc)
    seconds = int((now - last_saved).total_seconds())
    if seconds < 60:
        return "Just now"
    if seconds < 3600:
        return f"{seconds // 60}m ago"
    return f"{seconds // 3600}h ago"


class EditingSession:
    """Owns everything needed to edit one article and tears it down on close.

    The session is the host editors talk to: it forwards their commits to the
    store and keeps one editor per block in sync with the store's collection.
    """

    def __init__(
        self,
        store: BlockStore,
        *,
        autosave_delay: float = DEFAULT_AUTOSAVE_DELAY,
        timer_factory: TimerFactory | None = None,
    ):
        self.store = store
        self.palette = CommandPalette(self._insert_from_palette)
        if timer_factory is None:
            self.autosave = Autosave(store, autosave_delay)
        else:
            self.autosave = Autosave(store, autosave_delay, timer_factory=timer_factory)
        self._editors: dict[UUID, BlockEditor] = {}
        self._closed = False
        self._unsubscribe = store.subscribe(self._on_store_event)
        self._sync_editors()

    # ------------------------------------------------------------------ Editors
    @property
    def editors(self) -> list[BlockEditor]:
        """Editors in block order."""
        return [self._editors[block.id] for block in self.store.blocks if block.id in self._editors]

    def editor(self, block_id: UUID) -> BlockEditor | None:
        return self._editors.get(block_id)

    # ------------------------------------------------------------------ Host
    def update_block(self, block_id: UUID, content: Mapping[str, Any] | BlockContent) -> Block | None:
        return self.store.update_block(block_id, content)

    def delete_block(self, block_id: UUID) -> bool:
        return self.store.delete_block(block_id)

    def add_block(
        self,
        block_type: BlockType | str,
        position: int,
        content: Mapping[str, Any] | BlockContent | None = None,
    ) -> Block:
        return self.store.add_block(block_type, position, content)

    def open_palette(self, position: int) -> None:
        self.palette.open(position)

    def handle_key(self, key: str, *, block_id: UUID | None = None, shift: bool = False) -> bool:
        """Route a key to the open palette first, then to the focused block's editor."""
        if self.palette.handle_key(key):
            return True
        editor = self._editors.get(block_id) if block_id is not None else None
        return editor.key_down(key, shift=shift) if editor is not None else False

    # ------------------------------------------------------------------ Saving
    def save(self) -> bool:
        """Manual save; raises ``SaveError`` on failure."""
        return self.autosave.flush()

    def status_text(self, now: datetime | None = None) -> str:
        if self.store.is_saving:
            return "Saving..."
        if self.store.is_dirty:
            return "Unsaved changes"
        return f"Saved {format_last_saved(self.store.last_saved, now)}"

    def close(self) -> None:
        """Commit open buffers, flush unsaved changes and stop the timer."""
        if self._closed:
            return
        self._closed = True
        try:
            for editor in list(self._editors.values()):
                editor.blur()
            if self.store.is_dirty:
                self.autosave.flush()
        finally:
            self.autosave.close()
            self._unsubscribe()
            self._editors.clear()

    def __enter__(self) -> EditingSession:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ------------------------------------------------------------------ Internals
    def _insert_from_palette(self, block_type: BlockType, position: int) -> None:
        self.store.add_block(block_type, position)

    def _on_store_event(self, event: StoreEvent) -> None:
        if event in (StoreEvent.LOADED, StoreEvent.CHANGED):
            self._sync_editors()
        elif event is StoreEvent.SAVE_FAILED:
            logger.warning("Article %s has unsaved changes after a failed save.", self.store.article_id)

    def _sync_editors(self) -> None:
        current: dict[UUID, BlockEditor] = {}
        for block in self.store.blocks:
            editor = self._editors.get(block.id)
            if editor is None:
                editor = editor_for(block, self)
            elif editor.block.content != block.content:
                editor.refresh(block)
            else:
                editor.block = block
            current[block.id] = editor
        self._editors = current


def open_editing_session(
    store: BlockStore,
    article_id: UUID,
    *,
    autosave_delay: float = DEFAULT_AUTOSAVE_DELAY,
    timer_factory: TimerFactory | None = None,
) -> EditingSession:
    """Load the article's blocks into ``store`` and wrap it in a session."""
    store.load_blocks(article_id)
    return EditingSession(store, autosave_delay=autosave_delay, timer_factory=timer_factory)


__all__ = ["EditingSession", "format_last_saved", "open_editing_session"]

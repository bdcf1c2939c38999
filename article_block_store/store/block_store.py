"""In-memory mutation engine for one article's ordered blocks.

The store owns the working copy of an article's blocks while it is being
edited. Every mutation keeps positions dense (``0..n-1``) and marks the store
dirty; ``save_blocks`` writes the whole collection back through the
repository's transactional replace-all.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from article_block_store.models.blocks import Block, BlockContent, BlockType
from article_block_store.models.factory import coerce_content, create_block
from article_block_store.repositories.block_repository import BlockRepository, RepositoryError

logger = logging.getLogger(__name__)


class BlockStoreError(RuntimeError):
    """Raised when BlockStore operations encounter invalid state."""


class LoadError(BlockStoreError):
    """Raised when an article's blocks cannot be fetched."""


class SaveError(BlockStoreError):
    """Raised when the replace-all write fails; the store stays dirty."""


class StoreState(str, Enum):
    UNLOADED = "unloaded"
    CLEAN = "clean"
    DIRTY = "dirty"


class StoreEvent(str, Enum):
    LOADED = "loaded"
    CHANGED = "changed"
    SAVING = "saving"
    SAVED = "saved"
    SAVE_FAILED = "save_failed"


Listener = Callable[[StoreEvent], None]


class BlockStore:
    """Mutation engine scoped to a single editing session."""

    def __init__(self, repository: BlockRepository):
        self._repository = repository
        self._lock = threading.RLock()
        self._listeners: list[Listener] = []
        self._article_id: UUID | None = None
        self._blocks: list[Block] = []
        self._state = StoreState.UNLOADED
        self._revision = 0
        self._saving = False
        self._save_requested = False
        self._last_saved: datetime | None = None
        self._last_error: SaveError | None = None

    # ------------------------------------------------------------------ State
    @property
    def article_id(self) -> UUID | None:
        return self._article_id

    @property
    def blocks(self) -> tuple[Block, ...]:
        with self._lock:
            return tuple(self._blocks)

    @property
    def state(self) -> StoreState:
        return self._state

    @property
    def is_dirty(self) -> bool:
        return self._state is StoreState.DIRTY

    @property
    def is_saving(self) -> bool:
        return self._saving

    @property
    def last_saved(self) -> datetime | None:
        return self._last_saved

    @property
    def last_error(self) -> SaveError | None:
        return self._last_error

    def get_block(self, block_id: UUID) -> Block | None:
        with self._lock:
            return next((block for block in self._blocks if block.id == block_id), None)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for store events; returns an unsubscribe callable."""
        with self._lock:
            self._listeners.append(listener)

        def _unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return _unsubscribe

    # ------------------------------------------------------------------ Loading
    def load_blocks(self, article_id: UUID) -> list[Block]:
        """Fetch the article's blocks ordered by position and mark the store clean."""
        try:
            blocks = self._repository.list_blocks(article_id)
        except (RepositoryError, SQLAlchemyError) as exc:
            raise LoadError(f"Failed to load blocks for article {article_id}: {exc}") from exc

        with self._lock:
            self._article_id = article_id
            self._blocks = sorted(blocks, key=lambda block: block.position)
            self._state = StoreState.CLEAN
            self._last_error = None
            loaded = list(self._blocks)
        logger.debug("Loaded %d blocks for article %s", len(loaded), article_id)
        self._notify(StoreEvent.LOADED)
        return loaded

    # ------------------------------------------------------------------ Mutations
    def add_block(
        self,
        block_type: BlockType | str,
        position: int,
        content: Mapping[str, Any] | BlockContent | None = None,
    ) -> Block:
        """Insert a new block at ``position`` (clamped to ``0..n``)."""
        with self._lock:
            self._require_loaded()
            position = max(0, min(position, len(self._blocks)))
            block = create_block(block_type, content, position)
            blocks = [
                existing.model_copy(update={"position": existing.position + 1})
                if existing.position >= position
                else existing
                for existing in self._blocks
            ]
            blocks.append(block)
            self._blocks = sorted(blocks, key=lambda item: item.position)
            self._mark_dirty()
        self._notify(StoreEvent.CHANGED)
        return block

    def update_block(
        self,
        block_id: UUID,
        content: Mapping[str, Any] | BlockContent,
    ) -> Block | None:
        """Replace the block's content wholesale; ``None`` when the id is absent."""
        with self._lock:
            self._require_loaded()
            index = self._index_of(block_id)
            if index is None:
                return None
            current = self._blocks[index]
            typed_content = coerce_content(current.type, content)
            updated = current.model_copy(
                update={"content": typed_content, "updated_at": datetime.now(timezone.utc)}
            )
            self._blocks[index] = updated
            self._mark_dirty()
        self._notify(StoreEvent.CHANGED)
        return updated

    def delete_block(self, block_id: UUID) -> bool:
        with self._lock:
            self._require_loaded()
            index = self._index_of(block_id)
            if index is None:
                return False
            removed = self._blocks[index]
            self._blocks = [
                block.model_copy(update={"position": block.position - 1})
                if block.position > removed.position
                else block
                for block in self._blocks
                if block.id != block_id
            ]
            self._mark_dirty()
        self._notify(StoreEvent.CHANGED)
        return True

    def reorder_blocks(self, from_index: int, to_index: int) -> None:
        """Move one block in sequence order and renumber every position.

        ``from_index`` must address an existing block; ``to_index`` is clamped
        to the valid range.
        """
        with self._lock:
            self._require_loaded()
            if not 0 <= from_index < len(self._blocks):
                raise IndexError(f"from_index {from_index} out of range for {len(self._blocks)} blocks")
            to_index = max(0, min(to_index, len(self._blocks) - 1))
            ordered = list(self._blocks)
            moved = ordered.pop(from_index)
            ordered.insert(to_index, moved)
            self._blocks = [
                block if block.position == index else block.model_copy(update={"position": index})
                for index, block in enumerate(ordered)
            ]
            self._mark_dirty()
        self._notify(StoreEvent.CHANGED)

    # ------------------------------------------------------------------ Saving
    def save_blocks(self) -> bool:
        """Persist the whole collection, replacing the stored rows.

        Returns ``False`` when a save is already running; that save makes one
        more pass so the latest collection is written. Raises ``SaveError`` on
        failure and leaves the store dirty.
        """
        with self._lock:
            self._require_loaded()
            if self._saving:
                self._save_requested = True
                return False
            self._saving = True
        self._notify(StoreEvent.SAVING)

        try:
            while True:
                with self._lock:
                    self._save_requested = False
                    article_id = self._article_id
                    snapshot = list(self._blocks)
                    revision = self._revision

                try:
                    self._repository.replace_blocks(article_id, snapshot)
                except (RepositoryError, SQLAlchemyError) as exc:
                    error = SaveError(f"Failed to save blocks for article {article_id}: {exc}")
                    with self._lock:
                        self._last_error = error
                        self._save_requested = False
                    logger.error("Saving article %s failed: %s", article_id, exc)
                    self._notify(StoreEvent.SAVE_FAILED)
                    raise error from exc

                with self._lock:
                    self._last_saved = datetime.now(timezone.utc)
                    self._last_error = None
                    if self._revision == revision:
                        self._state = StoreState.CLEAN
                    if not self._save_requested:
                        break
        finally:
            with self._lock:
                self._saving = False

        logger.debug("Saved %d blocks for article %s", len(snapshot), article_id)
        self._notify(StoreEvent.SAVED)
        return True

    # ------------------------------------------------------------------ Helpers
    def _require_loaded(self) -> None:
        if self._state is StoreState.UNLOADED:
            raise BlockStoreError("No article loaded; call load_blocks first.")

    def _index_of(self, block_id: UUID) -> int | None:
        for index, block in enumerate(self._blocks):
            if block.id == block_id:
                return index
        return None

    def _mark_dirty(self) -> None:
        self._revision += 1
        self._state = StoreState.DIRTY

    def _notify(self, event: StoreEvent) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            listener(event)


__all__ = [
    "BlockStore",
    "BlockStoreError",
    "Listener",
    "LoadError",
    "SaveError",
    "StoreEvent",
    "StoreState",
]

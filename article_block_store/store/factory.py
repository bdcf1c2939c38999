"""Factory helpers for constructing the store façades."""

from __future__ import annotations

from sqlalchemy.orm import Session, sessionmaker

from article_block_store.repositories.article_repository import ArticleRepository
from article_block_store.repositories.block_repository import BlockRepository
from article_block_store.repositories.contact_repository import ContactRepository

from .article_store import ArticleStore
from .block_store import BlockStore


def create_article_store(session_factory: sessionmaker[Session]) -> ArticleStore:
    """Build an ArticleStore with the default repository implementations."""
    return ArticleStore(
        ArticleRepository(session_factory),
        BlockRepository(session_factory),
        ContactRepository(session_factory),
    )


def create_block_store(session_factory: sessionmaker[Session]) -> BlockStore:
    """Build an unloaded BlockStore for one editing session."""
    return BlockStore(BlockRepository(session_factory))


__all__ = ["create_article_store", "create_block_store"]

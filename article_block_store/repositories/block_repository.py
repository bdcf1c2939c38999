"""SQLAlchemy-backed repository for an article's native block rows."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Sequence
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from article_block_store.db.schema import DbArticle, DbBlock
from article_block_store.models.blocks import Block
from article_block_store.serialization import block_to_row, row_to_block


class RepositoryError(RuntimeError):
    """Base class for repository-level errors."""


class ArticleNotFoundError(RepositoryError):
    """Raised when an article cannot be found for a requested operation."""


class BlockRepository:
    """Persists and hydrates the flat, ordered block list of one article."""

    def __init__(self, session_factory: sessionmaker[Session]):
        self._session_factory = session_factory

    def list_blocks(self, article_id: UUID) -> list[Block]:
        """Return the article's blocks ordered by position."""
        with self._session_factory() as session:
            rows = session.scalars(
                select(DbBlock)
                .where(DbBlock.article_id == str(article_id))
                .order_by(DbBlock.position)
            ).all()
        return [row_to_block(self._to_row(record)) for record in rows]

    def replace_blocks(self, article_id: UUID, blocks: Sequence[Block]) -> None:
        """Replace every stored block of the article with ``blocks``.

        Delete and insert run in one transaction; a failed insert leaves the
        previously stored rows in place.
        """
        now = datetime.now(timezone.utc)
        payloads = [self._to_record(article_id, block, now) for block in blocks]

        with self._session_factory() as session:
            try:
                with session.begin():
                    if session.get(DbArticle, str(article_id)) is None:
                        raise ArticleNotFoundError(f"Article {article_id} does not exist.")
                    session.execute(delete(DbBlock).where(DbBlock.article_id == str(article_id)))
                    session.flush()
                    session.add_all(DbBlock(**payload) for payload in payloads)
            except SQLAlchemyError as exc:
                raise RepositoryError(f"Failed to replace blocks for article {article_id}: {exc}") from exc

    def count_blocks(self, article_id: UUID) -> int:
        with self._session_factory() as session:
            return session.scalar(
                select(func.count()).select_from(DbBlock).where(DbBlock.article_id == str(article_id))
            ) or 0

    @staticmethod
    def _to_row(record: DbBlock) -> dict[str, object]:
        return {
            "id": record.id,
            "position": record.position,
            "parent_id": record.parent_id,
            "type": record.type,
            "content": record.content,
            "created_at": record.created_at,
            "updated_at": record.updated_at,
        }

    @staticmethod
    def _to_record(article_id: UUID, block: Block, now: datetime) -> dict[str, object]:
        row = block_to_row(block, include_timestamps=True)
        row["article_id"] = str(article_id)
        row["created_at"] = row["created_at"] or now
        row["updated_at"] = row["updated_at"] or now
        return row


__all__ = ["ArticleNotFoundError", "BlockRepository", "RepositoryError"]

"""SQLAlchemy-backed repository for articles."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from article_block_store.db.schema import DbArticle, DbBlock
from article_block_store.models.article import Article
from article_block_store.models.foreign import ForeignContent

from .block_repository import ArticleNotFoundError, RepositoryError

# Columns overwritten when an imported page is synced again.
_SYNC_COLUMNS = (
    "title",
    "slug",
    "excerpt",
    "cover_image",
    "published",
    "tags",
    "notion_content",
    "last_synced_at",
    "updated_at",
)

_UPDATABLE_FIELDS = frozenset(
    {"title", "slug", "excerpt", "cover_image", "published", "tags", "notion_content", "last_synced_at"}
)


class DuplicateSlugError(RepositoryError):
    """Raised when an article slug is already taken."""


class ArticleRepository:
    """Repository that persists and hydrates Article models."""

    def __init__(self, session_factory: sessionmaker[Session]):
        self._session_factory = session_factory

    def create_article(self, article: Article) -> Article:
        record = self._to_record(article)
        now = datetime.now(timezone.utc)
        record["created_at"] = article.created_at or now
        record["updated_at"] = article.updated_at or now
        with self._session_factory() as session:
            session.add(DbArticle(**record))
            try:
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                raise DuplicateSlugError(f"Slug {article.slug!r} is already in use.") from exc
        return self._require(article.id)

    def get_article(self, article_id: UUID) -> Article | None:
        with self._session_factory() as session:
            record = session.get(DbArticle, str(article_id))
            return self._to_model(record) if record is not None else None

    def get_by_slug(self, slug: str, *, published_only: bool = False) -> Article | None:
        query = select(DbArticle).where(DbArticle.slug == slug)
        if published_only:
            query = query.where(DbArticle.published.is_(True))
        with self._session_factory() as session:
            record = session.scalars(query).one_or_none()
            return self._to_model(record) if record is not None else None

    def list_articles(self, *, published_only: bool = False) -> list[Article]:
        """Return articles newest first."""
        query = select(DbArticle).order_by(DbArticle.created_at.desc(), DbArticle.id)
        if published_only:
            query = query.where(DbArticle.published.is_(True))
        with self._session_factory() as session:
            return [self._to_model(record) for record in session.scalars(query).all()]

    def update_article(self, article_id: UUID, **fields: Any) -> Article:
        unknown = set(fields) - _UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update article fields: {sorted(unknown)}")

        with self._session_factory() as session:
            record = session.get(DbArticle, str(article_id))
            if record is None:
                raise ArticleNotFoundError(f"Article {article_id} does not exist.")
            for name, value in fields.items():
                setattr(record, name, self._column_value(name, value))
            record.updated_at = datetime.now(timezone.utc)
            try:
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                raise DuplicateSlugError(f"Slug {fields.get('slug')!r} is already in use.") from exc
        return self._require(article_id)

    def delete_article(self, article_id: UUID) -> None:
        """Delete the article and every block it owns."""
        with self._session_factory() as session:
            with session.begin():
                record = session.get(DbArticle, str(article_id))
                if record is None:
                    raise ArticleNotFoundError(f"Article {article_id} does not exist.")
                session.execute(delete(DbBlock).where(DbBlock.article_id == str(article_id)))
                session.delete(record)

    def upsert_by_notion_page_id(self, article: Article) -> Article:
        """Insert an imported article or refresh the one synced from the same page."""
        if not article.notion_page_id:
            raise ValueError("Imported articles need a notion_page_id.")
        now = datetime.now(timezone.utc)
        payload = self._to_record(article)
        payload["created_at"] = article.created_at or now
        payload["updated_at"] = now

        with self._session_factory() as session:
            try:
                with session.begin():
                    bind = session.get_bind()
                    if bind.dialect.name == "postgresql":
                        stmt = pg_insert(DbArticle).values(payload)
                    else:
                        stmt = sqlite_insert(DbArticle).values(payload)
                    update_cols = {name: getattr(stmt.excluded, name) for name in _SYNC_COLUMNS}
                    stmt = stmt.on_conflict_do_update(index_elements=["notion_page_id"], set_=update_cols)
                    session.execute(stmt)

                    stored_id = session.scalars(
                        select(DbArticle.id).where(DbArticle.notion_page_id == article.notion_page_id)
                    ).one()
                    # An imported article carries no native rows.
                    session.execute(delete(DbBlock).where(DbBlock.article_id == stored_id))
            except IntegrityError as exc:
                raise DuplicateSlugError(f"Slug {article.slug!r} is already in use.") from exc

        return self._require(UUID(stored_id))

    def _require(self, article_id: UUID) -> Article:
        article = self.get_article(article_id)
        if article is None:
            raise ArticleNotFoundError(f"Article {article_id} does not exist.")
        return article

    @staticmethod
    def _column_value(name: str, value: Any) -> Any:
        if name == "tags":
            return list(value or ())
        if name == "notion_content" and isinstance(value, ForeignContent):
            return value.model_dump(mode="json")
        return value

    @staticmethod
    def _to_model(record: DbArticle) -> Article:
        content = record.notion_content
        return Article(
            id=UUID(record.id),
            title=record.title,
            slug=record.slug,
            excerpt=record.excerpt or "",
            cover_image=record.cover_image,
            published=record.published,
            tags=tuple(record.tags or ()),
            author_id=record.author_id,
            notion_page_id=record.notion_page_id,
            notion_content=ForeignContent.model_validate(content) if content is not None else None,
            created_at=record.created_at,
            updated_at=record.updated_at,
            last_synced_at=record.last_synced_at,
        )

    @staticmethod
    def _to_record(article: Article) -> dict[str, Any]:
        return {
            "id": str(article.id),
            "title": article.title,
            "slug": article.slug,
            "excerpt": article.excerpt,
            "cover_image": article.cover_image,
            "published": article.published,
            "tags": list(article.tags),
            "author_id": article.author_id,
            "notion_page_id": article.notion_page_id,
            "notion_content": (
                article.notion_content.model_dump(mode="json") if article.notion_content else None
            ),
            "last_synced_at": article.last_synced_at,
        }


__all__ = ["ArticleRepository", "DuplicateSlugError"]

"""Article-level façade over the repositories."""

from __future__ import annotations

import logging
from uuid import UUID, uuid4

from article_block_store.models.article import (
    DRAFT_TITLE,
    Article,
    ArticleMetadata,
    Contact,
    UserIdentity,
)
from article_block_store.models.blocks import Block, BlockType
from article_block_store.parser.markdown_parser import markdown_to_blocks
from article_block_store.repositories.article_repository import ArticleRepository
from article_block_store.repositories.block_repository import ArticleNotFoundError, BlockRepository
from article_block_store.repositories.contact_repository import ContactRepository
from article_block_store.slugs import slugify

from .block_store import BlockStore

logger = logging.getLogger(__name__)


class ArticleStoreError(RuntimeError):
    """Raised when ArticleStore operations encounter invalid state."""


class ArticleValidationError(ArticleStoreError):
    """Raised when submitted article or contact fields are incomplete."""


class AuthorizationError(ArticleStoreError):
    """Raised when an admin operation is attempted without an identity."""


class ArticleStore:
    """Thin façade that coordinates articles, their blocks and contacts."""

    def __init__(
        self,
        article_repository: ArticleRepository,
        block_repository: BlockRepository,
        contact_repository: ContactRepository,
    ):
        """Internal constructor; prefer ``create_article_store`` for public use."""
        self._articles = article_repository
        self._blocks = block_repository
        self._contacts = contact_repository

    # ------------------------------------------------------------------ Public reads
    def list_published(self) -> list[Article]:
        return self._articles.list_articles(published_only=True)

    def get_published(self, slug: str) -> Article | None:
        return self._articles.get_by_slug(slug, published_only=True)

    def get_article(self, article_id: UUID) -> Article:
        article = self._articles.get_article(article_id)
        if article is None:
            raise ArticleNotFoundError(f"Article {article_id} does not exist.")
        return article

    def list_article_blocks(self, article_id: UUID) -> list[Block]:
        return self._blocks.list_blocks(article_id)

    def submit_contact(self, name: str, email: str, message: str) -> Contact:
        if not name.strip() or not email.strip() or not message.strip():
            raise ArticleValidationError("Name, email and message are required.")
        return self._contacts.add_contact(name.strip(), email.strip(), message.strip())

    # ------------------------------------------------------------------ Admin
    def list_articles(self, identity: UserIdentity | None) -> list[Article]:
        self._authorize(identity)
        return self._articles.list_articles()

    def create_draft(self, identity: UserIdentity | None) -> Article:
        """Create an unpublished article with a placeholder title and unique slug."""
        user = self._authorize(identity)
        article_id = uuid4()
        article = Article(
            id=article_id,
            title=DRAFT_TITLE,
            slug=f"untitled-{article_id.hex[:12]}",
            author_id=user.user_id,
        )
        created = self._articles.create_article(article)
        logger.info("Created draft article %s", created.id)
        return created

    def update_metadata(
        self,
        identity: UserIdentity | None,
        article_id: UUID,
        metadata: ArticleMetadata,
    ) -> Article:
        self._authorize(identity)
        title = metadata.title.strip()
        slug = metadata.slug.strip()
        if not title or not slug:
            raise ArticleValidationError("Title and slug are required.")
        return self._articles.update_article(
            article_id,
            title=title,
            slug=slug,
            excerpt=metadata.excerpt,
            cover_image=metadata.cover_image or None,
            published=metadata.published,
            tags=tuple(tag.strip() for tag in metadata.tags if tag.strip()),
        )

    def toggle_publish(self, identity: UserIdentity | None, article_id: UUID) -> Article:
        self._authorize(identity)
        article = self.get_article(article_id)
        return self._articles.update_article(article_id, published=not article.published)

    def delete_article(self, identity: UserIdentity | None, article_id: UUID) -> None:
        self._authorize(identity)
        self._articles.delete_article(article_id)
        logger.info("Deleted article %s", article_id)

    def import_markdown(
        self,
        identity: UserIdentity | None,
        source: str,
        *,
        title: str | None = None,
    ) -> Article:
        """Create a draft whose native blocks come from Markdown ``source``.

        The title defaults to the first top-level heading.
        """
        blocks = markdown_to_blocks(source)
        draft = self.create_draft(identity)
        if title is None:
            title = next((block.content.text for block in blocks if block.type is BlockType.HEADING1), None)
        self._blocks.replace_blocks(draft.id, blocks)
        if title:
            draft = self._articles.update_article(draft.id, title=title, slug=f"{slugify(title)}-{draft.id.hex[:8]}")
        logger.info("Imported %d Markdown blocks into article %s", len(blocks), draft.id)
        return draft

    def save_imported_article(self, identity: UserIdentity | None, article: Article) -> Article:
        """Insert or refresh an article imported from the external document tool."""
        self._authorize(identity)
        return self._articles.upsert_by_notion_page_id(article)

    def open_block_store(self, identity: UserIdentity | None, article_id: UUID) -> BlockStore:
        """Return a fresh BlockStore loaded with the article's native blocks."""
        self._authorize(identity)
        article = self.get_article(article_id)
        if article.notion_content is not None:
            raise ArticleStoreError(f"Article {article_id} is imported and cannot be edited as blocks.")
        store = BlockStore(self._blocks)
        store.load_blocks(article_id)
        return store

    def list_contacts(self, identity: UserIdentity | None) -> list[Contact]:
        self._authorize(identity)
        return self._contacts.list_contacts()

    def toggle_contact_read(self, identity: UserIdentity | None, contact_id: UUID, read: bool) -> Contact:
        self._authorize(identity)
        return self._contacts.set_read(contact_id, read)

    @staticmethod
    def _authorize(identity: UserIdentity | None) -> UserIdentity:
        if identity is None:
            raise AuthorizationError("Sign in to manage articles.")
        return identity


__all__ = [
    "ArticleStore",
    "ArticleStoreError",
    "ArticleValidationError",
    "AuthorizationError",
]

"""Article, contact and caller identity models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from .foreign import ForeignContent

DRAFT_TITLE = "Untitled Article"


class ContentSource(str, Enum):
    """Which storage shape an article's body uses."""

    NATIVE = "native"
    FOREIGN = "foreign"


class Article(BaseModel):
    """One article (the document that owns blocks)."""

    id: UUID
    title: str = DRAFT_TITLE
    slug: str
    excerpt: str = ""
    cover_image: str | None = None
    published: bool = False
    tags: tuple[str, ...] = ()
    author_id: str | None = None
    notion_page_id: str | None = None
    notion_content: ForeignContent | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    last_synced_at: datetime | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def content_source(self) -> ContentSource:
        return ContentSource.FOREIGN if self.notion_content is not None else ContentSource.NATIVE


class ArticleMetadata(BaseModel):
    """Editable metadata submitted from the admin form."""

    title: str = ""
    slug: str = ""
    excerpt: str = ""
    cover_image: str | None = None
    published: bool = False
    tags: tuple[str, ...] = Field(default_factory=tuple)

    model_config = ConfigDict(frozen=True)


class Contact(BaseModel):
    id: UUID
    name: str
    email: str
    message: str
    read: bool = False
    created_at: datetime | None = None

    model_config = ConfigDict(frozen=True)


@dataclass(frozen=True, slots=True)
class UserIdentity:
    """The authenticated caller, as supplied by the host's auth capability."""

    user_id: str
    email: str | None = None


__all__ = [
    "Article",
    "ArticleMetadata",
    "Contact",
    "ContentSource",
    "DRAFT_TITLE",
    "UserIdentity",
]

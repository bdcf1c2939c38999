from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from article_block_store.models.article import Article, ArticleMetadata, ContentSource, DRAFT_TITLE
from article_block_store.models.blocks import BlockType
from article_block_store.models.factory import create_block
from article_block_store.models.foreign import ForeignBlock, ForeignContent
from article_block_store.renderers import render_article_body
from article_block_store.repositories.article_repository import DuplicateSlugError
from article_block_store.repositories.block_repository import ArticleNotFoundError
from article_block_store.repositories.contact_repository import ContactNotFoundError
from article_block_store.store import (
    ArticleStore,
    ArticleStoreError,
    ArticleValidationError,
    AuthorizationError,
    StoreState,
)

PAGE_ID = "01234567-89ab-cdef-0123-456789abcdef"


def _imported(title: str = "Imported", *, text: str = "From the page") -> Article:
    block = ForeignBlock.model_validate(
        {"id": "p1", "type": "paragraph", "paragraph": {"rich_text": [{"plain_text": text}]}}
    )
    now = datetime(2024, 2, 1, tzinfo=timezone.utc)
    return Article(
        id=uuid4(),
        title=title,
        slug=title.lower(),
        published=True,
        notion_page_id=PAGE_ID,
        notion_content=ForeignContent(page={"id": PAGE_ID}, blocks=(block,)),
        last_synced_at=now,
    )


def test_create_draft_requires_identity(article_store: ArticleStore):
    with pytest.raises(AuthorizationError):
        article_store.create_draft(None)
    with pytest.raises(AuthorizationError):
        article_store.list_articles(None)


def test_create_draft_defaults(article_store: ArticleStore, identity):
    first = article_store.create_draft(identity)
    second = article_store.create_draft(identity)

    assert first.title == DRAFT_TITLE
    assert first.published is False
    assert first.author_id == "admin-1"
    assert first.slug.startswith("untitled-")
    assert first.slug != second.slug
    assert first.content_source is ContentSource.NATIVE
    assert {a.id for a in article_store.list_articles(identity)} == {first.id, second.id}
    assert article_store.list_published() == []


def test_update_metadata_validates_and_trims(article_store: ArticleStore, identity):
    draft = article_store.create_draft(identity)

    with pytest.raises(ArticleValidationError):
        article_store.update_metadata(identity, draft.id, ArticleMetadata(title="  ", slug="x"))

    updated = article_store.update_metadata(
        identity,
        draft.id,
        ArticleMetadata(
            title=" Hello ",
            slug=" hello ",
            excerpt="Intro",
            cover_image="",
            published=True,
            tags=("python", " ", " web "),
        ),
    )

    assert (updated.title, updated.slug, updated.excerpt) == ("Hello", "hello", "Intro")
    assert updated.cover_image is None
    assert updated.tags == ("python", "web")
    assert article_store.get_published("hello").id == draft.id


def test_update_metadata_rejects_duplicate_slug(article_store: ArticleStore, identity):
    first = article_store.create_draft(identity)
    second = article_store.create_draft(identity)
    article_store.update_metadata(identity, first.id, ArticleMetadata(title="A", slug="taken"))

    with pytest.raises(DuplicateSlugError):
        article_store.update_metadata(identity, second.id, ArticleMetadata(title="B", slug="taken"))


def test_toggle_publish_controls_public_visibility(article_store: ArticleStore, identity):
    draft = article_store.create_draft(identity)

    published = article_store.toggle_publish(identity, draft.id)
    assert published.published is True
    assert [a.id for a in article_store.list_published()] == [draft.id]
    assert article_store.get_published(draft.slug) is not None

    article_store.toggle_publish(identity, draft.id)
    assert article_store.get_published(draft.slug) is None


def test_delete_article_removes_blocks(article_store: ArticleStore, identity, block_repository):
    draft = article_store.create_draft(identity)
    block_repository.replace_blocks(draft.id, [create_block(BlockType.PARAGRAPH, {"text": "x"})])

    article_store.delete_article(identity, draft.id)

    assert block_repository.count_blocks(draft.id) == 0
    with pytest.raises(ArticleNotFoundError):
        article_store.get_article(draft.id)
    with pytest.raises(ArticleNotFoundError):
        article_store.delete_article(identity, draft.id)


def test_open_block_store_loads_native_blocks(article_store: ArticleStore, identity, block_repository):
    draft = article_store.create_draft(identity)
    block_repository.replace_blocks(
        draft.id,
        [create_block(BlockType.HEADING1, {"text": "T"}, 0), create_block(BlockType.PARAGRAPH, {"text": "p"}, 1)],
    )

    store = article_store.open_block_store(identity, draft.id)

    assert store.state is StoreState.CLEAN
    assert [block.type for block in store.blocks] == [BlockType.HEADING1, BlockType.PARAGRAPH]
    with pytest.raises(AuthorizationError):
        article_store.open_block_store(None, draft.id)


def test_imported_article_upserts_in_place(article_store: ArticleStore, identity):
    first = article_store.save_imported_article(identity, _imported("First"))
    second = article_store.save_imported_article(identity, _imported("Second", text="Changed"))

    assert second.id == first.id
    assert second.title == "Second"
    assert second.notion_content.blocks[0].plain_text() == "Changed"
    assert len(article_store.list_articles(identity)) == 1
    with pytest.raises(ArticleStoreError):
        article_store.open_block_store(identity, first.id)


def test_render_article_body_dispatches_on_storage(article_store: ArticleStore, identity):
    imported = article_store.save_imported_article(identity, _imported())
    draft = article_store.create_draft(identity)
    blocks = [create_block(BlockType.PARAGRAPH, {"text": "native"})]

    assert render_article_body(imported) == "<p><span>From the page</span></p>"
    assert render_article_body(draft, blocks) == "<p>native</p>"
    assert render_article_body(draft) == ""


def test_import_markdown_creates_titled_draft(article_store: ArticleStore, identity):
    article = article_store.import_markdown(identity, "# My Title\n\nBody text\n")

    assert article.title == "My Title"
    assert article.slug == f"my-title-{article.id.hex[:8]}"
    assert article.published is False
    blocks = article_store.list_article_blocks(article.id)
    assert [(b.type, b.position) for b in blocks] == [(BlockType.HEADING1, 0), (BlockType.PARAGRAPH, 1)]


def test_import_markdown_explicit_title_and_untitled(article_store: ArticleStore, identity):
    named = article_store.import_markdown(identity, "Just text\n", title="Chosen")
    untitled = article_store.import_markdown(identity, "Just text\n")

    assert named.title == "Chosen"
    assert untitled.title == DRAFT_TITLE
    with pytest.raises(AuthorizationError):
        article_store.import_markdown(None, "# x\n")


def test_contacts_flow(article_store: ArticleStore, identity):
    with pytest.raises(ArticleValidationError):
        article_store.submit_contact("Ann", "", "Hi")

    contact = article_store.submit_contact(" Ann ", "ann@example.com", " Hello ")
    assert (contact.name, contact.message, contact.read) == ("Ann", "Hello", False)

    with pytest.raises(AuthorizationError):
        article_store.list_contacts(None)
    assert [c.id for c in article_store.list_contacts(identity)] == [contact.id]

    assert article_store.toggle_contact_read(identity, contact.id, True).read is True
    with pytest.raises(ContactNotFoundError):
        article_store.toggle_contact_read(identity, uuid4(), True)

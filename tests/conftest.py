from __future__ import annotations

import os
from collections.abc import Iterator
from typing import Callable
from uuid import uuid4

import pytest
from sqlalchemy.engine import Engine

from article_block_store.db.engine import create_engine, create_session_factory
from article_block_store.db.schema import Base, DbArticle, DbBlock, DbContact, create_all
from article_block_store.models.article import Article, UserIdentity
from article_block_store.models.blocks import Block, BlockType
from article_block_store.models.factory import create_block
from article_block_store.repositories.article_repository import ArticleRepository
from article_block_store.repositories.block_repository import BlockRepository
from article_block_store.repositories.contact_repository import ContactRepository
from article_block_store.store import ArticleStore, BlockStore, create_article_store


@pytest.fixture(scope="session")
def postgres_url() -> str | None:
    """Return the Postgres test URL if provided via env."""
    return os.getenv("POSTGRES_TEST_URL")


@pytest.fixture
def engine(postgres_url: str | None) -> Iterator[Engine]:
    """Yield an engine targeting Postgres when configured; otherwise SQLite in-memory."""
    engine = create_engine(postgres_url) if postgres_url else create_engine()
    create_all(engine)
    try:
        yield engine
    finally:
        with engine.begin() as connection:
            if engine.dialect.name == "sqlite":
                Base.metadata.drop_all(bind=connection)
            else:
                connection.execute(DbBlock.__table__.delete())
                connection.execute(DbArticle.__table__.delete())
                connection.execute(DbContact.__table__.delete())
        engine.dispose()


@pytest.fixture
def session_factory(engine: Engine):
    return create_session_factory(engine)


@pytest.fixture
def block_repository(session_factory) -> BlockRepository:
    return BlockRepository(session_factory)


@pytest.fixture
def article_repository(session_factory) -> ArticleRepository:
    return ArticleRepository(session_factory)


@pytest.fixture
def contact_repository(session_factory) -> ContactRepository:
    return ContactRepository(session_factory)


@pytest.fixture
def article_store(session_factory) -> ArticleStore:
    return create_article_store(session_factory)


@pytest.fixture
def identity() -> UserIdentity:
    return UserIdentity(user_id="admin-1", email="admin@example.com")


@pytest.fixture
def article(article_repository: ArticleRepository) -> Article:
    """A stored draft article with no blocks."""
    return article_repository.create_article(Article(id=uuid4(), title="Draft", slug=f"draft-{uuid4().hex[:8]}"))


@pytest.fixture
def block_store(block_repository: BlockRepository, article: Article) -> BlockStore:
    """A store loaded with the (empty) ``article`` fixture."""
    store = BlockStore(block_repository)
    store.load_blocks(article.id)
    return store


@pytest.fixture
def block_factory() -> Callable[..., Block]:
    def _factory(block_type: BlockType | str = BlockType.PARAGRAPH, position: int = 0, **content) -> Block:
        return create_block(block_type, content or None, position)

    return _factory


class FakeTimer:
    """Manually fired stand-in for ``threading.Timer``."""

    def __init__(self, delay: float, callback: Callable[[], None]):
        self.delay = delay
        self.callback = callback
        self.started = False
        self.cancelled = False

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        if not self.cancelled:
            self.callback()


class FakeTimerFactory:
    def __init__(self) -> None:
        self.timers: list[FakeTimer] = []

    def __call__(self, delay: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def live(self) -> list[FakeTimer]:
        return [timer for timer in self.timers if timer.started and not timer.cancelled]


@pytest.fixture
def timers() -> FakeTimerFactory:
    return FakeTimerFactory()

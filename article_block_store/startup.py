"""Startup helpers for wiring settings, database and stores together."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from article_block_store.config import Settings, configure_logging
from article_block_store.db.engine import create_engine_from_settings, create_session_factory
from article_block_store.db.schema import create_all
from article_block_store.store import ArticleStore, BlockStore, create_article_store, create_block_store


@dataclass(slots=True)
class AppContext:
    settings: Settings
    engine: Engine
    session_factory: sessionmaker[Session]
    articles: ArticleStore

    def new_block_store(self) -> BlockStore:
        """A fresh, unloaded store for one editing session."""
        return create_block_store(self.session_factory)


def bootstrap(settings: Settings | None = None, *, setup_logging: bool = True) -> AppContext:
    """Build an application context, creating tables when missing.

    - ``settings`` defaults to ``Settings.from_env()`` (which reads ``.env``).
    - Logging is configured from ``settings.log_level`` unless disabled.
    """
    settings = settings or Settings.from_env()
    if setup_logging:
        configure_logging(settings.log_level)
    engine = create_engine_from_settings(settings)
    create_all(engine)
    session_factory = create_session_factory(engine)
    return AppContext(
        settings=settings,
        engine=engine,
        session_factory=session_factory,
        articles=create_article_store(session_factory),
    )


__all__ = ["AppContext", "bootstrap"]

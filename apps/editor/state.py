"""Shared NiceGUI app state (stores, renderers, seed data)."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from article_block_store import AppContext, bootstrap
from article_block_store.config import Settings
from article_block_store.models.article import UserIdentity

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[2]
DB_PATH = Path(__file__).resolve().parent.parent / "article_editor.db"
SAMPLE_DATA_DIR = PROJECT_ROOT / "data"

# Stands in for the host's auth capability in the demo.
DEMO_IDENTITY = UserIdentity(user_id="demo-admin", email="admin@example.com")


@dataclass(slots=True)
class EditorAppContext:
    app: AppContext
    identity: UserIdentity


_CONTEXT: Optional[EditorAppContext] = None


def get_context() -> EditorAppContext:
    """Return a singleton app context, seeding sample articles on first access."""

    global _CONTEXT
    if _CONTEXT is None:
        settings = Settings.from_env()
        if settings.database_url is None and settings.sqlite_path is None:
            settings = replace(settings, sqlite_path=DB_PATH)
        _CONTEXT = EditorAppContext(app=bootstrap(settings), identity=DEMO_IDENTITY)
        _seed_articles(_CONTEXT)
    return _CONTEXT


def _seed_articles(ctx: EditorAppContext) -> None:
    articles = ctx.app.articles
    if articles.list_articles(ctx.identity):
        logger.info("articles already present; skipping markdown seed")
        return
    for path in sorted(SAMPLE_DATA_DIR.glob("*.md")):
        logger.info("seeding %s", path.name)
        articles.import_markdown(ctx.identity, path.read_text(encoding="utf-8"))


__all__ = ["DEMO_IDENTITY", "EditorAppContext", "get_context"]

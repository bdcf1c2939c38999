from __future__ import annotations

from pathlib import Path

import pytest
from sqlalchemy import text
from sqlalchemy.pool import StaticPool

from article_block_store.config import Settings
from article_block_store.db.engine import create_engine, create_engine_from_settings
from article_block_store.db.schema import create_all


def test_create_engine_supports_sqlite_path(tmp_path: Path) -> None:
    db_path = tmp_path / "articles.db"

    engine = create_engine(sqlite_path=db_path)

    assert engine.url.drivername == "sqlite+pysqlite"
    assert engine.url.database == db_path.resolve().as_posix()
    engine.dispose()


def test_create_engine_rejects_conflicting_configuration(tmp_path: Path) -> None:
    db_path = tmp_path / "articles.db"

    with pytest.raises(ValueError):
        create_engine(connection_string="sqlite:///ignored.db", sqlite_path=db_path)


def test_in_memory_engine_shares_one_connection() -> None:
    engine = create_engine()

    assert engine.url.get_backend_name() == "sqlite"
    assert engine.url.database == ":memory:"
    assert isinstance(engine.pool, StaticPool)
    create_all(engine)
    with engine.connect() as connection:
        tables = {row[0] for row in connection.execute(text("SELECT name FROM sqlite_master WHERE type='table'"))}
    assert {"articles", "blocks", "contacts"} <= tables
    engine.dispose()


def test_sqlite_connections_enforce_foreign_keys(tmp_path: Path) -> None:
    engine = create_engine(sqlite_path=tmp_path / "fk.db")

    with engine.connect() as connection:
        assert connection.execute(text("PRAGMA foreign_keys")).scalar() == 1
    engine.dispose()


def test_create_engine_from_settings_prefers_url(tmp_path: Path) -> None:
    url_engine = create_engine_from_settings(
        Settings(database_url=f"sqlite:///{(tmp_path / 'url.db').as_posix()}", sqlite_path=tmp_path / "other.db")
    )
    path_engine = create_engine_from_settings(Settings(sqlite_path=tmp_path / "path.db", sql_echo=True))

    assert url_engine.url.database.endswith("url.db")
    assert path_engine.url.database.endswith("path.db")
    assert path_engine.echo is True
    url_engine.dispose()
    path_engine.dispose()


def test_bare_sqlite_url_is_treated_as_in_memory() -> None:
    engine = create_engine("sqlite://")

    assert isinstance(engine.pool, StaticPool)
    engine.dispose()

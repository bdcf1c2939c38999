"""Database engine helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from sqlalchemy import create_engine as sa_create_engine
from sqlalchemy import event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from article_block_store.config import Settings

DEFAULT_SQLITE_URL = "sqlite+pysqlite:///:memory:"


def create_engine(
    connection_string: str | None = None,
    *,
    sqlite_path: str | Path | None = None,
    echo: bool = False,
    connect_args: Mapping[str, Any] | None = None,
) -> Engine:
    """Create a SQLAlchemy engine for a URL, a SQLite file or in-memory SQLite.

    Parameters
    ----------
    connection_string:
        Full SQLAlchemy URL. Mutually exclusive with ``sqlite_path``.
    sqlite_path:
        Filesystem path to a SQLite database file. Expanded to an absolute path.
    echo:
        Enable SQLAlchemy engine echo logging.
    connect_args:
        Optional mapping passed through to ``sqlalchemy.create_engine``.

    Notes
    -----
    - With neither ``connection_string`` nor ``sqlite_path`` an in-memory
      SQLite database is used.
    - SQLite connections get ``PRAGMA foreign_keys=ON`` so deleting an article
      cascades to its blocks.
    """
    if connection_string and sqlite_path is not None:
        raise ValueError("Provide either 'connection_string' or 'sqlite_path', not both.")

    if connection_string:
        url = connection_string
    elif sqlite_path is not None:
        db_path = Path(sqlite_path).expanduser().resolve()
        url = f"sqlite+pysqlite:///{db_path.as_posix()}"
    else:
        url = DEFAULT_SQLITE_URL

    engine_kwargs: dict[str, Any] = {}
    args = dict(connect_args or {})
    if _is_memory_sqlite(url):
        # One shared connection so the autosave timer thread sees the same database.
        engine_kwargs["poolclass"] = StaticPool
        args.setdefault("check_same_thread", False)

    engine = sa_create_engine(url, echo=echo, future=True, connect_args=args, **engine_kwargs)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def create_engine_from_settings(settings: Settings) -> Engine:
    if settings.database_url:
        return create_engine(settings.database_url, echo=settings.sql_echo)
    return create_engine(sqlite_path=settings.sqlite_path, echo=settings.sql_echo)


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Return a configured session factory bound to the given engine."""
    return sessionmaker(bind=engine, class_=Session, expire_on_commit=False, future=True)


def _is_memory_sqlite(url: str) -> bool:
    parsed = make_url(url)
    return parsed.get_backend_name() == "sqlite" and parsed.database in (None, "", ":memory:")


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


__all__ = [
    "DEFAULT_SQLITE_URL",
    "create_engine",
    "create_engine_from_settings",
    "create_session_factory",
]

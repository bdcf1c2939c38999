from __future__ import annotations

from pathlib import Path

import pytest

from article_block_store.config import DEFAULT_AUTOSAVE_DELAY, Settings


def test_from_env_defaults() -> None:
    settings = Settings.from_env({})

    assert settings == Settings()
    assert settings.autosave_delay == DEFAULT_AUTOSAVE_DELAY
    assert settings.database_url is None
    assert settings.log_level == "INFO"


def test_from_env_reads_values() -> None:
    settings = Settings.from_env(
        {
            "DATABASE_URL": "postgresql+psycopg://user@localhost/articles",
            "SQLITE_PATH": "/tmp/articles.db",
            "AUTOSAVE_DELAY_SECONDS": "2.5",
            "SQL_ECHO": "Yes",
            "LOG_LEVEL": "debug",
        }
    )

    assert settings.database_url == "postgresql+psycopg://user@localhost/articles"
    assert settings.sqlite_path == Path("/tmp/articles.db")
    assert settings.autosave_delay == 2.5
    assert settings.sql_echo is True
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("value", ["soon", "-1"])
def test_from_env_rejects_bad_delay(value: str) -> None:
    with pytest.raises(ValueError, match="AUTOSAVE_DELAY_SECONDS"):
        Settings.from_env({"AUTOSAVE_DELAY_SECONDS": value})


def test_from_env_loads_dotenv_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("AUTOSAVE_DELAY_SECONDS=7\n", encoding="utf-8")
    monkeypatch.delenv("AUTOSAVE_DELAY_SECONDS", raising=False)

    settings = Settings.from_env(dotenv_path=env_file)

    assert settings.autosave_delay == 7.0
    monkeypatch.delenv("AUTOSAVE_DELAY_SECONDS", raising=False)

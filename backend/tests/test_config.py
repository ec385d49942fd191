"""Settings — database URL normalization and search defaults."""

from advocate_directory.config import Settings


def test_database_url_defaults_to_none(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    assert Settings(_env_file=None).database_url is None


def test_blank_database_url_means_no_store():
    assert Settings(database_url="  ").database_url is None


def test_postgres_url_gets_asyncpg_driver():
    settings = Settings(database_url="postgresql://u:p@db:5432/advocates")
    assert settings.database_url == "postgresql+asyncpg://u:p@db:5432/advocates"


def test_other_urls_pass_through():
    url = "sqlite+aiosqlite:///advocates.db"
    assert Settings(database_url=url).database_url == url


def test_search_defaults():
    settings = Settings(_env_file=None)
    assert settings.search_debounce_ms == 300
    assert settings.discard_stale_responses is False

import pytest

from todo_api.settings import get_settings

_ENV_VARS = [
    "PERSISTENCE_BACKEND",
    "SQLITE_DB_PATH",
    "CORS_ALLOW_ORIGINS",
    "LOG_LEVEL",
    "LOG_FORMAT",
    "HOST",
    "PORT",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestSettings:
    def test_defaults(self):
        s = get_settings()
        assert s.persistence_backend == "memory"
        assert s.sqlite_db_path == "./data/todos.db"
        assert s.cors_allow_origins == ["*"]
        assert s.log_level == "INFO"
        assert s.log_format == "json"
        assert s.host == "0.0.0.0"
        assert s.port == 8000

    def test_sqlite_backend(self, monkeypatch):
        monkeypatch.setenv("PERSISTENCE_BACKEND", " SQLite ")
        monkeypatch.setenv("SQLITE_DB_PATH", "/tmp/x.db")
        s = get_settings()
        assert s.persistence_backend == "sqlite"
        assert s.sqlite_db_path == "/tmp/x.db"

    def test_unknown_values_fall_back(self, monkeypatch):
        monkeypatch.setenv("PERSISTENCE_BACKEND", "postgres")
        monkeypatch.setenv("LOG_FORMAT", "xml")
        monkeypatch.setenv("PORT", "eighty")
        s = get_settings()
        assert s.persistence_backend == "memory"
        assert s.log_format == "json"
        assert s.port == 8000

    def test_origins_and_logging(self, monkeypatch):
        monkeypatch.setenv("CORS_ALLOW_ORIGINS", "http://a.test, http://b.test,,")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("LOG_FORMAT", "text")
        monkeypatch.setenv("PORT", "9001")
        s = get_settings()
        assert s.cors_allow_origins == ["http://a.test", "http://b.test"]
        assert s.log_level == "DEBUG"
        assert s.log_format == "text"
        assert s.port == 9001

"""
Configuration and engine helper tests
"""

import logging

import pytest

from sqlcrud.config import Settings
from sqlcrud.db.session import (
    MYSQL_DRIVER,
    build_database_url,
    build_dsn,
    create_db_engine,
    settings_to_url,
)
from sqlcrud.logging_config import setup_logging


class TestSettings:
    """Environment-driven configuration"""

    def test_defaults(self, monkeypatch):
        for name in ("DEBUG", "DB_HOST", "DB_PORT", "DB_DRIVER", "DATABASE_URL"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings(_env_file=None)

        assert settings.DEBUG is False
        assert settings.DB_HOST == "localhost"
        assert settings.DB_PORT is None
        assert settings.DB_DRIVER == MYSQL_DRIVER
        assert settings.DATABASE_URL is None

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("DB_HOST", "db.internal")
        monkeypatch.setenv("DB_PORT", "3307")
        monkeypatch.setenv("DB_USERNAME", "app")
        monkeypatch.setenv("DB_PASSWORD", "s3cret")
        monkeypatch.setenv("DB_DATABASE", "shop")
        settings = Settings(_env_file=None)

        assert settings.DB_HOST == "db.internal"
        assert settings.DB_PORT == 3307
        assert settings.DB_PASSWORD.get_secret_value() == "s3cret"
        assert "s3cret" not in repr(settings)


class TestUrls:
    """URL and DSN construction"""

    def test_build_dsn(self):
        assert build_dsn("localhost", "shop") == "mysql:host=localhost;dbname=shop"

    def test_build_database_url(self):
        url = build_database_url("db.internal", "app", "p@ss:word", "shop", port=3307)

        assert url.drivername == "mysql+pymysql"
        assert url.host == "db.internal"
        assert url.port == 3307
        assert url.username == "app"
        assert url.password == "p@ss:word"
        assert url.database == "shop"

    def test_settings_to_url_from_fields(self):
        settings = Settings(
            _env_file=None,
            DB_HOST="db.internal",
            DB_USERNAME="app",
            DB_PASSWORD="secret",
            DB_DATABASE="shop",
            DATABASE_URL=None,
        )
        url = settings_to_url(settings)

        assert url.drivername == MYSQL_DRIVER
        assert url.host == "db.internal"
        assert url.password == "secret"
        assert url.database == "shop"

    def test_settings_to_url_prefers_database_url(self):
        settings = Settings(_env_file=None, DATABASE_URL="sqlite:///./local.db")
        assert settings_to_url(settings).get_backend_name() == "sqlite"


class TestCreateEngine:
    """SQLite development backend"""

    def test_sqlite_now_function(self):
        engine = create_db_engine("sqlite://")
        try:
            with engine.connect() as conn:
                value = conn.exec_driver_sql("SELECT NOW()").scalar_one()
                fk = conn.exec_driver_sql("PRAGMA foreign_keys").scalar_one()
        finally:
            engine.dispose()

        assert len(value) == len("2024-01-01 00:00:00")
        assert fk == 1


class TestSetupLogging:
    """dictConfig installation"""

    @pytest.fixture(autouse=True)
    def restore_loggers(self):
        root = logging.getLogger()
        root_handlers, root_level = list(root.handlers), root.level
        yield
        root.handlers[:] = root_handlers
        root.setLevel(root_level)
        for name in ("sqlcrud", "sqlalchemy.engine"):
            logger = logging.getLogger(name)
            logger.handlers.clear()
            logger.propagate = True
            logger.setLevel(logging.NOTSET)

    def test_info_level_by_default(self):
        setup_logging(Settings(_env_file=None, DEBUG=False))

        assert logging.getLogger("sqlcrud").level == logging.INFO
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING

    def test_debug_level(self):
        setup_logging(Settings(_env_file=None, DEBUG=True))

        assert logging.getLogger("sqlcrud").level == logging.DEBUG
        assert logging.getLogger("sqlalchemy.engine").level == logging.INFO

"""
Database Engine Management Module

Builds connection URLs and synchronous SQLAlchemy engines.
MySQL/MariaDB (PyMySQL) is the production target; SQLite is supported for local development and tests.
"""

from typing import Optional, Union

from sqlalchemy import create_engine, event
from sqlalchemy.engine import URL, Engine, make_url

from sqlcrud.common.time import sql_now
from sqlcrud.config import Settings

MYSQL_DRIVER = "mysql+pymysql"


def build_dsn(host: str, database: str) -> str:
    """
    Build the driver-neutral MySQL data source name

    Only used for diagnostics; the engine is created from build_database_url().

    Example:
        >>> build_dsn("localhost", "shop")
        'mysql:host=localhost;dbname=shop'
    """
    return f"mysql:host={host};dbname={database}"


def build_database_url(
    host: str,
    username: str,
    password: str,
    database: str,
    port: Optional[int] = None,
    drivername: str = MYSQL_DRIVER,
) -> URL:
    """
    Build a SQLAlchemy URL for a MySQL server

    URL.create() quotes special characters in the credentials.
    """
    return URL.create(
        drivername,
        username=username,
        password=password,
        host=host,
        port=port,
        database=database,
    )


def settings_to_url(settings: Settings) -> URL:
    """Resolve the connection URL from configuration, preferring DATABASE_URL when set."""
    if settings.DATABASE_URL:
        return make_url(settings.DATABASE_URL)
    return build_database_url(
        host=settings.DB_HOST,
        username=settings.DB_USERNAME,
        password=settings.DB_PASSWORD.get_secret_value(),
        database=settings.DB_DATABASE,
        port=settings.DB_PORT,
        drivername=settings.DB_DRIVER,
    )


def create_db_engine(url: Union[str, URL], echo: bool = False) -> Engine:
    """
    Create a synchronous database engine

    echo=True prints SQL statements through the sqlalchemy.engine logger.

    Args:
        url: SQLAlchemy URL or URL string
        echo: Whether to log emitted SQL

    Returns:
        Engine: Database engine (no connection is opened yet)
    """
    url = make_url(url)
    is_sqlite = url.get_backend_name() == "sqlite"

    engine = create_engine(
        url,
        echo=echo,
        # SQLite specific configuration
        connect_args={"check_same_thread": False} if is_sqlite else {},
    )

    if is_sqlite:
        # Enable foreign keys and provide MySQL's NOW() so soft deletes work locally
        @event.listens_for(engine, "connect")
        def _set_sqlite_pragma(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()
            dbapi_connection.create_function("NOW", 0, sql_now)

    return engine

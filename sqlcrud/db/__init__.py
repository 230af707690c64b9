"""
Database Module Initialization
"""

from sqlcrud.db.session import (
    MYSQL_DRIVER,
    build_database_url,
    build_dsn,
    create_db_engine,
    settings_to_url,
)

__all__ = [
    "MYSQL_DRIVER",
    "build_database_url",
    "build_dsn",
    "create_db_engine",
    "settings_to_url",
]

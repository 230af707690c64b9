"""
sqlcrud

Generic CRUD, soft delete and pagination helpers over a single MySQL connection.
"""

from sqlcrud.common.errors import (
    ConnectionClosedError,
    DataAccessError,
    DatabaseConnectionError,
    QueryExecutionError,
    TransactionError,
)
from sqlcrud.config import Settings, get_settings
from sqlcrud.repositories.sqlalchemy.data_access import DataAccess

__version__ = "0.1.0"

__all__ = [
    "DataAccess",
    "DataAccessError",
    "DatabaseConnectionError",
    "QueryExecutionError",
    "ConnectionClosedError",
    "TransactionError",
    "Settings",
    "get_settings",
]

"""
Data Access Layer Module Initialization
"""

from sqlcrud.repositories.base import (
    CrudRepository,
    PaginatedRepository,
    QueryExecutor,
    ResultSet,
    Row,
    SoftDeleteRepository,
    TransactionalRepository,
)

__all__ = [
    "CrudRepository",
    "PaginatedRepository",
    "QueryExecutor",
    "ResultSet",
    "Row",
    "SoftDeleteRepository",
    "TransactionalRepository",
]

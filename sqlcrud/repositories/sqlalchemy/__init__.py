"""
SQLAlchemy Repository Implementation Module Initialization
"""

from sqlcrud.repositories.sqlalchemy.data_access import DataAccess

__all__ = [
    "DataAccess",
]

"""
Test Configuration Module
"""

import pytest

from sqlcrud.repositories.sqlalchemy.data_access import DataAccess


# Use in-memory database for testing
TEST_DATABASE_URL = "sqlite://"

USERS_DDL = """
CREATE TABLE users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    email TEXT UNIQUE,
    deleted_at TEXT NULL
)
"""


@pytest.fixture
def db():
    """Create a DataAccess over an in-memory database with a users table"""
    data_access = DataAccess.from_url(TEST_DATABASE_URL)
    data_access.execute_query(USERS_DDL)

    yield data_access

    # Clean up
    data_access.close()


@pytest.fixture
def seeded_db(db):
    """users table holding Ada (id 1), Grace (id 2) and Linus (id 3)"""
    for name in ("Ada", "Grace", "Linus"):
        db.create("users", {"name": name, "email": f"{name.lower()}@example.com"})
    return db


@pytest.fixture
def file_db_url(tmp_path):
    """URL of an on-disk SQLite database, for tests that need two connections"""
    url = f"sqlite:///{tmp_path / 'crud.db'}"
    setup = DataAccess.from_url(url)
    setup.execute_query(USERS_DDL)
    setup.close()
    return url

"""
Base Repository Interface Module

Defines the capability interfaces for data access, so callers can depend on
only the operations they use (e.g. read-only code takes a CrudRepository,
unit-of-work code takes a TransactionalRepository).
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional, Union

from sqlalchemy.engine import CursorResult

Row = dict[str, Any]
ResultSet = list[Row]


class QueryExecutor(ABC):
    """Raw statement execution"""

    @abstractmethod
    def execute_query(
        self, query: str, params: Optional[Mapping[str, Any]] = None
    ) -> CursorResult:
        """
        Prepare and execute a statement with named parameters

        Args:
            query: SQL text with :name placeholders
            params: Placeholder name -> value

        Returns:
            CursorResult: Open result handle

        Raises:
            QueryExecutionError: Driver failed to prepare or execute
        """
        pass


class TransactionalRepository(ABC):
    """Connection-scoped, non-nested transaction control"""

    @abstractmethod
    def begin_transaction(self) -> None:
        pass

    @abstractmethod
    def commit(self) -> None:
        pass

    @abstractmethod
    def rollback(self) -> None:
        pass


class CrudRepository(ABC):
    """Generic create/read/update/delete over any table"""

    @abstractmethod
    def create(self, table: str, data: Mapping[str, Any]) -> CursorResult:
        """
        Insert one row

        Args:
            table: Table name (trusted, interpolated verbatim)
            data: Column -> value, bound as named parameters

        Returns:
            CursorResult: Exposes lastrowid and rowcount
        """
        pass

    @abstractmethod
    def read(
        self, table: str, condition: str = "", fetch: bool = True
    ) -> Union[ResultSet, CursorResult]:
        """
        Select rows

        Args:
            table: Table name
            condition: Raw WHERE fragment, empty for no filter
            fetch: True returns a list of dict rows, False the open result handle
        """
        pass

    @abstractmethod
    def update(self, table: str, data: Mapping[str, Any], condition: str) -> CursorResult:
        pass

    @abstractmethod
    def delete(self, table: str, condition: str) -> CursorResult:
        pass


class SoftDeleteRepository(ABC):
    """Logical deletion through a deleted_at timestamp column"""

    @abstractmethod
    def soft_delete(self, table: str, condition: str) -> CursorResult:
        """Set deleted_at = NOW() on matching rows"""
        pass

    @abstractmethod
    def read_with_soft_delete(
        self, table: str, condition: str = "", fetch: bool = True
    ) -> Union[ResultSet, CursorResult]:
        """Like read(), restricted to rows whose deleted_at IS NULL"""
        pass


class PaginatedRepository(ABC):
    """LIMIT/OFFSET paging"""

    @abstractmethod
    def read_with_pagination(
        self, table: str, condition: str = "", page: int = 1, per_page: int = 10
    ) -> ResultSet:
        """
        Read one page of rows

        Args:
            page: 1-based page number (not validated)
            per_page: Page size

        Returns:
            ResultSet: Always materialized
        """
        pass

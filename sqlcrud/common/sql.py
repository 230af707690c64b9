"""
SQL Text Builders

Each builder returns (sql, params) ready for DataAccess.execute_query.

Table names and condition fragments are caller-trusted SQL text and are
interpolated verbatim; only INSERT/UPDATE values are bound as named parameters.
A literal colon inside a condition must be written as "\\:" so it is not read
as a bind marker.
"""

from typing import Any, Mapping

Params = dict[str, Any]


def has_condition(condition: str) -> bool:
    """An empty string or "0" means no filter, as for an optional WHERE clause"""
    return bool(condition) and condition != "0"


def build_insert(table: str, data: Mapping[str, Any]) -> tuple[str, Params]:
    """INSERT INTO <table> (k1, k2) VALUES (:k1, :k2)"""
    keys = list(data.keys())
    columns = ", ".join(keys)
    placeholders = ", ".join(f":{key}" for key in keys)
    sql = f"INSERT INTO {table} ({columns}) VALUES ({placeholders})"
    return sql, dict(data)


def build_select(table: str, condition: str = "") -> tuple[str, Params]:
    sql = f"SELECT * FROM {table}"
    if has_condition(condition):
        sql += f" WHERE {condition}"
    return sql, {}


def build_update(table: str, data: Mapping[str, Any], condition: str) -> tuple[str, Params]:
    """UPDATE <table> SET k1 = :k1, k2 = :k2 WHERE <condition>"""
    set_clause = ", ".join(f"{key} = :{key}" for key in data.keys())
    sql = f"UPDATE {table} SET {set_clause} WHERE {condition}"
    return sql, dict(data)


def build_delete(table: str, condition: str) -> tuple[str, Params]:
    """
    DELETE FROM <table> WHERE <condition>

    The returned params carry the condition under "condition", which matches
    no placeholder in the statement and is ignored at bind time.
    """
    sql = f"DELETE FROM {table} WHERE {condition}"
    return sql, {"condition": condition}


def build_soft_delete(table: str, condition: str) -> tuple[str, Params]:
    sql = f"UPDATE {table} SET deleted_at = NOW() WHERE {condition}"
    return sql, {}


def build_select_not_deleted(table: str, condition: str = "") -> tuple[str, Params]:
    sql = f"SELECT * FROM {table} WHERE deleted_at IS NULL"
    if has_condition(condition):
        sql += f" AND ({condition})"
    return sql, {}


def page_offset(page: int, per_page: int) -> int:
    """Row offset for a 1-based page number. Not validated: page <= 0 yields offset <= 0."""
    return (page - 1) * per_page


def build_paginated_select(
    table: str,
    condition: str = "",
    page: int = 1,
    per_page: int = 10,
) -> tuple[str, Params]:
    sql, params = build_select(table, condition)
    sql += f" LIMIT {int(per_page)} OFFSET {page_offset(int(page), int(per_page))}"
    return sql, params

"""Logical CRUD operations and the statement names they map to."""

from __future__ import annotations

from enum import StrEnum


class SqlMethod(StrEnum):
    INSERT_ONE = "insert"
    UPDATE_BY_ID = "updateById"
    UPDATE = "update"
    DELETE_BY_ID = "deleteById"
    DELETE = "delete"
    SELECT_BY_ID = "selectById"
    SELECT_LIST = "selectList"
    SELECT_PAGE = "selectPage"
    SELECT_COUNT = "selectCount"


class SqlCommandType(StrEnum):
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"
    SELECT = "select"


# Raw SQL escape hatches, injected for every entity type alongside SqlMethod.
INSERT_SQL = "insertSql"
UPDATE_SQL = "updateSql"
DELETE_SQL = "deleteSql"
SELECT_LIST_SQL = "selectListSql"
SELECT_PAGE_SQL = "selectPageSql"

RAW_SQL_METHODS = (INSERT_SQL, UPDATE_SQL, DELETE_SQL, SELECT_LIST_SQL, SELECT_PAGE_SQL)

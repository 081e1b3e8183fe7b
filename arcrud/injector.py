"""Generate the standard statement set for an entity type from its Table."""

from __future__ import annotations

import re
from dataclasses import replace
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, func, insert, literal_column, select, text, update

from arcrud.exceptions import ActiveRecordError
from arcrud.mapping import MappedStatement, ResultKind, TableInfo
from arcrud.methods import (
    RAW_SQL_METHODS,
    SELECT_LIST_SQL,
    SELECT_PAGE_SQL,
    SqlCommandType,
    SqlMethod,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from pydantic import BaseModel
    from sqlalchemy import Executable, Select, Table, TextClause
    from sqlalchemy.sql.dml import Delete, Update

    from arcrud.sql_args import FilledSql
    from arcrud.wrapper import Wrapper

_TRAILING_TERMINATORS = re.compile(r"[\s;]+\Z")


def build_statements(
    entity_type: type[BaseModel],
    table: Table,
    namespace: str | None = None,
) -> tuple[TableInfo, list[MappedStatement]]:
    """Build the statement table and mapped statements for *entity_type*.

    Entity fields map to same-named columns; fields without a column are
    ignored on write. The table must have a single-column primary key.
    """
    key_columns = list(table.primary_key.columns)
    if len(key_columns) != 1:
        raise ActiveRecordError(
            f"Table {table.name!r} must have exactly one primary key column, "
            f"found {len(key_columns)}"
        )
    key = key_columns[0]
    ns = namespace or table.name
    column_names = frozenset(table.c.keys())

    def values_of(entity: BaseModel, *, include_key: bool) -> dict[str, Any]:
        data = entity.model_dump(exclude_none=True)
        return {
            name: value
            for name, value in data.items()
            if name in column_names and (include_key or name != key.name)
        }

    def insert_one(entity: BaseModel) -> Executable:
        values = values_of(entity, include_key=True)
        stmt = insert(table)
        return stmt.values(**values) if values else stmt

    def update_by_id(entity: Any) -> Executable | None:
        values = values_of(entity, include_key=False)
        if not values:
            return None
        return update(table).where(key == entity.primary_key()).values(**values)

    def update_by_wrapper(payload: Mapping[str, Any]) -> Executable | None:
        values = values_of(payload["et"], include_key=False)
        if not values:
            return None
        return _apply_where(update(table).values(**values), _ew(payload))

    def delete_by_id(id_: Any) -> Executable:
        return delete(table).where(key == id_)

    def delete_by_wrapper(payload: Mapping[str, Any] | None) -> Executable:
        return _apply_where(delete(table), _ew(payload))

    def select_by_id(id_: Any) -> Executable:
        return select(table).where(key == id_)

    def select_list(payload: Mapping[str, Any] | None) -> Executable:
        wrapper = _ew(payload)
        return _apply_order(_apply_where(select(table), wrapper), wrapper)

    def select_count(payload: Mapping[str, Any] | None) -> Executable:
        return _apply_where(select(func.count()).select_from(table), _ew(payload))

    def stmt(
        method: str,
        command: SqlCommandType,
        build: Callable[[Any], Executable | None],
        result: ResultKind = ResultKind.ROW_COUNT,
        **extra: Any,
    ) -> MappedStatement:
        return MappedStatement(
            id=f"{ns}.{method}", command=command, build=build, result=result, **extra
        )

    entity_rows = {"result": ResultKind.ENTITY, "entity_type": entity_type}
    statements = [
        stmt(SqlMethod.INSERT_ONE, SqlCommandType.INSERT, insert_one, key_property=key.name),
        stmt(SqlMethod.UPDATE_BY_ID, SqlCommandType.UPDATE, update_by_id),
        stmt(SqlMethod.UPDATE, SqlCommandType.UPDATE, update_by_wrapper),
        stmt(SqlMethod.DELETE_BY_ID, SqlCommandType.DELETE, delete_by_id),
        stmt(SqlMethod.DELETE, SqlCommandType.DELETE, delete_by_wrapper),
        stmt(SqlMethod.SELECT_BY_ID, SqlCommandType.SELECT, select_by_id, **entity_rows),
        stmt(SqlMethod.SELECT_LIST, SqlCommandType.SELECT, select_list, **entity_rows),
        stmt(SqlMethod.SELECT_PAGE, SqlCommandType.SELECT, select_list, **entity_rows),
        stmt(SqlMethod.SELECT_COUNT, SqlCommandType.SELECT, select_count, ResultKind.SCALAR),
    ]
    for method in RAW_SQL_METHODS:
        if method == SELECT_LIST_SQL:
            statements.append(stmt(method, SqlCommandType.SELECT, _raw_text, ResultKind.MAPPING))
        elif method == SELECT_PAGE_SQL:
            statements.append(stmt(method, SqlCommandType.SELECT, _raw_select, ResultKind.MAPPING))
        else:
            command = SqlCommandType(method.removesuffix("Sql"))
            statements.append(stmt(method, command, _raw_text))

    info = TableInfo(
        entity_type=entity_type,
        table=table,
        namespace=ns,
        key_column=key.name,
        statements=frozenset(s.id.removeprefix(f"{ns}.") for s in statements),
    )
    return info, statements


def _ew(payload: Mapping[str, Any] | None) -> Wrapper | None:
    if not payload:
        return None
    return payload.get("ew")


def _apply_where(stmt: Select | Update | Delete, wrapper: Wrapper | None) -> Any:
    if wrapper is None or not wrapper.where_segments:
        return stmt
    clause = text(wrapper.where_sql)
    if wrapper.params:
        clause = clause.bindparams(**wrapper.params)
    return stmt.where(clause)


def _apply_order(stmt: Select, wrapper: Wrapper | None) -> Select:
    if wrapper is None or not wrapper.order_by_segments:
        return stmt
    return stmt.order_by(text(wrapper.order_by_sql))


def _raw_text(filled: FilledSql) -> TextClause:
    clause = text(filled.sql)
    if filled.params:
        clause = clause.bindparams(**filled.params)
    return clause


def _raw_select(filled: FilledSql) -> Select:
    """Wrap a raw SELECT as a derived table so it can be counted and paged.

    Only used for paged raw queries; unpaged ones run as written. An ORDER BY
    inside the raw SQL is not guaranteed to survive the wrapping, and some
    dialects reject it in a derived table altogether.
    """
    sql = _TRAILING_TERMINATORS.sub("", filled.sql)
    source = _raw_text(replace(filled, sql=sql)).columns().subquery("raw_sql")
    return select(literal_column("*")).select_from(source)

"""SQLAlchemy-backed execution session for mapped statements."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from sqlalchemy import Select, func, select

from arcrud.exceptions import ActiveRecordError, TooManyResultsError
from arcrud.mapping import ResultKind
from arcrud.metrics import statement_duration_seconds

if TYPE_CHECKING:
    from sqlalchemy import Connection, CursorResult, Engine, Executable

    from arcrud.mapping import MappedStatement
    from arcrud.page import Page
    from arcrud.registry import StatementRegistry

logger = structlog.get_logger()


class SqlSession:
    """Runs mapped statements by id against a SQLAlchemy engine.

    Every call opens its own connection; writes commit on success
    (autocommit per statement). Driver and SQLAlchemy errors propagate
    unchanged.
    """

    def __init__(
        self,
        engine: Engine,
        registry: StatementRegistry,
        *,
        max_page_size: int = 0,
    ) -> None:
        self._engine = engine
        self._registry = registry
        self._max_page_size = max_page_size

    @property
    def engine(self) -> Engine:
        return self._engine

    # --- Writes ---

    def insert(self, statement_id: str, payload: Any = None) -> int:
        return self._execute_write(statement_id, payload)

    def update(self, statement_id: str, payload: Any = None) -> int:
        return self._execute_write(statement_id, payload)

    def delete(self, statement_id: str, payload: Any = None) -> int:
        return self._execute_write(statement_id, payload)

    # --- Reads ---

    def select_one(self, statement_id: str, payload: Any = None) -> Any | None:
        rows = self.select_list(statement_id, payload)
        if len(rows) > 1:
            raise TooManyResultsError(
                f"{statement_id} expected at most one row, got {len(rows)}"
            )
        return rows[0] if rows else None

    def select_list(
        self,
        statement_id: str,
        payload: Any = None,
        page: Page[Any] | None = None,
    ) -> list[Any]:
        ms = self._registry.mapped_statement(statement_id)
        stmt = ms.build(payload)
        if stmt is None:
            return []
        with statement_duration_seconds.labels(command=ms.command.value).time():
            with self._engine.connect() as conn:
                if page is not None:
                    stmt = self._paginate(conn, ms, stmt, page)
                rows = self._map_rows(ms, conn.execute(stmt))
        logger.debug("statement_executed", statement=statement_id, rows=len(rows))
        return rows

    # --- Internals ---

    def _execute_write(self, statement_id: str, payload: Any) -> int:
        ms = self._registry.mapped_statement(statement_id)
        stmt = ms.build(payload)
        if stmt is None:
            logger.debug("statement_skipped", statement=statement_id, reason="no_values")
            return 0
        with statement_duration_seconds.labels(command=ms.command.value).time():
            with self._engine.begin() as conn:
                result = conn.execute(stmt)
                affected = result.rowcount
                if ms.key_property is not None:
                    _write_back_key(ms.key_property, payload, result)
        logger.debug("statement_executed", statement=statement_id, affected=affected)
        return affected

    def _paginate(
        self,
        conn: Connection,
        ms: MappedStatement,
        stmt: Executable,
        page: Page[Any],
    ) -> Select:
        if not isinstance(stmt, Select):
            raise ActiveRecordError(f"Statement {ms.id} cannot be paged")
        if self._max_page_size and page.size > self._max_page_size:
            logger.debug(
                "page_size_clamped",
                statement=ms.id,
                requested=page.size,
                limit=self._max_page_size,
            )
            page.size = self._max_page_size
        if page.search_count:
            counted = select(func.count()).select_from(stmt.order_by(None).subquery())
            page.total = conn.execute(counted).scalar_one()
        return stmt.limit(page.size).offset(page.offset)

    @staticmethod
    def _map_rows(ms: MappedStatement, result: CursorResult[Any]) -> list[Any]:
        if ms.result is ResultKind.ENTITY and ms.entity_type is not None:
            return [ms.entity_type.model_validate(dict(row)) for row in result.mappings()]
        if ms.result is ResultKind.SCALAR:
            return list(result.scalars())
        return [dict(row) for row in result.mappings()]


def _write_back_key(key_property: str, entity: Any, result: CursorResult[Any]) -> None:
    """Copy a database-generated primary key onto an entity that had none."""
    if getattr(entity, key_property, None) is not None:
        return
    generated = result.inserted_primary_key
    if generated and generated[0] is not None:
        setattr(entity, key_property, generated[0])

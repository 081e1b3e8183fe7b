"""Per-type statement tables and the mapped statements they name."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from arcrud.exceptions import UnresolvedStatementError

if TYPE_CHECKING:
    from collections.abc import Callable

    from sqlalchemy import Executable, Table

    from arcrud.methods import SqlCommandType


class ResultKind(StrEnum):
    ROW_COUNT = "row_count"
    ENTITY = "entity"
    SCALAR = "scalar"
    MAPPING = "mapping"


@dataclass(frozen=True)
class MappedStatement:
    """One executable operation for one entity type.

    ``build`` turns the call payload into a SQLAlchemy executable. It returns
    None when there is nothing to execute (an update with no values), which
    the session reports as zero affected rows.
    """

    id: str
    command: SqlCommandType
    build: Callable[[Any], Executable | None]
    result: ResultKind = ResultKind.ROW_COUNT
    entity_type: type | None = None
    key_property: str | None = None


@dataclass(frozen=True)
class TableInfo:
    """Statement table for one entity type: logical method name -> statement id."""

    entity_type: type
    table: Table
    namespace: str
    key_column: str
    statements: frozenset[str]

    def sql_statement(self, method: str) -> str:
        if method not in self.statements:
            raise UnresolvedStatementError(
                f"{self.entity_type.__name__} has no statement for {method!r}"
            )
        return f"{self.namespace}.{method}"

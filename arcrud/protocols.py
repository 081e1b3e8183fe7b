"""Port interfaces (Protocols) consumed by the Active Record core."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from arcrud.page import Page


@runtime_checkable
class SqlSessionPort(Protocol):
    """Executes statements by id and maps their results."""

    def insert(self, statement_id: str, payload: Any = None) -> int: ...
    def update(self, statement_id: str, payload: Any = None) -> int: ...
    def delete(self, statement_id: str, payload: Any = None) -> int: ...
    def select_one(self, statement_id: str, payload: Any = None) -> Any | None: ...
    def select_list(
        self,
        statement_id: str,
        payload: Any = None,
        page: Page[Any] | None = None,
    ) -> list[Any]: ...


@runtime_checkable
class StatementTablePort(Protocol):
    """Statement names for a single entity type."""

    def sql_statement(self, method: str) -> str: ...


@runtime_checkable
class StatementLookupPort(Protocol):
    """Finds the statement table of an entity type."""

    def table_for(self, entity_type: type) -> StatementTablePort: ...

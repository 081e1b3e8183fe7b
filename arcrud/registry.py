"""Registry of statement tables and mapped statements, keyed by entity type."""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

import structlog

from arcrud.exceptions import (
    DuplicateRegistrationError,
    RegistryFrozenError,
    UnresolvedStatementError,
)
from arcrud.injector import build_statements

if TYPE_CHECKING:
    from collections.abc import Mapping

    from pydantic import BaseModel
    from sqlalchemy import Table

    from arcrud.mapping import MappedStatement, TableInfo

logger = structlog.get_logger()


class StatementRegistry:
    """Holds every registered entity type's statement table.

    Populated once at startup, then frozen. A frozen registry is read-only
    and can be shared between threads without locking.
    """

    def __init__(self) -> None:
        self._tables: Mapping[type, TableInfo] = {}
        self._statements: Mapping[str, MappedStatement] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def entity_types(self) -> tuple[type, ...]:
        return tuple(self._tables)

    def register(
        self,
        entity_type: type[BaseModel],
        table: Table,
        *,
        namespace: str | None = None,
    ) -> TableInfo:
        """Inject the standard statement set for *entity_type* backed by *table*."""
        if self._frozen:
            raise RegistryFrozenError(
                f"Cannot register {entity_type.__name__}: registry is frozen"
            )
        if entity_type in self._tables:
            raise DuplicateRegistrationError(f"{entity_type.__name__} is already registered")

        info, statements = build_statements(entity_type, table, namespace)
        clashes = sorted(s.id for s in statements if s.id in self._statements)
        if clashes:
            raise DuplicateRegistrationError(
                f"Namespace {info.namespace!r} is already in use: {', '.join(clashes)}"
            )

        tables = dict(self._tables)
        tables[entity_type] = info
        statement_map = dict(self._statements)
        statement_map.update((s.id, s) for s in statements)
        self._tables = tables
        self._statements = statement_map

        logger.debug(
            "entity_registered",
            entity=entity_type.__name__,
            table=table.name,
            namespace=info.namespace,
            statements=len(statements),
        )
        return info

    def freeze(self) -> None:
        if self._frozen:
            return
        self._tables = MappingProxyType(dict(self._tables))
        self._statements = MappingProxyType(dict(self._statements))
        self._frozen = True
        logger.debug("registry_frozen", entities=len(self._tables))

    def table_for(self, entity_type: type) -> TableInfo:
        try:
            return self._tables[entity_type]
        except KeyError:
            raise UnresolvedStatementError(
                f"{entity_type.__name__} is not a registered entity type"
            ) from None

    def mapped_statement(self, statement_id: str) -> MappedStatement:
        try:
            return self._statements[statement_id]
        except KeyError:
            raise UnresolvedStatementError(f"Unknown statement {statement_id!r}") from None

    def __contains__(self, entity_type: object) -> bool:
        return entity_type in self._tables

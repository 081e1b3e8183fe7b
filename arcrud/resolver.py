"""Resolve (entity type, logical operation) pairs to statement ids."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from arcrud.methods import SqlMethod
    from arcrud.protocols import StatementLookupPort


class StatementResolver:
    """Pure lookup over a statement registry.

    Holds no state of its own; concurrent use is safe as long as the
    underlying registry is frozen.
    """

    def __init__(self, lookup: StatementLookupPort) -> None:
        self._lookup = lookup

    def resolve(self, entity_type: type, operation: SqlMethod | str) -> str:
        """Return the statement id for *operation* on *entity_type*.

        Raises UnresolvedStatementError if the type or operation is unknown.
        """
        return self._lookup.table_for(entity_type).sql_statement(str(operation))

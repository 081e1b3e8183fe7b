"""Active Record base class: entities that insert, update, delete and query themselves."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import BaseModel, ConfigDict, PrivateAttr
from typing_extensions import Self

from arcrud.exceptions import PrimaryKeyRequiredError, RecordNotBoundError
from arcrud.methods import (
    DELETE_SQL,
    INSERT_SQL,
    SELECT_LIST_SQL,
    SELECT_PAGE_SQL,
    UPDATE_SQL,
    SqlMethod,
)
from arcrud.metrics import dispatch_total
from arcrud.results import count_of, fill_page, first_of, ret_bool, single
from arcrud.shaping import as_wrapper, condition_payload, page_payload, raw_sql_payload

if TYPE_CHECKING:
    from arcrud.page import Page
    from arcrud.protocols import SqlSessionPort
    from arcrud.record import Record
    from arcrud.wrapper import Wrapper


class _Unset(Enum):
    TOKEN = 0


_UNSET = _Unset.TOKEN


class Model(BaseModel, ABC):
    """Base for persistent entities.

    Subclasses declare their fields (same names as the table columns) and
    implement ``primary_key()``. The class must be registered with a
    StatementRegistry and bound to a Record before use::

        class User(Model):
            id: int | None = None
            name: str = ""

            def primary_key(self) -> int | None:
                return self.id

    Condition arguments accept either a Wrapper or a clause string with
    ``{0}``-style placeholders followed by its arguments.
    """

    model_config = ConfigDict(extra="ignore")

    __record__: ClassVar[Record | None] = None
    _record: Record | None = PrivateAttr(default=None)

    @abstractmethod
    def primary_key(self) -> Any:
        """Return the primary key value, or None before it is assigned."""

    def use_record(self, record: Record) -> Self:
        """Run this instance against *record* instead of the class binding."""
        self._record = record
        return self

    # --- Insert ---

    def insert(self) -> bool:
        session, statement = self._dispatch(SqlMethod.INSERT_ONE)
        return ret_bool(session.insert(statement, self))

    def insert_or_update(self) -> bool:
        """Update by primary key when one is set, insert otherwise."""
        if self.primary_key() is not None:
            session, statement = self._dispatch(SqlMethod.UPDATE_BY_ID)
            return ret_bool(session.update(statement, self))
        return self.insert()

    def insert_sql(self, sql: str, *args: Any) -> bool:
        session, statement = self._dispatch(INSERT_SQL)
        return ret_bool(session.insert(statement, raw_sql_payload(sql, args)))

    # --- Delete ---

    def delete_by_id(self, pk: Any = _UNSET) -> bool:
        """Delete the row with *pk*, or this entity's own row when omitted.

        An explicit *pk* is passed through as given, None included.
        """
        if pk is _UNSET:
            pk = self._require_primary_key("delete_by_id")
        session, statement = self._dispatch(SqlMethod.DELETE_BY_ID)
        return ret_bool(session.delete(statement, pk))

    def delete(self, where: Wrapper | str | None = None, *args: Any) -> bool:
        payload = condition_payload(as_wrapper(where, args))
        session, statement = self._dispatch(SqlMethod.DELETE)
        return ret_bool(session.delete(statement, payload))

    def delete_sql(self, sql: str, *args: Any) -> bool:
        session, statement = self._dispatch(DELETE_SQL)
        return ret_bool(session.delete(statement, raw_sql_payload(sql, args)))

    # --- Update ---

    def update_by_id(self) -> bool:
        self._require_primary_key("update_by_id")
        session, statement = self._dispatch(SqlMethod.UPDATE_BY_ID)
        return ret_bool(session.update(statement, self))

    def update(self, where: Wrapper | str | None = None, *args: Any) -> bool:
        """Write this entity's non-None fields to every row matching *where*."""
        payload = condition_payload(as_wrapper(where, args), entity=self)
        session, statement = self._dispatch(SqlMethod.UPDATE)
        return ret_bool(session.update(statement, payload))

    def update_sql(self, sql: str, *args: Any) -> bool:
        session, statement = self._dispatch(UPDATE_SQL)
        return ret_bool(session.update(statement, raw_sql_payload(sql, args)))

    # --- Select ---

    def select_all(self) -> list[Self]:
        session, statement = self._dispatch(SqlMethod.SELECT_LIST)
        return session.select_list(statement)

    def select_by_id(self, pk: Any = _UNSET) -> Self | None:
        if pk is _UNSET:
            pk = self.primary_key()
        session, statement = self._dispatch(SqlMethod.SELECT_BY_ID)
        return single(session.select_one(statement, pk))

    def select_list(self, where: Wrapper | str | None = None, *args: Any) -> list[Self]:
        payload = condition_payload(as_wrapper(where, args))
        session, statement = self._dispatch(SqlMethod.SELECT_LIST)
        return session.select_list(statement, payload)

    def select_one(self, where: Wrapper | str | None = None, *args: Any) -> Self | None:
        """First row matching *where*; extra matches are logged, not raised."""
        rows = self.select_list(as_wrapper(where, args))
        return first_of(rows, type(self).__name__)

    def select_page(
        self,
        page: Page[Self],
        where: Wrapper | str | None = None,
        *args: Any,
    ) -> Page[Self]:
        """Fill *page* with one page of rows matching *where* and return it.

        A non-empty ``page.order_by_field`` is appended to the wrapper's
        ORDER BY before the query runs.
        """
        payload = page_payload(page, as_wrapper(where, args))
        session, statement = self._dispatch(SqlMethod.SELECT_PAGE)
        return fill_page(page, session.select_list(statement, payload, page))

    def select_count(self, where: Wrapper | str | None = None, *args: Any) -> int:
        payload = condition_payload(as_wrapper(where, args))
        session, statement = self._dispatch(SqlMethod.SELECT_COUNT)
        return count_of(session.select_list(statement, payload))

    def select_list_sql(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        session, statement = self._dispatch(SELECT_LIST_SQL)
        return session.select_list(statement, raw_sql_payload(sql, args))

    def select_page_sql(self, page: Page[Any], sql: str, *args: Any) -> list[dict[str, Any]]:
        """One page of raw rows; ``page.total`` is filled, ``page.records`` is not.

        The query is paged as a derived table, so an ORDER BY inside *sql*
        does not reliably order the page.
        """
        session, statement = self._dispatch(SELECT_PAGE_SQL)
        return session.select_list(statement, raw_sql_payload(sql, args), page)

    # --- Helpers ---

    def _require_primary_key(self, operation: str) -> Any:
        pk = self.primary_key()
        if pk is None:
            raise PrimaryKeyRequiredError(
                f"{type(self).__name__}.{operation} requires a primary key"
            )
        return pk

    def _active_record(self) -> Record:
        record = self._record or type(self).__record__
        if record is None:
            raise RecordNotBoundError(f"No Record is bound to {type(self).__name__}")
        return record

    def _dispatch(self, operation: SqlMethod | str) -> tuple[SqlSessionPort, str]:
        record = self._active_record()
        statement = record.resolver.resolve(type(self), operation)
        dispatch_total.labels(entity=type(self).__name__, operation=str(operation)).inc()
        return record.session, statement

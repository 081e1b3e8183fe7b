"""Condition wrappers: structured WHERE / ORDER BY fragments with bound values.

A wrapper is built per call and consumed by one caller. It is mutable and not
thread-safe; sharing one between threads is the caller's responsibility.
Column names are taken as trusted identifiers, values always travel as bind
parameters.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from typing_extensions import Self

from arcrud.sql_args import fill_sql_args

if TYPE_CHECKING:
    from collections.abc import Iterable

_AND = "AND"
_OR = "OR"


@dataclass
class Wrapper:
    """WHERE segments joined by AND/OR, ORDER BY columns and bind values.

    Every mutator returns the wrapper itself so calls can be chained::

        Condition.instance().where("age > {0}", 18).eq("active", True).order_by("name")
    """

    where_segments: list[tuple[str, str]] = field(default_factory=list)
    order_by_segments: list[str] = field(default_factory=list)
    params: dict[str, Any] = field(default_factory=dict)
    _arg_count: int = field(default=0, repr=False)

    PARAM_PREFIX = "ew"

    # --- Predicates ---

    def where(self, clause: str | None, *args: Any) -> Self:
        """AND a templated clause (``{0}``-style placeholders) onto the predicate."""
        return self._add(_AND, clause, args)

    def and_(self, clause: str | None, *args: Any) -> Self:
        return self._add(_AND, clause, args)

    def or_(self, clause: str | None, *args: Any) -> Self:
        return self._add(_OR, clause, args)

    def eq(self, column: str, value: Any) -> Self:
        return self.where(f"{column} = {{0}}", value)

    def ne(self, column: str, value: Any) -> Self:
        return self.where(f"{column} <> {{0}}", value)

    def gt(self, column: str, value: Any) -> Self:
        return self.where(f"{column} > {{0}}", value)

    def ge(self, column: str, value: Any) -> Self:
        return self.where(f"{column} >= {{0}}", value)

    def lt(self, column: str, value: Any) -> Self:
        return self.where(f"{column} < {{0}}", value)

    def le(self, column: str, value: Any) -> Self:
        return self.where(f"{column} <= {{0}}", value)

    def like(self, column: str, value: str) -> Self:
        """Substring match: the value is wrapped in ``%`` on both sides."""
        return self.where(f"{column} LIKE {{0}}", f"%{value}%")

    def in_(self, column: str, values: Iterable[Any]) -> Self:
        items = list(values)
        if not items:
            # IN () is not valid SQL; an empty set matches nothing.
            return self.where("1 = 0")
        placeholders = ", ".join(f"{{{i}}}" for i in range(len(items)))
        return self.where(f"{column} IN ({placeholders})", *items)

    def is_null(self, column: str) -> Self:
        return self.where(f"{column} IS NULL")

    def is_not_null(self, column: str) -> Self:
        return self.where(f"{column} IS NOT NULL")

    # --- Ordering ---

    def order_by(self, columns: str | None, asc: bool = True) -> Self:
        """Append an ORDER BY term. Blank *columns* leave the wrapper untouched."""
        if columns and columns.strip():
            direction = "ASC" if asc else "DESC"
            self.order_by_segments.append(f"{columns.strip()} {direction}")
        return self

    # --- Rendering ---

    @property
    def where_sql(self) -> str:
        """The predicate without the WHERE keyword, or an empty string."""
        parts: list[str] = []
        for connector, sql in self.where_segments:
            if parts:
                parts.append(connector)
            parts.append(f"({sql})")
        return " ".join(parts)

    @property
    def order_by_sql(self) -> str:
        return ", ".join(self.order_by_segments)

    def _add(self, connector: str, clause: str | None, args: tuple[Any, ...]) -> Self:
        if not clause or not clause.strip():
            return self
        filled = fill_sql_args(
            clause.strip(), args, prefix=self.PARAM_PREFIX, start=self._arg_count
        )
        self._arg_count += len(args)
        self.where_segments.append((connector, filled.sql))
        self.params.update(filled.params)
        return self


class Condition(Wrapper):
    """Entity-agnostic wrapper, the usual starting point for ad-hoc conditions."""

    @classmethod
    def instance(cls) -> Condition:
        return cls()

"""Build the payloads handed to the execution session."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from arcrud.sql_args import fill_sql_args
from arcrud.wrapper import Condition, Wrapper

if TYPE_CHECKING:
    from collections.abc import Sequence

    from arcrud.page import Page
    from arcrud.sql_args import FilledSql

# Reserved payload keys
EW = "ew"
ET = "et"


def as_wrapper(where: Wrapper | str | None, args: Sequence[Any] = ()) -> Wrapper | None:
    """Normalize the two condition forms callers may use.

    A clause string is turned into a wrapper with
    ``Condition.instance().where(clause, *args)``; a wrapper (or None) is
    returned as is.
    """
    if isinstance(where, str):
        return Condition.instance().where(where, *args)
    if args:
        raise TypeError("Positional arguments are only accepted with a where-clause string")
    return where


def condition_payload(wrapper: Wrapper | None, entity: Any = None) -> dict[str, Any]:
    """Payload for wrapper-driven operations; ``et`` is set for updates only."""
    payload: dict[str, Any] = {}
    if entity is not None:
        payload[ET] = entity
    if wrapper is not None:
        payload[EW] = wrapper
    return payload


def apply_page_order(page: Page[Any], wrapper: Wrapper | None) -> None:
    """Push the page's ORDER BY onto the wrapper, mutating it in place."""
    if wrapper is not None and page.order_by_field:
        wrapper.order_by(page.order_by_field, page.asc)


def page_payload(page: Page[Any], wrapper: Wrapper | None) -> dict[str, Any]:
    apply_page_order(page, wrapper)
    return condition_payload(wrapper)


def raw_sql_payload(sql: str, args: Sequence[Any] = ()) -> FilledSql:
    return fill_sql_args(sql, args)

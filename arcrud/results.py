"""Normalize raw session results into the façade's return contract."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

import structlog

from arcrud.exceptions import MalformedCountResultError, TooManyResultsError
from arcrud.metrics import select_one_multiple_results_total

if TYPE_CHECKING:
    from arcrud.page import Page

logger = structlog.get_logger()

T = TypeVar("T")


def ret_bool(affected: int) -> bool:
    """True when at least one row was affected. Zero or negative is not an error."""
    return affected >= 1


def single(result: T | list[T] | None) -> T | None:
    """Unwrap a by-id lookup that may come back as a value, None or a short list."""
    if isinstance(result, list):
        if len(result) > 1:
            raise TooManyResultsError(f"Expected at most one row, got {len(result)}")
        return result[0] if result else None
    return result


def first_of(rows: list[T], entity: str) -> T | None:
    """First row of a select-one query.

    More than one row is tolerated: the first wins and the anomaly is logged
    and counted.
    """
    if not rows:
        return None
    if len(rows) > 1:
        logger.warning("select_one_multiple_results", entity=entity, count=len(rows))
        select_one_multiple_results_total.labels(entity=entity).inc()
    return rows[0]


def count_of(rows: list[Any]) -> int:
    if not rows:
        raise MalformedCountResultError("Count query returned no rows")
    return int(rows[0])


def fill_page(page: Page[T], rows: list[T]) -> Page[T]:
    page.records = rows
    return page

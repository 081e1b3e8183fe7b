"""Pagination cursor carried into and out of paged queries."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    """Paging request in, result rows out.

    The caller creates the page, a paged query overwrites ``records`` (and
    ``total`` when ``search_count`` is set) in place and hands the same object
    back. Not thread-safe: one page belongs to one call chain.
    """

    current: int = 1
    size: int = 10
    order_by_field: str = ""
    asc: bool = True
    search_count: bool = True

    total: int = 0
    records: list[T] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.current < 1:
            self.current = 1
        if self.size < 1:
            raise ValueError(f"Page size must be positive, got {self.size}")

    @property
    def offset(self) -> int:
        return (self.current - 1) * self.size

    @property
    def pages(self) -> int:
        if self.total <= 0:
            return 0
        return math.ceil(self.total / self.size)

    @property
    def has_previous(self) -> bool:
        return self.current > 1

    @property
    def has_next(self) -> bool:
        return self.current < self.pages

"""SQLAlchemy engine construction."""

from __future__ import annotations

from typing import Any

from sqlalchemy import Engine, create_engine


def create_db_engine(url: str) -> Engine:
    """Create an engine for *url*.

    SQLite connections are opened with ``check_same_thread=False`` so one
    engine can serve callers on several threads. Statement echo is left to
    ``configure_logging(echo_sql=...)``.
    """
    connect_args: dict[str, Any] = {}
    if url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(url, connect_args=connect_args)

"""Shared test fixtures."""

from __future__ import annotations

import logging

import pytest
import structlog

from arcrud.config import Settings
from arcrud.engine import create_db_engine
from arcrud.record import Record
from arcrud.registry import StatementRegistry
from arcrud.session import SqlSession
from tests.support import RecordingSession, Tag, User, metadata, tags_table, users_table


@pytest.fixture()
def settings(tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'test.db'}",
        echo_sql=False,
        max_page_size=50,
        log_level="DEBUG",
        log_format="console",
        _env_file=None,
    )


@pytest.fixture()
def registry() -> StatementRegistry:
    registry = StatementRegistry()
    registry.register(User, users_table)
    registry.register(Tag, tags_table)
    return registry


@pytest.fixture()
def record(settings: Settings, registry: StatementRegistry, monkeypatch) -> Record:
    """Record backed by a fresh SQLite file, bound to User and Tag.

    Built without Record.from_settings so the global logging setup is left alone.
    """
    engine = create_db_engine(settings.database_url)
    metadata.create_all(engine)
    record = Record(registry, SqlSession(engine, registry, max_page_size=settings.max_page_size))
    # Restore the class-level bindings after the test.
    monkeypatch.setattr(User, "__record__", None)
    monkeypatch.setattr(Tag, "__record__", None)
    record.bind()
    yield record
    engine.dispose()


@pytest.fixture()
def recording() -> RecordingSession:
    return RecordingSession()


@pytest.fixture()
def fake_record(registry: StatementRegistry, recording: RecordingSession, monkeypatch) -> Record:
    """Record whose session only records calls."""
    record = Record(registry, recording)
    monkeypatch.setattr(User, "__record__", None)
    monkeypatch.setattr(Tag, "__record__", None)
    record.bind()
    return record


@pytest.fixture()
def restore_logging():
    """Undo configure_logging side effects on structlog and stdlib logging."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    sa_logger = logging.getLogger("sqlalchemy.engine")
    sa_level = sa_logger.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)
    sa_logger.setLevel(sa_level)

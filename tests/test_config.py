"""Tests for settings loading."""

from __future__ import annotations

import logging

import pytest
import structlog
from pydantic import ValidationError

from arcrud.config import Settings
from arcrud.record import Record
from arcrud.registry import StatementRegistry
from arcrud.session import SqlSession


class TestSettings:
    def test_defaults(self, monkeypatch):
        for field in Settings.model_fields:
            name = f"ARCRUD_{field.upper()}"
            monkeypatch.delenv(name, raising=False)
        settings = Settings(_env_file=None)
        assert settings.database_url == "sqlite:///./arcrud.db"
        assert settings.echo_sql is False
        assert settings.max_page_size == 500
        assert settings.log_level == "INFO"
        assert settings.log_format == "console"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("ARCRUD_DATABASE_URL", "sqlite:///:memory:")
        monkeypatch.setenv("ARCRUD_MAX_PAGE_SIZE", "25")
        monkeypatch.setenv("ARCRUD_ECHO_SQL", "true")
        settings = Settings(_env_file=None)
        assert settings.database_url == "sqlite:///:memory:"
        assert settings.max_page_size == 25
        assert settings.echo_sql is True

    def test_invalid_log_format(self):
        with pytest.raises(ValidationError):
            Settings(log_format="xml", _env_file=None)

    def test_negative_page_size_rejected(self):
        with pytest.raises(ValidationError):
            Settings(max_page_size=-1, _env_file=None)


@pytest.mark.usefixtures("restore_logging")
class TestRecordFromSettings:
    def test_builds_sqlite_session(self, settings: Settings, registry: StatementRegistry):
        record = Record.from_settings(settings, registry)
        try:
            assert isinstance(record.session, SqlSession)
            assert str(record.session.engine.url) == settings.database_url
            assert registry.frozen
        finally:
            record.session.engine.dispose()

    def test_applies_logging_settings(self, tmp_path, registry: StatementRegistry):
        settings = Settings(
            database_url=f"sqlite:///{tmp_path / 'echo.db'}",
            echo_sql=True,
            log_level="WARNING",
            log_format="json",
            _env_file=None,
        )
        record = Record.from_settings(settings, registry)
        try:
            assert logging.getLogger("sqlalchemy.engine").level == logging.INFO
            root = logging.getLogger()
            assert root.level == logging.WARNING
            assert isinstance(root.handlers[0].formatter, structlog.stdlib.ProcessorFormatter)
        finally:
            record.session.engine.dispose()

    def test_sql_echo_off(self, settings: Settings, registry: StatementRegistry):
        record = Record.from_settings(settings, registry)
        try:
            assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
        finally:
            record.session.engine.dispose()

"""Runtime bundle injected into entity types: registry, session and resolver."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from arcrud.engine import create_db_engine
from arcrud.exceptions import UnresolvedStatementError
from arcrud.logging import configure_logging
from arcrud.resolver import StatementResolver
from arcrud.session import SqlSession

if TYPE_CHECKING:
    from arcrud.config import Settings
    from arcrud.model import Model
    from arcrud.protocols import SqlSessionPort
    from arcrud.registry import StatementRegistry

logger = structlog.get_logger()


class Record:
    """What an entity needs to run its CRUD operations.

    Building a Record freezes the registry: entity types must all be
    registered beforehand.
    """

    def __init__(self, registry: StatementRegistry, session: SqlSessionPort) -> None:
        registry.freeze()
        self.registry = registry
        self.session = session
        self.resolver = StatementResolver(registry)

    @classmethod
    def from_settings(cls, settings: Settings, registry: StatementRegistry) -> Record:
        """Apply the logging settings, then build an engine-backed Record."""
        configure_logging(settings.log_level, settings.log_format, echo_sql=settings.echo_sql)
        engine = create_db_engine(settings.database_url)
        session = SqlSession(engine, registry, max_page_size=settings.max_page_size)
        return cls(registry, session)

    def bind(self, *entity_types: type[Model]) -> None:
        """Attach this record to entity classes (all registered types by default)."""
        targets = entity_types or self.registry.entity_types
        for entity_type in targets:
            if entity_type not in self.registry:
                raise UnresolvedStatementError(
                    f"Cannot bind {entity_type.__name__}: not a registered entity type"
                )
            entity_type.__record__ = self
            logger.debug("record_bound", entity=entity_type.__name__)

"""arcrud: Active Record CRUD dispatch over SQLAlchemy."""

from arcrud.config import Settings
from arcrud.exceptions import (
    ActiveRecordError,
    DuplicateRegistrationError,
    MalformedCountResultError,
    PrimaryKeyRequiredError,
    RecordNotBoundError,
    RegistryFrozenError,
    SqlTemplateError,
    TooManyResultsError,
    UnresolvedStatementError,
)
from arcrud.methods import SqlMethod
from arcrud.model import Model
from arcrud.page import Page
from arcrud.record import Record
from arcrud.registry import StatementRegistry
from arcrud.resolver import StatementResolver
from arcrud.session import SqlSession
from arcrud.sql_args import FilledSql, fill_sql_args
from arcrud.wrapper import Condition, Wrapper

__all__ = [
    "ActiveRecordError",
    "Condition",
    "DuplicateRegistrationError",
    "FilledSql",
    "MalformedCountResultError",
    "Model",
    "Page",
    "PrimaryKeyRequiredError",
    "Record",
    "RecordNotBoundError",
    "RegistryFrozenError",
    "Settings",
    "SqlMethod",
    "SqlSession",
    "SqlTemplateError",
    "StatementRegistry",
    "StatementResolver",
    "TooManyResultsError",
    "UnresolvedStatementError",
    "Wrapper",
    "fill_sql_args",
]

"""Exception hierarchy for the Active Record layer.

Errors raised by the database driver or SQLAlchemy are never wrapped here;
they reach the caller unchanged.
"""

from __future__ import annotations


class ActiveRecordError(Exception):
    """Base class for every error raised by arcrud itself."""


class PrimaryKeyRequiredError(ActiveRecordError):
    """An operation that needs the entity's primary key found it unset."""


class UnresolvedStatementError(ActiveRecordError):
    """No statement is registered for the requested entity type and operation."""


class MalformedCountResultError(ActiveRecordError):
    """A count query did not return exactly one value."""


class SqlTemplateError(ActiveRecordError, ValueError):
    """A SQL template references a positional argument that was not supplied."""


class RegistryFrozenError(ActiveRecordError):
    """The statement registry no longer accepts registrations."""


class DuplicateRegistrationError(ActiveRecordError):
    """An entity type was registered twice."""


class RecordNotBoundError(ActiveRecordError):
    """An entity was used before a Record was bound to its class."""


class TooManyResultsError(ActiveRecordError):
    """A single-row statement produced more than one row."""

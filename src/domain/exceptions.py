"""Domain exceptions for the repository, query translator and pager.

These are infrastructure-agnostic: the SQL and in-memory repositories raise
the same types, and the front end maps each one to a transport response
(see src/api/responses.py).  Nothing in the domain layer formats HTTP.
"""

from __future__ import annotations

from typing import Any


class RepositoryError(Exception):
    """Base class for every typed failure surfaced by the repository layer."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class NotFound(RepositoryError):
    """Raised when an operation requires a record that does not exist."""

    def __init__(self, entity: str, id: Any) -> None:
        super().__init__(
            f"{entity} with id {id!r} not found",
            details={"entity": entity, "id": id},
        )


class SchemaMismatch(RepositoryError):
    """Raised when a finder or update names a field the record type lacks."""

    def __init__(self, entity: str, field: str) -> None:
        super().__init__(
            f"{entity} has no field {field!r}",
            details={"entity": entity, "field": field},
        )


class UnsupportedOperator(RepositoryError):
    """Raised when a finder clause ends in an unrecognised keyword."""

    def __init__(self, keyword: str, clause: str | None = None) -> None:
        message = f"Unsupported finder operator: {keyword!r}"
        if clause:
            message += f" in clause {clause!r}"
        super().__init__(message, details={"keyword": keyword, "clause": clause})


class ArgumentCountMismatch(RepositoryError):
    """Raised when a finder is bound with the wrong number of arguments."""

    def __init__(self, finder: str, expected: int, actual: int) -> None:
        super().__init__(
            f"{finder} expects {expected} argument(s), got {actual}",
            details={"finder": finder, "expected": expected, "actual": actual},
        )


class InvalidArgument(RepositoryError):
    """Raised for bad pagination parameters and similar caller errors."""

    def __init__(self, name: str, value: Any, reason: str) -> None:
        super().__init__(
            f"Invalid {name}={value!r}: {reason}",
            details={"name": name, "value": value, "reason": reason},
        )


class DuplicateKey(RepositoryError):
    """Raised when a write would violate a unique constraint."""

    def __init__(self, entity: str, fields: tuple[str, ...] | list[str], value: Any = None) -> None:
        joined = ", ".join(fields)
        message = f"Duplicate {entity} for unique key ({joined})"
        if value is not None:
            message += f": {value!r}"
        super().__init__(
            message,
            details={"entity": entity, "fields": list(fields), "value": value},
        )

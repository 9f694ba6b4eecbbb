"""Persistence-policy exceptions. Typed, no storage-engine specifics."""

from typing import Any, Optional


class DataError(Exception):
    """Base for all persistence-policy errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ReadOnlyScopeViolationError(DataError):
    """Raised when a commit with pending changes is attempted inside a read-only scope."""

    def __init__(
        self,
        pending_count: int,
        entity_type: Optional[str] = None,
        operation: Optional[str] = None,
    ) -> None:
        self.pending_count = pending_count
        self.entity_type = entity_type
        self.operation = operation
        message = (
            f"Cannot save changes within a read-only request scope: "
            f"{pending_count} pending change(s)"
        )
        if entity_type is not None:
            message += f", first is {operation} of '{entity_type}'"
        super().__init__(message)


class ReadOnlyEntityError(DataError):
    """Raised on any create/update/delete of a type tagged read-only."""

    def __init__(self, entity_type: str, operation: str) -> None:
        self.entity_type = entity_type
        self.operation = operation
        super().__init__(
            f"Cannot {operation} read-only entity '{entity_type}'. This entity is marked "
            f"as read-only and does not support create, update, or delete operations."
        )


class NotFoundError(DataError):
    """Raised when a lookup by id finds no live (non-deleted) record."""

    def __init__(self, entity_type: str, entity_id: Any) -> None:
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id: {entity_id} not found")


class StorageError(DataError):
    """Opaque failure raised by a storage collaborator while applying a change set."""


class InvalidActorError(DataError):
    """Raised when the acting user id does not match the configured user id type."""


class InvalidChangeError(DataError):
    """Raised when staging or rewriting a change is not allowed (e.g. update after delete)."""

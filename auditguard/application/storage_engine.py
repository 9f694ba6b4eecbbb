"""Storage engine protocol. The commit pipeline depends on this; infrastructure implements it."""

from typing import Any, List, Optional, Protocol, Sequence, Type, TypeVar

from auditguard.domain.models.change import OperationKind, PendingChange

T = TypeVar("T")


class StorageEngine(Protocol):
    """Collaborator that stages, queries and physically persists entities."""

    def pending_changes(self) -> Sequence[PendingChange]:
        """
        Changes about to be committed, in a stable order. Returns the engine's own
        records: rewrite() is visible on the returned objects.
        """
        ...

    def rewrite(self, entity: Any, from_kind: OperationKind, to_kind: OperationKind) -> None:
        """Convert the staged change for entity in place (soft delete: DELETE -> UPDATE)."""
        ...

    def apply_changes(self, changes: Sequence[PendingChange]) -> None:
        """Persist the change set atomically. Failures propagate unmodified."""
        ...

    def get_by_id(self, entity_type: Type[T], entity_id: Any) -> Optional[T]:
        """Return the live (non-deleted) record with that id, or None."""
        ...

    def list_entities(self, entity_type: Type[T], offset: int, limit: int) -> List[T]:
        """Return live records ordered by id."""
        ...

"""Audit metadata policy for pending inserts, updates and deletes. No storage engine."""

from typing import Generic, Optional, TypeVar

from auditguard.core.clock import Clock, utc_now
from auditguard.domain.models.change import OperationKind, PendingChange

TUserId = TypeVar("TUserId")


class AuditVisitor(Generic[TUserId]):
    """
    Computes metadata mutations for one pending change given an optional actor id.
    Version bumps only accompany attributable writes: without an actor, timestamps
    are stamped but attribution and version are left untouched. Deletes never bump
    the version.
    """

    def __init__(self, clock: Clock = utc_now) -> None:
        self._clock = clock

    def visit(self, change: PendingChange, actor_id: Optional[TUserId]) -> bool:
        """Dispatch by kind. Returns True only for a delete converted into a soft delete."""
        if change.kind is OperationKind.INSERT:
            self.on_insert(change, actor_id)
            return False
        if change.kind is OperationKind.UPDATE:
            self.on_update(change, actor_id)
            return False
        return self.on_delete(change, actor_id)

    def on_insert(self, change: PendingChange, actor_id: Optional[TUserId]) -> None:
        if not change.capabilities.auditable:
            return
        entity = change.entity
        now = self._clock()
        entity.created_on = now
        entity.modified_on = now

        if actor_id is None:
            return
        entity.modified_by = actor_id
        # Keep a creator the store already assigned (merge/replay)
        if entity.created_by is None:
            entity.created_by = actor_id
        entity.version += 1

    def on_update(self, change: PendingChange, actor_id: Optional[TUserId]) -> None:
        if not change.capabilities.auditable:
            return
        entity = change.entity
        entity.modified_on = self._clock()

        if actor_id is None:
            return
        entity.modified_by = actor_id
        entity.version += 1

    def on_delete(self, change: PendingChange, actor_id: Optional[TUserId]) -> bool:
        """
        Mark a deletable entity as deleted. Returns False (physical delete) when the
        entity is not deletable; the caller rewrites the change to an update otherwise.
        """
        if not change.capabilities.deletable:
            return False
        entity = change.entity
        entity.is_deleted = True

        if change.capabilities.auditable:
            entity.modified_on = self._clock()
            if actor_id is not None:
                entity.modified_by = actor_id
        return True

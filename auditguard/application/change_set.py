"""Change-set orchestrator: the commit boundary. Guards, audits, then hands the change set to storage."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, Protocol, Sequence, Tuple, TypeVar

from auditguard.application.storage_engine import StorageEngine
from auditguard.audit.visitor import AuditVisitor
from auditguard.domain.exceptions import DataError, InvalidActorError, ReadOnlyScopeViolationError
from auditguard.domain.models.change import OperationKind, PendingChange
from auditguard.security.identity import IdentityProvider
from auditguard.security.read_only_guard import ReadOnlyEntityGuard
from auditguard.security.read_only_scope import ReadOnlyScope

TUserId = TypeVar("TUserId")

_SNAPSHOT_FIELDS = (
    "id",
    "created_on",
    "created_by",
    "modified_on",
    "modified_by",
    "version",
    "is_deleted",
)


class CommitState(str, Enum):
    """States of a single commit attempt."""

    REQUESTED = "requested"
    GUARDING = "guarding"
    AUDITING = "auditing"
    PERSISTING = "persisting"
    COMMITTED = "committed"
    REJECTED = "rejected"


@dataclass(frozen=True)
class CommitResult:
    """Outcome of a successful commit: (entity type, persisted kind) per change."""

    state: CommitState
    changes: Tuple[Tuple[str, OperationKind], ...]
    actor_id: Optional[Any] = None

    @property
    def count(self) -> int:
        return len(self.changes)


class ChangeSetObserver(Protocol):
    """Hook notified after a commit has been persisted."""

    def on_saved(self, result: CommitResult) -> None:
        ...


@dataclass
class _AuditSnapshot:
    """Id, audit fields and kind of one change before auditing, for all-or-nothing restore."""

    change: PendingChange
    kind: OperationKind
    values: Dict[str, Any]

    @classmethod
    def take(cls, change: PendingChange) -> "_AuditSnapshot":
        values = {
            name: getattr(change.entity, name)
            for name in _SNAPSHOT_FIELDS
            if hasattr(change.entity, name)
        }
        return cls(change=change, kind=change.kind, values=values)

    def restore(self, storage: StorageEngine) -> None:
        for name, value in self.values.items():
            setattr(self.change.entity, name, value)
        if self.change.kind is not self.kind:
            storage.rewrite(self.change.entity, self.change.kind, self.kind)


class ChangeSetOrchestrator(Generic[TUserId]):
    """
    Drives one commit: Requested -> Guarding -> Auditing -> Persisting -> Committed | Rejected.

    Guards run before any metadata is touched: an active read-only scope vetoes any
    non-empty change set, and read-only entity types are vetoed change by change in
    storage order. Deletes of deletable entities are rewritten into updates. If storage
    fails, metadata and rewrites are rolled back and the storage error is re-raised as is.
    """

    def __init__(
        self,
        storage: StorageEngine,
        *,
        identity_provider: Optional[IdentityProvider[TUserId]] = None,
        visitor: Optional[AuditVisitor[TUserId]] = None,
        guard: Optional[ReadOnlyEntityGuard] = None,
        observer: Optional[ChangeSetObserver] = None,
        user_id_type: Optional[type] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._storage = storage
        self._identity_provider = identity_provider
        self._visitor = visitor or AuditVisitor()
        self._guard = guard or ReadOnlyEntityGuard()
        self._observer = observer
        self._user_id_type = user_id_type
        self._logger = logger or logging.getLogger(__name__)
        self._token_user_id: Optional[TUserId] = None

    def with_user_id(self, user_id: TUserId) -> "ChangeSetOrchestrator[TUserId]":
        """Attribute subsequent commits to user_id unless commit() is given an actor."""
        self._token_user_id = user_id
        return self

    def commit(self, actor_id: Optional[TUserId] = None) -> CommitResult:
        """
        Commit all pending changes. Raises ReadOnlyScopeViolationError or
        ReadOnlyEntityError when rejected; storage errors propagate unmodified.
        """
        actor = self._effective_actor(actor_id)
        changes = list(self._storage.pending_changes())
        log_context = {
            "pending": len(changes),
            "actor_id": str(actor) if actor is not None else None,
        }
        self._logger.info(
            "commit_requested",
            extra={**log_context, "state": CommitState.REQUESTED.value},
        )

        state = CommitState.GUARDING
        try:
            self._check_guards(changes)
        except DataError as e:
            self._logger.warning(
                "commit_rejected",
                extra={**log_context, "failed_in": state.value, "reason": e.message},
            )
            raise

        snapshots = [_AuditSnapshot.take(change) for change in changes]
        try:
            state = CommitState.AUDITING
            self._audit(changes, actor)
            state = CommitState.PERSISTING
            self._storage.apply_changes(changes)
        except Exception as e:
            for snapshot in snapshots:
                snapshot.restore(self._storage)
            self._logger.error(
                "commit_failed",
                extra={**log_context, "failed_in": state.value, "error": str(e)},
            )
            raise

        result = CommitResult(
            state=CommitState.COMMITTED,
            changes=tuple((change.entity_type_name, change.kind) for change in changes),
            actor_id=actor,
        )
        self._logger.info(
            "commit_persisted",
            extra={**log_context, "state": result.state.value},
        )
        if self._observer is not None:
            self._observer.on_saved(result)
        return result

    def _effective_actor(self, actor_id: Optional[TUserId]) -> Optional[TUserId]:
        actor = actor_id
        if actor is None:
            actor = self._token_user_id
        if actor is None and self._identity_provider is not None:
            actor = self._identity_provider.get_current_user_id()
        if actor is None:
            return None
        if self._user_id_type is not None and not isinstance(actor, self._user_id_type):
            raise InvalidActorError(
                f"Actor id {actor!r} is not a {self._user_id_type.__name__}"
            )
        return actor

    def _check_guards(self, changes: Sequence[PendingChange]) -> None:
        if changes and ReadOnlyScope.is_active():
            first = changes[0]
            raise ReadOnlyScopeViolationError(
                pending_count=len(changes),
                entity_type=first.entity_type_name,
                operation=first.kind.verb,
            )
        for change in changes:
            self._guard.check(change)

    def _audit(self, changes: List[PendingChange], actor: Optional[TUserId]) -> None:
        for change in changes:
            if self._visitor.visit(change, actor):
                self._storage.rewrite(change.entity, OperationKind.DELETE, OperationKind.UPDATE)

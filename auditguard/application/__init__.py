# Application layer: commit orchestration, staging and queries over a storage engine.

from auditguard.application.change_set import (
    ChangeSetObserver,
    ChangeSetOrchestrator,
    CommitResult,
    CommitState,
)
from auditguard.application.queries import find_by_id, list_live
from auditguard.application.storage_engine import StorageEngine
from auditguard.application.unit_of_work import ReadOnlyEntitySet, StagingObserver, UnitOfWork

__all__ = [
    "ChangeSetObserver",
    "ChangeSetOrchestrator",
    "CommitResult",
    "CommitState",
    "ReadOnlyEntitySet",
    "StagingObserver",
    "StorageEngine",
    "UnitOfWork",
    "find_by_id",
    "list_live",
]

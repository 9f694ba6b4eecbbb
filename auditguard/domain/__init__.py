"""Domain layer: entity contracts, pending changes, exceptions. No storage engine."""

from auditguard.domain.exceptions import (
    DataError,
    InvalidActorError,
    InvalidChangeError,
    NotFoundError,
    ReadOnlyEntityError,
    ReadOnlyScopeViolationError,
    StorageError,
)
from auditguard.domain.models import (
    Auditable,
    AuditBase,
    Capabilities,
    Deletable,
    Entity,
    GuidAuditBase,
    OperationKind,
    PendingChange,
    ReadOnly,
    ReadOnlyEntityBase,
)

__all__ = [
    "AuditBase",
    "Auditable",
    "Capabilities",
    "DataError",
    "Deletable",
    "Entity",
    "GuidAuditBase",
    "InvalidActorError",
    "InvalidChangeError",
    "NotFoundError",
    "OperationKind",
    "PendingChange",
    "ReadOnly",
    "ReadOnlyEntityBase",
    "ReadOnlyEntityError",
    "ReadOnlyScopeViolationError",
    "StorageError",
]

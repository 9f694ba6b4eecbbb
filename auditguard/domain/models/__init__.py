"""Domain models. Entity contracts and pending changes."""

from auditguard.domain.models.change import OperationKind, PendingChange
from auditguard.domain.models.entity import (
    Auditable,
    AuditBase,
    Capabilities,
    Deletable,
    Entity,
    GuidAuditBase,
    ReadOnly,
    ReadOnlyEntityBase,
)

__all__ = [
    "AuditBase",
    "Auditable",
    "Capabilities",
    "Deletable",
    "Entity",
    "GuidAuditBase",
    "OperationKind",
    "PendingChange",
    "ReadOnly",
    "ReadOnlyEntityBase",
]

"""Pending change model. Transient: lives for a single commit attempt."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Optional

from auditguard.domain.exceptions import InvalidChangeError
from auditguard.domain.models.entity import Capabilities


class OperationKind(str, Enum):
    """Kind of write staged for an entity."""

    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"

    @property
    def verb(self) -> str:
        """Verb used in error messages: create / update / delete."""
        return _VERBS[self]


_VERBS: Dict[OperationKind, str] = {
    OperationKind.INSERT: "create",
    OperationKind.UPDATE: "update",
    OperationKind.DELETE: "delete",
}

# Restaging an already staged entity: (staged kind, requested kind) -> resulting kind.
# None means the entity is unstaged; missing pairs are not allowed.
_RESTAGE: Dict[tuple[OperationKind, OperationKind], Optional[OperationKind]] = {
    (OperationKind.INSERT, OperationKind.UPDATE): OperationKind.INSERT,
    (OperationKind.INSERT, OperationKind.DELETE): None,
    (OperationKind.UPDATE, OperationKind.UPDATE): OperationKind.UPDATE,
    (OperationKind.UPDATE, OperationKind.DELETE): OperationKind.DELETE,
    (OperationKind.DELETE, OperationKind.DELETE): OperationKind.DELETE,
}

# Rewrites allowed during a commit (soft delete, and its rollback).
_REWRITES: FrozenSet[tuple[OperationKind, OperationKind]] = frozenset(
    {
        (OperationKind.DELETE, OperationKind.UPDATE),
        (OperationKind.UPDATE, OperationKind.DELETE),
    }
)


def restage(current: OperationKind, requested: OperationKind) -> Optional[OperationKind]:
    """Resolve a second staging request for the same entity. Raises if not allowed."""
    key = (current, requested)
    if key not in _RESTAGE:
        raise InvalidChangeError(
            f"Cannot stage {requested.value} for an entity already staged for {current.value}"
        )
    return _RESTAGE[key]


@dataclass
class PendingChange:
    """
    One staged write: entity reference, operation kind and the entity's capability tag.
    Field values live on the entity itself and are mutated in place by auditing.
    """

    entity: Any
    kind: OperationKind
    capabilities: Capabilities = field(init=False)

    def __post_init__(self) -> None:
        self.capabilities = Capabilities.of(type(self.entity))

    @property
    def entity_type_name(self) -> str:
        return type(self.entity).__name__

    def rewrite(self, from_kind: OperationKind, to_kind: OperationKind) -> None:
        """Change the operation kind in place. Only delete <-> update is allowed."""
        if self.kind is not from_kind:
            raise InvalidChangeError(
                f"Cannot rewrite {self.entity_type_name} from {from_kind.value}: "
                f"change is staged as {self.kind.value}"
            )
        if (from_kind, to_kind) not in _REWRITES:
            raise InvalidChangeError(
                f"Rewrite from {from_kind.value} to {to_kind.value} is not allowed"
            )
        self.kind = to_kind

"""Change staging shared by storage engines. Implements the staging half of StorageEngine."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Protocol, Sequence, Type, TypeVar

from auditguard.domain.exceptions import InvalidChangeError, ReadOnlyEntityError
from auditguard.domain.models.change import OperationKind, PendingChange, restage
from auditguard.domain.models.entity import Capabilities

T = TypeVar("T")


class StagingObserver(Protocol):
    """Hook notified whenever an entity's staged state changes."""

    def on_staged(self, entity: Any, kind: Optional[OperationKind]) -> None:
        """kind is the resulting staged operation, or None when the entity was unstaged."""
        ...


class UnitOfWork(ABC):
    """
    Tracks staged inserts, updates and deletes in staging order (one change per entity
    instance). Subclasses provide physical persistence and lookups.
    """

    def __init__(self, observer: Optional[StagingObserver] = None) -> None:
        self._staged: Dict[int, PendingChange] = {}
        self._observer = observer

    # --- Staging ---

    def add(self, entity: T) -> T:
        self._stage(entity, OperationKind.INSERT)
        return entity

    def update(self, entity: T) -> T:
        self._stage(entity, OperationKind.UPDATE)
        return entity

    def remove(self, entity: Any) -> None:
        self._stage(entity, OperationKind.DELETE)

    def _stage(self, entity: Any, kind: OperationKind) -> None:
        key = id(entity)
        current = self._staged.get(key)
        if current is None:
            self._staged[key] = PendingChange(entity=entity, kind=kind)
            resolved: Optional[OperationKind] = kind
        else:
            resolved = restage(current.kind, kind)
            if resolved is None:
                del self._staged[key]
            else:
                current.kind = resolved
        if self._observer is not None:
            self._observer.on_staged(entity, resolved)

    def pending_changes(self) -> List[PendingChange]:
        return list(self._staged.values())

    def rewrite(self, entity: Any, from_kind: OperationKind, to_kind: OperationKind) -> None:
        change = self._staged.get(id(entity))
        if change is None:
            raise InvalidChangeError(f"{type(entity).__name__} has no staged change")
        change.rewrite(from_kind, to_kind)

    def clear(self) -> None:
        self._staged.clear()

    def apply_changes(self, changes: Sequence[PendingChange]) -> None:
        """Persist atomically; staged changes are dropped only after success."""
        self._persist(list(changes))
        for change in changes:
            self._staged.pop(id(change.entity), None)

    def read_only(self, entity_type: Type[T]) -> "ReadOnlyEntitySet":
        """Query view over a read-only type that fails fast on any write."""
        if not Capabilities.of(entity_type).read_only:
            raise TypeError(f"{entity_type.__name__} is not a read-only entity type")
        return ReadOnlyEntitySet(self, entity_type)

    # --- Engine specifics ---

    @abstractmethod
    def _persist(self, changes: List[PendingChange]) -> None:
        ...

    @abstractmethod
    def get_by_id(self, entity_type: Type[T], entity_id: Any) -> Optional[T]:
        ...

    @abstractmethod
    def list_entities(self, entity_type: Type[T], offset: int, limit: int) -> List[T]:
        ...


class ReadOnlyEntitySet:
    """Read access to one read-only entity type. Writes raise ReadOnlyEntityError immediately."""

    def __init__(self, storage: UnitOfWork, entity_type: type) -> None:
        self._storage = storage
        self._entity_type = entity_type
        self._type_name = entity_type.__name__

    def get(self, entity_id: Any) -> Optional[Any]:
        return self._storage.get_by_id(self._entity_type, entity_id)

    def list(self, offset: int = 0, limit: int = 50) -> List[Any]:
        return self._storage.list_entities(self._entity_type, offset, limit)

    def add(self, entity: Any) -> None:
        raise ReadOnlyEntityError(self._type_name, OperationKind.INSERT.verb)

    def update(self, entity: Any) -> None:
        raise ReadOnlyEntityError(self._type_name, OperationKind.UPDATE.verb)

    def remove(self, entity: Any) -> None:
        raise ReadOnlyEntityError(self._type_name, OperationKind.DELETE.verb)

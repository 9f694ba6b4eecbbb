"""In-memory storage engine. Reference collaborator for tests and local runs."""

import copy
from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar

from auditguard.application.unit_of_work import StagingObserver, UnitOfWork
from auditguard.domain.exceptions import StorageError
from auditguard.domain.models.change import OperationKind, PendingChange
from auditguard.domain.models.entity import Capabilities

T = TypeVar("T")

_Key = Tuple[type, Any]


class InMemoryStorageEngine(UnitOfWork):
    """
    Dict-backed store keyed by (entity type, id). Stores and returns deep copies, so
    callers only change stored state through a commit. A change set is validated
    completely before anything is written.
    """

    def __init__(self, observer: Optional[StagingObserver] = None) -> None:
        super().__init__(observer)
        self._rows: Dict[_Key, Any] = {}

    def _persist(self, changes: List[PendingChange]) -> None:
        keys = set(self._rows)
        for change in changes:
            key = (type(change.entity), change.entity.id)
            if change.entity.id is None:
                raise StorageError(f"{change.entity_type_name} has no id")
            if change.kind is OperationKind.INSERT:
                if key in keys:
                    raise StorageError(
                        f"Duplicate key: {change.entity_type_name} with id {change.entity.id} already exists"
                    )
                keys.add(key)
            elif key not in keys:
                raise StorageError(
                    f"Cannot {change.kind.value} {change.entity_type_name} with id "
                    f"{change.entity.id}: no such row"
                )
            elif change.kind is OperationKind.DELETE:
                keys.discard(key)

        for change in changes:
            key = (type(change.entity), change.entity.id)
            if change.kind is OperationKind.DELETE:
                del self._rows[key]
            else:
                self._rows[key] = copy.deepcopy(change.entity)

    def get_by_id(self, entity_type: Type[T], entity_id: Any) -> Optional[T]:
        row = self._rows.get((entity_type, entity_id))
        if row is None or not self._is_live(row):
            return None
        return copy.deepcopy(row)

    def list_entities(self, entity_type: Type[T], offset: int, limit: int) -> List[T]:
        rows = [
            row
            for (row_type, _), row in self._rows.items()
            if row_type is entity_type and self._is_live(row)
        ]
        rows.sort(key=lambda row: row.id)
        return [copy.deepcopy(row) for row in rows[offset:offset + limit]]

    def stored(self, entity_type: Type[T], entity_id: Any) -> Optional[T]:
        """Raw stored row, including soft-deleted ones."""
        row = self._rows.get((entity_type, entity_id))
        return copy.deepcopy(row)

    @staticmethod
    def _is_live(row: Any) -> bool:
        return not (Capabilities.of(type(row)).deletable and row.is_deleted)

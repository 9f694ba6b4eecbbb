"""Typed lookups over a storage engine."""

from typing import Any, List, Optional, Type, TypeVar

from auditguard.application.storage_engine import StorageEngine
from auditguard.config.settings import get_settings
from auditguard.domain.exceptions import NotFoundError

T = TypeVar("T")


def find_by_id(storage: StorageEngine, entity_type: Type[T], entity_id: Any) -> T:
    """Return the live record with entity_id. Soft-deleted records count as missing."""
    entity = storage.get_by_id(entity_type, entity_id)
    if entity is None:
        raise NotFoundError(entity_type.__name__, entity_id)
    return entity


def list_live(
    storage: StorageEngine,
    entity_type: Type[T],
    page: int = 1,
    size: Optional[int] = None,
) -> List[T]:
    """One page of live records, 1-based."""
    if size is None:
        size = get_settings().default_page_size
    if page < 1 or size < 1:
        raise ValueError("page and size must be >= 1")
    return storage.list_entities(entity_type, (page - 1) * size, size)

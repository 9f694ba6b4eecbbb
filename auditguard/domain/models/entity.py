"""Entity capability contracts. Pure domain: no ORM or storage engine.

A concrete record type opts into the commit pipeline by inheriting from the
capability mixins below. ``Auditable`` and ``Deletable`` may be combined;
``ReadOnly`` excludes both.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from functools import lru_cache
from typing import Generic, Optional, TypeVar

TId = TypeVar("TId")
TUserId = TypeVar("TUserId")


class _Capability:
    _capability: Optional[str] = None

    def __init_subclass__(cls, **kwargs) -> None:
        super().__init_subclass__(**kwargs)
        tags = {vars(base).get("_capability") for base in cls.__mro__} - {None}
        if "read_only" in tags and len(tags) > 1:
            raise TypeError(
                f"{cls.__name__} cannot be both read-only and auditable/deletable"
            )


@dataclass(kw_only=True)
class Entity(Generic[TId]):
    """Any persisted record. Id type is a parameter (int, UUID, ...)."""

    id: Optional[TId] = None


@dataclass(kw_only=True)
class Auditable(_Capability, Generic[TUserId]):
    """Audit metadata. Actor id type is independent of the entity id type."""

    _capability = "auditable"

    created_on: Optional[datetime] = None
    created_by: Optional[TUserId] = None
    modified_on: Optional[datetime] = None
    modified_by: Optional[TUserId] = None
    # Set by external sync processes; never touched by the commit pipeline
    synchronized_on: Optional[datetime] = None
    version: int = 0


@dataclass(kw_only=True)
class Deletable(_Capability):
    _capability = "deletable"

    is_deleted: bool = False


class ReadOnly(_Capability):
    """Marker for mirrored/legacy records that may only be queried."""

    _capability = "read_only"


@dataclass(kw_only=True)
class AuditBase(Entity[TId], Auditable[TUserId], Deletable):
    """Auditable, soft-deletable record."""


@dataclass(kw_only=True)
class GuidAuditBase(AuditBase[uuid.UUID, TUserId]):
    """AuditBase with a generated UUID id."""

    id: Optional[uuid.UUID] = field(default_factory=uuid.uuid4)


@dataclass(kw_only=True)
class ReadOnlyEntityBase(Entity[TId], ReadOnly):
    """Identity only; create, update and delete always fail."""


@dataclass(frozen=True)
class Capabilities:
    """Capability tag for an entity type, evaluated once per type."""

    auditable: bool
    deletable: bool
    read_only: bool

    @staticmethod
    @lru_cache(maxsize=None)
    def of(entity_type: type) -> "Capabilities":
        return Capabilities(
            auditable=issubclass(entity_type, Auditable),
            deletable=issubclass(entity_type, Deletable),
            read_only=issubclass(entity_type, ReadOnly),
        )

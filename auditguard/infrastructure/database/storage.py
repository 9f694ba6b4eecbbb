"""SQLAlchemy-backed storage engine. Applies a change set in a single transaction."""

from dataclasses import fields
from typing import Any, Dict, List, Optional, Type, TypeVar

from sqlalchemy import Engine, Table, delete, insert, select, update

from auditguard.application.unit_of_work import StagingObserver, UnitOfWork
from auditguard.domain.exceptions import StorageError
from auditguard.domain.models.change import OperationKind, PendingChange
from auditguard.domain.models.entity import Capabilities
from auditguard.infrastructure.database.tables import TableRegistry

T = TypeVar("T")


class SqlAlchemyStorageEngine(UnitOfWork):
    """
    Persists dataclass entities to the tables in a TableRegistry. SQLAlchemy errors
    (IntegrityError, OperationalError, ...) propagate unchanged; an update or delete
    that matches no row raises StorageError. Either way the transaction rolls back.
    """

    def __init__(
        self,
        engine: Engine,
        registry: TableRegistry,
        observer: Optional[StagingObserver] = None,
    ) -> None:
        super().__init__(observer)
        self._engine = engine
        self._registry = registry

    def create_all(self) -> None:
        self._registry.metadata.create_all(self._engine)

    def _persist(self, changes: List[PendingChange]) -> None:
        with self._engine.begin() as conn:
            for change in changes:
                entity = change.entity
                table = self._registry.table_for(type(entity))
                if change.kind is OperationKind.INSERT:
                    result = conn.execute(insert(table).values(**self._values(entity, table)))
                    if entity.id is None:
                        entity.id = result.inserted_primary_key[0]
                    continue
                if change.kind is OperationKind.UPDATE:
                    result = conn.execute(
                        update(table)
                        .where(table.c.id == entity.id)
                        .values(**self._values(entity, table))
                    )
                else:
                    result = conn.execute(delete(table).where(table.c.id == entity.id))
                # Raising inside begin() rolls the whole change set back
                if result.rowcount != 1:
                    raise StorageError(
                        f"Cannot {change.kind.value} {change.entity_type_name} with id "
                        f"{entity.id}: no such row"
                    )

    def get_by_id(self, entity_type: Type[T], entity_id: Any) -> Optional[T]:
        table = self._registry.table_for(entity_type)
        stmt = select(table).where(table.c.id == entity_id)
        if Capabilities.of(entity_type).deletable:
            stmt = stmt.where(table.c.is_deleted == False)
        with self._engine.connect() as conn:
            row = conn.execute(stmt).mappings().first()
        if row is None:
            return None
        return self._to_entity(entity_type, row)

    def list_entities(self, entity_type: Type[T], offset: int, limit: int) -> List[T]:
        table = self._registry.table_for(entity_type)
        stmt = select(table).order_by(table.c.id).offset(offset).limit(limit)
        if Capabilities.of(entity_type).deletable:
            stmt = stmt.where(table.c.is_deleted == False)
        with self._engine.connect() as conn:
            rows = conn.execute(stmt).mappings().all()
        return [self._to_entity(entity_type, row) for row in rows]

    @staticmethod
    def _values(entity: Any, table: Table) -> Dict[str, Any]:
        values = {
            column.name: getattr(entity, column.name)
            for column in table.columns
            if hasattr(entity, column.name)
        }
        # Let the database assign autoincrement ids
        if values.get("id") is None:
            values.pop("id", None)
        return values

    @staticmethod
    def _to_entity(entity_type: Type[T], row) -> T:
        names = {f.name for f in fields(entity_type) if f.init}
        return entity_type(**{key: value for key, value in row.items() if key in names})

# auditguard/infrastructure/database/tables.py

from typing import Dict, List, Optional

from sqlalchemy import Boolean, Column, Integer, MetaData, Table, Uuid

from auditguard.infrastructure.database.types import UtcDateTime


def id_column(id_type=Uuid) -> Column:
    return Column("id", id_type, primary_key=True)


def audit_columns(id_type=Uuid, user_id_type=Uuid) -> List[Column]:
    """Fresh id + audit metadata + soft-delete columns for one table."""
    return [
        id_column(id_type),
        Column("created_on", UtcDateTime, nullable=True),
        Column("created_by", user_id_type, nullable=True),
        Column("modified_on", UtcDateTime, nullable=True),
        Column("modified_by", user_id_type, nullable=True),
        Column("synchronized_on", UtcDateTime, nullable=True),
        Column("version", Integer, nullable=False, default=0),
        Column("is_deleted", Boolean, nullable=False, default=False, index=True),
    ]


class TableRegistry:
    """Maps entity types to the tables that store them."""

    def __init__(self, metadata: Optional[MetaData] = None) -> None:
        self.metadata = metadata or MetaData()
        self._tables: Dict[type, Table] = {}

    def register(self, entity_type: type, table: Table) -> Table:
        self._tables[entity_type] = table
        return table

    def table_for(self, entity_type: type) -> Table:
        try:
            return self._tables[entity_type]
        except KeyError:
            raise LookupError(f"No table registered for {entity_type.__name__}") from None

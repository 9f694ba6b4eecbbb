# scripts/run_sample.py

import sys
from pathlib import Path

# Ensure project root is on the path when running this script directly
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import uuid
from dataclasses import dataclass

from sqlalchemy import Column, Float, String, Table

from auditguard.application.change_set import ChangeSetOrchestrator
from auditguard.application.queries import find_by_id, list_live
from auditguard.config.logging import configure_logging
from auditguard.config.settings import get_settings
from auditguard.domain.exceptions import NotFoundError, ReadOnlyScopeViolationError
from auditguard.domain.models.entity import GuidAuditBase
from auditguard.infrastructure.database.session import create_db_engine
from auditguard.infrastructure.database.storage import SqlAlchemyStorageEngine
from auditguard.infrastructure.database.tables import TableRegistry, audit_columns
from auditguard.security.read_only_scope import ReadOnlyScope

ALICE = uuid.UUID("11111111-1111-1111-1111-111111111111")
BOB = uuid.UUID("22222222-2222-2222-2222-222222222222")


@dataclass(kw_only=True)
class Product(GuidAuditBase[uuid.UUID]):
    name: str = ""
    price: float = 0.0


def run_sample():
    settings = get_settings()
    configure_logging(settings.log_level)

    registry = TableRegistry()
    registry.register(
        Product,
        Table(
            "products",
            registry.metadata,
            *audit_columns(),
            Column("name", String(100), nullable=False),
            Column("price", Float, nullable=False),
        ),
    )
    storage = SqlAlchemyStorageEngine(create_db_engine(settings), registry)
    storage.create_all()
    orchestrator = ChangeSetOrchestrator[uuid.UUID](storage, user_id_type=uuid.UUID)

    product = storage.add(Product(name="Widget", price=10.0))
    orchestrator.commit(ALICE)
    print("Created:", product.name, "version", product.version)

    product.price = 12.5
    storage.update(product)
    orchestrator.commit(BOB)
    loaded = find_by_id(storage, Product, product.id)
    print("Updated by:", loaded.modified_by, "version", loaded.version)

    storage.update(loaded)
    with ReadOnlyScope():
        try:
            orchestrator.commit(ALICE)
        except ReadOnlyScopeViolationError as e:
            print("Rejected:", e.message)
    storage.clear()

    storage.remove(product)
    orchestrator.commit(ALICE)
    try:
        find_by_id(storage, Product, product.id)
    except NotFoundError as e:
        print("After delete:", e.message)
    print("Live products:", len(list_live(storage, Product)))


run_sample()

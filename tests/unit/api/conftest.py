"""Fixtures for API unit tests: a small FastAPI app over an in-memory store, AsyncClient."""

import uuid

import pytest
from fastapi import FastAPI, Request
from httpx import ASGITransport, AsyncClient

from auditguard.api.errors import register_exception_handlers
from auditguard.api.middleware import (
    ActorIdentityMiddleware,
    CorrelationIdMiddleware,
    ReadOnlyRequestMiddleware,
)
from auditguard.application.change_set import ChangeSetOrchestrator
from auditguard.application.queries import find_by_id
from auditguard.infrastructure.memory.store import InMemoryStorageEngine
from auditguard.security.identity import IdentityProvider
from tests.unit.fakes import Product


@pytest.fixture
def storage():
    return InMemoryStorageEngine()


@pytest.fixture
def app(storage):
    """Product endpoints wired through the middleware stack."""
    orchestrator = ChangeSetOrchestrator[uuid.UUID](
        storage,
        identity_provider=IdentityProvider(),
        user_id_type=uuid.UUID,
    )
    app = FastAPI()
    register_exception_handlers(app)
    # Last added runs first
    app.add_middleware(ReadOnlyRequestMiddleware)
    app.add_middleware(ActorIdentityMiddleware)
    app.add_middleware(CorrelationIdMiddleware)

    @app.post("/products")
    async def create_product(payload: dict):
        product = storage.add(Product(name=payload["name"], price=payload.get("price", 0.0)))
        orchestrator.commit()
        return {"id": str(product.id), "created_by": str(product.created_by)}

    @app.get("/products/{product_id}")
    async def get_product(product_id: uuid.UUID):
        product = find_by_id(storage, Product, product_id)
        return {"id": str(product.id), "name": product.name, "version": product.version}

    @app.get("/products/{product_id}/touch")
    async def touch_product(product_id: uuid.UUID):
        product = find_by_id(storage, Product, product_id)
        storage.update(product)
        orchestrator.commit()
        return {"version": product.version}

    @app.post("/products/{product_id}/rename")
    async def rename_product(product_id: uuid.UUID, payload: dict):
        # Stages an update without loading, so a missing row surfaces at commit
        product = storage.update(Product(id=product_id, name=payload["name"]))
        orchestrator.commit()
        return {"version": product.version}

    @app.get("/whoami")
    async def whoami(request: Request):
        return {
            "correlation_id": request.state.correlation_id,
            "actor_id": str(request.state.actor_id) if request.state.actor_id else None,
        }

    return app


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

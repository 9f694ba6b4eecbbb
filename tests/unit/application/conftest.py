"""Fixtures for application tests: in-memory storage, orchestrator with a fixed clock."""

from unittest.mock import MagicMock

import pytest

from auditguard.application.change_set import ChangeSetOrchestrator
from auditguard.audit.visitor import AuditVisitor
from auditguard.infrastructure.memory.store import InMemoryStorageEngine
from auditguard.security.identity import IdentityProvider
from tests.unit.fakes import FixedClock


@pytest.fixture
def storage():
    return InMemoryStorageEngine()


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def logger():
    return MagicMock()


@pytest.fixture
def identity_provider():
    provider = IdentityProvider()
    yield provider
    provider.clear_current_user_id()


@pytest.fixture
def orchestrator(storage, clock, logger, identity_provider):
    return ChangeSetOrchestrator(
        storage,
        identity_provider=identity_provider,
        visitor=AuditVisitor(clock=clock),
        logger=logger,
    )

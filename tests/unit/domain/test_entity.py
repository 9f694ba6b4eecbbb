"""Entity contracts: capability tags, exclusivity, generic id typing."""

import uuid
from dataclasses import dataclass

import pytest

from auditguard.domain.models.entity import (
    AuditBase,
    Capabilities,
    ReadOnly,
    ReadOnlyEntityBase,
)
from tests.unit.fakes import Customer, LegacyProduct, Note, Product, Tag


@pytest.mark.parametrize(
    "entity_type, expected",
    [
        (Product, Capabilities(auditable=True, deletable=True, read_only=False)),
        (Customer, Capabilities(auditable=True, deletable=True, read_only=False)),
        (LegacyProduct, Capabilities(auditable=False, deletable=False, read_only=True)),
        (Note, Capabilities(auditable=False, deletable=False, read_only=False)),
        (Tag, Capabilities(auditable=False, deletable=True, read_only=False)),
    ],
)
def test_capabilities_by_type(entity_type, expected):
    assert Capabilities.of(entity_type) == expected


def test_audit_defaults():
    product = Product(name="Widget")
    assert product.version == 0
    assert product.is_deleted is False
    assert product.created_by is None
    assert product.modified_by is None
    assert product.created_on is None
    assert product.synchronized_on is None


def test_guid_base_generates_distinct_ids():
    first, second = Product(), Product()
    assert isinstance(first.id, uuid.UUID)
    assert first.id != second.id


def test_numeric_ids_are_caller_assigned():
    customer = Customer(id=7, name="Ada", created_by=3)
    assert customer.id == 7
    assert customer.created_by == 3


def test_read_only_and_auditable_cannot_be_combined():
    with pytest.raises(TypeError) as exc_info:

        @dataclass(kw_only=True)
        class Broken(AuditBase[int, int], ReadOnly):
            pass

    assert "Broken" in str(exc_info.value)


def test_read_only_base_carries_only_identity():
    legacy = LegacyProduct(id=1, name="Old")
    assert not hasattr(legacy, "version")
    assert not hasattr(legacy, "is_deleted")
    assert isinstance(legacy, ReadOnlyEntityBase)

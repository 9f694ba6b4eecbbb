"""Pending changes: operation verbs, restaging rules, in-place rewrites."""

import pytest

from auditguard.domain.exceptions import InvalidChangeError
from auditguard.domain.models.change import OperationKind, PendingChange, restage
from tests.unit.fakes import LegacyProduct, Product


def test_operation_verbs():
    assert OperationKind.INSERT.verb == "create"
    assert OperationKind.UPDATE.verb == "update"
    assert OperationKind.DELETE.verb == "delete"


def test_pending_change_tags_capabilities_once():
    change = PendingChange(entity=LegacyProduct(id=1), kind=OperationKind.INSERT)
    assert change.capabilities.read_only is True
    assert change.entity_type_name == "LegacyProduct"


def test_rewrite_delete_to_update():
    change = PendingChange(entity=Product(), kind=OperationKind.DELETE)
    change.rewrite(OperationKind.DELETE, OperationKind.UPDATE)
    assert change.kind is OperationKind.UPDATE


def test_rewrite_requires_matching_from_kind():
    change = PendingChange(entity=Product(), kind=OperationKind.UPDATE)
    with pytest.raises(InvalidChangeError):
        change.rewrite(OperationKind.DELETE, OperationKind.UPDATE)


def test_rewrite_insert_not_allowed():
    change = PendingChange(entity=Product(), kind=OperationKind.INSERT)
    with pytest.raises(InvalidChangeError):
        change.rewrite(OperationKind.INSERT, OperationKind.UPDATE)


@pytest.mark.parametrize(
    "current, requested, expected",
    [
        (OperationKind.INSERT, OperationKind.UPDATE, OperationKind.INSERT),
        (OperationKind.INSERT, OperationKind.DELETE, None),
        (OperationKind.UPDATE, OperationKind.DELETE, OperationKind.DELETE),
        (OperationKind.DELETE, OperationKind.DELETE, OperationKind.DELETE),
    ],
)
def test_restage_allowed(current, requested, expected):
    assert restage(current, requested) is expected


@pytest.mark.parametrize(
    "current, requested",
    [
        (OperationKind.INSERT, OperationKind.INSERT),
        (OperationKind.DELETE, OperationKind.UPDATE),
        (OperationKind.UPDATE, OperationKind.INSERT),
    ],
)
def test_restage_rejected(current, requested):
    with pytest.raises(InvalidChangeError):
        restage(current, requested)

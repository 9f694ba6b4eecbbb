"""ReadOnlyEntityGuard: always-on veto for read-only entity types."""

import pytest

from auditguard.domain.exceptions import ReadOnlyEntityError
from auditguard.domain.models.change import OperationKind, PendingChange
from auditguard.security.read_only_guard import ReadOnlyEntityGuard
from tests.unit.fakes import LegacyProduct, Product


@pytest.mark.parametrize(
    "kind, operation",
    [
        (OperationKind.INSERT, "create"),
        (OperationKind.UPDATE, "update"),
        (OperationKind.DELETE, "delete"),
    ],
)
def test_read_only_entity_rejected(kind, operation):
    change = PendingChange(entity=LegacyProduct(id=1), kind=kind)
    with pytest.raises(ReadOnlyEntityError) as exc_info:
        ReadOnlyEntityGuard.check(change)
    assert exc_info.value.entity_type == "LegacyProduct"
    assert exc_info.value.operation == operation
    assert "LegacyProduct" in exc_info.value.message
    assert operation in exc_info.value.message


def test_regular_entity_passes():
    ReadOnlyEntityGuard.check(PendingChange(entity=Product(), kind=OperationKind.DELETE))

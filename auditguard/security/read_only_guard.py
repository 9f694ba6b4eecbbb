"""Per-type read-only policy. Always on, independent of any read-only scope."""

from auditguard.domain.exceptions import ReadOnlyEntityError
from auditguard.domain.models.change import PendingChange


class ReadOnlyEntityGuard:
    """Veto create/update/delete of entity types tagged read-only."""

    @staticmethod
    def check(change: PendingChange) -> None:
        """Raises ReadOnlyEntityError naming the entity type and attempted operation."""
        if change.capabilities.read_only:
            raise ReadOnlyEntityError(change.entity_type_name, change.kind.verb)

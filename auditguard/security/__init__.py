"""Security: read-only scopes, read-only entity guard, acting-user identity."""

from auditguard.security.identity import IdentityProvider
from auditguard.security.read_only_guard import ReadOnlyEntityGuard
from auditguard.security.read_only_scope import ReadOnlyScope, enforce_read_only

__all__ = [
    "IdentityProvider",
    "ReadOnlyEntityGuard",
    "ReadOnlyScope",
    "enforce_read_only",
]

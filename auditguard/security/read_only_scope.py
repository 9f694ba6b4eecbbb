"""Context-local read-only scope. While active, any commit with pending changes is refused."""

import contextvars
from typing import Optional

from auditguard.core.context import read_only_depth_ctx


class ReadOnlyScope:
    """
    Marks the current logical execution context (request, asyncio task) as query-only.

    Scopes nest: each enter() must be paired with exit(), and exiting an inner scope
    leaves an outer one active. State lives in a context variable, so concurrent
    tasks never observe each other's scopes.

        with ReadOnlyScope():
            storage.get_by_id(Product, product_id)   # fine
            orchestrator.commit()                    # ReadOnlyScopeViolationError if anything is staged
    """

    def __init__(self) -> None:
        self._token: Optional[contextvars.Token] = None
        self._depth = 0

    @staticmethod
    def is_active() -> bool:
        return read_only_depth_ctx.get() > 0

    def enter(self) -> "ReadOnlyScope":
        if self._token is not None:
            raise RuntimeError("ReadOnlyScope already entered; create a new scope to nest")
        self._depth = read_only_depth_ctx.get() + 1
        self._token = read_only_depth_ctx.set(self._depth)
        return self

    def exit(self) -> None:
        """End this scope. Only the innermost open scope may exit."""
        if self._token is None:
            raise RuntimeError("ReadOnlyScope exited without being entered")
        if read_only_depth_ctx.get() != self._depth:
            raise RuntimeError("ReadOnlyScope exited out of order; exit the innermost scope first")
        token, self._token = self._token, None
        read_only_depth_ctx.reset(token)

    def __enter__(self) -> "ReadOnlyScope":
        return self.enter()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.exit()


def enforce_read_only() -> ReadOnlyScope:
    """Return a new, not yet entered, read-only scope."""
    return ReadOnlyScope()

"""Acting-user identity for the current request or task."""

from typing import Generic, Optional, TypeVar

from auditguard.core.context import actor_id_ctx

TUserId = TypeVar("TUserId")


class IdentityProvider(Generic[TUserId]):
    """Context-local current user id. Unset means a system/anonymous operation."""

    def get_current_user_id(self) -> Optional[TUserId]:
        return actor_id_ctx.get()

    def set_current_user_id(self, user_id: TUserId) -> None:
        actor_id_ctx.set(user_id)

    def clear_current_user_id(self) -> None:
        actor_id_ctx.set(None)

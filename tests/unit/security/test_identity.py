"""IdentityProvider: context-local current user."""

import asyncio

from auditguard.security.identity import IdentityProvider
from tests.unit.fakes import U1, U2


def test_set_get_clear():
    provider = IdentityProvider()
    assert provider.get_current_user_id() is None
    provider.set_current_user_id(U1)
    assert provider.get_current_user_id() == U1
    provider.clear_current_user_id()
    assert provider.get_current_user_id() is None


async def test_current_user_isolated_per_task():
    provider = IdentityProvider()

    async def act_as(user_id):
        provider.set_current_user_id(user_id)
        await asyncio.sleep(0)
        return provider.get_current_user_id()

    results = await asyncio.gather(act_as(U1), act_as(U2))
    assert results == [U1, U2]
    assert provider.get_current_user_id() is None

import asyncio

from core.password import verify_password_sync
from core.store import InMemoryStore
from seed.contacts import SEED_CONTACTS, clear_contacts, seed_contacts
from seed.users import DEV_PASSWORD, SAMPLE_USERS, seed_users


def test_seed_is_idempotent():
    store = InMemoryStore()

    async def run():
        user_ids = await seed_users(store)
        await seed_contacts(store, user_ids)
        await seed_contacts(store, await seed_users(store))
        return user_ids

    user_ids = asyncio.run(run())

    assert len(store.users) == len(SAMPLE_USERS)
    assert len(store.contacts) == sum(len(c) for c in SEED_CONTACTS.values())
    for contact in store.contacts.values():
        assert contact.user_id in user_ids.values()
    user = next(iter(store.users.values()))
    assert verify_password_sync(DEV_PASSWORD, user.password)


def test_clear_contacts():
    store = InMemoryStore()

    async def run():
        user_ids = await seed_users(store)
        await seed_contacts(store, user_ids)
        await clear_contacts(store, user_ids)

    asyncio.run(run())

    assert store.contacts == {}

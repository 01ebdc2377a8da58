"""Seed data for users with known development passwords."""

from core.password import hash_password
from core.store import Store

# Every seeded user logs in with this password.
DEV_PASSWORD = "password123"

SAMPLE_USERS = [
    {"username": "johndoe", "email": "johndoe@example.com"},
    {"username": "janedoe", "email": "janedoe@example.com"},
]


async def seed_users(store: Store) -> dict[str, str]:
    """Register the sample users that do not exist yet.

    Returns:
        Mapping of email to user id for every sample user.
    """
    user_ids: dict[str, str] = {}
    for sample in SAMPLE_USERS:
        user = await store.find_user_by_email(sample["email"])
        if user:
            print(f"User already exists: {user.username}")
        else:
            user = await store.insert_user(
                sample["username"],
                sample["email"],
                await hash_password(DEV_PASSWORD),
            )
            print(f"Created user: {user.username} (id: {user.id})")
        user_ids[user.email] = user.id
    return user_ids

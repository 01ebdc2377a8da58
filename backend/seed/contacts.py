"""Seed data for contacts owned by the sample users."""

from core.store import Store

# Keyed by owner email (see seed.users.SAMPLE_USERS)
SEED_CONTACTS = {
    "johndoe@example.com": [
        {"name": "Alice Johnson", "email": "alice.johnson@techstart.io", "phone": "555-0101"},
        {"name": "Bob Williams", "email": "bob.williams@consultinggroup.com", "phone": "555-0201"},
        {"name": "Carol Martinez", "email": "cmartinez@medcenter.org", "phone": "555-0301"},
    ],
    "janedoe@example.com": [
        {"name": "David Chen", "email": "david.chen@acme.example", "phone": "555-0401"},
        {"name": "Emma Davis", "email": "emma.davis@example.net", "phone": "+1234567890"},
    ],
}


async def seed_contacts(store: Store, user_ids: dict[str, str]) -> None:
    """Insert sample contacts, skipping any the owner already has by name."""
    for owner_email, contacts in SEED_CONTACTS.items():
        user_id = user_ids.get(owner_email)
        if not user_id:
            print(f"  Warning: Owner not found: {owner_email}")
            continue

        existing = {c.name for c in await store.list_contacts(user_id)}
        for contact in contacts:
            if contact["name"] in existing:
                print(f"Contact already exists: {contact['name']}")
                continue
            created = await store.insert_contact(
                user_id, contact["name"], contact["email"], contact["phone"]
            )
            print(f"Created contact: {created.name} (id: {created.id})")


async def clear_contacts(store: Store, user_ids: dict[str, str]) -> None:
    """Remove every contact owned by the sample users."""
    removed = 0
    for user_id in user_ids.values():
        for contact in await store.list_contacts(user_id):
            await store.delete_contact(contact.id)
            removed += 1
    print(f"Cleared {removed} contacts of seeded users")

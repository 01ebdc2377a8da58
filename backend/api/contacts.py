import logging

import msgspec.structs
from litestar import Controller, delete, get, post, put

from core.auth import Identity
from core.errors import AuthzError, NotFoundError, ValidationError
from core.models import Contact
from core.store import Store


logger = logging.getLogger(__name__)


class ContactCreate(msgspec.Struct, forbid_unknown_fields=True):
    """Create a new contact owned by the caller."""

    name: str
    email: str
    phone: str


class ContactUpdate(msgspec.Struct, forbid_unknown_fields=True):
    """Partial update; fields left out (or null) keep their current value."""

    name: str | None = None
    email: str | None = None
    phone: str | None = None


async def _get_owned_contact(store: Store, contact_id: str, identity: Identity) -> Contact:
    """Fetch a contact the caller owns.

    Raises:
        NotFoundError: if no contact has this id
        AuthzError: if the contact exists but belongs to another user
    """
    contact = await store.get_contact(contact_id)
    if contact is None:
        raise NotFoundError("Contact not found")
    if contact.user_id != identity.id:
        logger.info("User %s denied access to contact %s", identity.id, contact_id)
        raise AuthzError("User doesn't have permission to access other user contacts")
    return contact


class ContactsController(Controller):
    path = "/api/contacts"
    tags = ["Contacts"]
    security = [{"bearerAuth": []}]

    @get()
    async def list_contacts(self, store: Store, identity: Identity) -> list[Contact]:
        """Get all contacts of the logged-in user."""
        return await store.list_contacts(identity.id)

    @get("/{contact_id:str}")
    async def get_contact(
        self, store: Store, identity: Identity, contact_id: str
    ) -> Contact:
        """Get a single contact by ID."""
        return await _get_owned_contact(store, contact_id, identity)

    @post(status_code=201)
    async def create_contact(
        self, store: Store, identity: Identity, data: ContactCreate
    ) -> Contact:
        """Create a new contact."""
        if not (data.name.strip() and data.email.strip() and data.phone.strip()):
            raise ValidationError("All fields are mandatory!")

        return await store.insert_contact(identity.id, data.name, data.email, data.phone)

    @put("/{contact_id:str}")
    async def update_contact(
        self, store: Store, identity: Identity, contact_id: str, data: ContactUpdate
    ) -> Contact:
        """Update a contact by ID. Only the owner can update."""
        await _get_owned_contact(store, contact_id, identity)

        fields = {
            key: value
            for key, value in msgspec.structs.asdict(data).items()
            if value is not None
        }
        contact = await store.update_contact(contact_id, fields)
        if contact is None:
            raise NotFoundError("Contact not found")
        return contact

    @delete("/{contact_id:str}", status_code=200)
    async def delete_contact(
        self, store: Store, identity: Identity, contact_id: str
    ) -> Contact:
        """Delete a contact by ID and return its last values. Only the owner can delete."""
        await _get_owned_contact(store, contact_id, identity)

        contact = await store.delete_contact(contact_id)
        if contact is None:
            raise NotFoundError("Contact not found")
        return contact

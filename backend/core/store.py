"""
Store interface plus an in-memory implementation for development and tests.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Protocol, runtime_checkable

import msgspec.structs

from core.config import AppConfig
from core.errors import ConflictError
from core.models import CONTACT_FIELDS, Contact, User


logger = logging.getLogger(__name__)


@runtime_checkable
class Store(Protocol):
    """Persistence for users and contacts.

    Lookups by id return ``None`` for unknown or malformed ids; callers decide
    whether that is a 404.
    """

    async def open(self) -> None:
        ...

    async def close(self) -> None:
        ...

    async def ping(self) -> bool:
        ...

    async def find_user_by_email(self, email: str) -> User | None:
        ...

    async def insert_user(self, username: str, email: str, password_hash: str) -> User:
        ...

    async def list_contacts(self, user_id: str) -> list[Contact]:
        ...

    async def get_contact(self, contact_id: str) -> Contact | None:
        ...

    async def insert_contact(
        self, user_id: str, name: str, email: str, phone: str
    ) -> Contact:
        ...

    async def update_contact(
        self, contact_id: str, fields: dict[str, Any]
    ) -> Contact | None:
        ...

    async def delete_contact(self, contact_id: str) -> Contact | None:
        ...


def _now() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryStore:
    """Dict-backed store. State lives only as long as the process."""

    def __init__(self) -> None:
        self.users: dict[str, User] = {}
        self.contacts: dict[str, Contact] = {}

    async def open(self) -> None:
        logger.info("Using in-memory store")

    async def close(self) -> None:
        pass

    async def ping(self) -> bool:
        return True

    def reset(self) -> None:
        self.users.clear()
        self.contacts.clear()

    async def find_user_by_email(self, email: str) -> User | None:
        for user in self.users.values():
            if user.email == email:
                return user
        return None

    async def insert_user(self, username: str, email: str, password_hash: str) -> User:
        if await self.find_user_by_email(email):
            raise ConflictError("User already registered!")
        now = _now()
        user = User(
            id=str(uuid.uuid4()),
            username=username,
            email=email,
            password=password_hash,
            created_at=now,
            updated_at=now,
        )
        self.users[user.id] = user
        return user

    async def list_contacts(self, user_id: str) -> list[Contact]:
        return [c for c in self.contacts.values() if c.user_id == user_id]

    async def get_contact(self, contact_id: str) -> Contact | None:
        return self.contacts.get(contact_id)

    async def insert_contact(
        self, user_id: str, name: str, email: str, phone: str
    ) -> Contact:
        now = _now()
        contact = Contact(
            id=str(uuid.uuid4()),
            user_id=user_id,
            name=name,
            email=email,
            phone=phone,
            created_at=now,
            updated_at=now,
        )
        self.contacts[contact.id] = contact
        return contact

    async def update_contact(
        self, contact_id: str, fields: dict[str, Any]
    ) -> Contact | None:
        contact = self.contacts.get(contact_id)
        if contact is None:
            return None
        changes = {k: v for k, v in fields.items() if k in CONTACT_FIELDS}
        if not changes:
            return contact
        updated = msgspec.structs.replace(contact, updated_at=_now(), **changes)
        self.contacts[contact_id] = updated
        return updated

    async def delete_contact(self, contact_id: str) -> Contact | None:
        return self.contacts.pop(contact_id, None)


def create_store(config: AppConfig) -> Store:
    """Pick the store for this config: Postgres when a database host is set."""
    if not config.database.host:
        return InMemoryStore()

    from core.db import PostgresStore

    return PostgresStore(config.database.conninfo)

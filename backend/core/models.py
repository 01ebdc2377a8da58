"""Records held by the store."""

from dataclasses import dataclass
from datetime import datetime

import msgspec


@dataclass
class User:
    """A registered user. ``password`` holds the Argon2 hash, never plaintext."""

    id: str
    username: str
    email: str
    password: str
    created_at: datetime
    updated_at: datetime


class Contact(msgspec.Struct, kw_only=True):
    """A contact owned by exactly one user; ``user_id`` never changes after creation."""

    id: str
    user_id: str
    name: str
    email: str
    phone: str
    created_at: datetime = msgspec.field(name="createdAt")
    updated_at: datetime = msgspec.field(name="updatedAt")


# Fields a client may change on a contact.
CONTACT_FIELDS = ("name", "email", "phone")

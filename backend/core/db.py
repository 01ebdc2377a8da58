import logging
import uuid
from typing import Any

import psycopg
import psycopg.errors
import psycopg.rows
import psycopg_pool

from core.errors import ConflictError
from core.models import CONTACT_FIELDS, Contact, User


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# SQL Queries
# ---------------------------------------------------------------------------


def sql_create_schema() -> list[str]:
    """Create the users and contacts tables if they do not exist yet."""
    return [
        """
        CREATE TABLE IF NOT EXISTS users (
            id uuid PRIMARY KEY DEFAULT gen_random_uuid(),
            username text NOT NULL,
            email text NOT NULL UNIQUE,
            password text NOT NULL,
            created_at timestamptz NOT NULL DEFAULT now(),
            updated_at timestamptz NOT NULL DEFAULT now()
        )
        """,
        """
        CREATE TABLE IF NOT EXISTS contacts (
            id uuid PRIMARY KEY DEFAULT gen_random_uuid(),
            user_id uuid NOT NULL REFERENCES users (id),
            name text NOT NULL,
            email text NOT NULL,
            phone text NOT NULL,
            created_at timestamptz NOT NULL DEFAULT now(),
            updated_at timestamptz NOT NULL DEFAULT now()
        )
        """,
        "CREATE INDEX IF NOT EXISTS contacts_user_id_idx ON contacts (user_id)",
    ]


USER_COLUMNS = "id::text AS id, username, email, password, created_at, updated_at"

CONTACT_COLUMNS = (
    "id::text AS id, user_id::text AS user_id, name, email, phone, created_at, updated_at"
)


def sql_select_user_by_email() -> str:
    return f"SELECT {USER_COLUMNS} FROM users WHERE email = %(email)s"


def sql_insert_user() -> str:
    return f"""
        INSERT INTO users (username, email, password)
        VALUES (%(username)s, %(email)s, %(password)s)
        RETURNING {USER_COLUMNS}
    """


def sql_select_contacts_by_user() -> str:
    """List all contacts owned by a user."""
    return f"""
        SELECT {CONTACT_COLUMNS}
        FROM contacts
        WHERE user_id = %(user_id)s
        ORDER BY created_at
    """


def sql_select_contact_by_id() -> str:
    return f"SELECT {CONTACT_COLUMNS} FROM contacts WHERE id = %(id)s"


def sql_insert_contact() -> str:
    return f"""
        INSERT INTO contacts (user_id, name, email, phone)
        VALUES (%(user_id)s, %(name)s, %(email)s, %(phone)s)
        RETURNING {CONTACT_COLUMNS}
    """


def sql_update_contact(fields: set[str]) -> str:
    """Update contact fields dynamically and bump updated_at."""
    updates = [f"{f} = %({f})s" for f in sorted(fields) if f in CONTACT_FIELDS]
    if not updates:
        raise ValueError("No valid fields to update")
    return f"""
        UPDATE contacts
        SET {", ".join(updates)}, updated_at = now()
        WHERE id = %(id)s
        RETURNING {CONTACT_COLUMNS}
    """


def sql_delete_contact() -> str:
    return f"DELETE FROM contacts WHERE id = %(id)s RETURNING {CONTACT_COLUMNS}"


def _parse_id(value: str) -> uuid.UUID | None:
    try:
        return uuid.UUID(value)
    except (ValueError, TypeError):
        return None


class PostgresStore:
    """Store backed by an async psycopg connection pool.

    The pool is created in ``open()`` and released in ``close()``; the app's
    lifespan owns both calls.
    """

    def __init__(self, conninfo: str, min_size: int = 2, max_size: int = 10) -> None:
        self.conninfo = conninfo
        self.min_size = min_size
        self.max_size = max_size
        self.pool: psycopg_pool.AsyncConnectionPool | None = None

    async def open(self) -> None:
        """Open the pool and make sure the tables exist."""
        self.pool = psycopg_pool.AsyncConnectionPool(
            conninfo=self.conninfo,
            min_size=self.min_size,
            max_size=self.max_size,
            open=False,
        )
        await self.pool.open()
        await self.pool.wait()
        async with self.pool.connection() as conn:
            async with conn.cursor() as cur:
                for statement in sql_create_schema():
                    await cur.execute(statement)
        logger.info("Database pool initialized")

    async def close(self) -> None:
        if self.pool:
            await self.pool.close()
            self.pool = None
            logger.info("Database pool closed")

    async def ping(self) -> bool:
        if not self.pool:
            return False
        try:
            async with self.pool.connection() as conn:
                async with conn.cursor() as cur:
                    await cur.execute("SELECT 1")
            return True
        except psycopg.Error:
            logger.warning("Database ping failed", exc_info=True)
            return False

    async def _fetch_one(
        self, query: str, params: dict[str, Any]
    ) -> dict[str, Any] | None:
        if not self.pool:
            raise RuntimeError("Database pool not initialized")
        async with self.pool.connection() as conn:
            async with conn.cursor(row_factory=psycopg.rows.dict_row) as cur:
                await cur.execute(query, params)
                return await cur.fetchone()

    async def _fetch_all(self, query: str, params: dict[str, Any]) -> list[dict[str, Any]]:
        if not self.pool:
            raise RuntimeError("Database pool not initialized")
        async with self.pool.connection() as conn:
            async with conn.cursor(row_factory=psycopg.rows.dict_row) as cur:
                await cur.execute(query, params)
                return await cur.fetchall()

    async def find_user_by_email(self, email: str) -> User | None:
        row = await self._fetch_one(sql_select_user_by_email(), {"email": email})
        return User(**row) if row else None

    async def insert_user(self, username: str, email: str, password_hash: str) -> User:
        try:
            row = await self._fetch_one(
                sql_insert_user(),
                {"username": username, "email": email, "password": password_hash},
            )
        except psycopg.errors.UniqueViolation as exc:
            raise ConflictError("User already registered!") from exc
        if not row:
            raise RuntimeError("Failed to create user")
        return User(**row)

    async def list_contacts(self, user_id: str) -> list[Contact]:
        owner = _parse_id(user_id)
        if owner is None:
            return []
        rows = await self._fetch_all(sql_select_contacts_by_user(), {"user_id": owner})
        return [Contact(**row) for row in rows]

    async def get_contact(self, contact_id: str) -> Contact | None:
        parsed = _parse_id(contact_id)
        if parsed is None:
            return None
        row = await self._fetch_one(sql_select_contact_by_id(), {"id": parsed})
        return Contact(**row) if row else None

    async def insert_contact(
        self, user_id: str, name: str, email: str, phone: str
    ) -> Contact:
        row = await self._fetch_one(
            sql_insert_contact(),
            {"user_id": user_id, "name": name, "email": email, "phone": phone},
        )
        if not row:
            raise RuntimeError("Failed to create contact")
        return Contact(**row)

    async def update_contact(
        self, contact_id: str, fields: dict[str, Any]
    ) -> Contact | None:
        parsed = _parse_id(contact_id)
        if parsed is None:
            return None
        changes = {k: v for k, v in fields.items() if k in CONTACT_FIELDS}
        if not changes:
            return await self.get_contact(contact_id)
        row = await self._fetch_one(
            sql_update_contact(set(changes)), {"id": parsed, **changes}
        )
        return Contact(**row) if row else None

    async def delete_contact(self, contact_id: str) -> Contact | None:
        parsed = _parse_id(contact_id)
        if parsed is None:
            return None
        row = await self._fetch_one(sql_delete_contact(), {"id": parsed})
        return Contact(**row) if row else None

#!/usr/bin/env python3
"""Run seed scripts to populate the database with development data.

Usage:
    python -m seed.run [--clear]

Options:
    --clear     Remove the seeded users' contacts before inserting
"""

import argparse
import asyncio
import sys

from core.config import AppConfig
from core.store import create_store
from seed.users import seed_users
from seed.contacts import clear_contacts, seed_contacts


async def main(clear: bool = False) -> int:
    """Run all seed scripts."""
    config = AppConfig.load()

    if not config.database.host:
        print("Error: No database configured")
        return 1

    print(f"Connecting to database: {config.database.host}/{config.database.name}")

    store = create_store(config)
    await store.open()
    try:
        print("\n=== Seeding users ===")
        user_ids = await seed_users(store)

        if clear:
            print("\n=== Clearing seed data ===")
            await clear_contacts(store, user_ids)

        print("\n=== Seeding contacts ===")
        await seed_contacts(store, user_ids)

        print("\n=== Seed complete ===")
        return 0
    finally:
        await store.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the database with development data")
    parser.add_argument(
        "--clear",
        action="store_true",
        help="Clear the seeded users' contacts before inserting",
    )
    args = parser.parse_args()

    sys.exit(asyncio.run(main(clear=args.clear)))

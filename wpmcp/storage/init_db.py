# Copyright (c) 2026 WPMCP Contributors. All Rights Reserved.

"""
Database Initialization — Create tables from ORM metadata.

Usage: python -m wpmcp.storage.init_db
"""

import asyncio

from wpmcp.storage.database import close_db, create_all_tables


async def main():
    """Create all gateway tables."""
    print("[init_db] Creating tables...")
    await create_all_tables()
    print("[init_db] Done.")
    await close_db()


if __name__ == "__main__":
    asyncio.run(main())

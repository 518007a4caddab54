#!/usr/bin/env python3
"""
Database Initialization Script
Creates tables and reports what exists.
"""
import asyncio
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import text
from cel_schedule.database import engine, Base, create_tables
# Register every model on Base.metadata
import cel_schedule.models  # noqa: F401


async def init_database():
    """Initialize the database tables."""
    print("=" * 50)
    print("CEL Schedule Database Initialization")
    print("=" * 50)

    # Create all tables
    print("\n[1/2] Creating database tables...")
    await create_tables()
    print("      Tables created successfully!")

    # Verify tables
    print("\n[2/2] Verifying database structure...")
    async with engine.connect() as conn:
        for table in Base.metadata.sorted_tables:
            count_result = await conn.execute(text(f'SELECT COUNT(*) FROM "{table.name}"'))
            row_count = count_result.scalar()
            print(f"        - {table.name}: {row_count} rows")

    print("\n" + "=" * 50)
    print("Database initialization complete!")
    print("=" * 50)


async def reset_database():
    """Drop all tables and recreate them (USE WITH CAUTION!)."""
    print("WARNING: This will delete all data!")
    confirm = input("Type 'RESET' to confirm: ")

    if confirm != "RESET":
        print("Aborted.")
        return

    print("\nDropping all tables...")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    print("Recreating tables...")
    await init_database()


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Database initialization script")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Drop and recreate all tables (destructive!)"
    )
    args = parser.parse_args()

    if args.reset:
        asyncio.run(reset_database())
    else:
        asyncio.run(init_database())

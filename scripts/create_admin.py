#!/usr/bin/env python3
"""
Admin User Creation Script
Creates or updates an admin user and the volunteer it is linked to.
"""
import asyncio
import sys
import os
import argparse
from datetime import datetime, timezone

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from cel_schedule.database import async_session_maker, create_tables
from cel_schedule.models import AccessLevel, AuthUser, Volunteer
from cel_schedule.repositories import Database, SqlDatabase
from cel_schedule.services.auth_service import get_password_hash


async def create_admin(
    username: str,
    password: str,
    volunteer_id: str | None = None,
    name: str | None = None,
    db: Database | None = None
) -> AuthUser:
    """Create or update an admin user."""
    print("=" * 50)
    print("CEL Schedule Admin User Management")
    print("=" * 50)

    if db is None:
        # Ensure tables exist
        print("\n[1/3] Ensuring database tables exist...")
        await create_tables()
        print("      Tables verified!")
        db = SqlDatabase(async_session_maker)

    # Linked volunteer
    print("\n[2/3] Resolving linked volunteer...")
    if volunteer_id:
        volunteer = await db.volunteers.get(volunteer_id)
        if volunteer is None:
            raise SystemExit(f"Error: Volunteer '{volunteer_id}' not found")
        print(f"      Using volunteer '{volunteer.name}'")
    else:
        volunteer = Volunteer.new(name or "Administrator")
        await db.volunteers.create(volunteer)
        print(f"      Created volunteer '{volunteer.name}' ({volunteer.id})")

    # Create or update admin user
    print(f"\n[3/3] Creating/updating admin user '{username}'...")
    existing_user = await db.auth_users.get_by_username(username)

    if existing_user:
        # Update existing user
        existing_user.hashed_password = get_password_hash(password)
        existing_user.access_level = int(AccessLevel.ADMIN)
        existing_user.is_disabled = False
        existing_user.volunteer_id = volunteer.id
        existing_user.last_updated = datetime.now(timezone.utc)
        await db.auth_users.update(existing_user)
        user = existing_user
        print(f"      Updated existing user '{username}'!")
    else:
        # Create new user
        user = AuthUser.new(
            volunteer_id=volunteer.id,
            username=username,
            hashed_password=get_password_hash(password),
            access_level=AccessLevel.ADMIN
        )
        await db.auth_users.create(user)
        print(f"      Created new admin user '{username}'!")

    print(f"      User ID: {user.id}")
    print(f"      Volunteer ID: {user.volunteer_id}")
    print(f"      Access Level: ADMIN ({int(AccessLevel.ADMIN)})")

    print("\n" + "=" * 50)
    print("Admin user ready! You can now login at /api/auth/login")
    print("=" * 50)
    return user


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create or update admin user")
    parser.add_argument(
        "--username", "-u",
        type=str,
        default="admin",
        help="Admin username (default: admin)"
    )
    parser.add_argument(
        "--password", "-p",
        type=str,
        required=True,
        help="Admin password"
    )
    parser.add_argument(
        "--volunteer-id", "-v",
        type=str,
        default=None,
        help="Existing volunteer to link (default: create one)"
    )
    parser.add_argument(
        "--name", "-n",
        type=str,
        default=None,
        help="Name of the created volunteer (default: Administrator)"
    )

    args = parser.parse_args()

    if len(args.password) < 8:
        print("Error: Password must be at least 8 characters long")
        sys.exit(1)

    asyncio.run(create_admin(args.username, args.password, args.volunteer_id, args.name))

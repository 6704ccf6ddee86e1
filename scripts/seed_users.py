#!/usr/bin/env python3
"""Seed the database with demo registered users and print their session tokens.

Usage:
    python scripts/seed_users.py demo@example.com other@example.com
"""

import asyncio
import sys
from pathlib import Path

# Ensure project root is on path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from viralgif_engine.accounts.service import UserStore
from viralgif_engine.common.config import get_settings
from viralgif_engine.common.database import DatabaseManager
from viralgif_engine.common.security import SessionVerifier


async def seed_users(emails: list[str]) -> None:
    settings = get_settings()
    db = DatabaseManager(settings)
    await db.init()
    await db.create_all()

    store = UserStore()
    verifier = SessionVerifier(settings)

    async with db.get_session() as session:
        for email in emails:
            user = await store.find_by_email(session, email)
            if user:
                print(f"  [skip] {email} already exists")
            else:
                user = await store.create_user(session, email)
                print(f"  [created] {email}")
            print(f"    token: {verifier.issue(user.id)}")

    await db.close()


if __name__ == "__main__":
    asyncio.run(seed_users(sys.argv[1:] or ["demo@example.com"]))

#!/usr/bin/env python3
"""
Create a user that can sign in through POST /auth/login.
Usage (from repo root): python API/scripts/create_user.py <email> <password> [--name NAME]
Example: python API/scripts/create_user.py ada@example.com 696k2iyi --name "Ada"
"""
from __future__ import annotations

import argparse
import asyncio
import sys


async def _create(email: str, password: str, name: str) -> int:
    from loginkit.auth.queries import SqlUserQueries
    from loginkit.core.bootstrap import initialize_database
    from loginkit.core.password import hash_password
    from loginkit.memory.database import SessionLocal, engine

    await initialize_database(engine)
    try:
        async with SessionLocal() as db:
            queries = SqlUserQueries(db)
            if await queries.find_user_by_email(email):
                print(f"Error: user already exists: {email}", file=sys.stderr)
                return 1
            user = await queries.create_user(email, hash_password(password), name=name)
    finally:
        await engine.dispose()
    print(f"Created user {user.email} ({user.id})")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Create a login user")
    parser.add_argument("email")
    parser.add_argument("password")
    parser.add_argument("--name", default="", help="Display name")
    args = parser.parse_args()
    return asyncio.run(_create(args.email, args.password, args.name))


if __name__ == "__main__":
    sys.exit(main())

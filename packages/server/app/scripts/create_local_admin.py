"""
Script to create a super-admin user for local testing and print a bearer token.
"""

import argparse
import asyncio

from sqlmodel import select

import app.models  # noqa: F401
from app.core.auth import create_jwt
from app.core.database import async_session_factory, init_db, unit_of_work
from app.models.user import User
from app.services.users import norm_email


async def create_admin(code: str, name: str, email: str) -> str:
    await init_db()

    async with unit_of_work(async_session_factory) as session:
        result = await session.execute(select(User).where(User.code == code.upper()))
        user = result.scalar_one_or_none()

        if not user:
            user = User(
                code=code.upper(),
                name=name,
                role="Admin",
                email=norm_email(email),
                is_super_admin=True,
            )
            session.add(user)
            await session.flush()
            print(f"Created super-admin {user.code} ({user.id}).")
        else:
            if not user.is_super_admin:
                user.is_super_admin = True
                session.add(user)
                print(f"Promoted {user.code} to super-admin.")
            else:
                print(f"User {user.code} already exists.")
        user_id = user.id

    token, _ = create_jwt(user_id)
    return token


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create a local super-admin user.")
    parser.add_argument("--code", default="ADMIN", help="User code (default: ADMIN)")
    parser.add_argument("--name", default="Local Admin", help="Display name")
    parser.add_argument("--email", required=True, help="Email address for the user")

    args = parser.parse_args()

    token = asyncio.run(create_admin(args.code, args.name, args.email))
    print(f"Bearer token: {token}")

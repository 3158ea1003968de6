from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from loginkit.core.logging import DOMAIN_HISTORY, get_domain_logger
from loginkit.models.entities import LoginHistory, User

logger = get_domain_logger(__name__, DOMAIN_HISTORY)


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class SqlUserQueries:
    """User lookup and login history over a request-scoped session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_user_by_email(self, email: str) -> User | None:
        return (
            await self.db.execute(select(User).where(User.email == normalize_email(email)))
        ).scalar_one_or_none()

    async def update_login_history(self, user_id: uuid.UUID) -> None:
        now = datetime.now(timezone.utc)
        row = await self.db.get(LoginHistory, user_id)
        if row is None:
            row = LoginHistory(user_id=user_id, last_login_at=now, login_count=1)
            self.db.add(row)
        else:
            row.last_login_at = now
            row.login_count += 1
        await self.db.commit()
        logger.info("Login history updated | user_id=%s count=%s", user_id, row.login_count)

    async def create_user(self, email: str, password_hash: str, name: str = "") -> User:
        user = User(email=normalize_email(email), password_hash=password_hash, name=name)
        self.db.add(user)
        await self.db.commit()
        return user

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Protocol

from loginkit.core.alerts import AlertEngine
from loginkit.core.settings import settings
from loginkit.memory.session_store import SessionStore


class UserQueries(Protocol):
    async def find_user_by_email(self, email: str): ...

    async def update_login_history(self, user_id: uuid.UUID) -> None: ...


@dataclass
class HandlerContext:
    """Everything a login page handler touches, passed in explicitly."""

    users: UserQueries
    store: SessionStore
    alerts: AlertEngine
    client_id: str
    token_key: str = field(default_factory=lambda: settings.token_store_key)

"""Login page handler.

``sign_in`` looks the user up by email, verifies the password, and on success
signs a token, stores it in the client's session, refreshes login history and
raises a success alert. Any failure raises the same generic error alert so the
caller cannot tell an unknown email from a wrong password.
"""
from __future__ import annotations

import asyncio
import functools
import uuid
from dataclasses import dataclass

from loginkit.auth.context import HandlerContext
from loginkit.auth.queries import normalize_email
from loginkit.core.jwt_auth import create_token
from loginkit.core.logging import DOMAIN_AUTH, get_domain_logger
from loginkit.core.password import hash_password, verify_password

logger = get_domain_logger(__name__, DOMAIN_AUTH)

LOGIN_SUCCESS_MESSAGE = "Login success"
LOGIN_FAILURE_MESSAGE = "Invalid email/password"
DIAGNOSTIC_PASSWORD = "696k2iyi"
DIAGNOSTIC_ROUNDS = 10


@functools.lru_cache(maxsize=1)
def _placeholder_hash() -> str:
    # Unknown emails are verified against this hash; it never matches a submitted password.
    return hash_password("placeholder-never-matches")


@dataclass
class LoginResult:
    success: bool
    alert: dict
    token: str | None = None
    user_id: uuid.UUID | None = None


class LoginHandler:
    def __init__(self, context: HandlerContext | None = None):
        # test() needs no collaborators; sign_in does.
        self.context = context

    async def verify_hash(self, password: str, password_hash: str | None) -> bool:
        if not password_hash:
            return False
        try:
            return await asyncio.to_thread(verify_password, password, password_hash)
        except ValueError as exc:
            logger.warning("Stored password hash is not a bcrypt hash: %s", exc)
            return False

    async def sign_in(self, email: str, password: str) -> LoginResult:
        ctx = self.context
        if ctx is None:
            raise RuntimeError("sign_in requires a HandlerContext")
        user = await ctx.users.find_user_by_email(email)
        stored_hash = user.password_hash if user is not None else _placeholder_hash()
        verified = await self.verify_hash(password, stored_hash)

        if user is not None and verified:
            token = self.create_token(user)
            await ctx.store.store_value(ctx.token_key, token, persist=True)
            await ctx.users.update_login_history(user.id)
            alert = ctx.alerts.show_alert(LOGIN_SUCCESS_MESSAGE, "success", client_id=ctx.client_id)
            logger.info("Login succeeded | user_id=%s client=%s", user.id, ctx.client_id)
            return LoginResult(success=True, alert=alert, token=token, user_id=user.id)

        logger.info("Login rejected | email=%s client=%s", normalize_email(email), ctx.client_id)
        alert = ctx.alerts.show_alert(LOGIN_FAILURE_MESSAGE, "error", client_id=ctx.client_id)
        return LoginResult(success=False, alert=alert)

    def create_token(self, user) -> str:
        return create_token(user)

    def test(self) -> str:
        """Hash the diagnostic password at cost 10 and log it."""
        hashed = hash_password(DIAGNOSTIC_PASSWORD, rounds=DIAGNOSTIC_ROUNDS)
        logger.info("Diagnostic bcrypt hash: %s", hashed)
        return hashed

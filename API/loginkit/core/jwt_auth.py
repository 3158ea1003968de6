"""JWT creation and verification for login sessions."""
from datetime import datetime, timedelta, timezone

import jwt

from loginkit.core.settings import settings


def token_claims(user, now: datetime | None = None) -> dict:
    """Minimal claim set for ``user``: identity plus issue/expiry times."""
    issued = (now or datetime.now(timezone.utc)).replace(microsecond=0)
    return {
        "sub": str(user.id),
        "email": user.email,
        "iat": issued,
        "exp": issued + timedelta(seconds=settings.jwt_expire_seconds),
    }


def create_token(user, now: datetime | None = None) -> str:
    return jwt.encode(
        token_claims(user, now=now),
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )


def decode_token(token: str) -> dict | None:
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
        )
    except jwt.PyJWTError:
        return None

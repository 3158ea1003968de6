"""Password hashing for the login handler.

bcrypt through passlib, so hashes written by bcrypt.js (``$2a$``) and by
Python (``$2b$``) verify the same way. bcrypt only reads the first 72 bytes.
"""
from passlib.context import CryptContext

from loginkit.core.settings import settings

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)


def _truncate(plain: str) -> str:
    return (plain or "")[:72]


def hash_password(plain: str, rounds: int | None = None) -> str:
    if rounds is None:
        return pwd_context.hash(_truncate(plain))
    return pwd_context.handler("bcrypt").using(rounds=rounds).hash(_truncate(plain))


def verify_password(plain: str, hashed: str) -> bool:
    """Constant-time check of ``plain`` against ``hashed``.

    Raises ValueError when ``hashed`` is not a recognised bcrypt hash.
    """
    return pwd_context.verify(_truncate(plain), hashed)

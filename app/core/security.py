from __future__ import annotations

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str, rounds: int) -> str:
    """Salted bcrypt hash of ``password`` using ``rounds`` as the cost factor."""
    return pwd_context.using(bcrypt__rounds=rounds).hash(password)


def verify_password(plain_password: str, password_hash: str) -> bool:
    return pwd_context.verify(plain_password, password_hash)


def is_password_hash(value: str | None) -> bool:
    if not value:
        return False
    return pwd_context.identify(value) is not None

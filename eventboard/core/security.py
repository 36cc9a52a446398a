"""Password hashing — bcrypt through passlib."""

from typing import Optional

from passlib.context import CryptContext

BCRYPT_ROUNDS = 10
# bcrypt digests are 60 characters and start with "$2a$", "$2b$" or "$2y$"
HASH_MIN_LENGTH = 50
HASH_PREFIX = "$2"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Compare a plaintext password to a stored digest.

    A missing or unrecognised digest (pending accounts, corrupted rows) is a
    failed match, not an error.
    """
    if not hashed_password or not plain_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        return False


def is_password_hash(value: str) -> bool:
    return len(value) >= HASH_MIN_LENGTH and value.startswith(HASH_PREFIX)


def ensure_password_hash(value: Optional[str]) -> Optional[str]:
    """Hash `value` unless it already looks like a bcrypt digest."""
    if not value:
        return None
    if is_password_hash(value):
        return value
    return hash_password(value)

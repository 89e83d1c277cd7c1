"""Password hashing for coach accounts (argon2 through passlib)."""

from typing import Optional

from passlib.context import CryptContext


pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")

# Verified against when the e-mail is unknown so that login timing does not
# reveal which addresses have accounts.
_DUMMY_HASH = pwd_context.hash("dugout-placeholder-password")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Check ``plain_password``; a missing hash still costs one argon2 verify."""
    if not hashed_password:
        pwd_context.verify(plain_password, _DUMMY_HASH)
        return False
    return pwd_context.verify(plain_password, hashed_password)

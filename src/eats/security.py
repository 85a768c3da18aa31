"""Password hashing and verification-code generation."""

import secrets

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    """Check a raw password against a stored hash; malformed hashes never match."""
    try:
        return pwd_context.verify(plain, hashed)
    except (ValueError, TypeError):
        return False


def generate_verification_code() -> str:
    """Opaque, URL-safe, single-use code for email verification."""
    return secrets.token_urlsafe(24)

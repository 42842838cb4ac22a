"""
Password Hashing

Accounts store a bcrypt hash (passlib), never the password itself.
Token verification lives in app.services.auth_service.
"""

from passlib.context import CryptContext


pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """
    Hash a password for storage on User.password_hash.

    Example:
        >>> hash_password("showreel-2024").startswith("$2b$")
        True
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, password_hash: str) -> bool:
    return pwd_context.verify(plain_password, password_hash)

"""
Authentication Service
Access token verification for the portfolio API.

Accounts log in through the external auth service, which signs HS256
tokens with the SECRET_KEY shared with this API:

    {"sub": "<user uuid>", "exp": <unix time>, "type": "access"}

verify_token checks them; create_access_token produces the same format
and is used by integration scripts and the test suite.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from app.core.config import settings
from app.schemas.user import TokenPayload


ALGORITHM = "HS256"


def create_access_token(user_id: UUID, expires_in: Optional[int] = None) -> str:
    """
    Sign an access token for user_id.

    Args:
        user_id: Account the token authenticates
        expires_in: Lifetime in seconds, JWT_EXPIRATION when omitted
            (negative values give an already expired token)
    """
    if expires_in is None:
        expires_in = settings.JWT_EXPIRATION

    claims = {
        "sub": str(user_id),
        "exp": datetime.now(timezone.utc) + timedelta(seconds=expires_in),
        "type": "access",
    }
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=ALGORITHM)


def verify_token(token: str, expected_type: str = "access") -> Optional[TokenPayload]:
    """
    Decode a bearer token.

    Returns None when the signature or expiry is invalid, a claim is
    missing or the token is not of expected_type.
    """
    try:
        claims = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None

    if not all(claims.get(key) for key in ("sub", "exp", "type")):
        return None
    if claims["type"] != expected_type:
        return None

    return TokenPayload(sub=claims["sub"], exp=claims["exp"], type=claims["type"])

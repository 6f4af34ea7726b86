import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from pydantic import BaseModel

logger = logging.getLogger(__name__)

ACCESS_TOKEN_EXPIRE_MINUTES = 60 * 24


class InvalidTokenError(Exception):
    pass


class TokenIdentity(BaseModel):
    subject: str
    role: Optional[str] = None


def create_access_token(
    subject: str,
    role: str,
    secret: str,
    algorithm: str = "HS256",
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Issue a signed token for the given user.

    The identity is stored under `userId`, the claim the web client and
    the login flow use, and mirrored in the standard `sub` claim.
    """
    expire = datetime.now(timezone.utc) + (
        expires_delta if expires_delta is not None else timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    payload = {"userId": subject, "sub": subject, "role": role, "exp": expire}
    return jwt.encode(payload, secret, algorithm=algorithm)


def verify_access_token(token: str, secret: str, algorithm: str = "HS256") -> TokenIdentity:
    """
    Verify a token and return the caller identity it carries.

    Raises:
        InvalidTokenError: bad signature, malformed or expired token, or no subject claim
    """
    try:
        payload = jwt.decode(token, secret, algorithms=[algorithm])
    except jwt.ExpiredSignatureError as e:
        raise InvalidTokenError("Token has expired") from e
    except jwt.PyJWTError as e:
        raise InvalidTokenError("Could not validate credentials") from e

    subject = payload.get("userId") or payload.get("sub")
    if not subject:
        raise InvalidTokenError("Token has no subject")

    role = payload.get("role")
    return TokenIdentity(subject=str(subject), role=str(role) if role is not None else None)

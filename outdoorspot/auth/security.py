"""Password hashing and JWT access tokens."""
import hashlib
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from outdoorspot.config import settings
from outdoorspot.errors import AuthenticationError


# pbkdf2 instead of storing raw passwords
def hash_password(
        password: str,
        salt: Optional[bytes] = None,
        iterations: int = settings.PASSWORD_HASH_ITERATIONS) -> str:
    """Return `salt_hex$hash_hex`."""
    if salt is None:
        salt = secrets.token_bytes(16)
    hashed = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return f"{salt.hex()}${hashed.hex()}"


def verify_password(
        password: str,
        stored_hash: str,
        iterations: int = settings.PASSWORD_HASH_ITERATIONS) -> bool:
    try:
        salt_hex, hash_hex = stored_hash.split("$")
        salt = bytes.fromhex(salt_hex)
    except ValueError:
        return False
    expected = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations).hex()
    return secrets.compare_digest(expected, hash_hex)


def create_access_token(
        user_id: str,
        expires_minutes: int = settings.JWT_EXPIRES_MINUTES,
        now: Optional[datetime] = None) -> str:
    """Signed token whose subject is the user id."""
    issued_at = now or datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=expires_minutes),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> str:
    """
    Verify a token and return its user id.

    Raises:
        AuthenticationError: if the token is malformed, expired or badly signed.
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["exp", "sub"]},
        )
    except jwt.PyJWTError as e:
        raise AuthenticationError("Invalid token.") from e

    user_id = payload.get("sub")
    if not isinstance(user_id, str) or not user_id:
        raise AuthenticationError("Invalid token.")
    return user_id

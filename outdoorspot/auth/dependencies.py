"""Auth gate as FastAPI dependencies.

- `get_current_user`: a valid bearer token is required, otherwise 401 and the
  handler never runs.
- `get_optional_user`: attaches the user when the token is valid, and lets
  the request through anonymously otherwise.
- `require_admin`: a valid token of an admin user, otherwise 401/403.
"""
from typing import Optional

import asyncpg
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from outdoorspot.auth.security import decode_access_token
from outdoorspot.db.repositories import UserRepository
from outdoorspot.dependencies import get_user_repository
from outdoorspot.errors import AuthenticationError, PermissionDeniedError
from outdoorspot.logger import logger
from outdoorspot.models import User

bearer_scheme = HTTPBearer(auto_error=False)


async def _resolve_user(token: str, users: UserRepository) -> User:
    user_id = decode_access_token(token)
    user = await users.get(user_id)
    if user is None or not user.is_active:
        raise AuthenticationError("Invalid token.")
    return user


async def get_current_user(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
        users: UserRepository = Depends(get_user_repository)) -> User:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Access denied. No token provided.")
    return await _resolve_user(credentials.credentials, users)


async def get_optional_user(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
        users: UserRepository = Depends(get_user_repository)) -> Optional[User]:
    if credentials is None or not credentials.credentials:
        return None
    try:
        return await _resolve_user(credentials.credentials, users)
    except AuthenticationError:
        logger.debug("Optional auth: invalid token, continuing anonymously")
    except (OSError, asyncpg.PostgresError, asyncpg.InterfaceError) as e:
        logger.warning("Optional auth: user lookup failed ({error}), continuing anonymously", error=e)
    return None


async def require_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        raise PermissionDeniedError("Admin access required")
    return user

"""User endpoints. `/me` routes act on the authenticated user."""
from typing import Any, List, Optional

from fastapi import APIRouter, Depends

from outdoorspot.auth.dependencies import get_current_user, get_optional_user
from outdoorspot.db.repositories import UserRepository
from outdoorspot.dependencies import get_user_repository
from outdoorspot.errors import BadRequestError, NotFoundError
from outdoorspot.logger import logger
from outdoorspot.models import Envelope, User, UserUpdate

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", response_model=Envelope[List[User]])
async def list_users(
    repo: UserRepository = Depends(get_user_repository),
    _user: Optional[User] = Depends(get_optional_user),
):
    return Envelope[List[User]](data=await repo.list_all())


# /me must be declared before /{user_id}
@router.get("/me", response_model=Envelope[User])
async def get_me(user: User = Depends(get_current_user)):
    return Envelope[User](data=user)


@router.put("/me", response_model=Envelope[User])
async def update_me(
    payload: UserUpdate,
    repo: UserRepository = Depends(get_user_repository),
    user: User = Depends(get_current_user),
):
    values = payload.model_dump(exclude_unset=True)
    if not values:
        raise BadRequestError("No valid fields provided.")
    updated = await repo.update(user.id, values)
    logger.info("User {user_id} updated fields {fields}", user_id=user.id, fields=sorted(values))
    return Envelope[User](data=updated)


@router.delete("/me", response_model=Envelope[Any])
async def delete_me(
    repo: UserRepository = Depends(get_user_repository),
    user: User = Depends(get_current_user),
):
    await repo.delete(user.id)
    logger.info("User {user_id} deleted", user_id=user.id)
    return Envelope[Any](message="User deleted successfully")


@router.get("/{user_id}", response_model=Envelope[User])
async def get_user(
    user_id: str,
    repo: UserRepository = Depends(get_user_repository),
    _user: Optional[User] = Depends(get_optional_user),
):
    found = await repo.get(user_id)
    if found is None:
        raise NotFoundError("User not found")
    return Envelope[User](data=found)

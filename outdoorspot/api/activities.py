"""Activity CRUD."""
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, status

from outdoorspot.auth.dependencies import get_current_user, get_optional_user
from outdoorspot.db.repositories import ActivityRepository
from outdoorspot.dependencies import get_activity_repository
from outdoorspot.errors import NotFoundError
from outdoorspot.models import Activity, ActivityCreate, ActivityUpdate, Envelope, User

router = APIRouter(prefix="/activities", tags=["Activities"])


@router.get("", response_model=Envelope[List[Activity]])
async def list_activities(
    repo: ActivityRepository = Depends(get_activity_repository),
    _user: Optional[User] = Depends(get_optional_user),
):
    return Envelope[List[Activity]](data=await repo.list_all())


@router.get("/{activity_id}", response_model=Envelope[Activity])
async def get_activity(
    activity_id: str,
    repo: ActivityRepository = Depends(get_activity_repository),
    _user: Optional[User] = Depends(get_optional_user),
):
    activity = await repo.get(activity_id)
    if activity is None:
        raise NotFoundError("Activity not found")
    return Envelope[Activity](data=activity)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=Envelope[Activity])
async def create_activity(
    payload: ActivityCreate,
    repo: ActivityRepository = Depends(get_activity_repository),
    _user: User = Depends(get_current_user),
):
    return Envelope[Activity](data=await repo.create(payload))


@router.put("/{activity_id}", response_model=Envelope[Activity])
async def update_activity(
    activity_id: str,
    payload: ActivityUpdate,
    repo: ActivityRepository = Depends(get_activity_repository),
    _user: User = Depends(get_current_user),
):
    activity = await repo.update(activity_id, payload.model_dump(exclude_unset=True))
    return Envelope[Activity](data=activity)


@router.delete("/{activity_id}", response_model=Envelope[Any])
async def delete_activity(
    activity_id: str,
    repo: ActivityRepository = Depends(get_activity_repository),
    _user: User = Depends(get_current_user),
):
    await repo.delete(activity_id)
    return Envelope[Any](message="Activity deleted successfully")

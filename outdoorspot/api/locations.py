"""Location CRUD, backed by PostgreSQL."""
import math
from typing import Any, Optional

from fastapi import APIRouter, Depends, status

from outdoorspot.auth.dependencies import get_current_user, get_optional_user
from outdoorspot.config import settings
from outdoorspot.db.repositories import ActivityRepository, LocationRepository, ReviewRepository
from outdoorspot.dependencies import (
    get_activity_repository,
    get_location_repository,
    get_review_repository,
)
from outdoorspot.errors import NotFoundError
from outdoorspot.models import (
    Envelope,
    LocationCreate,
    LocationDetail,
    LocationDisplay,
    LocationRecord,
    LocationUpdate,
    PaginatedResponse,
    Pagination,
    User,
)
from outdoorspot.search.search_utils import parse_limit
from outdoorspot.utils.display import (
    build_stats,
    compose_address,
    extract_amenities,
    extract_contact_info,
    extract_image_urls,
)

router = APIRouter(prefix="/locations", tags=["Locations"])


@router.get("", response_model=PaginatedResponse[LocationRecord])
async def list_locations(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    repo: LocationRepository = Depends(get_location_repository),
    _user: Optional[User] = Depends(get_optional_user),
):
    """One page of locations. Malformed `page`/`limit` fall back to the defaults."""
    page_number = max(parse_limit(page, default=1, maximum=1_000_000), 1)
    page_size = max(
        parse_limit(limit, default=settings.LOCATIONS_PAGE_SIZE, maximum=settings.LOCATIONS_MAX_PAGE_SIZE),
        1,
    )
    records, total = await repo.list_page(page_number, page_size)
    return PaginatedResponse[LocationRecord](
        data=records,
        pagination=Pagination(
            page=page_number,
            limit=page_size,
            total=total,
            pages=math.ceil(total / page_size),
        ),
    )


@router.get("/{location_id}", response_model=Envelope[LocationDetail])
async def get_location(
    location_id: str,
    repo: LocationRepository = Depends(get_location_repository),
    activities: ActivityRepository = Depends(get_activity_repository),
    reviews: ReviewRepository = Depends(get_review_repository),
    _user: Optional[User] = Depends(get_optional_user),
):
    detail = await repo.get_detail(location_id, activities=activities, reviews=reviews)
    if detail is None:
        raise NotFoundError("Location not found")
    return Envelope[LocationDetail](data=detail)


@router.get("/{location_id}/display", response_model=Envelope[LocationDisplay])
async def get_location_display(
    location_id: str,
    repo: LocationRepository = Depends(get_location_repository),
    _user: Optional[User] = Depends(get_optional_user),
):
    """Display-ready values: address line, stats, amenities, contacts, images."""
    record = await repo.get(location_id)
    if record is None:
        raise NotFoundError("Location not found")
    display = LocationDisplay(
        id=record.id,
        name=record.name,
        description=record.description,
        address=compose_address(record),
        stats=build_stats(record),
        amenities=extract_amenities(record.amenities),
        contacts=extract_contact_info(record.contact_info),
        images=extract_image_urls(record.images),
    )
    return Envelope[LocationDisplay](data=display)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=Envelope[LocationRecord])
async def create_location(
    payload: LocationCreate,
    repo: LocationRepository = Depends(get_location_repository),
    user: User = Depends(get_current_user),
):
    record = await repo.create(payload, created_by_id=user.id)
    return Envelope[LocationRecord](data=record)


@router.put("/{location_id}", response_model=Envelope[LocationRecord])
async def update_location(
    location_id: str,
    payload: LocationUpdate,
    repo: LocationRepository = Depends(get_location_repository),
    _user: User = Depends(get_current_user),
):
    record = await repo.update(location_id, payload.model_dump(exclude_unset=True))
    return Envelope[LocationRecord](data=record)


@router.delete("/{location_id}", response_model=Envelope[Any])
async def delete_location(
    location_id: str,
    repo: LocationRepository = Depends(get_location_repository),
    _user: User = Depends(get_current_user),
):
    await repo.delete(location_id)
    return Envelope[Any](message="Location deleted successfully")

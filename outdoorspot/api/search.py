"""Search endpoints: text/tag/region filters, combined search and nearby."""
from typing import Optional

from fastapi import APIRouter, Depends

from outdoorspot.auth.dependencies import get_optional_user
from outdoorspot.dependencies import get_search_service
from outdoorspot.logger import logger
from outdoorspot.models import (
    Activity,
    CombinedSearchResponse,
    Location,
    SearchListResponse,
    SearchQuery,
    User,
)
from outdoorspot.search.search_service import SearchService
from outdoorspot.search.search_utils import parse_limit, parse_nearby_query

router = APIRouter(prefix="/search", tags=["Search"])


@router.get("", response_model=CombinedSearchResponse, response_model_exclude_none=True)
async def search_all(
    q: Optional[str] = None,
    activity: Optional[str] = None,
    state: Optional[str] = None,
    category: Optional[str] = None,
    type: Optional[str] = "all",  # pylint: disable=redefined-builtin
    svc: SearchService = Depends(get_search_service),
    user: Optional[User] = Depends(get_optional_user),
):
    """Locations and activities in one response; `type` picks which are filled."""
    query = SearchQuery(q=q, activity=activity, state=state, category=category, type=type)
    logger.info("Combined search: {query} (user: {user})", query=query.echo(), user=user.id if user else None)
    results = await svc.search_all(
        q=query.q,
        activity=query.activity,
        state=query.state,
        category=query.category,
        search_type=query.type,
    )
    return CombinedSearchResponse(data=results, query=query.model_dump(exclude_none=True, exclude={"limit"}))


@router.get(
    "/locations",
    response_model=SearchListResponse[Location],
    response_model_exclude_none=True,
)
async def search_locations(
    q: Optional[str] = None,
    activity: Optional[str] = None,
    state: Optional[str] = None,
    limit: Optional[str] = None,
    svc: SearchService = Depends(get_search_service),
    _user: Optional[User] = Depends(get_optional_user),
):
    """Locations matching every filter given, weather attached."""
    query = SearchQuery(q=q, activity=activity, state=state, limit=parse_limit(limit))
    logger.info("Location search: {query}", query=query.echo())
    hits = await svc.search_locations(
        q=query.q, activity=query.activity, state=query.state, limit=query.limit
    )
    return SearchListResponse[Location](data=hits, total=len(hits), query=query.echo())


@router.get(
    "/activities",
    response_model=SearchListResponse[Activity],
    response_model_exclude_none=True,
)
async def search_activities(
    q: Optional[str] = None,
    category: Optional[str] = None,
    limit: Optional[str] = None,
    svc: SearchService = Depends(get_search_service),
    _user: Optional[User] = Depends(get_optional_user),
):
    """Activities matching the text and category filters."""
    query = SearchQuery(q=q, category=category, limit=parse_limit(limit))
    logger.info("Activity search: {query}", query=query.echo())
    hits = await svc.search_activities(q=query.q, category=query.category, limit=query.limit)
    return SearchListResponse[Activity](data=hits, total=len(hits), query=query.echo())


@router.get(
    "/nearby",
    response_model=SearchListResponse[Location],
    response_model_exclude_none=True,
)
async def search_nearby(
    lat: Optional[str] = None,
    lng: Optional[str] = None,
    radius: Optional[str] = None,
    limit: Optional[str] = None,
    svc: SearchService = Depends(get_search_service),
    _user: Optional[User] = Depends(get_optional_user),
):
    """Closest locations first. Distances use the flat 111 km/degree approximation."""
    query = parse_nearby_query(lat, lng, radius=radius, limit=limit)
    logger.info("Nearby search: {query}", query=query.model_dump())
    hits = await svc.nearby(query)
    return SearchListResponse[Location](data=hits, total=len(hits), query=query.model_dump())


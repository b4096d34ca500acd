"""Pydantic models for requests, responses and stored resources."""
from datetime import date, datetime
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from outdoorspot.config import settings
from outdoorspot.utils.display import extract_image_urls

T = TypeVar("T")


class CamelModel(BaseModel):  # pylint: disable=too-few-public-methods
    """camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Weather
# ---------------------------------------------------------------------------

class ForecastDay(CamelModel):  # pylint: disable=too-few-public-methods
    day: str
    high: float
    low: float
    condition: str


class Weather(CamelModel):
    """Current reading attached to a location."""
    location: str
    temperature: Optional[float] = None
    condition: str = "Unknown"
    humidity: Optional[int] = None
    forecast: List[ForecastDay] = Field(default_factory=list)

    @classmethod
    def unknown(cls, name: str) -> "Weather":
        """Placeholder used when no reading exists for `name`."""
        return cls(location=name, condition="Unknown")

    @classmethod
    def unavailable(cls, name: str) -> "Weather":
        """Placeholder used when the lookup timed out or failed."""
        return cls(location=name, condition="Unavailable")


# ---------------------------------------------------------------------------
# Search projections
# ---------------------------------------------------------------------------

class Coordinates(CamelModel):  # pylint: disable=too-few-public-methods
    lat: float
    lng: float


class Location(CamelModel):
    """Read-only projection of a location used by search."""
    id: str
    name: str
    description: str = ""
    location: str = ""  # region / state label
    coordinates: Coordinates
    activities: List[str] = Field(default_factory=list)
    rating: Optional[float] = Field(default=None, ge=0, le=5)
    price: float = Field(default=0, ge=0)
    images: List[str] = Field(default_factory=list)
    weather: Optional[Weather] = None
    distance: Optional[float] = None


class Activity(CamelModel):
    """An activity offered at a location."""
    id: str
    name: str
    category: str = ""
    description: str = ""
    location_name: str = ""
    location_id: Optional[str] = None
    difficulty_level: Optional[int] = Field(default=None, ge=1, le=5)
    distance_miles: Optional[float] = None
    estimated_duration_hours: Optional[float] = None
    created_at: Optional[datetime] = None


class SearchQuery(BaseModel):
    """Parameters of one search request. Blank strings count as absent."""
    q: Optional[str] = None
    activity: Optional[str] = None
    state: Optional[str] = None
    category: Optional[str] = None
    type: Optional[str] = None
    limit: int = settings.DEFAULT_LIMIT

    @field_validator("q", "activity", "state", "category", "type", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    def echo(self) -> Dict[str, Any]:
        """Query parameters as echoed back in responses."""
        return self.model_dump(exclude_none=True)


class NearbyQuery(BaseModel):  # pylint: disable=too-few-public-methods
    lat: float
    lng: float
    radius: float = settings.NEARBY_DEFAULT_RADIUS_KM
    limit: int = settings.DEFAULT_LIMIT


# ---------------------------------------------------------------------------
# Persisted resources
# ---------------------------------------------------------------------------

class LocationBase(CamelModel):
    """Writable columns of a location."""
    name: str
    description: Optional[str] = None
    location_type: str = "Facility"
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = "US"
    elevation: Optional[float] = None
    terrain_type: Optional[str] = None
    climate_zone: Optional[str] = None
    amenities: Optional[Any] = None
    cost_per_night: Optional[float] = Field(default=None, ge=0)
    max_capacity: Optional[int] = None
    pet_friendly: bool = False
    reservation_required: bool = False
    season_start: Optional[date] = None
    season_end: Optional[date] = None
    difficulty_level: Optional[int] = Field(default=None, ge=1, le=5)
    safety_notes: Optional[str] = None
    regulations: Optional[str] = None
    contact_info: Optional[Any] = None
    website_url: Optional[str] = None
    images: Optional[Any] = None
    verified: bool = True
    is_active: bool = True
    rating: Optional[float] = Field(default=None, ge=0, le=5)


class LocationCreate(LocationBase):  # pylint: disable=too-few-public-methods
    pass


def _reject_null(value: Any) -> Any:
    """Partial updates may omit a required column but not set it to null."""
    if value is None:
        raise ValueError("may not be null")
    return value


class LocationUpdate(CamelModel):
    """Partial update: only the fields sent are written."""
    name: Optional[str] = None
    description: Optional[str] = None
    location_type: Optional[str] = None
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    elevation: Optional[float] = None
    terrain_type: Optional[str] = None
    climate_zone: Optional[str] = None
    amenities: Optional[Any] = None
    cost_per_night: Optional[float] = Field(default=None, ge=0)
    max_capacity: Optional[int] = None
    pet_friendly: Optional[bool] = None
    reservation_required: Optional[bool] = None
    season_start: Optional[date] = None
    season_end: Optional[date] = None
    difficulty_level: Optional[int] = Field(default=None, ge=1, le=5)
    safety_notes: Optional[str] = None
    regulations: Optional[str] = None
    contact_info: Optional[Any] = None
    website_url: Optional[str] = None
    images: Optional[Any] = None
    verified: Optional[bool] = None
    is_active: Optional[bool] = None
    rating: Optional[float] = Field(default=None, ge=0, le=5)

    @field_validator(
        "name", "location_type", "latitude", "longitude", "pet_friendly",
        "reservation_required", "verified", "is_active",
    )
    @classmethod
    def _not_null(cls, value: Any) -> Any:
        return _reject_null(value)


class LocationRecord(LocationBase):
    """A row of the `locations` table."""
    id: str
    created_by_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_search_location(self, tags: Optional[List[str]] = None) -> Location:
        """Project the row onto the search `Location` shape."""
        return Location(
            id=self.id,
            name=self.name,
            description=self.description or "",
            location=self.state or "",
            coordinates=Coordinates(lat=self.latitude, lng=self.longitude),
            activities=list(tags or []),
            rating=self.rating,
            price=self.cost_per_night or 0,
            images=extract_image_urls(self.images),
        )


class ActivityCreate(CamelModel):  # pylint: disable=too-few-public-methods
    name: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    description: Optional[str] = None
    location_id: str
    difficulty_level: Optional[int] = Field(default=None, ge=1, le=5)
    distance_miles: Optional[float] = Field(default=None, ge=0)
    estimated_duration_hours: Optional[float] = Field(default=None, ge=0)


class ActivityUpdate(CamelModel):  # pylint: disable=too-few-public-methods
    name: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    location_id: Optional[str] = None
    difficulty_level: Optional[int] = Field(default=None, ge=1, le=5)
    distance_miles: Optional[float] = Field(default=None, ge=0)
    estimated_duration_hours: Optional[float] = Field(default=None, ge=0)

    @field_validator("name", "category", "location_id")
    @classmethod
    def _not_null(cls, value: Any) -> Any:
        return _reject_null(value)


class User(CamelModel):
    """Public view of a user. Never carries the password hash."""
    id: str
    email: str
    username: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    is_admin: bool = False
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserUpdate(CamelModel):  # pylint: disable=too-few-public-methods
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    username: Optional[str] = Field(default=None, min_length=1)


class RegisterRequest(CamelModel):  # pylint: disable=too-few-public-methods
    email: str = Field(..., min_length=3)
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class LoginRequest(CamelModel):  # pylint: disable=too-few-public-methods
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class AuthPayload(CamelModel):  # pylint: disable=too-few-public-methods
    user: User
    token: str


class ReviewAuthor(CamelModel):  # pylint: disable=too-few-public-methods
    id: str
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    avatar_url: Optional[str] = None


class Review(CamelModel):  # pylint: disable=too-few-public-methods
    id: str
    rating: int = Field(..., ge=1, le=5)
    title: Optional[str] = None
    content: str
    user_id: str
    location_id: Optional[str] = None
    user: Optional[ReviewAuthor] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ReviewCreate(CamelModel):  # pylint: disable=too-few-public-methods
    content: str = Field(..., min_length=1)
    rating: int = Field(..., ge=1, le=5)
    title: Optional[str] = None
    location_id: str


class ReviewUpdate(CamelModel):  # pylint: disable=too-few-public-methods
    content: Optional[str] = Field(default=None, min_length=1)
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    title: Optional[str] = None


class LocationDetail(LocationRecord):  # pylint: disable=too-few-public-methods
    activities: List[Activity] = Field(default_factory=list)
    reviews: List[Review] = Field(default_factory=list)


class DisplayStat(BaseModel):  # pylint: disable=too-few-public-methods
    label: str
    value: Optional[str] = None


class ContactEntry(BaseModel):  # pylint: disable=too-few-public-methods
    label: str
    value: str


class LocationDisplay(CamelModel):  # pylint: disable=too-few-public-methods
    """Display-ready view of a location."""
    id: str
    name: str
    description: Optional[str] = None
    address: Optional[str] = None
    stats: List[DisplayStat] = Field(default_factory=list)
    amenities: List[str] = Field(default_factory=list)
    contacts: List[ContactEntry] = Field(default_factory=list)
    images: List[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Envelopes
# ---------------------------------------------------------------------------

class Envelope(BaseModel, Generic[T]):  # pylint: disable=too-few-public-methods
    """`{success, message?, data?}` wrapper shared by every endpoint."""
    success: bool = True
    message: Optional[str] = None
    data: Optional[T] = None


class Pagination(BaseModel):  # pylint: disable=too-few-public-methods
    page: int
    limit: int
    total: int
    pages: int


class PaginatedResponse(BaseModel, Generic[T]):  # pylint: disable=too-few-public-methods
    success: bool = True
    data: List[T]
    pagination: Pagination


class SearchListResponse(BaseModel, Generic[T]):  # pylint: disable=too-few-public-methods
    """Response of the single-collection search endpoints."""
    success: bool = True
    data: List[T]
    total: int
    query: Dict[str, Any] = Field(default_factory=dict)


class CombinedResults(BaseModel):  # pylint: disable=too-few-public-methods
    locations: List[Location] = Field(default_factory=list)
    activities: List[Activity] = Field(default_factory=list)


class CombinedSearchResponse(BaseModel):  # pylint: disable=too-few-public-methods
    success: bool = True
    data: CombinedResults
    query: Dict[str, Any] = Field(default_factory=dict)

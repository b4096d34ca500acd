"""Data access for locations, activities, users and reviews."""
import asyncio
import uuid
from typing import Any, Dict, List, Optional, Sequence, Tuple

import asyncpg

from outdoorspot.db.postgres_connector import PostgresConnector
from outdoorspot.errors import BadRequestError, NotFoundError
from outdoorspot.models import (
    Activity,
    ActivityCreate,
    LocationBase,
    LocationCreate,
    LocationDetail,
    LocationRecord,
    Location,
    RegisterRequest,
    Review,
    ReviewAuthor,
    ReviewCreate,
    User,
)
from outdoorspot.utils.display import format_label

LOCATION_COLUMNS: Tuple[str, ...] = tuple(LocationBase.model_fields)
ACTIVITY_COLUMNS: Tuple[str, ...] = tuple(ActivityCreate.model_fields)
USER_PUBLIC_COLUMNS = (
    "id, email, username, first_name, last_name, avatar_url, bio, "
    "is_admin, is_active, created_at, updated_at"
)
USER_UPDATABLE_COLUMNS = ("first_name", "last_name", "avatar_url", "bio", "username")
REVIEW_UPDATABLE_COLUMNS = ("content", "rating", "title")


def new_id() -> str:
    return str(uuid.uuid4())


def _build_insert(table: str, values: Dict[str, Any]) -> Tuple[str, List[Any]]:
    """INSERT ... RETURNING * from a dict of (whitelisted) column values."""
    columns = ", ".join(values)
    placeholders = ", ".join(f"${index}" for index in range(1, len(values) + 1))
    sql = f"INSERT INTO {table} ({columns}) VALUES ({placeholders}) RETURNING *"  # nosec B608
    return sql, list(values.values())


def _build_update(
        table: str,
        values: Dict[str, Any],
        record_id: str,
        touch_updated_at: bool = True) -> Tuple[str, List[Any]]:
    """UPDATE ... WHERE id = $n RETURNING * from a dict of (whitelisted) column values."""
    assignments = [f"{column} = ${index}" for index, column in enumerate(values, start=1)]
    if touch_updated_at:
        assignments.append("updated_at = now()")
    id_position = len(values) + 1
    sql = (
        f"UPDATE {table} SET {', '.join(assignments)} "  # nosec B608
        f"WHERE id = ${id_position} RETURNING *"
    )
    return sql, [*values.values(), record_id]


def _only(values: Dict[str, Any], allowed: Sequence[str]) -> Dict[str, Any]:
    return {key: value for key, value in values.items() if key in allowed}


def _deleted(status: str) -> bool:
    """asyncpg returns e.g. `DELETE 1`."""
    return status.split()[-1] != "0"


def search_tags(location_type: Optional[str], categories: Sequence[Optional[str]]) -> List[str]:
    """Activity tags of a stored location: its type, then its activity categories."""
    tags: Dict[str, None] = {}
    for raw in (location_type, *categories):
        if raw:
            tags[format_label(raw)] = None
    return list(tags)


class LocationRepository:
    """CRUD and search projection for the `locations` table."""

    def __init__(self, db_connector: PostgresConnector):
        self.db = db_connector

    async def list_page(self, page: int, limit: int) -> Tuple[List[LocationRecord], int]:
        """One page of locations, newest first, with the total row count."""
        offset = (page - 1) * limit
        rows, count_row = await asyncio.gather(
            self.db.execute_query(
                "SELECT * FROM locations ORDER BY created_at DESC, id LIMIT $1 OFFSET $2",
                limit, offset,
            ),
            self.db.fetch_one("SELECT COUNT(*) AS total FROM locations"),
        )
        total = int(count_row["total"]) if count_row else 0
        return [LocationRecord.model_validate(row) for row in rows], total

    async def get(self, location_id: str) -> Optional[LocationRecord]:
        row = await self.db.fetch_one("SELECT * FROM locations WHERE id = $1", location_id)
        return LocationRecord.model_validate(row) if row else None

    async def get_detail(
            self,
            location_id: str,
            activities: "ActivityRepository",
            reviews: "ReviewRepository") -> Optional[LocationDetail]:
        """The location with its activities and reviews."""
        record = await self.get(location_id)
        if record is None:
            return None
        location_activities, location_reviews = await asyncio.gather(
            activities.list_for_location(location_id),
            reviews.list_for_location(location_id),
        )
        return LocationDetail(
            **record.model_dump(),
            activities=location_activities,
            reviews=location_reviews,
        )

    async def create(self, data: LocationCreate, created_by_id: Optional[str] = None) -> LocationRecord:
        return await self.insert_values(data.model_dump(), created_by_id=created_by_id)

    async def insert_values(
            self,
            values: Dict[str, Any],
            created_by_id: Optional[str] = None) -> LocationRecord:
        """Insert a row from raw column values (used by the seeder too)."""
        row_values = {"id": new_id(), **_only(values, LOCATION_COLUMNS)}
        if created_by_id is not None:
            row_values["created_by_id"] = created_by_id
        sql, args = _build_insert("locations", row_values)
        row = await self.db.fetch_one(sql, *args)
        return LocationRecord.model_validate(row)

    async def update(self, location_id: str, values: Dict[str, Any]) -> LocationRecord:
        """Write the given columns. Raises when nothing is writable or the row is missing."""
        values = _only(values, LOCATION_COLUMNS)
        if not values:
            raise BadRequestError("No valid fields provided.")
        sql, args = _build_update("locations", values, location_id)
        row = await self.db.fetch_one(sql, *args)
        if row is None:
            raise NotFoundError("Location not found")
        return LocationRecord.model_validate(row)

    async def delete(self, location_id: str) -> None:
        status = await self.db.execute("DELETE FROM locations WHERE id = $1", location_id)
        if not _deleted(status):
            raise NotFoundError("Location not found")

    async def find_existing(
            self,
            name: str,
            latitude: float,
            longitude: float,
            website_url: Optional[str] = None,
            tolerance: float = 0.001) -> Optional[Dict[str, Any]]:
        """Match by website URL first, then by name and nearby coordinates."""
        if website_url:
            row = await self.db.fetch_one(
                "SELECT * FROM locations WHERE website_url = $1 LIMIT 1", website_url
            )
            if row:
                return row
        return await self.db.fetch_one(
            """SELECT * FROM locations
            WHERE name = $1
              AND latitude BETWEEN $2 AND $3
              AND longitude BETWEEN $4 AND $5
            LIMIT 1""",
            name,
            latitude - tolerance, latitude + tolerance,
            longitude - tolerance, longitude + tolerance,
        )

    async def list_for_search(self) -> List[Location]:
        """Active locations projected for search, ordered by name."""
        rows = await self.db.execute_query(
            """SELECT l.*,
                COALESCE(
                    array_agg(DISTINCT a.category) FILTER (WHERE a.category IS NOT NULL),
                    '{}'
                ) AS activity_categories
            FROM locations l
            LEFT JOIN activities a ON a.location_id = l.id
            WHERE l.is_active
            GROUP BY l.id
            ORDER BY l.name, l.id"""
        )
        return [
            LocationRecord.model_validate(row).to_search_location(
                search_tags(row.get("location_type"), row.get("activity_categories") or [])
            )
            for row in rows
        ]


class ActivityRepository:
    """CRUD for the `activities` table."""

    SELECT_SQL = (
        "SELECT a.*, l.name AS location_name FROM activities a "
        "JOIN locations l ON l.id = a.location_id"
    )

    def __init__(self, db_connector: PostgresConnector):
        self.db = db_connector

    @staticmethod
    def _to_activity(row: Dict[str, Any]) -> Activity:
        row = dict(row)
        row["description"] = row.get("description") or ""
        row["location_name"] = row.get("location_name") or ""
        return Activity.model_validate(row)

    async def list_all(self) -> List[Activity]:
        rows = await self.db.execute_query(f"{self.SELECT_SQL} ORDER BY a.name, a.id")
        return [self._to_activity(row) for row in rows]

    async def list_for_location(self, location_id: str) -> List[Activity]:
        rows = await self.db.execute_query(
            f"{self.SELECT_SQL} WHERE a.location_id = $1 ORDER BY a.name", location_id
        )
        return [self._to_activity(row) for row in rows]

    async def get(self, activity_id: str) -> Optional[Activity]:
        row = await self.db.fetch_one(f"{self.SELECT_SQL} WHERE a.id = $1", activity_id)
        return self._to_activity(row) if row else None

    async def create(self, data: ActivityCreate) -> Activity:
        sql, args = _build_insert("activities", {"id": new_id(), **data.model_dump()})
        try:
            row = await self.db.fetch_one(sql, *args)
        except asyncpg.ForeignKeyViolationError as e:
            raise NotFoundError("Location not found") from e
        return await self.get(row["id"])

    async def update(self, activity_id: str, values: Dict[str, Any]) -> Activity:
        values = _only(values, ACTIVITY_COLUMNS)
        if not values:
            raise BadRequestError("No valid fields provided.")
        sql, args = _build_update("activities", values, activity_id, touch_updated_at=False)
        try:
            row = await self.db.fetch_one(sql, *args)
        except asyncpg.ForeignKeyViolationError as e:
            raise NotFoundError("Location not found") from e
        if row is None:
            raise NotFoundError("Activity not found")
        return await self.get(activity_id)

    async def delete(self, activity_id: str) -> None:
        status = await self.db.execute("DELETE FROM activities WHERE id = $1", activity_id)
        if not _deleted(status):
            raise NotFoundError("Activity not found")


class UserRepository:
    """Users. The password hash only leaves through `get_credentials`."""

    def __init__(self, db_connector: PostgresConnector):
        self.db = db_connector

    async def list_all(self) -> List[User]:
        rows = await self.db.execute_query(
            f"SELECT {USER_PUBLIC_COLUMNS} FROM users ORDER BY created_at"  # nosec B608
        )
        return [User.model_validate(row) for row in rows]

    async def get(self, user_id: str) -> Optional[User]:
        row = await self.db.fetch_one(
            f"SELECT {USER_PUBLIC_COLUMNS} FROM users WHERE id = $1", user_id  # nosec B608
        )
        return User.model_validate(row) if row else None

    async def get_credentials(self, email: str) -> Optional[Tuple[User, str]]:
        """(user, password_hash) for an email, None if unknown."""
        row = await self.db.fetch_one(
            f"SELECT {USER_PUBLIC_COLUMNS}, password_hash FROM users "  # nosec B608
            "WHERE lower(email) = lower($1)",
            email.strip(),
        )
        if row is None:
            return None
        password_hash = row.pop("password_hash")
        return User.model_validate(row), password_hash

    async def create(self, data: RegisterRequest, password_hash: str) -> User:
        existing = await self.db.fetch_one(
            "SELECT id FROM users WHERE lower(email) = lower($1)", data.email.strip()
        )
        if existing:
            raise BadRequestError("User already exists")
        try:
            row = await self.db.fetch_one(
                f"""INSERT INTO users (id, email, username, password_hash, first_name, last_name)
                VALUES ($1, $2, $3, $4, $5, $6)
                RETURNING {USER_PUBLIC_COLUMNS}""",  # nosec B608
                new_id(), data.email.strip(), data.username.strip(), password_hash,
                data.first_name, data.last_name,
            )
        except asyncpg.UniqueViolationError as e:
            raise BadRequestError("User already exists") from e
        return User.model_validate(row)

    async def update(self, user_id: str, values: Dict[str, Any]) -> User:
        values = _only(values, USER_UPDATABLE_COLUMNS)
        if not values:
            raise BadRequestError("No valid fields provided.")
        assignments = ", ".join(
            f"{column} = ${index}" for index, column in enumerate(values, start=1)
        )
        try:
            row = await self.db.fetch_one(
                f"UPDATE users SET {assignments}, updated_at = now() "  # nosec B608
                f"WHERE id = ${len(values) + 1} RETURNING {USER_PUBLIC_COLUMNS}",
                *values.values(), user_id,
            )
        except asyncpg.UniqueViolationError as e:
            raise BadRequestError("Username already taken") from e
        if row is None:
            raise NotFoundError("User not found")
        return User.model_validate(row)

    async def delete(self, user_id: str) -> None:
        status = await self.db.execute("DELETE FROM users WHERE id = $1", user_id)
        if not _deleted(status):
            raise NotFoundError("User not found")


class ReviewRepository:
    """Reviews joined with a summary of their author."""

    SELECT_SQL = (
        "SELECT r.*, u.username, u.first_name, u.last_name, u.avatar_url "
        "FROM reviews r JOIN users u ON u.id = r.user_id"
    )

    def __init__(self, db_connector: PostgresConnector):
        self.db = db_connector

    @staticmethod
    def _to_review(row: Dict[str, Any]) -> Review:
        author = ReviewAuthor(
            id=row["user_id"],
            username=row.get("username"),
            first_name=row.get("first_name"),
            last_name=row.get("last_name"),
            avatar_url=row.get("avatar_url"),
        )
        return Review(
            id=row["id"],
            rating=row["rating"],
            title=row.get("title"),
            content=row["content"],
            user_id=row["user_id"],
            location_id=row.get("location_id"),
            user=author,
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )

    async def list_all(self) -> List[Review]:
        rows = await self.db.execute_query(f"{self.SELECT_SQL} ORDER BY r.created_at DESC")
        return [self._to_review(row) for row in rows]

    async def list_for_location(self, location_id: str) -> List[Review]:
        rows = await self.db.execute_query(
            f"{self.SELECT_SQL} WHERE r.location_id = $1 ORDER BY r.created_at DESC", location_id
        )
        return [self._to_review(row) for row in rows]

    async def get(self, review_id: str) -> Optional[Review]:
        row = await self.db.fetch_one(f"{self.SELECT_SQL} WHERE r.id = $1", review_id)
        return self._to_review(row) if row else None

    async def create(self, user_id: str, data: ReviewCreate) -> Review:
        review_id = new_id()
        try:
            await self.db.execute(
                """INSERT INTO reviews (id, rating, title, content, user_id, location_id)
                VALUES ($1, $2, $3, $4, $5, $6)""",
                review_id, data.rating, data.title, data.content, user_id, data.location_id,
            )
        except asyncpg.ForeignKeyViolationError as e:
            raise NotFoundError("Location not found") from e
        return await self.get(review_id)

    async def update(self, review_id: str, values: Dict[str, Any]) -> Review:
        values = _only(values, REVIEW_UPDATABLE_COLUMNS)
        if not values:
            raise BadRequestError("No valid fields provided.")
        sql, args = _build_update("reviews", values, review_id)
        row = await self.db.fetch_one(sql, *args)
        if row is None:
            raise NotFoundError("Review not found")
        return await self.get(review_id)

    async def delete(self, review_id: str) -> None:
        status = await self.db.execute("DELETE FROM reviews WHERE id = $1", review_id)
        if not _deleted(status):
            raise NotFoundError("Review not found")

# tests/test_repositories.py
import asyncpg
import pytest
from unittest.mock import AsyncMock

from outdoorspot.db.repositories import (
    ActivityRepository,
    LocationRepository,
    ReviewRepository,
    UserRepository,
    _build_insert,
    _build_update,
    search_tags,
)
from outdoorspot.errors import BadRequestError, NotFoundError
from outdoorspot.models import ActivityCreate, RegisterRequest

LOCATION_ROW = {
    "id": "loc-1",
    "name": "Cedar Hill State Park",
    "description": None,
    "location_type": "state_park",
    "latitude": 32.6248,
    "longitude": -96.9786,
    "state": "Texas",
    "rating": 4.5,
    "cost_per_night": 20,
    "images": ['{"url": "https://img/cedar.jpg"}'],
    "activity_categories": ["mountain_biking", "fishing"],
}

USER_ROW = {"id": "user-1", "email": "hiker@example.com", "username": "hiker"}


def test_build_insert():
    sql, args = _build_insert("activities", {"id": "a1", "name": "Loop"})
    assert sql == "INSERT INTO activities (id, name) VALUES ($1, $2) RETURNING *"
    assert args == ["a1", "Loop"]


def test_build_update():
    sql, args = _build_update("locations", {"name": "New", "rating": 4}, "loc-1")
    assert sql == (
        "UPDATE locations SET name = $1, rating = $2, updated_at = now() "
        "WHERE id = $3 RETURNING *"
    )
    assert args == ["New", 4, "loc-1"]


def test_search_tags():
    assert search_tags("state_park", ["fishing", "mountainBiking", "fishing", None]) == [
        "State park",
        "Fishing",
        "Mountain Biking",
    ]


@pytest.mark.asyncio
class TestLocationRepository:

    async def test_list_page(self, mock_db_connector):
        mock_db_connector.execute_query.return_value = [LOCATION_ROW]
        mock_db_connector.fetch_one.return_value = {"total": 41}

        records, total = await LocationRepository(mock_db_connector).list_page(page=3, limit=20)

        assert total == 41
        assert records[0].name == "Cedar Hill State Park"
        assert mock_db_connector.execute_query.await_args.args[1:] == (20, 40)

    async def test_update_without_writable_fields(self, mock_db_connector):
        repo = LocationRepository(mock_db_connector)
        with pytest.raises(BadRequestError):
            await repo.update("loc-1", {})
        with pytest.raises(BadRequestError):
            await repo.update("loc-1", {"id": "other", "created_by_id": "me"})
        mock_db_connector.fetch_one.assert_not_awaited()

    async def test_update_missing_row(self, mock_db_connector):
        with pytest.raises(NotFoundError):
            await LocationRepository(mock_db_connector).update("loc-1", {"name": "New"})

    async def test_delete_missing_row(self, mock_db_connector):
        mock_db_connector.execute.return_value = "DELETE 0"
        with pytest.raises(NotFoundError):
            await LocationRepository(mock_db_connector).delete("loc-1")

    async def test_list_for_search_projection(self, mock_db_connector):
        mock_db_connector.execute_query.return_value = [LOCATION_ROW]

        [location] = await LocationRepository(mock_db_connector).list_for_search()

        assert location.id == "loc-1"
        assert location.location == "Texas"
        assert location.description == ""
        assert location.coordinates.lat == 32.6248
        assert location.activities == ["State park", "Mountain biking", "Fishing"]
        assert location.price == 20
        assert location.images == ["https://img/cedar.jpg"]

    async def test_find_existing_prefers_website(self, mock_db_connector):
        mock_db_connector.fetch_one.return_value = {"id": "loc-1"}

        found = await LocationRepository(mock_db_connector).find_existing(
            "Camp", 1.0, 2.0, website_url="https://camp.example"
        )

        assert found == {"id": "loc-1"}
        assert mock_db_connector.fetch_one.await_count == 1
        assert "website_url" in mock_db_connector.fetch_one.await_args.args[0]

    async def test_find_existing_by_name_and_coordinates(self, mock_db_connector):
        await LocationRepository(mock_db_connector).find_existing("Camp", 1.0, 2.0)

        args = mock_db_connector.fetch_one.await_args.args
        assert args[1] == "Camp"
        assert args[2:] == pytest.approx((0.999, 1.001, 1.999, 2.001))


@pytest.mark.asyncio
class TestActivityRepository:

    async def test_create_for_unknown_location(self, mock_db_connector):
        mock_db_connector.fetch_one = AsyncMock(side_effect=asyncpg.ForeignKeyViolationError("fk"))
        data = ActivityCreate(name="Loop", category="hiking", location_id="nowhere")

        with pytest.raises(NotFoundError) as excinfo:
            await ActivityRepository(mock_db_connector).create(data)
        assert excinfo.value.message == "Location not found"

    async def test_missing_description_becomes_empty(self, mock_db_connector):
        mock_db_connector.fetch_one.return_value = {
            "id": "a1", "name": "Loop", "category": "hiking", "description": None,
            "location_id": "loc-1", "location_name": "Cedar Hill State Park",
        }
        activity = await ActivityRepository(mock_db_connector).get("a1")
        assert activity.description == ""
        assert activity.location_name == "Cedar Hill State Park"


@pytest.mark.asyncio
class TestUserRepository:

    async def test_register_existing_email(self, mock_db_connector):
        mock_db_connector.fetch_one.return_value = {"id": "user-1"}
        data = RegisterRequest(email="hiker@example.com", username="hiker", password="pw")

        with pytest.raises(BadRequestError) as excinfo:
            await UserRepository(mock_db_connector).create(data, password_hash="x$y")
        assert excinfo.value.message == "User already exists"

    async def test_get_credentials_splits_hash(self, mock_db_connector):
        mock_db_connector.fetch_one.return_value = {**USER_ROW, "password_hash": "salt$hash"}

        user, password_hash = await UserRepository(mock_db_connector).get_credentials(" Hiker@Example.com ")

        assert user.id == "user-1"
        assert password_hash == "salt$hash"
        assert not hasattr(user, "password_hash")
        assert mock_db_connector.fetch_one.await_args.args[1] == "Hiker@Example.com"

    async def test_update_ignores_protected_fields(self, mock_db_connector):
        with pytest.raises(BadRequestError):
            await UserRepository(mock_db_connector).update("user-1", {"is_admin": True, "email": "x"})


@pytest.mark.asyncio
class TestReviewRepository:

    async def test_review_row_carries_author(self, mock_db_connector):
        mock_db_connector.fetch_one.return_value = {
            "id": "r1", "rating": 5, "title": None, "content": "Great", "user_id": "user-1",
            "location_id": "loc-1", "username": "hiker", "first_name": "Ada",
            "last_name": None, "avatar_url": None,
        }

        review = await ReviewRepository(mock_db_connector).get("r1")

        assert review.user.username == "hiker"
        assert review.user.id == "user-1"

    async def test_update_only_review_fields(self, mock_db_connector):
        with pytest.raises(BadRequestError):
            await ReviewRepository(mock_db_connector).update("r1", {"user_id": "someone"})

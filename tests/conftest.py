# tests/conftest.py
import pytest
from unittest.mock import MagicMock, AsyncMock

from fastapi.testclient import TestClient

from outdoorspot import main
from outdoorspot.auth.security import create_access_token
from outdoorspot.dependencies import (
    get_activity_repository,
    get_location_repository,
    get_review_repository,
    get_search_service,
    get_user_repository,
    get_weather_service,
)
from outdoorspot.models import User
from outdoorspot.search.search_service import SearchService
from outdoorspot.search.sources import CatalogSource
from outdoorspot.search.weather_enrichment import WeatherEnrichmentService
from outdoorspot.weather import WeatherService

# --- Low level client mocks ---

@pytest.fixture
def mock_db_connector():
    """Mocked PostgreSQL connector: every query returns nothing."""
    db_conn = MagicMock()
    db_conn.execute_query = AsyncMock(return_value=[])
    db_conn.fetch_one = AsyncMock(return_value=None)
    db_conn.execute = AsyncMock(return_value="DELETE 1")
    return db_conn

@pytest.fixture
def mock_cache_manager():
    """Mocked Redis cache manager, always a miss."""
    cache = MagicMock()
    cache.get_json = AsyncMock(return_value=None)
    cache.set_json = AsyncMock()
    cache.ping = AsyncMock(return_value=True)
    return cache

# --- Application services ---

@pytest.fixture
def weather_service(mock_cache_manager):
    """Real weather table, no simulated latency."""
    return WeatherService(cache=mock_cache_manager, delay_s=0)

@pytest.fixture
def search_service(weather_service):
    """Search over the built-in catalog."""
    return SearchService(
        source=CatalogSource(),
        weather_enrichment=WeatherEnrichmentService(weather_service, timeout_s=1.0),
    )

# --- API ---

@pytest.fixture
def hiker():
    return User(id="user-1", email="hiker@example.com", username="hiker")

@pytest.fixture
def auth_header(hiker):
    return {"Authorization": f"Bearer {create_access_token(hiker.id)}"}

@pytest.fixture
def user_repo(hiker):
    """UserRepository stand-in that knows a single user."""
    repo = MagicMock()
    repo.get = AsyncMock(side_effect=lambda user_id: hiker if user_id == hiker.id else None)
    return repo

@pytest.fixture
def location_repo():
    return MagicMock()

@pytest.fixture
def activity_repo():
    return MagicMock()

@pytest.fixture
def review_repo():
    return MagicMock()

@pytest.fixture
def client(search_service, weather_service, user_repo, location_repo, activity_repo, review_repo):
    """TestClient with every service and repository swapped for a test double."""
    overrides = {
        get_search_service: lambda: search_service,
        get_weather_service: lambda: weather_service,
        get_user_repository: lambda: user_repo,
        get_location_repository: lambda: location_repo,
        get_activity_repository: lambda: activity_repo,
        get_review_repository: lambda: review_repo,
    }
    main.app.dependency_overrides.update(overrides)
    yield TestClient(main.app, raise_server_exceptions=False)
    main.app.dependency_overrides.clear()

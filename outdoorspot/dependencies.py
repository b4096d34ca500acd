"""Shared service instances and the FastAPI dependencies exposing them."""
from fastapi import Depends

from outdoorspot.cache import cache_manager
from outdoorspot.config import settings
from outdoorspot.db.postgres_connector import PostgresConnector
from outdoorspot.db.repositories import (
    ActivityRepository,
    LocationRepository,
    ReviewRepository,
    UserRepository,
)
from outdoorspot.search.search_service import SearchService
from outdoorspot.search.sources import build_source
from outdoorspot.search.weather_enrichment import WeatherEnrichmentService
from outdoorspot.weather import WeatherService

# --- Global instances ---

# Connection pool (opened in the app lifespan)
db_connector: PostgresConnector = PostgresConnector(settings.DATABASE_URL)

weather_service: WeatherService = WeatherService(
    cache=cache_manager if settings.WEATHER_CACHE_ENABLED else None
)

search_service: SearchService = SearchService(
    source=build_source(settings.SEARCH_SOURCE, db_connector),
    weather_enrichment=WeatherEnrichmentService(weather_service),
)


def get_db() -> PostgresConnector:
    return db_connector


def get_search_service() -> SearchService:
    return search_service


def get_weather_service() -> WeatherService:
    return weather_service


def get_location_repository(db: PostgresConnector = Depends(get_db)) -> LocationRepository:
    return LocationRepository(db)


def get_activity_repository(db: PostgresConnector = Depends(get_db)) -> ActivityRepository:
    return ActivityRepository(db)


def get_user_repository(db: PostgresConnector = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def get_review_repository(db: PostgresConnector = Depends(get_db)) -> ReviewRepository:
    return ReviewRepository(db)

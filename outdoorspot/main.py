"""Main module for the FastAPI application."""
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import asyncpg
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from redis.exceptions import RedisError
from starlette.exceptions import HTTPException as StarletteHTTPException

from outdoorspot.api import activities, auth, locations, reviews, search, users, weather
from outdoorspot.cache import cache_manager
from outdoorspot.config import settings
from outdoorspot.db.schema import create_tables
from outdoorspot.dependencies import db_connector
from outdoorspot.errors import AppError
from outdoorspot.logger import logger

STARTED_AT = time.monotonic()


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Handle FastAPI startup and shutdown events."""
    logger.info("Starting up {name} ({env})...", name=settings.APP_NAME, env=settings.ENVIRONMENT)

    try:
        await db_connector.connect()
        await create_tables(db_connector)
        logger.info("PostgreSQL connection pool established successfully.")
    except (OSError, asyncpg.PostgresError) as e:
        # The catalog source still serves search without a database
        logger.error("Failed to connect to PostgreSQL: {error}", error=e)

    try:
        await cache_manager.ping()
        logger.info("Redis cache connected successfully.")
    except RedisError as e:
        logger.error("Failed to connect to Redis: {error}", error=e)

    yield

    logger.info("Shutting down {name}...", name=settings.APP_NAME)
    await db_connector.close()
    logger.info("PostgreSQL connection pool closed.")
    await cache_manager.close()
    logger.info("Redis connection closed.")


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Error envelopes ---

@app.exception_handler(AppError)
async def app_error_handler(_request: Request, exc: AppError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.message},
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(_request: Request, exc: RequestValidationError):
    errors = exc.errors()
    summary = ""
    if errors:
        first = errors[0]
        summary = f"{'.'.join(str(part) for part in first.get('loc', ()))}: {first.get('msg')}"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "message": "Invalid request", "error": summary},
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        content = {"success": False, "message": "Route not found", "path": request.url.path}
    else:
        content = {"success": False, "message": str(exc.detail)}
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.opt(exception=exc).error("Unhandled error on {method} {path}",
                                    method=request.method, path=request.url.path)
    content = {"success": False, "message": "Internal server error"}
    if settings.ENVIRONMENT == "development":
        content["error"] = str(exc)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)


# --- Routes ---

for module in (auth, search, locations, activities, reviews, users, weather):
    app.include_router(module.router, prefix="/api")


@app.get("/")
def root():
    """Root endpoint to check API status."""
    return {"status": "ok", "message": f"{settings.APP_NAME} is running"}


@app.get("/health", status_code=status.HTTP_200_OK, tags=["Monitoring"])
async def health_check():
    """
    Health check endpoint.

    Checks connectivity to PostgreSQL and Redis.
    Returns 200 OK if both are reachable, otherwise 503 Service Unavailable.
    """
    services_status = {"database": "ok", "redis": "ok"}
    try:
        await cache_manager.ping()
    except RedisError:
        services_status["redis"] = "error"
        logger.error("Health check failed: Redis connection error.")

    try:
        await db_connector.execute_query("SELECT 1")
    except (ConnectionError, OSError, asyncpg.PostgresError):
        services_status["database"] = "error"
        logger.error("Health check failed: Database connection error.")

    healthy = "error" not in services_status.values()
    body = {
        "status": "OK" if healthy else "DEGRADED",
        "message": f"{settings.APP_NAME} is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - STARTED_AT, 3),
        "environment": settings.ENVIRONMENT,
        "services": services_status,
    }
    return JSONResponse(
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content=body,
    )

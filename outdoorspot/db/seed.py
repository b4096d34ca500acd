"""Seed the `locations` table from a JSONL export.

Each line is one camelCase location object. Existing rows are matched by
website URL, else by name and rounded coordinates, and only their empty
columns are filled in. Everything else is inserted.

Usage:
    python -m outdoorspot.db.seed results/metadata_clean.jsonl --create-schema
"""
import argparse
import asyncio
import json
import math
import sys
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, Optional

import asyncpg

from outdoorspot.config import settings
from outdoorspot.db.postgres_connector import PostgresConnector
from outdoorspot.db.repositories import LocationRepository
from outdoorspot.db.schema import create_tables
from outdoorspot.errors import AppError
from outdoorspot.logger import logger

STRING_FIELDS = {
    "description": "description",
    "address": "address",
    "city": "city",
    "state": "state",
    "terrainType": "terrain_type",
    "climateZone": "climate_zone",
    "safetyNotes": "safety_notes",
    "regulations": "regulations",
    "websiteUrl": "website_url",
}

JSON_FIELDS = {
    "amenities": "amenities",
    "contactInfo": "contact_info",
    "images": "images",
}

COORD_PRECISION = 3
COORD_TOLERANCE = 0.001


def norm_str(value: Any) -> Optional[str]:
    """Trimmed string, None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def as_number(value: Any) -> Optional[float]:
    """Numbers and numeric strings as float. Anything else is None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return int(value)


def as_date(value: Any) -> Optional[date]:
    """ISO date or datetime string -> date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = norm_str(value)
    if not text:
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def round_coord(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        return None
    return round(float(value), COORD_PRECISION)


def is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def is_seedable(record: Dict[str, Any]) -> bool:
    """A record needs a name and numeric coordinates."""
    if not norm_str(record.get("name")):
        return False
    return all(
        isinstance(record.get(key), (int, float)) and not isinstance(record.get(key), bool)
        for key in ("latitude", "longitude")
    )


def normalize_record(record: Dict[str, Any]) -> Dict[str, Any]:
    """Map one JSONL object onto `locations` column values."""
    values: Dict[str, Any] = {
        "name": norm_str(record.get("name")),
        "location_type": norm_str(record.get("locationType")) or "Facility",
        "latitude": float(record["latitude"]),
        "longitude": float(record["longitude"]),
        "country": norm_str(record.get("country")) or "US",
        "elevation": as_number(record.get("elevation")),
        "cost_per_night": as_number(record.get("costPerNight")),
        "max_capacity": as_int(record.get("maxCapacity")),
        "difficulty_level": as_int(record.get("difficultyLevel")),
        "rating": as_number(record.get("rating")),
        "pet_friendly": bool(record.get("petFriendly") or False),
        "reservation_required": bool(record.get("reservationRequired") or False),
        "season_start": as_date(record.get("seasonStart")),
        "season_end": as_date(record.get("seasonEnd")),
        "verified": True if record.get("verified") is None else bool(record["verified"]),
        "is_active": True if record.get("isActive") is None else bool(record["isActive"]),
    }
    for source, column in STRING_FIELDS.items():
        values[column] = norm_str(record.get(source))
    # Absent JSON keys are left out so an update never touches them
    for source, column in JSON_FIELDS.items():
        if source in record:
            values[column] = record[source]
    return values


def fill_empty(existing: Dict[str, Any], incoming: Dict[str, Any]) -> Dict[str, Any]:
    """Columns of `existing` that are empty and that `incoming` can fill."""
    return {
        column: value
        for column, value in incoming.items()
        if column != "id" and is_empty(existing.get(column)) and value is not None
    }


@dataclass
class SeedSummary:
    read: int = 0
    created: int = 0
    updated: int = 0
    skipped: int = 0
    errors: int = 0

    def log(self):
        logger.info(
            "Seed summary: read={read} created={created} updated={updated} "
            "skipped={skipped} errors={errors}",
            read=self.read, created=self.created, updated=self.updated,
            skipped=self.skipped, errors=self.errors,
        )


async def upsert_location(repo: LocationRepository, values: Dict[str, Any]) -> str:
    """Insert or fill in one location. Returns `"create"` or `"update"`."""
    lat_key = round_coord(values["latitude"])
    lng_key = round_coord(values["longitude"])
    existing = await repo.find_existing(
        values["name"],
        lat_key if lat_key is not None else values["latitude"],
        lng_key if lng_key is not None else values["longitude"],
        website_url=values.get("website_url"),
        tolerance=COORD_TOLERANCE,
    )
    if existing is None:
        await repo.insert_values(values)
        return "create"

    missing = fill_empty(existing, values)
    if missing:
        await repo.update(existing["id"], missing)
    return "update"


async def seed_lines(repo: LocationRepository, lines) -> SeedSummary:
    """Upsert every JSONL line. Bad lines are counted and skipped over."""
    summary = SeedSummary()
    for raw in lines:
        line = raw.strip()
        if not line:
            continue
        summary.read += 1
        try:
            record = json.loads(line)
            if not isinstance(record, dict) or not is_seedable(record):
                summary.skipped += 1
                continue
            action = await upsert_location(repo, normalize_record(record))
        except (ValueError, AppError, asyncpg.PostgresError) as e:
            summary.errors += 1
            logger.error("[line {line}] {error}", line=summary.read, error=e)
            continue
        if action == "create":
            summary.created += 1
        else:
            summary.updated += 1
    return summary


async def seed_file(path: Path, database_url: str, create_schema: bool = False) -> SeedSummary:
    connector = PostgresConnector(database_url)
    await connector.connect()
    try:
        if create_schema:
            await create_tables(connector)
        logger.info("Seeding from: {path}", path=path)
        with path.open(encoding="utf-8") as handle:
            summary = await seed_lines(LocationRepository(connector), handle)
    finally:
        await connector.close()
    summary.log()
    return summary


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Seed locations from a JSONL file")
    parser.add_argument("input", help="JSONL file, one location per line")
    parser.add_argument("--database-url", default=settings.DATABASE_URL, help="PostgreSQL URL")
    parser.add_argument("--create-schema", action="store_true", help="Create missing tables first")
    args = parser.parse_args(argv)

    path = Path(args.input).resolve()
    if not path.exists():
        logger.error("Input file not found: {path}", path=path)
        return 1

    asyncio.run(seed_file(path, args.database_url, create_schema=args.create_schema))
    return 0


if __name__ == "__main__":
    sys.exit(main())

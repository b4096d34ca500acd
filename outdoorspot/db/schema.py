"""Table definitions. Every statement is idempotent."""
from outdoorspot.logger import logger

DDL_STATEMENTS = [
    """
    CREATE TABLE IF NOT EXISTS users (
        id TEXT PRIMARY KEY,
        email TEXT NOT NULL UNIQUE,
        username TEXT NOT NULL UNIQUE,
        password_hash TEXT NOT NULL,
        first_name TEXT,
        last_name TEXT,
        avatar_url TEXT,
        bio TEXT,
        is_admin BOOLEAN NOT NULL DEFAULT FALSE,
        is_active BOOLEAN NOT NULL DEFAULT TRUE,
        created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
        updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS locations (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        description TEXT,
        location_type TEXT NOT NULL DEFAULT 'Facility',
        latitude DOUBLE PRECISION NOT NULL,
        longitude DOUBLE PRECISION NOT NULL,
        address TEXT,
        city TEXT,
        state TEXT,
        country TEXT DEFAULT 'US',
        elevation DOUBLE PRECISION,
        terrain_type TEXT,
        climate_zone TEXT,
        amenities JSONB,
        cost_per_night NUMERIC(10, 2),
        max_capacity INTEGER,
        pet_friendly BOOLEAN NOT NULL DEFAULT FALSE,
        reservation_required BOOLEAN NOT NULL DEFAULT FALSE,
        season_start DATE,
        season_end DATE,
        difficulty_level INTEGER,
        safety_notes TEXT,
        regulations TEXT,
        contact_info JSONB,
        website_url TEXT,
        images JSONB,
        verified BOOLEAN NOT NULL DEFAULT TRUE,
        is_active BOOLEAN NOT NULL DEFAULT TRUE,
        rating DOUBLE PRECISION,
        created_by_id TEXT REFERENCES users(id) ON DELETE SET NULL,
        created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
        updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
    )
    """,
    "CREATE INDEX IF NOT EXISTS locations_name_idx ON locations (name)",
    "CREATE INDEX IF NOT EXISTS locations_website_url_idx ON locations (website_url)",
    """
    CREATE TABLE IF NOT EXISTS activities (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        category TEXT NOT NULL,
        description TEXT,
        location_id TEXT NOT NULL REFERENCES locations(id) ON DELETE CASCADE,
        difficulty_level INTEGER,
        distance_miles DOUBLE PRECISION,
        estimated_duration_hours DOUBLE PRECISION,
        created_at TIMESTAMPTZ NOT NULL DEFAULT now()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS reviews (
        id TEXT PRIMARY KEY,
        rating INTEGER NOT NULL CHECK (rating BETWEEN 1 AND 5),
        title TEXT,
        content TEXT NOT NULL,
        user_id TEXT NOT NULL REFERENCES users(id) ON DELETE CASCADE,
        location_id TEXT REFERENCES locations(id) ON DELETE CASCADE,
        created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
        updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
    )
    """,
]


async def create_tables(connector) -> None:
    """Create every table and index that does not exist yet."""
    for statement in DDL_STATEMENTS:
        await connector.execute(statement)
    logger.info("Database schema ready ({count} statements)", count=len(DDL_STATEMENTS))

# Persistence layer for imported events
"""
Persistence Layer for Event Import.

Upserts EventRecord objects into the PostgreSQL ``events`` table keyed by
event name. An upsert overwrites every column, so re-running an import
converges on the same stored state.
"""

import logging

from psycopg2.extras import Json

from techfest.schemas.event import EventRecord

logger = logging.getLogger(__name__)

EVENTS_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS events (
    event_id SERIAL PRIMARY KEY,
    name TEXT NOT NULL UNIQUE,
    slug TEXT NOT NULL,
    description TEXT,
    short_description TEXT,
    category TEXT NOT NULL,
    department TEXT NOT NULL,
    image TEXT,
    event_date DATE NOT NULL,
    event_time TEXT,
    venue TEXT,
    registration_fee INTEGER NOT NULL DEFAULT 0 CHECK (registration_fee >= 0),
    max_participants INTEGER NOT NULL DEFAULT 100 CHECK (max_participants > 0),
    team_size JSONB NOT NULL,
    prizes JSONB NOT NULL DEFAULT '{}'::jsonb,
    coordinators JSONB NOT NULL DEFAULT '[]'::jsonb,
    rules JSONB NOT NULL DEFAULT '[]'::jsonb,
    eligibility JSONB NOT NULL DEFAULT '[]'::jsonb,
    is_active BOOLEAN NOT NULL DEFAULT TRUE,
    status TEXT NOT NULL DEFAULT 'upcoming',
    online_registration_open BOOLEAN NOT NULL DEFAULT TRUE,
    tags JSONB NOT NULL DEFAULT '[]'::jsonb,
    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
)
"""

UPSERT_EVENT_SQL = """
INSERT INTO events (
    name, slug, description, short_description, category, department,
    image, event_date, event_time, venue, registration_fee, max_participants,
    team_size, prizes, coordinators, rules, eligibility, is_active, status,
    online_registration_open, tags
) VALUES (
    %(name)s, %(slug)s, %(description)s, %(short_description)s, %(category)s,
    %(department)s, %(image)s, %(event_date)s, %(event_time)s, %(venue)s,
    %(registration_fee)s, %(max_participants)s, %(team_size)s, %(prizes)s,
    %(coordinators)s, %(rules)s, %(eligibility)s, %(is_active)s, %(status)s,
    %(online_registration_open)s, %(tags)s
)
ON CONFLICT (name) DO UPDATE SET
    slug = EXCLUDED.slug,
    description = EXCLUDED.description,
    short_description = EXCLUDED.short_description,
    category = EXCLUDED.category,
    department = EXCLUDED.department,
    image = EXCLUDED.image,
    event_date = EXCLUDED.event_date,
    event_time = EXCLUDED.event_time,
    venue = EXCLUDED.venue,
    registration_fee = EXCLUDED.registration_fee,
    max_participants = EXCLUDED.max_participants,
    team_size = EXCLUDED.team_size,
    prizes = EXCLUDED.prizes,
    coordinators = EXCLUDED.coordinators,
    rules = EXCLUDED.rules,
    eligibility = EXCLUDED.eligibility,
    is_active = EXCLUDED.is_active,
    status = EXCLUDED.status,
    online_registration_open = EXCLUDED.online_registration_open,
    tags = EXCLUDED.tags,
    updated_at = NOW()
RETURNING event_id;
"""


class EventDataWriter:
    """
    Persists normalized EventRecord objects to the PostgreSQL database.

    Each upsert runs in its own transaction: a failure rolls back that record
    only and is re-raised for the caller to record.
    """

    def __init__(self, db_connection) -> None:
        """Initialize with an active psycopg2 connection."""
        self.conn = db_connection

    def ensure_schema(self) -> None:
        """Create the events table if it does not exist."""
        with self.conn.cursor() as cur:
            cur.execute(EVENTS_TABLE_SQL)
        self.conn.commit()

    def upsert_event(self, event: EventRecord) -> int:
        """
        Insert the event or overwrite the stored event with the same name.

        Returns:
            int: The event_id of the stored row.
        """
        try:
            with self.conn.cursor() as cur:
                cur.execute(UPSERT_EVENT_SQL, self._to_params(event))
                event_id = cur.fetchone()[0]
            self.conn.commit()
        except Exception:
            self.conn.rollback()
            raise

        logger.debug(f"Upserted event '{event.name}' (id={event_id})")
        return event_id

    @staticmethod
    def _to_params(event: EventRecord) -> dict:
        document = event.to_document()
        return {
            "name": event.name,
            "slug": event.slug,
            "description": event.description,
            "short_description": event.short_description,
            "category": event.category.value,
            "department": event.department.value,
            "image": event.image,
            "event_date": event.date,
            "event_time": event.time,
            "venue": event.venue,
            "registration_fee": event.registration_fee,
            "max_participants": event.max_participants,
            "team_size": Json(document["team_size"]),
            "prizes": Json(document["prizes"]),
            "coordinators": Json(document["coordinators"]),
            "rules": Json(document["rules"]),
            "eligibility": Json(document["eligibility"]),
            "is_active": event.is_active,
            "status": event.status,
            "online_registration_open": event.online_registration_open,
            "tags": Json(document["tags"]),
        }

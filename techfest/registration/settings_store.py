"""
Runtime settings store.

A small key/value table for settings operators change at runtime (the
registration toggle, the auto-disable time, ...). Values are stored as text.
"""

import logging
from typing import Any, List, Optional

from techfest.schemas.settings import Setting

logger = logging.getLogger(__name__)

SETTINGS_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS settings (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    description TEXT,
    category TEXT NOT NULL DEFAULT 'general',
    is_public BOOLEAN NOT NULL DEFAULT FALSE,
    updated_by TEXT,
    updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
)
"""

_COLUMNS = "key, value, description, category, is_public, updated_by, updated_at"

# Metadata passed as NULL keeps the stored value
UPSERT_SETTING_SQL = f"""
INSERT INTO settings (key, value, description, category, is_public, updated_by)
VALUES (%s, %s, %s, COALESCE(%s, 'general'), COALESCE(%s, FALSE), %s)
ON CONFLICT (key) DO UPDATE SET
    value = EXCLUDED.value,
    description = COALESCE(%s, settings.description),
    category = COALESCE(%s, settings.category),
    is_public = COALESCE(%s, settings.is_public),
    updated_by = COALESCE(EXCLUDED.updated_by, settings.updated_by),
    updated_at = NOW()
RETURNING {_COLUMNS};
"""


def _row_to_setting(row) -> Setting:
    return Setting(
        key=row[0],
        value=row[1],
        description=row[2],
        category=row[3],
        is_public=row[4],
        updated_by=row[5],
        updated_at=row[6],
    )


class SettingsStore:
    """Key/value settings persisted in PostgreSQL."""

    def __init__(self, db_connection) -> None:
        """Initialize with an active psycopg2 connection."""
        self.conn = db_connection

    def ensure_schema(self) -> None:
        """Create the settings table if it does not exist."""
        with self.conn.cursor() as cur:
            cur.execute(SETTINGS_TABLE_SQL)
        self.conn.commit()

    def list_settings(self) -> List[Setting]:
        """Return all settings ordered by category, then key."""
        with self.conn.cursor() as cur:
            cur.execute(f"SELECT {_COLUMNS} FROM settings ORDER BY category, key")
            rows = cur.fetchall()
        return [_row_to_setting(row) for row in rows]

    def get_setting(self, key: str) -> Optional[Setting]:
        """Return the setting stored under ``key``, or None."""
        with self.conn.cursor() as cur:
            cur.execute(f"SELECT {_COLUMNS} FROM settings WHERE key = %s", (key,))
            row = cur.fetchone()
        return _row_to_setting(row) if row else None

    def get_value(self, key: str, default: Any = None) -> Any:
        """Return the value stored under ``key``, or ``default``."""
        setting = self.get_setting(key)
        return setting.value if setting is not None else default

    def set_value(
        self,
        key: str,
        value: str,
        description: Optional[str] = None,
        category: Optional[str] = None,
        is_public: Optional[bool] = None,
        updated_by: Optional[str] = None,
    ) -> Setting:
        """
        Create or update a setting.

        Metadata left as None keeps its stored value (or the column default
        on insert).
        """
        try:
            with self.conn.cursor() as cur:
                cur.execute(
                    UPSERT_SETTING_SQL,
                    (
                        key,
                        value,
                        description,
                        category,
                        is_public,
                        updated_by,
                        description,
                        category,
                        is_public,
                    ),
                )
                row = cur.fetchone()
            self.conn.commit()
        except Exception:
            self.conn.rollback()
            raise

        logger.info(f"Setting updated: {key}")
        return _row_to_setting(row)

    def delete_setting(self, key: str) -> bool:
        """Delete a setting. Returns False if it did not exist."""
        try:
            with self.conn.cursor() as cur:
                cur.execute("DELETE FROM settings WHERE key = %s", (key,))
                deleted = cur.rowcount > 0
            self.conn.commit()
        except Exception:
            self.conn.rollback()
            raise

        if deleted:
            logger.info(f"Setting deleted: {key}")
        return deleted

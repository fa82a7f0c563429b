"""
Unit tests for EventDataWriter against a mocked psycopg2 connection.
"""

from datetime import date
from unittest.mock import MagicMock

import pytest
from psycopg2.extras import Json

from techfest.ingestion.persist import EVENTS_TABLE_SQL, UPSERT_EVENT_SQL, EventDataWriter
from techfest.schemas.event import EventRecord, Prizes, TeamSize


@pytest.fixture
def mock_conn():
    conn = MagicMock()
    cursor = conn.cursor.return_value.__enter__.return_value
    cursor.fetchone.return_value = (7,)
    return conn


@pytest.fixture
def event():
    return EventRecord(
        name="Robo Race",
        date=date(2025, 11, 13),
        team_size=TeamSize(min=2, max=4),
        prizes=Prizes(first="₹1500"),
    )


def executed(conn):
    return conn.cursor.return_value.__enter__.return_value.execute


class TestEventDataWriter:
    """Tests for EventDataWriter."""

    def test_upsert_returns_id_and_commits(self, mock_conn, event):
        writer = EventDataWriter(mock_conn)

        assert writer.upsert_event(event) == 7
        mock_conn.commit.assert_called_once()
        mock_conn.rollback.assert_not_called()

    def test_upsert_is_keyed_by_name(self, mock_conn, event):
        EventDataWriter(mock_conn).upsert_event(event)

        sql, params = executed(mock_conn).call_args[0]
        assert sql == UPSERT_EVENT_SQL
        assert "ON CONFLICT (name) DO UPDATE" in sql
        assert params["name"] == "Robo Race"
        assert params["event_date"] == date(2025, 11, 13)
        assert params["category"] == "Technical"

    def test_json_columns(self, mock_conn, event):
        EventDataWriter(mock_conn).upsert_event(event)

        params = executed(mock_conn).call_args[0][1]
        assert isinstance(params["team_size"], Json)
        assert params["team_size"].adapted == {"min": 2, "max": 4}
        assert params["prizes"].adapted == {"first": "₹1500"}
        assert params["tags"].adapted == ["technical", "common"]

    def test_failure_rolls_back_and_reraises(self, mock_conn, event):
        executed(mock_conn).side_effect = RuntimeError("connection lost")

        with pytest.raises(RuntimeError, match="connection lost"):
            EventDataWriter(mock_conn).upsert_event(event)

        mock_conn.rollback.assert_called_once()
        mock_conn.commit.assert_not_called()

    def test_ensure_schema(self, mock_conn):
        EventDataWriter(mock_conn).ensure_schema()

        executed(mock_conn).assert_called_once_with(EVENTS_TABLE_SQL)
        mock_conn.commit.assert_called_once()

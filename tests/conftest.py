"""
Shared pytest fixtures for the techfest test suite.

Provides raw survey rows, in-memory stand-ins for the PostgreSQL-backed
event writer and settings store, and a controllable clock.
"""

from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Set

import pytest

from techfest.ingestion.normalization.row_normalizer import EventRowNormalizer
from techfest.schemas.event import EventRecord
from techfest.schemas.settings import Setting

# Verbose survey-form headers as they appear in the exports
TEAM_SIZE_HEADER = (
    "Team size (minimum  & maximum)\nIf team event \nExample :  Minimum : 2\n"
    "                   Maximum : 4\nIf individual type : 1\n"
)
PRIZES_HEADER = "Prizes\nExample : 1st : 1500rs \n                  2nd : 1000rs "
VENUE_HEADER = "Venue\nExample: classroom number, quadrangle etc\n"

ROW_HEADERS = {
    "name": "Event name",
    "category": "Event Category",
    "department": "Event department ",
    "team_size": TEAM_SIZE_HEADER,
    "prizes": PRIZES_HEADER,
    "date": "Event date ",
    "registration_fee": "Registration fee",
    "max_participants": "Maximum team slots ",
    "coordinator_names": "Event Coordinators  Name ",
    "coordinator_phones": "Event Coordinators contact number",
    "coordinator_emails": "Event Coordinators E-mail",
    "venue": VENUE_HEADER,
    "time": "Event start time",
}


class InMemoryEventWriter:
    """Event writer keeping upserted documents in a dict keyed by name."""

    def __init__(self, fail_on: Optional[Set[str]] = None):
        self.events: Dict[str, dict] = {}
        self.calls: List[str] = []
        self.fail_on = fail_on or set()

    def upsert_event(self, event: EventRecord) -> int:
        self.calls.append(event.name)
        if event.name in self.fail_on:
            raise ValueError(f"duplicate key value violates unique constraint for {event.name}")
        self.events[event.name] = event.to_document()
        return len(self.events)


class InMemorySettingsStore:
    """Settings store backed by a dict, mirroring SettingsStore's interface."""

    def __init__(self):
        self.settings: Dict[str, Setting] = {}

    def list_settings(self) -> List[Setting]:
        return sorted(self.settings.values(), key=lambda s: (s.category, s.key))

    def get_setting(self, key: str) -> Optional[Setting]:
        return self.settings.get(key)

    def get_value(self, key: str, default=None):
        setting = self.settings.get(key)
        return setting.value if setting is not None else default

    def set_value(
        self,
        key,
        value,
        description=None,
        category=None,
        is_public=None,
        updated_by=None,
    ) -> Setting:
        existing = self.settings.get(key)
        setting = Setting(
            key=key,
            value=value,
            description=description if description is not None else (existing.description if existing else None),
            category=category or (existing.category if existing else "general"),
            is_public=is_public if is_public is not None else (existing.is_public if existing else False),
            updated_by=updated_by or (existing.updated_by if existing else None),
            updated_at=datetime.now(timezone.utc),
        )
        self.settings[key] = setting
        return setting

    def delete_setting(self, key: str) -> bool:
        return self.settings.pop(key, None) is not None


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def make_row():
    """
    Return a function that builds raw survey rows keyed by export headers.

    Example:
        row = make_row(name="Robo Race", team_size="2", venue="Lab 3")
    """

    def _make_row(**fields) -> Dict[str, str]:
        return {ROW_HEADERS[field]: value for field, value in fields.items()}

    return _make_row


@pytest.fixture
def normalizer():
    """EventRowNormalizer using the packaged ingestion config."""
    return EventRowNormalizer()


@pytest.fixture
def event_writer():
    return InMemoryEventWriter()


@pytest.fixture
def settings_store():
    return InMemorySettingsStore()


@pytest.fixture
def clock():
    return FakeClock(datetime(2025, 11, 1, 9, 0, tzinfo=timezone.utc))

"""
Row normalizer.

Turns one raw survey row into an EventRecord using the declarative header
alias table and the field parsers. A row is only dropped when it has no
usable event name; every other problem degrades to a field default.
"""

import logging
from datetime import date
from typing import Any, Dict, Mapping, Optional

from techfest.configs.config import Config
from techfest.ingestion.normalization.field_mapper import (
    HeaderAliasMapper,
    create_alias_mapper_from_config,
)
from techfest.ingestion.normalization.parsers import (
    DEFAULT_FALLBACK_DATE,
    normalize_category,
    normalize_department,
    parse_coordinators,
    parse_date,
    parse_max_participants,
    parse_prizes,
    parse_registration_fee,
    parse_team_size,
)
from techfest.schemas.event import EventRecord

logger = logging.getLogger(__name__)

HEADER_LEAK_MARKER = "event name"


def is_skippable_name(name: Optional[str]) -> bool:
    """True for empty names and header text that leaked into the data range."""
    if not name or not name.strip():
        return True
    return HEADER_LEAK_MARKER in name.strip().lower()


class EventRowNormalizer:
    """Normalizes raw rows into EventRecord objects."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the normalizer.

        Args:
            config: The ``event_import`` config section. Defaults to the one
                in configs/ingestion.yaml.
        """
        self.config = config if config is not None else Config.get_event_import_config()
        self.mapper: HeaderAliasMapper = create_alias_mapper_from_config(self.config)
        self.defaults: Dict[str, Any] = self.config.get("defaults", {})
        self.department_aliases: Dict[str, str] = {
            str(key).strip().upper(): value
            for key, value in (self.config.get("department_aliases") or {}).items()
        } or None
        self.category_images: Dict[str, str] = self.config.get("category_images", {})
        self.fallback_date = self._load_fallback_date(self.config.get("fallback_date"))

    @staticmethod
    def _load_fallback_date(value: Any) -> date:
        if isinstance(value, date):
            return value
        if value:
            try:
                return date.fromisoformat(str(value))
            except ValueError:
                logger.warning(f"Invalid fallback_date '{value}' in config, using default")
        return DEFAULT_FALLBACK_DATE

    def normalize_row(self, row: Mapping[str, Any]) -> Optional[EventRecord]:
        """
        Normalize a raw row.

        Args:
            row: Raw row (header -> cell text)

        Returns:
            EventRecord, or None when the row has no usable event name
        """
        fields = self.mapper.map_row(row)
        name = fields.get("name", "")

        if is_skippable_name(name):
            return None

        category = normalize_category(fields.get("category"))
        department = normalize_department(
            fields.get("department"), self.department_aliases
        )

        short_description = fields.get("short_description") or name
        description = (
            fields.get("description")
            or fields.get("short_description")
            or self.defaults.get("description", "Event description")
        )

        return EventRecord(
            name=name,
            description=description,
            short_description=short_description,
            category=category,
            department=department,
            image=self.category_images.get(category.value)
            or self.category_images.get("default"),
            date=parse_date(fields.get("date"), self.fallback_date),
            time=fields.get("time") or self.defaults.get("time", "10:00 AM"),
            venue=fields.get("venue") or self.defaults.get("venue", "TBA"),
            registration_fee=parse_registration_fee(fields.get("registration_fee")),
            max_participants=parse_max_participants(fields.get("max_participants")),
            team_size=parse_team_size(fields.get("team_size")),
            prizes=parse_prizes(fields.get("prizes")),
            coordinators=parse_coordinators(
                fields.get("coordinator_names"),
                fields.get("coordinator_phones"),
                fields.get("coordinator_emails"),
            ),
            rules=[],
            eligibility=list(
                self.defaults.get("eligibility", ["Open to all students"])
            ),
            is_active=True,
            status=self.defaults.get("status", "upcoming"),
            online_registration_open=True,
            tags=[category.value.lower(), department.value.lower()],
        )

"""
Module for event deduplication.

Submissions are re-sent when organizers correct a form, so the same event
name can appear several times across the CSV and XLSX exports. Records are
keyed by name and the last occurrence wins.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List

from techfest.schemas.event import EventRecord

logger = logging.getLogger(__name__)


class EventDeduplicator(ABC):
    """Abstract base for deduplication strategies."""

    @abstractmethod
    def deduplicate(self, events: List[EventRecord]) -> List[EventRecord]:
        """Deduplicate events and return unique set."""
        pass


class NameDeduplicator(EventDeduplicator):
    """Match by exact event name; the last occurrence wins."""

    def deduplicate(self, events: List[EventRecord]) -> List[EventRecord]:
        """
        Deduplicate events on name.

        Output order follows the first time each name was seen, but the
        fields come from the last row carrying that name.

        Returns:
            List of unique events
        """
        unique: Dict[str, EventRecord] = {}

        for event in events:
            if event.name in unique:
                logger.debug(f"Duplicate event name '{event.name}', keeping later row")
            unique[event.name] = event

        return list(unique.values())

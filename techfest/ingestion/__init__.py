"""
Event import for survey-form submissions.

Usage:
    from techfest.ingestion import EventImporter
    from techfest.ingestion.persist import EventDataWriter

    importer = EventImporter(EventDataWriter(conn))
    summary = importer.import_from_sources("events.csv", "events.xlsx")
"""

from .importer import EventImporter
from .sources import SourceNotFoundError, load_sources

__all__ = [
    "EventImporter",
    "SourceNotFoundError",
    "load_sources",
]

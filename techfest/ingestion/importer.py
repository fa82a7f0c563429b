"""
Event Importer.

Coordinates the tabular event import:

    raw rows -> EventRowNormalizer -> NameDeduplicator -> writer.upsert_event

Per-record persistence failures are collected into the ImportSummary rather
than aborting the batch. The only hard failure is SourceNotFoundError, raised
before any parsing when no source file exists.
"""

import logging
from collections import Counter
from datetime import datetime, timezone
from typing import Iterable, List, Mapping, Optional, Protocol

from techfest.ingestion.deduplication import EventDeduplicator, NameDeduplicator
from techfest.ingestion.normalization.row_normalizer import EventRowNormalizer
from techfest.ingestion.sources import PathLike, load_sources
from techfest.schemas.event import EventRecord, ImportFailure, ImportSummary

logger = logging.getLogger(__name__)


class EventWriter(Protocol):
    """Anything that can upsert an event keyed by name."""

    def upsert_event(self, event: EventRecord) -> object: ...


class EventImporter:
    """
    Imports event submissions into the event store.

    Responsibilities:
    - Normalize raw rows (skipping rows without a usable name)
    - Deduplicate by name, last row wins
    - Upsert each unique record, recording failures
    - Summarize the run for the operator
    """

    def __init__(
        self,
        writer: EventWriter,
        normalizer: Optional[EventRowNormalizer] = None,
        deduplicator: Optional[EventDeduplicator] = None,
    ):
        """Initialize the importer."""
        self.writer = writer
        self.normalizer = normalizer or EventRowNormalizer()
        self.deduplicator = deduplicator or NameDeduplicator()

    def normalize_rows(self, rows: Iterable[Mapping[str, str]]) -> List[EventRecord]:
        """
        Normalize raw rows.

        Rows without a usable name are skipped; a row that fails to
        normalize is logged and dropped without affecting the others.
        """
        records: List[EventRecord] = []
        skipped = 0
        failed = 0
        for index, row in enumerate(rows, start=1):
            try:
                record = self.normalizer.normalize_row(row)
            except Exception as e:
                failed += 1
                logger.error(f"Failed to parse row {index}: {e}")
                continue
            if record is None:
                skipped += 1
                continue
            records.append(record)

        if skipped:
            logger.info(f"Skipped {skipped} rows without a usable event name")
        if failed:
            logger.warning(f"Dropped {failed} rows that could not be parsed")
        return records

    def import_rows(self, rows: Iterable[Mapping[str, str]]) -> ImportSummary:
        """Normalize, deduplicate and persist raw rows."""
        return self.import_all(self.normalize_rows(rows))

    def import_all(self, records: Iterable[EventRecord]) -> ImportSummary:
        """
        Deduplicate and persist already-normalized records.

        Deduplication is fully resolved before the first upsert, so no two
        writes target the same name.

        Returns:
            ImportSummary with counts, per-record errors and a department breakdown
        """
        start_time = datetime.now(timezone.utc)
        unique_events = self.deduplicator.deduplicate(list(records))
        logger.info(f"Parsed {len(unique_events)} unique events")

        summary = ImportSummary(total_parsed=len(unique_events))

        for event in unique_events:
            try:
                self.writer.upsert_event(event)
                summary.success_count += 1
                logger.info(
                    f"Imported {event.name} "
                    f"({event.department.value} - {event.category.value})"
                )
            except Exception as e:
                summary.error_count += 1
                summary.errors.append(ImportFailure(event=event.name, error=str(e)))
                logger.error(f"Failed to import event '{event.name}': {e}")

        department_counts = Counter(event.department.value for event in unique_events)
        summary.by_department = dict(sorted(department_counts.items()))

        duration = (datetime.now(timezone.utc) - start_time).total_seconds()
        logger.info(
            f"Import finished in {duration:.2f}s: {summary.success_count} imported, "
            f"{summary.error_count} failed"
        )
        return summary

    def import_from_sources(
        self,
        csv_path: Optional[PathLike] = None,
        xlsx_path: Optional[PathLike] = None,
    ) -> ImportSummary:
        """
        Import from the CSV and/or XLSX export.

        Raises:
            SourceNotFoundError: If neither file exists
        """
        rows = load_sources(csv_path, xlsx_path)
        logger.info(f"Found {len(rows)} rows across import sources")
        return self.import_rows(rows)

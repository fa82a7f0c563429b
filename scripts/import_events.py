#!/usr/bin/env python3
"""
Import event submissions from the survey CSV / XLSX exports.

Usage:
    python scripts/import_events.py
    python scripts/import_events.py --csv responses.csv --xlsx responses.xlsx
"""

import argparse
import logging
import sys

from dotenv import load_dotenv

from techfest.configs.settings import get_settings
from techfest.db import get_connection
from techfest.ingestion.importer import EventImporter
from techfest.ingestion.persist import EventDataWriter
from techfest.ingestion.sources import SourceNotFoundError

# Picks up a .env in the working directory as well as the project root one
load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("import_events")


def parse_args(argv=None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("--csv", default=str(settings.EVENT_IMPORT_CSV_PATH), help="CSV export path")
    parser.add_argument("--xlsx", default=str(settings.EVENT_IMPORT_XLSX_PATH), help="XLSX export path")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    conn = get_connection()
    try:
        writer = EventDataWriter(conn)
        writer.ensure_schema()
        summary = EventImporter(writer).import_from_sources(args.csv, args.xlsx)
    except SourceNotFoundError as e:
        logger.error(str(e))
        return 1
    finally:
        conn.close()

    print("\n" + "=" * 60)
    print(summary.message)
    if summary.error_count:
        print(f"{summary.error_count} events failed to import:")
        for failure in summary.errors:
            print(f"   {failure.event}: {failure.error}")

    print("\nEvents by Department:")
    for department, count in summary.by_department.items():
        print(f"   {department}: {count} events")
    print("=" * 60 + "\n")

    return 0 if summary.error_count == 0 else 2


if __name__ == "__main__":
    sys.exit(main())

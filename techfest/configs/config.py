# techfest/configs/config.py
"""Loader for the declarative event import table (configs/ingestion.yaml)."""

from functools import lru_cache
from pathlib import Path

import yaml

REQUIRED_IMPORT_FIELDS = ("name",)


class Config:
    """Access to the YAML files shipped next to this module."""

    CONFIG_DIR = Path(__file__).parent.resolve()
    INGESTION_CONFIG_PATH = CONFIG_DIR / "ingestion.yaml"

    @classmethod
    @lru_cache
    def load_ingestion_config(cls) -> dict:
        """Parse ingestion.yaml once per process."""
        path = cls.INGESTION_CONFIG_PATH
        if not path.is_file():
            raise FileNotFoundError(f"Ingestion config not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    @classmethod
    def get_event_import_config(cls) -> dict:
        """
        Return the ``event_import`` section.

        Raises:
            KeyError: If the section is missing or maps no header aliases
                for a required field
        """
        section = cls.load_ingestion_config().get("event_import")
        if not section:
            raise KeyError(
                f"'event_import' section missing from {cls.INGESTION_CONFIG_PATH}"
            )

        mappings = section.get("field_mappings") or {}
        missing = [field for field in REQUIRED_IMPORT_FIELDS if not mappings.get(field)]
        if missing:
            raise KeyError(f"event_import.field_mappings lacks aliases for {missing}")
        return section

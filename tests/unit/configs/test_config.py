"""
Unit tests for the YAML ingestion config loader.
"""

import pytest

from techfest.configs.config import Config


class TestConfig:
    """Tests for Config."""

    def test_event_import_section(self):
        config = Config.get_event_import_config()

        assert config["fallback_date"] == "2025-11-12"
        assert set(config["category_images"]) >= {"Technical", "Non-Technical", "Cultural", "default"}

    def test_every_field_has_aliases(self):
        mappings = Config.get_event_import_config()["field_mappings"]

        for field in (
            "name",
            "category",
            "department",
            "team_size",
            "prizes",
            "date",
            "registration_fee",
            "max_participants",
            "coordinator_names",
            "coordinator_phones",
            "coordinator_emails",
        ):
            assert mappings[field], field

    def test_name_aliases_in_priority_order(self):
        mappings = Config.get_event_import_config()["field_mappings"]
        assert mappings["name"] == ["Event name", "Event Name", "Name", "Event"]

    def test_load_is_cached(self):
        assert Config.load_ingestion_config() is Config.load_ingestion_config()

    def test_missing_section(self, monkeypatch):
        monkeypatch.setattr(Config, "load_ingestion_config", classmethod(lambda cls: {}))

        with pytest.raises(KeyError):
            Config.get_event_import_config()

    def test_missing_name_aliases(self, monkeypatch):
        monkeypatch.setattr(
            Config,
            "load_ingestion_config",
            classmethod(lambda cls: {"event_import": {"field_mappings": {"venue": ["Venue"]}}}),
        )

        with pytest.raises(KeyError, match="name"):
            Config.get_event_import_config()

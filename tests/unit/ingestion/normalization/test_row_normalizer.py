"""
Unit tests for EventRowNormalizer.
"""

from datetime import date

import pytest

from techfest.ingestion.normalization.row_normalizer import (
    EventRowNormalizer,
    is_skippable_name,
)
from techfest.schemas.event import CoordinatorRole, Department, EventCategory


class TestIsSkippableName:
    """Tests for is_skippable_name."""

    @pytest.mark.parametrize("name", ["", "   ", None, "Event Name (example)", "EVENT NAME"])
    def test_skippable(self, name):
        assert is_skippable_name(name)

    def test_real_name(self):
        assert not is_skippable_name("Robo Race")


class TestEventRowNormalizer:
    """Tests for normalize_row with the packaged config."""

    def test_full_row(self, normalizer, make_row):
        row = make_row(
            name="Robo Race",
            category="Technical",
            department="Mechanical",
            team_size="Minimum : 2\nMaximum : 4",
            prizes="1st : 1500rs \n 2nd : 1000rs",
            date="11/13/2025",
            registration_fee="100",
            max_participants="30",
            coordinator_names="Asha & Ravi",
            coordinator_phones="9876543210, 9123456780",
            coordinator_emails="asha@college.edu",
            venue="Mech Workshop",
            time="2:00 PM",
        )

        event = normalizer.normalize_row(row)

        assert event.name == "Robo Race"
        assert event.slug == "robo-race"
        assert event.category == EventCategory.TECHNICAL
        assert event.department == Department.MECH
        assert (event.team_size.min, event.team_size.max) == (2, 4)
        assert event.prizes.to_dict() == {"first": "₹1500", "second": "₹1000"}
        assert event.date == date(2025, 11, 13)
        assert event.registration_fee == 100
        assert event.max_participants == 30
        assert [c.name for c in event.coordinators] == ["Asha", "Ravi"]
        assert event.coordinators[0].role == CoordinatorRole.HEAD
        assert event.coordinators[1].email == ""
        assert event.venue == "Mech Workshop"
        assert event.time == "2:00 PM"
        assert event.tags == ["technical", "mech"]

    def test_defaults_for_sparse_row(self, normalizer, make_row):
        """A row with just a name gets every documented default."""
        event = normalizer.normalize_row(make_row(name="Treasure Hunt"))

        assert event.category == EventCategory.TECHNICAL
        assert event.department == Department.COMMON
        assert event.date == date(2025, 11, 12)
        assert event.time == "10:00 AM"
        assert event.venue == "TBA"
        assert event.registration_fee == 0
        assert event.max_participants == 100
        assert (event.team_size.min, event.team_size.max) == (1, 1)
        assert event.prizes.to_dict() == {}
        assert event.coordinators == []
        assert event.description == "Event description"
        assert event.short_description == "Treasure Hunt"
        assert event.eligibility == ["Open to all students"]
        assert event.status == "upcoming"
        assert event.is_active is True
        assert event.online_registration_open is True

    def test_skips_empty_name(self, normalizer, make_row):
        assert normalizer.normalize_row(make_row(name="", venue="Lab 1")) is None

    def test_skips_leaked_header_row(self, normalizer, make_row):
        assert normalizer.normalize_row(make_row(name="Event Name (example)")) is None

    def test_image_follows_category(self, normalizer, make_row):
        technical = normalizer.normalize_row(make_row(name="A", category="Technical"))
        cultural = normalizer.normalize_row(make_row(name="B", category="Cultural"))

        assert technical.image == normalizer.category_images["Technical"]
        assert cultural.image == normalizer.category_images["Cultural"]
        assert technical.image != cultural.image

    def test_alternate_headers(self, normalizer):
        """Later aliases are used when the primary header is absent."""
        row = {"Name": "Quiz", "Department": "cse", "Date": "2025-11-14", "Venue": "Hall B"}
        event = normalizer.normalize_row(row)

        assert event.department == Department.CSE
        assert event.date == date(2025, 11, 14)
        assert event.venue == "Hall B"

    def test_description_falls_back_to_short_description(self, normalizer):
        row = {"Event name": "Solo Dance", "Short Description": "solo dance"}
        event = normalizer.normalize_row(row)

        assert event.description == "solo dance"
        assert event.short_description == "solo dance"

    def test_custom_config(self):
        config = {
            "fallback_date": "2026-02-01",
            "defaults": {"venue": "Main Stage"},
            "field_mappings": {"name": ["Title"], "department": ["Dept"]},
            "department_aliases": {"cs": "CSE"},
            "category_images": {},
        }
        normalizer = EventRowNormalizer(config)

        event = normalizer.normalize_row({"Title": "Hackathon", "Dept": "CS"})

        assert event.date == date(2026, 2, 1)
        assert event.venue == "Main Stage"
        assert event.department == Department.CSE
        assert event.image is None

    def test_invalid_fallback_date_in_config(self):
        normalizer = EventRowNormalizer({"fallback_date": "not-a-date"})
        assert normalizer.fallback_date == date(2025, 11, 12)

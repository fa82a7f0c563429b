"""
Unit tests for the header alias mapper.
"""

from techfest.ingestion.normalization.field_mapper import (
    HeaderAliasMapper,
    create_alias_mapper_from_config,
)


class TestHeaderAliasMapper:
    """Tests for HeaderAliasMapper."""

    def setup_method(self):
        self.mapper = HeaderAliasMapper(
            {
                "name": ["Event name", "Event Name", "Name"],
                "department": ["Event department ", "Department"],
            }
        )

    def test_first_alias_wins(self):
        row = {"Event name": "Robo Race", "Name": "Other"}
        assert self.mapper.first(row, "name") == "Robo Race"

    def test_empty_alias_falls_through(self):
        """An empty column does not shadow a later alias."""
        row = {"Event name": "   ", "Name": "Robo Race"}
        assert self.mapper.first(row, "name") == "Robo Race"

    def test_header_whitespace_is_ignored(self):
        """Trailing spaces in export headers still match."""
        row = {"Department ": "CSE"}
        assert self.mapper.first(row, "department") == "CSE"

    def test_values_are_stripped(self):
        assert self.mapper.first({"Name": "  Quiz  "}, "name") == "Quiz"

    def test_missing_everywhere(self):
        assert self.mapper.first({"Venue": "Lab"}, "name") == ""

    def test_unknown_field(self):
        assert self.mapper.first({"Event name": "Quiz"}, "prizes") == ""

    def test_non_string_values(self):
        assert self.mapper.first({"Name": 42}, "name") == "42"

    def test_map_row_covers_every_field(self):
        mapped = self.mapper.map_row({"Event Name": "Quiz"})
        assert mapped == {"name": "Quiz", "department": ""}

    def test_fields(self):
        assert self.mapper.fields == ["name", "department"]


class TestCreateAliasMapperFromConfig:
    """Tests for create_alias_mapper_from_config."""

    def test_reads_field_mappings(self):
        mapper = create_alias_mapper_from_config(
            {"field_mappings": {"venue": ["Venue"]}}
        )
        assert mapper.first({"Venue": "Seminar Hall"}, "venue") == "Seminar Hall"

    def test_missing_section(self):
        mapper = create_alias_mapper_from_config({})
        assert mapper.fields == []

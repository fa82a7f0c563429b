"""
Header alias mapper for survey-form exports.

Column headers in the event submission exports are free-text survey labels
that drift between exports ("Event department " vs "Department"). Each
logical field is configured with an ordered list of accepted header labels;
the first present, non-empty column wins.
"""

import logging
from typing import Any, Dict, List, Mapping, Sequence

logger = logging.getLogger(__name__)


class HeaderAliasMapper:
    """
    Maps raw rows to logical fields by probing header aliases in order.

    Labels are compared after stripping surrounding whitespace, matching the
    stripped headers produced by the source readers.
    """

    def __init__(self, field_aliases: Mapping[str, Sequence[str]]):
        """
        Initialize the mapper.

        Args:
            field_aliases: Dict mapping logical field names to the ordered list
                of accepted header labels.
                Example: {"name": ["Event name", "Event Name", "Name"]}
        """
        self.field_aliases: Dict[str, List[str]] = {
            field: [alias.strip() for alias in aliases]
            for field, aliases in field_aliases.items()
        }

    @property
    def fields(self) -> List[str]:
        return list(self.field_aliases)

    def first(self, row: Mapping[str, Any], field: str) -> str:
        """
        Return the first non-empty value among the aliases of ``field``.

        Args:
            row: Raw row (header -> cell text)
            field: Logical field name

        Returns:
            Stripped cell text, or "" if no alias holds a value
        """
        aliases = self.field_aliases.get(field)
        if aliases is None:
            logger.debug(f"No header aliases configured for field '{field}'")
            return ""

        stripped = {str(key).strip(): value for key, value in row.items()}
        for alias in aliases:
            value = stripped.get(alias)
            if value is None:
                continue
            text = str(value).strip()
            if text:
                return text
        return ""

    def map_row(self, row: Mapping[str, Any]) -> Dict[str, str]:
        """Extract every configured field from a raw row."""
        return {field: self.first(row, field) for field in self.field_aliases}


def create_alias_mapper_from_config(config: Dict[str, Any]) -> HeaderAliasMapper:
    """
    Create a HeaderAliasMapper from the ``event_import`` config section.

    Example config:
        field_mappings:
          name: ["Event name", "Event Name", "Name", "Event"]
          venue: ["Venue"]
    """
    return HeaderAliasMapper(config.get("field_mappings", {}))

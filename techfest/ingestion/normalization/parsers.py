"""
Field parsers for free-text survey answers.

Each parser is a pure function that never raises: text that cannot be
understood falls back to the documented default, so a messy cell degrades
a single field instead of dropping the whole event.
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime
from typing import Mapping

from techfest.schemas.event import (
    Coordinator,
    CoordinatorRole,
    Department,
    EventCategory,
    Prizes,
    TeamSize,
)

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_DATE = date(2025, 11, 12)
DEFAULT_REGISTRATION_FEE = 0
DEFAULT_MAX_PARTICIPANTS = 100
CURRENCY_SYMBOL = "₹"

DEFAULT_DEPARTMENT_ALIASES: dict[str, str] = {
    "AIML": "AIML",
    "CSE": "CSE",
    "ECE": "ECE",
    "MECH": "Mech",
    "MECHANICAL": "Mech",
    "CIVIL": "Civil",
    "MBA": "MBA",
    "APPLIED SCIENCE": "Applied Science",
    "COMMON": "Common",
}

_FIRST_NUMBER = re.compile(r"(\d+)")
_MINIMUM = re.compile(r"minimum\s*:?\s*(\d+)", re.IGNORECASE)
_MAXIMUM = re.compile(r"maximum\s*:?\s*(\d+)", re.IGNORECASE)
_PRIZE_TIERS = {
    "first": re.compile(r"1st\s*:?\s*[₹rs]*\s*(\d+)", re.IGNORECASE),
    "second": re.compile(r"2nd\s*:?\s*[₹rs]*\s*(\d+)", re.IGNORECASE),
    "third": re.compile(r"3rd\s*:?\s*[₹rs]*\s*(\d+)", re.IGNORECASE),
}
# ASCII digits only
_SLASH_DATE = re.compile(r"\s*(\d+)\s*/\s*(\d+)\s*/\s*(\d+)\s*", re.ASCII)
_ORDINAL_SUFFIX = re.compile(r"(\d+)(st|nd|rd|th)\b", re.IGNORECASE)
_NAME_SEPARATORS = re.compile(r"[,&;]|\band\b", re.IGNORECASE)
_CONTACT_SEPARATORS = re.compile(r"[,&;]")

# Tried in order after ISO parsing fails
_DATE_FORMATS = (
    "%B %d, %Y",
    "%b %d, %Y",
    "%B %d %Y",
    "%b %d %Y",
    "%d %B %Y",
    "%d %b %Y",
    "%d %B, %Y",
    "%d %b, %Y",
)


def _first_int(text: str | None) -> int | None:
    if not text:
        return None
    match = _FIRST_NUMBER.search(str(text))
    return int(match.group(1)) if match else None


# ============================================================================
# TEAM SIZE / PRIZES
# ============================================================================


def parse_team_size(text: str | None) -> TeamSize:
    """
    Parse a team size answer into a {min, max} range.

    - "Minimum : 2\\nMaximum : 4" -> {2, 4}
    - "Maximum : 4"              -> {1, 4}
    - "3"                        -> {3, 3}
    - ""                         -> {1, 1}

    A lone minimum yields max = min. Values are clamped so 1 <= min <= max.
    """
    if not text or not str(text).strip():
        return TeamSize()

    text = str(text)
    lowered = text.lower()
    min_match = _MINIMUM.search(text)
    max_match = _MAXIMUM.search(text)

    if min_match or max_match:
        minimum = int(min_match.group(1)) if min_match else 1
        maximum = int(max_match.group(1)) if max_match else minimum
    elif "maximum" in lowered and "minimum" not in lowered:
        number = _first_int(text)
        if number is None:
            return TeamSize()
        minimum, maximum = 1, number
    else:
        number = _first_int(text)
        if number is None:
            return TeamSize()
        minimum = maximum = number

    minimum = max(minimum, 1)
    maximum = max(maximum, minimum)
    return TeamSize(min=minimum, max=maximum)


def parse_prizes(text: str | None) -> Prizes:
    """
    Parse "1st : 1500rs 2nd : 1000rs" style answers into prize tiers.

    Matched tiers become currency strings ("₹1500"); tiers not mentioned are
    left out.
    """
    if not text:
        return Prizes()

    text = str(text)
    found = {}
    for tier, pattern in _PRIZE_TIERS.items():
        match = pattern.search(text)
        if match:
            found[tier] = f"{CURRENCY_SYMBOL}{match.group(1)}"
    return Prizes(**found)


# ============================================================================
# DATES / NUMBERS
# ============================================================================


def _parse_generic_date(text: str) -> date | None:
    """Parse ISO dates/timestamps and common written forms ("12th November 2025")."""
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass

    cleaned = _ORDINAL_SUFFIX.sub(r"\1", text)
    cleaned = re.sub(r"\s+", " ", cleaned).strip()
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(cleaned, fmt).date()
        except ValueError:
            continue
    return None


def parse_date(text: str | None, fallback: date = DEFAULT_FALLBACK_DATE) -> date:
    """
    Parse an event date answer.

    Three slash-separated numbers are read month/day/year ("3/15/2025" is
    15 March 2025); a four-digit leading part is read year/month/day and a
    two-digit year is taken as 20xx. Anything else goes through generic
    parsing. Empty or unparseable text returns ``fallback``.
    """
    if not text or not str(text).strip():
        return fallback

    text = str(text).strip()
    slash_match = _SLASH_DATE.fullmatch(text)

    if slash_match:
        first, second, third = slash_match.groups()
        try:
            if len(first) == 4:
                year, month, day = int(first), int(second), int(third)
            else:
                month, day, year = int(first), int(second), int(third)
                if year < 100:
                    year += 2000
            return date(year, month, day)
        except (ValueError, OverflowError):
            logger.debug(f"Invalid calendar date '{text}', using fallback {fallback}")
            return fallback

    parsed = _parse_generic_date(text)
    if parsed is None:
        logger.debug(f"Unparseable date '{text}', using fallback {fallback}")
        return fallback
    return parsed


def parse_registration_fee(text: str | None) -> int:
    """Return the first run of digits as the fee, or 0."""
    number = _first_int(text)
    return number if number is not None else DEFAULT_REGISTRATION_FEE


def parse_max_participants(text: str | None) -> int:
    """Return the first run of digits as the slot count, or 100 when absent or zero."""
    number = _first_int(text)
    if not number:
        return DEFAULT_MAX_PARTICIPANTS
    return number


# ============================================================================
# CATEGORY / DEPARTMENT
# ============================================================================


def normalize_category(text: str | None) -> EventCategory:
    """
    Map a free-text category onto EventCategory.

    "technical" without "non" -> Technical; any "non" -> Non-Technical;
    "cultural" -> Cultural; everything else -> Technical.
    """
    if not text:
        return EventCategory.TECHNICAL

    lowered = str(text).strip().lower()
    if "technical" in lowered and "non" not in lowered:
        return EventCategory.TECHNICAL
    if "non" in lowered:
        return EventCategory.NON_TECHNICAL
    if "cultural" in lowered:
        return EventCategory.CULTURAL
    return EventCategory.TECHNICAL


def normalize_department(
    text: str | None,
    aliases: Mapping[str, str] | None = None,
) -> Department:
    """
    Map a free-text department onto Department via an uppercase alias table.

    Unmapped values, including empty text, map to Common.
    """
    if not text:
        return Department.COMMON

    table = aliases if aliases is not None else DEFAULT_DEPARTMENT_ALIASES
    canonical = table.get(str(text).strip().upper())
    if canonical is None:
        return Department.COMMON
    try:
        return Department(canonical)
    except ValueError:
        logger.warning(f"Department alias maps to unknown department '{canonical}'")
        return Department.COMMON


# ============================================================================
# COORDINATORS
# ============================================================================


def _split(text: str | None, pattern: re.Pattern) -> list[str]:
    if not text:
        return []
    return [part.strip() for part in pattern.split(str(text)) if part and part.strip()]


def parse_coordinators(
    names: str | None,
    phones: str | None = None,
    emails: str | None = None,
) -> list[Coordinator]:
    """
    Build coordinators from parallel name / phone / email answers.

    Names split on commas, ampersands, semicolons and the word "and"; phones
    and emails split on commas, ampersands and semicolons. Lists are aligned
    by position with "" for missing entries. The first coordinator is the head.
    """
    name_list = _split(names, _NAME_SEPARATORS)
    phone_list = _split(phones, _CONTACT_SEPARATORS)
    email_list = _split(emails, _CONTACT_SEPARATORS)

    return [
        Coordinator(
            name=name,
            phone=phone_list[index] if index < len(phone_list) else "",
            email=email_list[index] if index < len(email_list) else "",
            role=CoordinatorRole.HEAD if index == 0 else CoordinatorRole.COORDINATOR,
        )
        for index, name in enumerate(name_list)
    ]

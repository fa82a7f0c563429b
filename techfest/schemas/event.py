# techfest/schemas/event.py
"""
Canonical Event Schema for the techfest event store.

Event submissions arrive as free-text survey spreadsheets. Every row that
survives import is normalized into an ``EventRecord``; the record is the
shape persisted in the ``events`` table and returned by the admin API.
"""

import datetime
import re
from enum import Enum
from typing import Dict, List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
    model_validator,
)


def slugify(name: str) -> str:
    """
    Derive a URL slug from an event name.

    Lowercases, collapses every run of non-alphanumeric characters into a
    single hyphen and trims leading/trailing hyphens.

    Example:
        >>> slugify("Robo Race!")
        'robo-race'
    """
    slug = re.sub(r"[^a-z0-9]+", "-", (name or "").lower())
    return slug.strip("-")


# ============================================================================
# ENUMS
# ============================================================================


class EventCategory(str, Enum):
    """Closed set of event categories."""

    TECHNICAL = "Technical"
    NON_TECHNICAL = "Non-Technical"
    CULTURAL = "Cultural"


class Department(str, Enum):
    """Closed set of organizing departments."""

    AIML = "AIML"
    CSE = "CSE"
    ECE = "ECE"
    MECH = "Mech"
    CIVIL = "Civil"
    MBA = "MBA"
    APPLIED_SCIENCE = "Applied Science"
    COMMON = "Common"


class CoordinatorRole(str, Enum):
    """Role of a coordinator within an event."""

    HEAD = "head"
    COORDINATOR = "coordinator"


# ============================================================================
# NESTED MODELS
# ============================================================================


class TeamSize(BaseModel):
    """Allowed team size range (inclusive)."""

    min: int = Field(default=1, ge=1)
    max: int = Field(default=1, ge=1)

    @model_validator(mode="after")
    def validate_range(self) -> "TeamSize":
        if self.min > self.max:
            raise ValueError(
                f"Team size min ({self.min}) must not exceed max ({self.max})"
            )
        return self


class Prizes(BaseModel):
    """
    Prize tiers as display strings (e.g. "₹1500").

    Tiers missing from the source stay None and are dropped on serialization.
    """

    first: Optional[str] = None
    second: Optional[str] = None
    third: Optional[str] = None

    def to_dict(self) -> Dict[str, str]:
        """Return only the tiers that are present."""
        return self.model_dump(exclude_none=True)


class Coordinator(BaseModel):
    """Event coordinator contact."""

    name: str
    phone: str = ""
    email: str = ""
    role: CoordinatorRole = CoordinatorRole.COORDINATOR


# ============================================================================
# EVENT RECORD
# ============================================================================


class EventRecord(BaseModel):
    """
    Normalized event record.

    ``name`` is the natural key: the importer deduplicates on it and the
    store upserts on it.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Robo Race",
                "slug": "robo-race",
                "category": "Technical",
                "department": "Mech",
                "team_size": {"min": 2, "max": 4},
                "prizes": {"first": "₹1500", "second": "₹1000"},
                "date": "2025-11-12",
                "registration_fee": 100,
                "max_participants": 30,
            }
        },
    )

    name: str = Field(..., min_length=1)
    slug: str = ""
    description: str = "Event description"
    short_description: str = ""
    category: EventCategory = EventCategory.TECHNICAL
    department: Department = Department.COMMON
    image: Optional[str] = None
    date: datetime.date
    time: str = "10:00 AM"
    venue: str = "TBA"
    registration_fee: int = Field(default=0, ge=0)
    max_participants: int = Field(default=100, ge=1)
    team_size: TeamSize = Field(default_factory=TeamSize)
    prizes: Prizes = Field(default_factory=Prizes)
    coordinators: List[Coordinator] = Field(default_factory=list)
    rules: List[str] = Field(default_factory=list)
    eligibility: List[str] = Field(default_factory=lambda: ["Open to all students"])
    is_active: bool = True
    status: str = "upcoming"
    online_registration_open: bool = True
    tags: List[str] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Event name must not be empty")
        return v

    @model_validator(mode="after")
    def fill_derived_fields(self) -> "EventRecord":
        """Derive slug, short description and tags when not provided."""
        if not self.slug:
            self.slug = slugify(self.name)
        if not self.short_description:
            self.short_description = self.name
        if not self.tags:
            self.tags = [self.category.value.lower(), self.department.value.lower()]
        return self

    def to_document(self) -> dict:
        """Serialize to a JSON-compatible dict, omitting absent prize tiers."""
        data = self.model_dump(mode="json")
        data["prizes"] = self.prizes.to_dict()
        return data


# ============================================================================
# IMPORT SUMMARY
# ============================================================================


class ImportFailure(BaseModel):
    """A single record that could not be persisted."""

    event: str
    error: str


class ImportSummary(BaseModel):
    """Operator-facing result of an import run."""

    total_parsed: int = 0
    success_count: int = 0
    error_count: int = 0
    errors: List[ImportFailure] = Field(default_factory=list)
    by_department: Dict[str, int] = Field(default_factory=dict)

    @computed_field
    @property
    def message(self) -> str:
        return f"Successfully imported {self.success_count} events"

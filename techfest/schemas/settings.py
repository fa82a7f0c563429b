# techfest/schemas/settings.py
"""Runtime settings and registration-control models."""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class Setting(BaseModel):
    """A single key/value runtime setting."""

    key: str = Field(..., min_length=1)
    value: str
    description: Optional[str] = None
    category: str = "general"
    is_public: bool = False
    updated_by: Optional[str] = None
    updated_at: Optional[datetime] = None


class SettingCreate(BaseModel):
    """Request body for creating a setting."""

    key: str = ""
    value: str = ""
    description: Optional[str] = None
    category: Optional[str] = None
    is_public: Optional[bool] = None


class SettingUpdate(BaseModel):
    """Request body for updating a setting."""

    value: str = ""
    description: Optional[str] = None
    category: Optional[str] = None
    is_public: Optional[bool] = None


class RegistrationState(str, Enum):
    """
    Lifecycle of user registration.

    ENABLED -> DISABLE_SCHEDULED -> DISABLED, with manual toggles allowed
    from any state.
    """

    ENABLED = "enabled"
    DISABLE_SCHEDULED = "disable_scheduled"
    DISABLED = "disabled"


class RegistrationScheduleInfo(BaseModel):
    """Snapshot of the registration auto-disable schedule."""

    state: RegistrationState
    user_registration_disabled: bool
    scheduled_time: Optional[datetime] = None
    seconds_remaining: Optional[float] = None


class RegistrationControlUpdate(BaseModel):
    """
    Request body for the manual registration toggle.

    Accepts any JSON value so the route can answer 400 for a non-boolean.
    """

    disabled: Any = None


class AutoDisableUpdate(BaseModel):
    """Request body for scheduling registration auto-disable; the route parses the ISO-8601 time."""

    scheduled_time: Any = None

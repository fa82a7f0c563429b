"""
Registration control service.

Owns the global "user registration disabled" flag and the scheduled
auto-disable time, both kept in the settings store. Time comes from an
injected clock so transitions can be driven without real timers.

State machine:

    ENABLED --schedule_disable--> DISABLE_SCHEDULED --apply_due--> DISABLED

Manual toggles (set_disabled) move between ENABLED and DISABLED from any
state; disabling clears a pending schedule.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional, Union

from techfest.registration.settings_store import SettingsStore
from techfest.schemas.settings import RegistrationScheduleInfo, RegistrationState

logger = logging.getLogger(__name__)

USER_REGISTRATION_DISABLED_KEY = "user_registration_disabled"
AUTO_DISABLE_TIME_KEY = "registration_auto_disable_time"

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Return current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


def to_utc(value: Union[datetime, str]) -> datetime:
    """
    Coerce a datetime or ISO-8601 string to an aware UTC datetime.

    Naive values are taken to already be in UTC.

    Raises:
        ValueError: If a string is not valid ISO-8601
    """
    if isinstance(value, str):
        value = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class RegistrationControl:
    """Explicit state transitions for user registration."""

    def __init__(self, store: SettingsStore, clock: Clock = utc_now):
        self.store = store
        self.clock = clock

    # ========================================================================
    # READS
    # ========================================================================

    def is_disabled(self) -> bool:
        return self.store.get_value(USER_REGISTRATION_DISABLED_KEY, "false") == "true"

    def get_scheduled_time(self) -> Optional[datetime]:
        """Return the pending auto-disable time, if any."""
        raw = self.store.get_value(AUTO_DISABLE_TIME_KEY)
        if not raw:
            return None
        try:
            return to_utc(raw)
        except ValueError:
            logger.warning(f"Ignoring invalid {AUTO_DISABLE_TIME_KEY} value '{raw}'")
            return None

    def get_state(self) -> RegistrationState:
        if self.is_disabled():
            return RegistrationState.DISABLED
        if self.get_scheduled_time() is not None:
            return RegistrationState.DISABLE_SCHEDULED
        return RegistrationState.ENABLED

    def get_schedule_info(self) -> RegistrationScheduleInfo:
        scheduled = self.get_scheduled_time()
        remaining = None
        if scheduled is not None:
            remaining = max(0.0, (scheduled - self.clock()).total_seconds())
        return RegistrationScheduleInfo(
            state=self.get_state(),
            user_registration_disabled=self.is_disabled(),
            scheduled_time=scheduled,
            seconds_remaining=remaining,
        )

    def is_registration_open(self) -> bool:
        """Apply any due schedule, then report whether users may register."""
        self.apply_due()
        return not self.is_disabled()

    # ========================================================================
    # TRANSITIONS
    # ========================================================================

    def set_disabled(
        self, disabled: bool, updated_by: Optional[str] = None
    ) -> RegistrationState:
        """Manually enable or disable user registration."""
        self.store.set_value(
            USER_REGISTRATION_DISABLED_KEY,
            "true" if disabled else "false",
            description=(
                "When true, users cannot register for events. "
                "Only admins can register users."
            ),
            category="general",
            is_public=False,
            updated_by=updated_by,
        )
        if disabled:
            self.cancel_schedule()

        logger.info(f"User registration {'DISABLED' if disabled else 'ENABLED'}")
        return self.get_state()

    def schedule_disable(
        self,
        when: Union[datetime, str],
        updated_by: Optional[str] = None,
    ) -> RegistrationScheduleInfo:
        """
        Schedule registration to be disabled at ``when``.

        Raises:
            ValueError: If ``when`` is not a valid time or is not in the future
        """
        scheduled = to_utc(when)
        now = self.clock()
        if scheduled <= now:
            raise ValueError(
                f"Scheduled time {scheduled.isoformat()} must be in the future"
            )

        self.store.set_value(
            AUTO_DISABLE_TIME_KEY,
            scheduled.isoformat(),
            description="UTC time at which user registration is disabled automatically.",
            category="registration",
            is_public=False,
            updated_by=updated_by,
        )
        logger.info(f"Registration auto-disable scheduled for {scheduled.isoformat()}")
        return self.get_schedule_info()

    def cancel_schedule(self) -> bool:
        """Drop a pending auto-disable. Returns False if none was pending."""
        cancelled = self.store.delete_setting(AUTO_DISABLE_TIME_KEY)
        if cancelled:
            logger.info("Registration auto-disable schedule cleared")
        return cancelled

    def apply_due(self) -> bool:
        """
        Disable registration if the scheduled time has passed.

        Returns:
            True if this call disabled registration
        """
        scheduled = self.get_scheduled_time()
        if scheduled is None or self.clock() < scheduled:
            return False

        was_disabled = self.is_disabled()
        if not was_disabled:
            self.store.set_value(
                USER_REGISTRATION_DISABLED_KEY,
                "true",
                category="general",
                is_public=False,
                updated_by="auto-disable",
            )
            logger.info(
                f"User registration auto-disabled (scheduled {scheduled.isoformat()})"
            )
        self.cancel_schedule()
        return not was_disabled

"""
Registration control.

- SettingsStore: key/value runtime settings
- RegistrationControl: registration toggle and scheduled auto-disable
- AutoDisableScheduler: background loop applying due schedules
"""

from .control import RegistrationControl
from .scheduler import AutoDisableScheduler
from .settings_store import SettingsStore

__all__ = [
    "AutoDisableScheduler",
    "RegistrationControl",
    "SettingsStore",
]

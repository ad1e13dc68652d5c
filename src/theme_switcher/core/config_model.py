"""Core configuration model (structured view)."""

from __future__ import annotations

from dataclasses import dataclass

NAMESPACE = "theme_switcher"

LIGHT_PROFILE = "light_profile"
DARK_PROFILE = "dark_profile"
START_HOUR = "start_hour"
END_HOUR = "end_hour"
SHOW_NOTIFICATIONS = "show_notifications"
FIRST_RUN = "first_run"

SCHEDULE_KEYS = (LIGHT_PROFILE, DARK_PROFILE, START_HOUR, END_HOUR)

MIN_HOUR = 0
MAX_HOUR = 23


@dataclass(frozen=True)
class AppConfig:
    debug: bool
    settings_path: str
    backend: str
    check_interval: float
    watch_interval: float
    apply_timeout: float
    setup_max_passes: int
    force_refresh: bool
    force_refresh_profile: str
    hotkeys_enabled: bool
    hotkey_modifier: str
    hotkey_switch_key: str
    hotkey_configure_key: str


def is_valid_hour(value) -> bool:
    # bool is an int subclass; a stored true/false is not an hour
    return isinstance(value, int) and not isinstance(value, bool) and MIN_HOUR <= value <= MAX_HOUR


@dataclass(frozen=True)
class ScheduleConfig:
    """A fully populated light/dark schedule.

    The window is the half-open interval [start_hour, end_hour). It is never
    wrapped around midnight: start_hour == end_hour is an empty window and
    start_hour > end_hour never contains any hour.
    """

    light_profile: str
    dark_profile: str
    start_hour: int
    end_hour: int

    def is_day(self, hour: int) -> bool:
        if not is_valid_hour(hour):
            raise ValueError(f"hour must be an integer in [{MIN_HOUR}, {MAX_HOUR}], got {hour!r}")
        return self.start_hour <= hour < self.end_hour

    def profile_for_hour(self, hour: int) -> str:
        return self.light_profile if self.is_day(hour) else self.dark_profile

    @classmethod
    def from_values(cls, values: dict) -> ScheduleConfig | None:
        """Build a schedule from raw stored values, or None if any field is missing."""
        light = values.get(LIGHT_PROFILE)
        dark = values.get(DARK_PROFILE)
        start = values.get(START_HOUR)
        end = values.get(END_HOUR)

        if not isinstance(light, str) or not light:
            return None
        if not isinstance(dark, str) or not dark:
            return None
        if not is_valid_hour(start) or not is_valid_hour(end):
            return None

        return cls(light_profile=light, dark_profile=dark, start_hour=start, end_hour=end)

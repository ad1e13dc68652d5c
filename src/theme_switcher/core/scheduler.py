"""Core orchestration for Theme Switcher.

Keeps the ensure-configured -> decide -> apply-if-needed cycle in one place,
decoupled from the desktop, the settings file and the terminal via ports.
Every trigger (activation, timer tick, settings change, manual command)
goes through run_cycle().
"""

from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime
from enum import Enum, auto
import logging
import threading
from typing import Callable

from .config_model import (
    DARK_PROFILE,
    END_HOUR,
    FIRST_RUN,
    LIGHT_PROFILE,
    MAX_HOUR,
    MIN_HOUR,
    SCHEDULE_KEYS,
    SHOW_NOTIFICATIONS,
    START_HOUR,
    ScheduleConfig,
    is_valid_hour,
)
from .ports import NotifyLevel, ProfileApplier, ProfileCatalog, Prompter, SettingsStore, UIFeedback
from .state_machine import SwitcherEvent, SwitcherState, SwitcherStateMachine

logger = logging.getLogger(__name__)


class ApplyOutcome(Enum):
    APPLIED = auto()
    UNCHANGED = auto()
    NOT_FOUND = auto()
    FAILED = auto()
    UNCONFIGURED = auto()

    @property
    def ok(self) -> bool:
        return self in (ApplyOutcome.APPLIED, ApplyOutcome.UNCHANGED)


class ThemeScheduler:
    """Decides which profile the current hour calls for and applies it once."""

    def __init__(
        self,
        catalog: ProfileCatalog,
        applier: ProfileApplier,
        settings: SettingsStore,
        prompter: Prompter,
        ui: UIFeedback,
        clock: Callable[[], datetime] = datetime.now,
        max_setup_passes: int = 1,
    ):
        self._catalog = catalog
        self._applier = applier
        self._settings = settings
        self._prompter = prompter
        self._ui = ui
        self._clock = clock
        self._max_setup_passes = max(1, max_setup_passes)
        self._state = SwitcherStateMachine()
        self._last_applied: str | None = None

        self._apply_lock = threading.Lock()
        self._guard = threading.Lock()
        self._busy = False
        self._rerun_requested = False
        self._setup_requested = False
        self._writer_thread: int | None = None

    @property
    def last_applied_profile(self) -> str | None:
        return self._last_applied

    @property
    def state(self) -> SwitcherState:
        return self._state.state

    # -- configuration -----------------------------------------------------

    def read_schedule(self) -> ScheduleConfig | None:
        return ScheduleConfig.from_values({key: self._settings.get(key) for key in SCHEDULE_KEYS})

    def missing_fields(self) -> list[str]:
        missing = []
        for key in SCHEDULE_KEYS:
            value = self._settings.get(key)
            if key in (START_HOUR, END_HOUR):
                if not is_valid_hour(value):
                    missing.append(key)
            elif not isinstance(value, str) or not value:
                missing.append(key)
        return missing

    def ensure_configured(self) -> ScheduleConfig | None:
        """Return the complete schedule, prompting for missing fields first.

        Runs at most max_setup_passes setup passes and stops early when a
        pass yields no value at all. Returns None if the schedule is still
        incomplete; the caller defers to the next trigger.
        """
        schedule = self.read_schedule()
        passes = 0
        while schedule is None and passes < self._max_setup_passes:
            passes += 1
            logger.info("Configuration incomplete (missing: %s), running setup", ", ".join(self.missing_fields()))
            supplied = self.prompt_for_settings()
            schedule = self.read_schedule()
            if supplied == 0:
                break
        return self._record_configuration(schedule)

    def prompt_for_settings(self) -> int:
        """Prompt for the four schedule fields, persisting each one independently.

        A cancelled prompt leaves that field untouched and moves on to the
        next one. Returns how many values the user supplied.
        """
        with self._own_writes():
            return self._prompt_fields()

    @contextmanager
    def _own_writes(self):
        self._writer_thread = threading.get_ident()
        try:
            yield
        finally:
            self._writer_thread = None

    def _prompt_fields(self) -> int:
        supplied = 0

        profiles = self._catalog.list_profiles()
        if profiles:
            for key, label in ((LIGHT_PROFILE, "light"), (DARK_PROFILE, "dark")):
                choice = self._prompter.pick_one(profiles, f"Select {label} theme")
                if choice:
                    supplied += 1
                    self._persist(key, choice)
        else:
            logger.warning("No profiles found on this host, skipping theme selection")

        for key, label in ((START_HOUR, "start"), (END_HOUR, "end")):
            hour = self._prompter.prompt_integer(f"Enter {label} hour ({MIN_HOUR}-{MAX_HOUR})", MIN_HOUR, MAX_HOUR)
            if hour is None:
                continue
            if not is_valid_hour(hour):
                logger.warning("Ignoring out-of-range %s hour: %r", label, hour)
                continue
            supplied += 1
            self._persist(key, hour)

        return supplied

    def _persist(self, key: str, value) -> None:
        if not self._settings.set(key, value):
            logger.error("Failed to save setting %s", key)

    def _record_configuration(self, schedule: ScheduleConfig | None) -> ScheduleConfig | None:
        if schedule is None:
            self._state.transition(SwitcherEvent.SETTINGS_MISSING)
            logger.info("Configuration still incomplete, deferring to the next trigger")
            return None
        self._state.transition(SwitcherEvent.CONFIGURED)
        return schedule

    def _finish_first_run(self, schedule: ScheduleConfig) -> None:
        if not self._settings.get(FIRST_RUN, True):
            return
        with self._own_writes():
            self._settings.set(FIRST_RUN, False)
        if not self._settings.get(SHOW_NOTIFICATIONS, True):
            return
        self._ui.notify(
            f"Light theme '{schedule.light_profile}' from {schedule.start_hour}:00 "
            f"to {schedule.end_hour}:00, dark theme '{schedule.dark_profile}' otherwise",
            NotifyLevel.INFO,
        )

    # -- decision ----------------------------------------------------------

    def current_hour(self) -> int:
        return self._clock().hour

    def decide(self, hour: int | None = None) -> str | None:
        """Return the profile for hour (default: now), or None if unconfigured."""
        schedule = self.read_schedule()
        if schedule is None:
            return None
        return schedule.profile_for_hour(self.current_hour() if hour is None else hour)

    def apply_if_needed(self, selected: str) -> ApplyOutcome:
        with self._apply_lock:
            if selected not in self._catalog.list_profiles():
                logger.error("Profile not found: %s", selected)
                self._ui.notify(f"Theme '{selected}' not found", NotifyLevel.ERROR)
                return ApplyOutcome.NOT_FOUND

            if selected == self._last_applied:
                logger.debug("Profile %s already applied", selected)
                return ApplyOutcome.UNCHANGED

            logger.info("Applying profile %s", selected)
            if not self._applier.apply_profile(selected):
                logger.error("Failed to apply profile %s", selected)
                self._ui.notify(f"Failed to switch to theme '{selected}'", NotifyLevel.ERROR)
                return ApplyOutcome.FAILED

            self._last_applied = selected
            self._record_applied(selected)
            if self._settings.get(SHOW_NOTIFICATIONS, True):
                self._ui.notify(f"Switched to theme '{selected}'", NotifyLevel.INFO)
            return ApplyOutcome.APPLIED

    def _record_applied(self, selected: str) -> None:
        schedule = self.read_schedule()
        if schedule is None:
            return
        if self._state.state == SwitcherState.UNINITIALIZED:
            self._state.transition(SwitcherEvent.CONFIGURED)
        if selected == schedule.light_profile:
            self._state.transition(SwitcherEvent.LIGHT_APPLIED)
        else:
            self._state.transition(SwitcherEvent.DARK_APPLIED)

    # -- triggers ----------------------------------------------------------

    def run_cycle(self, reason: str = "tick", force_setup: bool = False) -> ApplyOutcome | None:
        """Run one decision cycle.

        Single-flight: if a cycle is already running, the request is folded
        into one extra pass of the running cycle and None is returned.
        """
        with self._guard:
            if self._busy:
                logger.debug("Cycle in progress, queueing re-run (%s)", reason)
                self._rerun_requested = True
                self._setup_requested = self._setup_requested or force_setup
                return None
            self._busy = True

        try:
            outcome = self._cycle(reason, force_setup)
            while True:
                with self._guard:
                    if not self._rerun_requested:
                        self._busy = False
                        return outcome
                    self._rerun_requested = False
                    force_setup = self._setup_requested
                    self._setup_requested = False
                outcome = self._cycle("re-run", force_setup)
        except BaseException:
            with self._guard:
                self._busy = False
                self._rerun_requested = False
                self._setup_requested = False
            raise

    def _cycle(self, reason: str, force_setup: bool) -> ApplyOutcome:
        logger.debug("Decision cycle (%s)", reason)
        if force_setup:
            self.prompt_for_settings()
            schedule = self._record_configuration(self.read_schedule())
        else:
            schedule = self.ensure_configured()

        if schedule is None:
            return ApplyOutcome.UNCONFIGURED

        selected = schedule.profile_for_hour(self.current_hour())
        outcome = self.apply_if_needed(selected)
        if outcome.ok:
            self._finish_first_run(schedule)
        return outcome

    def switch_now(self) -> ApplyOutcome | None:
        return self.run_cycle("manual switch")

    def configure(self) -> ApplyOutcome | None:
        return self.run_cycle("manual configure", force_setup=True)

    def on_settings_changed(self) -> None:
        # Writes made by the running cycle itself are already re-read by it
        if self._writer_thread == threading.get_ident():
            return
        self.run_cycle("settings changed")

"""Per-process switcher state machine."""

from __future__ import annotations

from enum import Enum, auto
import logging


class SwitcherState(Enum):
    UNINITIALIZED = auto()
    CONFIGURED = auto()
    LIGHT_APPLIED = auto()
    DARK_APPLIED = auto()


class SwitcherEvent(Enum):
    CONFIGURED = auto()
    SETTINGS_MISSING = auto()
    LIGHT_APPLIED = auto()
    DARK_APPLIED = auto()


_TRANSITIONS = {
    SwitcherState.UNINITIALIZED: {
        SwitcherEvent.CONFIGURED: SwitcherState.CONFIGURED,
        SwitcherEvent.SETTINGS_MISSING: SwitcherState.UNINITIALIZED,
    },
    SwitcherState.CONFIGURED: {
        SwitcherEvent.CONFIGURED: SwitcherState.CONFIGURED,
        SwitcherEvent.LIGHT_APPLIED: SwitcherState.LIGHT_APPLIED,
        SwitcherEvent.DARK_APPLIED: SwitcherState.DARK_APPLIED,
        SwitcherEvent.SETTINGS_MISSING: SwitcherState.UNINITIALIZED,
    },
    SwitcherState.LIGHT_APPLIED: {
        SwitcherEvent.CONFIGURED: SwitcherState.LIGHT_APPLIED,
        SwitcherEvent.LIGHT_APPLIED: SwitcherState.LIGHT_APPLIED,
        SwitcherEvent.DARK_APPLIED: SwitcherState.DARK_APPLIED,
        SwitcherEvent.SETTINGS_MISSING: SwitcherState.UNINITIALIZED,
    },
    SwitcherState.DARK_APPLIED: {
        SwitcherEvent.CONFIGURED: SwitcherState.DARK_APPLIED,
        SwitcherEvent.LIGHT_APPLIED: SwitcherState.LIGHT_APPLIED,
        SwitcherEvent.DARK_APPLIED: SwitcherState.DARK_APPLIED,
        SwitcherEvent.SETTINGS_MISSING: SwitcherState.UNINITIALIZED,
    },
}


class SwitcherStateMachine:
    def __init__(self):
        self.state = SwitcherState.UNINITIALIZED

    def transition(self, event: SwitcherEvent) -> SwitcherState:
        allowed = _TRANSITIONS.get(self.state, {})
        if event not in allowed:
            logging.getLogger(__name__).warning(
                "Invalid state transition: %s --%s--> (ignored)", self.state, event
            )
            return self.state
        self.state = allowed[event]
        return self.state

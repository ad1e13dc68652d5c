"""Core ports (interfaces) for Theme Switcher.

These protocols define the boundaries between the scheduling core and the
host-specific adapters (desktop backends, settings file, terminal prompts,
notifications). They are intentionally small and capability-oriented to
keep the core decoupled and testable with in-memory fakes.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Protocol, Sequence, runtime_checkable


class NotifyLevel(Enum):
    INFO = "info"
    ERROR = "error"


@runtime_checkable
class ProfileCatalog(Protocol):
    """Enumerates the appearance profiles known to the host."""

    def list_profiles(self) -> list[str]:
        """Return every known profile id (may be empty, unordered)."""


@runtime_checkable
class ProfileApplier(Protocol):
    """Switches the host appearance."""

    def apply_profile(self, profile_id: str) -> bool:
        """Apply a profile; True on success."""


@runtime_checkable
class SettingsStore(Protocol):
    """Scalar key/value persistence scoped to this application's namespace."""

    def get(self, key: str, default: Any = None) -> Any:
        """Return the stored value or default when absent."""

    def set(self, key: str, value: Any) -> bool:
        """Persist a value; True on success."""

    def on_changed(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register a change callback; returns an unsubscribe function."""


@runtime_checkable
class Prompter(Protocol):
    """Interactive input. Both methods return None when the user cancels."""

    def pick_one(self, options: Sequence[str], prompt: str) -> str | None:
        """Let the user choose one of options."""

    def prompt_integer(self, prompt: str, minimum: int, maximum: int) -> int | None:
        """Ask for an integer in [minimum, maximum], re-prompting until valid."""


@runtime_checkable
class UIFeedback(Protocol):
    """User-visible notifications."""

    def notify(self, message: str, level: NotifyLevel = NotifyLevel.INFO) -> None:
        """Display a notification."""

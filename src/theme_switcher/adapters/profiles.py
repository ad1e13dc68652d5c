"""Desktop profile backends (catalog + applier) for Theme Switcher.

Each backend enumerates the appearance profiles the desktop knows about and
switches to one of them by shelling out to the desktop's own settings tool:

  GNOME (and derivatives): gsettings, GTK themes found on disk
  XFCE:                    xfconf-query, GTK themes found on disk
  macOS:                   osascript, fixed "Light"/"Dark" catalog

Unsupported platforms get NullProfileBackend, whose catalog is empty so
every selection is reported as "not found" instead of failing silently.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
import logging
import os
from pathlib import Path
import shutil
import subprocess

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5.0

# Subdirectories that mark a directory under a themes dir as a GTK theme
_GTK_MARKERS = ("gtk-4.0", "gtk-3.0", "gtk-2.0")


class ProfileBackend(ABC):
    """Profile catalog and applier for one desktop environment."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT):
        self.timeout = timeout

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable backend name."""

    @abstractmethod
    def is_available(self) -> bool:
        """True if the desktop tooling this backend needs is present."""

    @abstractmethod
    def list_profiles(self) -> list[str]:
        """Every profile id the desktop knows about."""

    @abstractmethod
    def apply_profile(self, profile_id: str) -> bool:
        """Switch the desktop to profile_id; True on success."""

    def current_profile(self) -> str | None:
        """Profile currently active on the desktop, if it can be read."""
        return None


class NullProfileBackend(ProfileBackend):
    """Fallback for platforms without a supported desktop."""

    @property
    def name(self) -> str:
        return "none"

    def is_available(self) -> bool:
        return False

    def list_profiles(self) -> list[str]:
        return []

    def apply_profile(self, profile_id: str) -> bool:
        logger.warning("No desktop backend available, cannot apply %s", profile_id)
        return False


class _GtkThemeBackend(ProfileBackend):
    """Shared GTK theme discovery for Linux desktops."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, theme_dirs: list[Path] | None = None):
        super().__init__(timeout)
        self._theme_dirs = theme_dirs

    def list_profiles(self) -> list[str]:
        return find_gtk_themes(self._theme_dirs)


class GnomeProfileBackend(_GtkThemeBackend):
    SCHEMA = "org.gnome.desktop.interface"

    @property
    def name(self) -> str:
        return "gnome"

    def is_available(self) -> bool:
        return _has_cmd("gsettings")

    def apply_profile(self, profile_id: str) -> bool:
        result = _run(["gsettings", "set", self.SCHEMA, "gtk-theme", profile_id], self.timeout)
        if not _succeeded(result):
            return False
        # libadwaita apps follow color-scheme rather than gtk-theme
        scheme = "prefer-dark" if _looks_dark(profile_id) else "default"
        _run(["gsettings", "set", self.SCHEMA, "color-scheme", scheme], self.timeout)
        return True

    def current_profile(self) -> str | None:
        result = _run(["gsettings", "get", self.SCHEMA, "gtk-theme"], self.timeout)
        if not _succeeded(result):
            return None
        return result.stdout.strip().strip("'") or None


class XfceProfileBackend(_GtkThemeBackend):
    CHANNEL = "xsettings"
    PROPERTY = "/Net/ThemeName"

    @property
    def name(self) -> str:
        return "xfce"

    def is_available(self) -> bool:
        return _has_cmd("xfconf-query")

    def apply_profile(self, profile_id: str) -> bool:
        result = _run(
            ["xfconf-query", "-c", self.CHANNEL, "-p", self.PROPERTY, "-s", profile_id],
            self.timeout,
        )
        return _succeeded(result)

    def current_profile(self) -> str | None:
        result = _run(["xfconf-query", "-c", self.CHANNEL, "-p", self.PROPERTY], self.timeout)
        if not _succeeded(result):
            return None
        return result.stdout.strip() or None


class MacOSProfileBackend(ProfileBackend):
    LIGHT = "Light"
    DARK = "Dark"

    @property
    def name(self) -> str:
        return "macos"

    def is_available(self) -> bool:
        return _has_cmd("osascript")

    def list_profiles(self) -> list[str]:
        return [self.LIGHT, self.DARK]

    def apply_profile(self, profile_id: str) -> bool:
        if profile_id not in (self.LIGHT, self.DARK):
            return False
        dark = "true" if profile_id == self.DARK else "false"
        script = f'tell application "System Events" to tell appearance preferences to set dark mode to {dark}'
        return _succeeded(_run(["osascript", "-e", script], self.timeout))

    def current_profile(self) -> str | None:
        script = 'tell application "System Events" to tell appearance preferences to get dark mode'
        result = _run(["osascript", "-e", script], self.timeout)
        if not _succeeded(result):
            return None
        return self.DARK if result.stdout.strip() == "true" else self.LIGHT


class ForceRefreshApplier:
    """Applier wrapper that flickers through an intermediate profile first.

    Some desktops only repaint already-open windows when the theme actually
    changes; switching to a different profile and back forces that. Disabled
    unless FORCE_REFRESH is set.
    """

    def __init__(self, applier, intermediate: str, enabled: bool = True):
        self._applier = applier
        self._intermediate = intermediate
        self._enabled = enabled

    def apply_profile(self, profile_id: str) -> bool:
        if self._enabled and self._intermediate and self._intermediate != profile_id:
            if not self._applier.apply_profile(self._intermediate):
                logger.debug("Force-refresh via %s failed, applying directly", self._intermediate)
        return self._applier.apply_profile(profile_id)


def default_theme_dirs() -> list[Path]:
    home = Path.home()
    data_home = Path(os.environ.get("XDG_DATA_HOME") or home / ".local" / "share")
    data_dirs = os.environ.get("XDG_DATA_DIRS") or "/usr/local/share:/usr/share"

    dirs = [home / ".themes", data_home / "themes"]
    dirs.extend(Path(entry) / "themes" for entry in data_dirs.split(":") if entry)
    return dirs


def find_gtk_themes(theme_dirs: list[Path] | None = None) -> list[str]:
    """Names of the GTK themes installed in theme_dirs, sorted and unique."""
    names = set()
    for base in theme_dirs if theme_dirs is not None else default_theme_dirs():
        try:
            entries = list(base.iterdir())
        except OSError:
            continue
        for entry in entries:
            if entry.is_dir() and any((entry / marker).is_dir() for marker in _GTK_MARKERS):
                names.add(entry.name)
    return sorted(names)


# Cached backend instance
_cached_backend: ProfileBackend | None = None


def get_profile_backend(force_type: str | None = None, timeout: float = DEFAULT_TIMEOUT) -> ProfileBackend:
    """Get the profile backend for the current desktop.

    Args:
        force_type: "gnome", "xfce", "macos" or "none" to bypass detection;
                    None or "auto" detects from the platform and session.
        timeout: Timeout in seconds for each desktop command.

    Returns:
        ProfileBackend (NullProfileBackend if nothing suitable is available)
    """
    global _cached_backend

    if force_type == "auto":
        force_type = None

    if force_type is None and _cached_backend is not None:
        return _cached_backend

    from ..platform_utils import IS_LINUX, IS_MACOS, current_desktop

    backend: ProfileBackend
    desktop = current_desktop()

    if force_type == "gnome":
        backend = GnomeProfileBackend(timeout)
    elif force_type == "xfce":
        backend = XfceProfileBackend(timeout)
    elif force_type == "macos":
        backend = MacOSProfileBackend(timeout)
    elif force_type == "none":
        backend = NullProfileBackend(timeout)
    elif IS_MACOS:
        backend = MacOSProfileBackend(timeout)
    elif IS_LINUX and desktop == "xfce":
        backend = XfceProfileBackend(timeout)
    elif IS_LINUX:
        backend = GnomeProfileBackend(timeout)
    else:
        backend = NullProfileBackend(timeout)

    if not isinstance(backend, NullProfileBackend) and not backend.is_available():
        logger.warning("%s backend tooling not found, theme switching disabled", backend.name)
        backend = NullProfileBackend(timeout)

    if force_type is None:
        _cached_backend = backend

    return backend


def clear_backend_cache():
    """Clear the cached backend instance.

    Useful for testing or when the desktop session changes.
    """
    global _cached_backend
    _cached_backend = None


def _looks_dark(profile_id: str) -> bool:
    return "dark" in profile_id.lower()


def _has_cmd(name: str) -> bool:
    return shutil.which(name) is not None


def _run(args: list[str], timeout: float = DEFAULT_TIMEOUT) -> subprocess.CompletedProcess[str] | None:
    try:
        return subprocess.run(args, capture_output=True, text=True, timeout=timeout)
    except subprocess.TimeoutExpired:
        logger.warning("Command timed out after %ss: %s", timeout, args[0])
        return None
    except OSError as e:
        logger.warning("Command failed to start: %s (%s)", args[0], e)
        return None


def _succeeded(result: subprocess.CompletedProcess[str] | None) -> bool:
    if result is None:
        return False
    if result.returncode != 0:
        logger.warning("Command exited with %s: %s", result.returncode, (result.stderr or "").strip())
        return False
    return True

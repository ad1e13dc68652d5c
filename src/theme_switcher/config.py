"""Configuration for Theme Switcher"""
import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()


def _default_settings_path() -> str:
    base = os.getenv("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return str(Path(base) / "theme-switcher" / "settings.json")


class Config:
    """Environment configuration"""

    # Settings file (profiles + schedule)
    SETTINGS_PATH = os.getenv("THEME_SWITCHER_SETTINGS", "") or _default_settings_path()

    # Desktop backend: "auto", "gnome", "xfce", "macos" or "none"
    BACKEND = os.getenv("THEME_SWITCHER_BACKEND", "auto").lower()

    # Timing (seconds)
    CHECK_INTERVAL = os.getenv("CHECK_INTERVAL", "60")
    WATCH_INTERVAL = os.getenv("WATCH_INTERVAL", "2")
    APPLY_TIMEOUT = os.getenv("APPLY_TIMEOUT", "5")

    # Setup passes per decision cycle
    SETUP_MAX_PASSES = os.getenv("SETUP_MAX_PASSES", "1")

    # Flicker through an intermediate theme before applying (some desktops
    # only repaint open windows on an actual theme change)
    FORCE_REFRESH = os.getenv("FORCE_REFRESH", "false").lower() == "true"
    FORCE_REFRESH_PROFILE = os.getenv("FORCE_REFRESH_PROFILE", "Adwaita")

    # Hotkeys
    HOTKEYS_ENABLED = os.getenv("HOTKEYS_ENABLED", "true").lower() == "true"
    HOTKEY_MODIFIER = os.getenv("HOTKEY_MODIFIER", "ctrl")
    HOTKEY_SWITCH_KEY = os.getenv("HOTKEY_SWITCH_KEY", "t")
    HOTKEY_CONFIGURE_KEY = os.getenv("HOTKEY_CONFIGURE_KEY", "y")

    DEBUG = os.getenv("DEBUG", "false").lower() == "true"


config = Config()

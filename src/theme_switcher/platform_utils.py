"""Platform detection and desktop session utilities for Theme Switcher"""

import os
import sys

# Platform detection
IS_WINDOWS = sys.platform == "win32"
IS_LINUX = sys.platform.startswith("linux")
IS_MACOS = sys.platform == "darwin"


def current_desktop() -> str:
    """Lower-cased desktop session name (e.g. "gnome", "xfce"), "" if unknown."""
    if not IS_LINUX:
        return ""
    raw = os.environ.get("XDG_CURRENT_DESKTOP") or os.environ.get("DESKTOP_SESSION") or ""
    # XDG_CURRENT_DESKTOP may be a colon-separated list, e.g. "ubuntu:GNOME"
    names = [part.strip().lower() for part in raw.split(":") if part.strip()]
    for name in names:
        if "xfce" in name:
            return "xfce"
        if name in ("gnome", "unity", "budgie", "pantheon") or "gnome" in name:
            return "gnome"
    return names[0] if names else ""


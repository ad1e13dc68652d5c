"""Desktop notifications for Theme Switcher"""
import subprocess

from .platform_utils import IS_LINUX, IS_MACOS


def notify(title: str, message: str, timeout: int = 3, urgency: str = "normal"):
    """Show desktop notification"""
    if IS_LINUX:
        args = ["notify-send", "-u", urgency, "-t", str(timeout * 1000), title, message]
    elif IS_MACOS:
        script = f"display notification {_quote(message)} with title {_quote(title)}"
        args = ["osascript", "-e", script]
    else:
        return
    try:
        subprocess.run(args, timeout=2, capture_output=True)
    except (OSError, subprocess.SubprocessError):
        pass  # Notifications are optional


def _quote(text: str) -> str:
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'

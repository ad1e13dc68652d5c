import subprocess

from theme_switcher import ui_feedback
from theme_switcher.adapters.ui_feedback import UIFeedbackAdapter
from theme_switcher.core.ports import NotifyLevel


def test_adapter_maps_levels_to_urgency():
    calls = []
    adapter = UIFeedbackAdapter(notify_fn=lambda title, message, urgency: calls.append((title, message, urgency)))

    adapter.notify("Switched to theme 'Yaru'")
    adapter.notify("Theme 'Nope' not found", NotifyLevel.ERROR)

    assert calls[0][1:] == ("Switched to theme 'Yaru'", "normal")
    assert calls[1][1:] == ("Theme 'Nope' not found", "critical")


def test_notify_uses_notify_send_on_linux(monkeypatch):
    calls = []
    monkeypatch.setattr(ui_feedback, "IS_LINUX", True)
    monkeypatch.setattr(ui_feedback, "IS_MACOS", False)
    monkeypatch.setattr(subprocess, "run", lambda args, **kwargs: calls.append(args))

    ui_feedback.notify("Theme Switcher", "hello")

    assert calls == [["notify-send", "-u", "normal", "-t", "3000", "Theme Switcher", "hello"]]


def test_notify_missing_tool_is_ignored(monkeypatch):
    def fail(args, **kwargs):
        raise FileNotFoundError(args[0])

    monkeypatch.setattr(ui_feedback, "IS_LINUX", True)
    monkeypatch.setattr(subprocess, "run", fail)

    ui_feedback.notify("Theme Switcher", "hello")

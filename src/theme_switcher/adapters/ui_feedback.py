"""UI feedback adapter."""

from __future__ import annotations

import logging

from ..core.ports import NotifyLevel
from ..ui_feedback import notify

logger = logging.getLogger(__name__)

_TITLES = {
    NotifyLevel.INFO: "🌓 Theme Switcher",
    NotifyLevel.ERROR: "⚠ Theme Switcher",
}


class UIFeedbackAdapter:
    def __init__(self, notify_fn=notify):
        self._notify = notify_fn

    def notify(self, message: str, level: NotifyLevel = NotifyLevel.INFO) -> None:
        logger.debug("Notification (%s): %s", level.value, message)
        urgency = "critical" if level is NotifyLevel.ERROR else "normal"
        self._notify(_TITLES[level], message, urgency=urgency)

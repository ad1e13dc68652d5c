"""JSON file settings store.

The settings file holds one JSON object per namespace, so it can be shared
with other tools:

    {
      "theme_switcher": {
        "light_profile": "Adwaita",
        "dark_profile": "Adwaita-dark",
        "start_hour": 8,
        "end_hour": 20
      }
    }

Only this application's namespace is read and written, and change callbacks
fire only when that namespace changes, whether through set() or through an
external edit picked up by check_for_changes().
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
import tempfile
import threading
from typing import Any, Callable

from ..core.config_model import FIRST_RUN, NAMESPACE, SHOW_NOTIFICATIONS

logger = logging.getLogger(__name__)

DEFAULTS = {
    SHOW_NOTIFICATIONS: True,
    FIRST_RUN: True,
}

_UNSET = object()


class JsonSettingsStore:
    def __init__(self, path: str | os.PathLike, namespace: str = NAMESPACE, defaults: dict | None = None):
        self._path = Path(path)
        self._namespace = namespace
        self._defaults = dict(DEFAULTS if defaults is None else defaults)
        self._lock = threading.RLock()
        self._callbacks: list[Callable[[], None]] = []
        self._data: dict = {}
        self._mtime: int | None = None
        self._reload()

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str, default: Any = _UNSET) -> Any:
        with self._lock:
            section = self._section()
            if key in section:
                return section[key]
        return self._defaults.get(key) if default is _UNSET else default

    def set(self, key: str, value: Any) -> bool:
        with self._lock:
            # Pick up external edits first so they are not overwritten
            self._reload()
            section = self._section()
            if key in section and section[key] == value:
                return True

            data = dict(self._data)
            data[self._namespace] = {**section, key: value}
            if not self._write(data):
                return False
            self._data = data

        logger.debug("Setting %s.%s = %r", self._namespace, key, value)
        self._fire()
        return True

    def on_changed(self, callback: Callable[[], None]) -> Callable[[], None]:
        with self._lock:
            self._callbacks.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._callbacks:
                    self._callbacks.remove(callback)

        return unsubscribe

    def check_for_changes(self) -> bool:
        """Reload the file if it changed on disk; True if our namespace changed."""
        with self._lock:
            if _mtime(self._path) == self._mtime:
                return False
            before = self._section()
            self._reload()
            changed = self._section() != before

        if changed:
            logger.info("Settings changed on disk: %s", self._path)
            self._fire()
        return changed

    def _section(self) -> dict:
        section = self._data.get(self._namespace)
        return section if isinstance(section, dict) else {}

    def _reload(self) -> None:
        self._mtime = _mtime(self._path)
        if self._mtime is None:
            self._data = {}
            return
        try:
            with self._path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Cannot read settings file %s: %s", self._path, e)
            data = {}
        if not isinstance(data, dict):
            logger.warning("Settings file %s is not a JSON object, ignoring it", self._path)
            data = {}
        self._data = data

    def _write(self, data: dict) -> bool:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=self._path.parent, prefix=".settings-", suffix=".json")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, indent=2, sort_keys=True)
                    f.write("\n")
                os.replace(tmp, self._path)
            except BaseException:
                Path(tmp).unlink(missing_ok=True)
                raise
        except OSError as e:
            logger.error("Cannot write settings file %s: %s", self._path, e)
            return False
        self._mtime = _mtime(self._path)
        return True

    def _fire(self) -> None:
        with self._lock:
            callbacks = list(self._callbacks)
        for callback in callbacks:
            callback()


def _mtime(path: Path) -> int | None:
    try:
        return path.stat().st_mtime_ns
    except OSError:
        return None

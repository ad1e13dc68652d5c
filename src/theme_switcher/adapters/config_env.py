"""Env configuration adapter producing a structured AppConfig."""

from __future__ import annotations

from ..config import config as env_config
from ..core.config_model import AppConfig
from ..exceptions import ConfigurationError

BACKENDS = ("auto", "gnome", "xfce", "macos", "none")
MODIFIERS = ("ctrl", "alt")


def load_app_config(source=None) -> AppConfig:
    source = source or env_config

    backend = str(source.BACKEND).lower()
    if backend not in BACKENDS:
        raise ConfigurationError(f"Unknown backend {backend!r}, expected one of {', '.join(BACKENDS)}")

    modifier = str(source.HOTKEY_MODIFIER).lower()
    if modifier not in MODIFIERS:
        raise ConfigurationError(f"Unsupported hotkey modifier {modifier!r}")

    return AppConfig(
        debug=source.DEBUG,
        settings_path=source.SETTINGS_PATH,
        backend=backend,
        check_interval=_positive_float("CHECK_INTERVAL", source.CHECK_INTERVAL),
        watch_interval=_positive_float("WATCH_INTERVAL", source.WATCH_INTERVAL),
        apply_timeout=_positive_float("APPLY_TIMEOUT", source.APPLY_TIMEOUT),
        setup_max_passes=int(_positive_float("SETUP_MAX_PASSES", source.SETUP_MAX_PASSES)),
        force_refresh=source.FORCE_REFRESH,
        force_refresh_profile=source.FORCE_REFRESH_PROFILE,
        hotkeys_enabled=source.HOTKEYS_ENABLED,
        hotkey_modifier=modifier,
        hotkey_switch_key=str(source.HOTKEY_SWITCH_KEY).lower(),
        hotkey_configure_key=str(source.HOTKEY_CONFIGURE_KEY).lower(),
    )


def _positive_float(name: str, raw) -> float:
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {raw!r}")
    return value

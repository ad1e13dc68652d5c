"""Exceptions raised by Theme Switcher."""


class ThemeSwitcherError(Exception):
    """Base class for Theme Switcher errors."""


class ConfigurationError(ThemeSwitcherError):
    """Invalid environment configuration."""

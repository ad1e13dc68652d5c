"""Theme Switcher - light desktop theme by day, dark theme by night"""

__version__ = "1.0.0"
__description__ = "Switch between a light and a dark desktop theme by time of day"

__all__ = ["main", "ThemeSwitcher", "ThemeScheduler", "__version__"]


def __getattr__(name: str):
    """Lazy import to avoid pulling in the desktop adapters on package import.

    This allows importing theme_switcher.core without a desktop session,
    which is needed for CI/headless environments.
    """
    if name == "ThemeSwitcher":
        from .main import ThemeSwitcher

        return ThemeSwitcher
    if name == "ThemeScheduler":
        from .core.scheduler import ThemeScheduler

        return ThemeScheduler
    if name == "main":
        from .main import main

        return main
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

"""Theme Switcher: light theme by day, dark theme by night"""

import logging
import signal
import threading

from .adapters.config_env import load_app_config
from .adapters.profiles import ForceRefreshApplier, get_profile_backend
from .adapters.prompter import TerminalPrompter
from .adapters.settings_store import JsonSettingsStore
from .adapters.ui_feedback import UIFeedbackAdapter
from .core.config_model import AppConfig
from .core.scheduler import ThemeScheduler
from .platform_utils import IS_WINDOWS
from .timer import PeriodicTimer

logger = logging.getLogger(__name__)


class ThemeSwitcher:
    """Main application - wires the scheduler to the desktop and runs the triggers"""

    def __init__(
        self,
        app_config: AppConfig | None = None,
        backend=None,
        store=None,
        prompter=None,
        ui=None,
        clock=None,
    ):
        self.app_config = app_config or load_app_config()
        cfg = self.app_config

        self.backend = backend or get_profile_backend(cfg.backend, timeout=cfg.apply_timeout)
        self.store = store or JsonSettingsStore(cfg.settings_path)
        applier = ForceRefreshApplier(self.backend, cfg.force_refresh_profile, enabled=cfg.force_refresh)

        scheduler_kwargs = {"clock": clock} if clock is not None else {}
        self.scheduler = ThemeScheduler(
            catalog=self.backend,
            applier=applier,
            settings=self.store,
            prompter=prompter or TerminalPrompter(),
            ui=ui or UIFeedbackAdapter(),
            max_setup_passes=cfg.setup_max_passes,
            **scheduler_kwargs,
        )
        self.keyboard = None
        self._shutdown_event = threading.Event()
        self._waiting = False

    def on_switch_hotkey(self):
        """Force a re-check now"""
        self._spawn(self.scheduler.switch_now, "ThemeSwitcher-Switch")

    def on_configure_hotkey(self):
        """Open the configuration prompts now"""
        self._spawn(self.scheduler.configure, "ThemeSwitcher-Configure")

    @staticmethod
    def _spawn(target, name):
        # Keep the hotkey listener responsive while prompts wait for input
        threading.Thread(target=target, name=name, daemon=True).start()

    def _start_hotkeys(self):
        cfg = self.app_config
        if not cfg.hotkeys_enabled:
            return
        try:
            from .keyboard_handler import KeyboardHandler

            self.keyboard = KeyboardHandler(
                cfg.hotkey_modifier,
                {
                    cfg.hotkey_switch_key: self.on_switch_hotkey,
                    cfg.hotkey_configure_key: self.on_configure_hotkey,
                },
            )
            self.keyboard.start()
        except Exception as e:
            # pynput needs a display/input backend; run without hotkeys when headless
            logger.warning("Global hotkeys unavailable: %s", e)
            self.keyboard = None

    def run(self):
        """Run the application until a shutdown is requested"""
        cfg = self.app_config
        print("\n" + "=" * 50)
        print("🌓 Theme Switcher")
        print("=" * 50)
        print(f"Backend: {self.backend.name}")
        print(f"Settings: {cfg.settings_path}")
        print(f"Check interval: {cfg.check_interval:g}s")
        if cfg.hotkeys_enabled:
            print(f"Switch now: {cfg.hotkey_modifier}+{cfg.hotkey_switch_key}")
            print(f"Configure: {cfg.hotkey_modifier}+{cfg.hotkey_configure_key}")
        print("\nPress Ctrl+C to quit")
        print("=" * 50 + "\n")

        unsubscribe = self.store.on_changed(self.scheduler.on_settings_changed)
        try:
            self.scheduler.run_cycle("activation")
            self._start_hotkeys()

            with PeriodicTimer(cfg.check_interval, self.scheduler.run_cycle, name="ThemeSwitcher-Tick"), \
                    PeriodicTimer(cfg.watch_interval, self.store.check_for_changes, name="ThemeSwitcher-Watch"):
                self._waiting = True
                while not self._shutdown_event.wait(1.0):
                    pass
        except KeyboardInterrupt:
            pass
        finally:
            self._waiting = False
            unsubscribe()
            self.shutdown()

    def shutdown(self):
        """Clean shutdown"""
        print("\nShutting down...")
        self._shutdown_event.set()
        if self.keyboard:
            self.keyboard.stop()
            self.keyboard = None
        print("✓ Done")

    def request_shutdown(self):
        """Request application shutdown (thread-safe)"""
        self._shutdown_event.set()

    @property
    def waiting(self):
        """True once run() is idle in its main loop, watching the shutdown event"""
        return self._waiting


def install_signal_handlers(app: ThemeSwitcher):
    def signal_handler(sig, frame):
        app.request_shutdown()
        if not app.waiting:
            # Setup prompts block on input; interrupt them instead of waiting
            raise KeyboardInterrupt

    signal.signal(signal.SIGINT, signal_handler)
    if not IS_WINDOWS:
        signal.signal(signal.SIGTERM, signal_handler)


def main():
    from .cli import app

    app()


if __name__ == "__main__":
    main()

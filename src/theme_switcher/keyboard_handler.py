"""Global hotkeys for Theme Switcher"""
from pynput import keyboard
from pynput.keyboard import Key

_MODIFIER_KEYS = {
    "alt": (Key.alt, Key.alt_l, Key.alt_r),
    "ctrl": (Key.ctrl, Key.ctrl_l, Key.ctrl_r),
}


class KeyboardHandler:
    """Fire a callback when modifier+key is pressed, once per press"""

    def __init__(self, modifier: str, bindings: dict):
        self.modifier = modifier.lower()
        self.bindings = {key.lower(): callback for key, callback in bindings.items()}
        self.listener = None
        self.pressed_keys = set()
        self.active_key = None

    def start(self):
        """Start keyboard listener"""
        self.listener = keyboard.Listener(
            on_press=self._on_press,
            on_release=self._on_release
        )
        self.listener.start()

    def stop(self):
        """Stop keyboard listener"""
        if self.listener:
            self.listener.stop()
            self.listener = None

    def _on_press(self, key):
        """Track key presses and detect hotkeys"""
        self.pressed_keys.add(self._normalize(key))

        hotkey = self._pressed_hotkey()
        if hotkey and hotkey != self.active_key:
            self.active_key = hotkey
            self.bindings[hotkey]()

    def _on_release(self, key):
        """Track key releases"""
        normalized = self._normalize(key)
        self.pressed_keys.discard(normalized)

        # Re-arm once the modifier or the bound key is released
        if normalized == self.active_key or normalized in _MODIFIER_KEYS.get(self.modifier, ()):
            self.active_key = None

    def _pressed_hotkey(self):
        """Bound key currently held together with the modifier, if any"""
        modifiers = _MODIFIER_KEYS.get(self.modifier, ())
        if not any(mod in self.pressed_keys for mod in modifiers):
            return None
        for key in self.bindings:
            if key in self.pressed_keys:
                return key
        return None

    @staticmethod
    def _normalize(key):
        char = getattr(key, "char", None)
        if not char:
            return key
        # Ctrl+letter arrives as a control character on some platforms
        if len(char) == 1 and 0 < ord(char) < 27:
            char = chr(ord(char) + 96)
        return char.lower()

import pytest

# pynput needs an input backend (X server, macOS, Windows); headless imports
# fail with a plain ImportError, so skip on that too
pytest.importorskip("pynput.keyboard", exc_type=ImportError)

from pynput.keyboard import Key, KeyCode  # noqa: E402

from theme_switcher.keyboard_handler import KeyboardHandler  # noqa: E402


def _handler():
    fired = []
    handler = KeyboardHandler(
        "ctrl",
        {"t": lambda: fired.append("switch"), "y": lambda: fired.append("configure")},
    )
    return handler, fired


def test_hotkey_fires_once_per_press():
    handler, fired = _handler()

    handler._on_press(Key.ctrl_l)
    handler._on_press(KeyCode.from_char("t"))
    handler._on_press(KeyCode.from_char("t"))  # auto-repeat
    assert fired == ["switch"]

    handler._on_release(KeyCode.from_char("t"))
    handler._on_press(KeyCode.from_char("t"))
    assert fired == ["switch", "switch"]


def test_control_character_is_normalized():
    handler, fired = _handler()

    handler._on_press(Key.ctrl)
    handler._on_press(KeyCode.from_char("\x19"))  # ctrl+y on X11
    assert fired == ["configure"]


def test_key_without_modifier_is_ignored():
    handler, fired = _handler()

    handler._on_press(KeyCode.from_char("t"))
    assert fired == []

from theme_switcher.core.state_machine import SwitcherEvent, SwitcherState, SwitcherStateMachine


def test_state_machine_happy_path():
    sm = SwitcherStateMachine()
    assert sm.state == SwitcherState.UNINITIALIZED

    sm.transition(SwitcherEvent.CONFIGURED)
    assert sm.state == SwitcherState.CONFIGURED

    sm.transition(SwitcherEvent.LIGHT_APPLIED)
    assert sm.state == SwitcherState.LIGHT_APPLIED

    sm.transition(SwitcherEvent.DARK_APPLIED)
    assert sm.state == SwitcherState.DARK_APPLIED

    sm.transition(SwitcherEvent.CONFIGURED)
    assert sm.state == SwitcherState.DARK_APPLIED


def test_state_machine_settings_missing_resets():
    sm = SwitcherStateMachine()
    sm.transition(SwitcherEvent.CONFIGURED)
    sm.transition(SwitcherEvent.LIGHT_APPLIED)

    sm.transition(SwitcherEvent.SETTINGS_MISSING)
    assert sm.state == SwitcherState.UNINITIALIZED


def test_state_machine_rejects_apply_before_configured(caplog):
    sm = SwitcherStateMachine()

    assert sm.transition(SwitcherEvent.DARK_APPLIED) == SwitcherState.UNINITIALIZED
    assert "Invalid state transition" in caplog.text

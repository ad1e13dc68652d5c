import io

from theme_switcher.adapters.prompter import TerminalPrompter


def _prompter(answers: str):
    out = io.StringIO()
    return TerminalPrompter(stdin=io.StringIO(answers), stdout=out), out


def test_pick_by_number_or_name():
    prompter, out = _prompter("2\n")
    assert prompter.pick_one(["Adwaita", "Adwaita-dark"], "Select dark theme") == "Adwaita-dark"
    assert "1) Adwaita" in out.getvalue()

    prompter, _ = _prompter("Adwaita\n")
    assert prompter.pick_one(["Adwaita", "Adwaita-dark"], "Select light theme") == "Adwaita"


def test_pick_reprompts_on_invalid_choice():
    prompter, out = _prompter("7\nnope\n1\n")
    assert prompter.pick_one(["Adwaita", "Yaru"], "Select light theme") == "Adwaita"
    assert out.getvalue().count("Please enter a number between 1 and 2") == 2


def test_pick_cancel_on_empty_or_eof():
    prompter, _ = _prompter("\n")
    assert prompter.pick_one(["Adwaita"], "Select light theme") is None

    prompter, _ = _prompter("")
    assert prompter.pick_one(["Adwaita"], "Select light theme") is None


def test_pick_with_no_options_returns_none():
    prompter, out = _prompter("1\n")
    assert prompter.pick_one([], "Select light theme") is None
    assert out.getvalue() == ""


def test_integer_rejects_non_numeric_and_out_of_range():
    prompter, out = _prompter("abc\n24\n-1\n23\n")
    assert prompter.prompt_integer("Enter end hour (0-23)", 0, 23) == 23
    assert out.getvalue().count("Please enter a number between 0 and 23") == 3


def test_integer_accepts_bounds():
    prompter, _ = _prompter("0\n")
    assert prompter.prompt_integer("Enter start hour (0-23)", 0, 23) == 0


def test_integer_cancel():
    prompter, _ = _prompter("\n")
    assert prompter.prompt_integer("Enter start hour (0-23)", 0, 23) is None

    prompter, _ = _prompter("abc\n")
    assert prompter.prompt_integer("Enter start hour (0-23)", 0, 23) is None


def test_pick_numeric_answer_is_always_a_position():
    prompter, _ = _prompter("2\n")
    assert prompter.pick_one(["2", "Yaru"], "Select dark theme") == "Yaru"

    prompter, _ = _prompter("1\n")
    assert prompter.pick_one(["2", "Yaru"], "Select dark theme") == "2"

    prompter, out = _prompter("3\n\n")
    assert prompter.pick_one(["3", "Yaru"], "Select dark theme") is None
    assert "Please enter a number between 1 and 2" in out.getvalue()

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from shelfhelpers import ui as ui_module
from shelfhelpers.errors import EditorError, InvalidChoiceError, UserAbortedError
from shelfhelpers.ui import (
    EMPTY_VALUE,
    INVALID_CHOICE,
    LOCAL_TAG,
    NOT_CONFIRMED,
    ONLINE_TAG,
    TOO_MANY_ERRORS,
    UI,
    blue_bold,
    cyan_bold,
    yellow_bold,
)


def answers(ui, *lines):
    """Feed the given lines to ui.get_input."""
    return patch.object(ui, "get_input", side_effect=list(lines))


# --------------------------------------------------------------------- input

def test_get_input_strips(ui, monkeypatch):
    monkeypatch.setattr("builtins.input", lambda: "  some value \n")
    assert ui.get_input() == "some value"


def test_get_input_end_of_input(ui, monkeypatch):
    def eof():
        raise EOFError
    monkeypatch.setattr("builtins.input", eof)
    with pytest.raises(EOFError):
        ui.get_input()


@pytest.mark.parametrize("answer, expected", [
    ("y", True),
    ("Y", True),
    ("yes", True),
    ("n", False),
    ("YES", False),
    ("", False),
])
def test_accept(ui, capsys, answer, expected):
    with answers(ui, answer):
        assert ui.accept("Really") is expected
    assert "Really Y/N : " in capsys.readouterr().out


def test_accept_end_of_input(ui):
    with answers(ui, EOFError()):
        assert ui.accept("Really") is False


# ------------------------------------------------------------- select_option

def test_select_option_by_number(ui, capsys):
    options = [ui.tag("Dune", True), ui.tag("Dune Messiah", False), ui.tag("Dune", True), ""]
    with answers(ui, "2"):
        assert ui.select_option("Title", "Pick the right title", options, False) == "Dune Messiah"

    out = capsys.readouterr().out
    assert "Pick the right title" in out
    assert "2. " in out
    assert "3. " not in out
    assert "Choose option [1-2], leave [B]lank, [E]dit manually, or [A]bort: " in out


def test_select_option_prompts(ui, capsys):
    with answers(ui, "1"):
        ui.select_option("Title", "", ["only"], False)
    assert "Choose [1], leave [B]lank" in capsys.readouterr().out

    with answers(ui, "b"):
        ui.select_option("Title", "", [], False)
    assert "Leave [B]lank, [E]dit manually, or [A]bort: " in capsys.readouterr().out


def test_select_option_blank(ui):
    with answers(ui, "B"):
        assert ui.select_option("Title", "", ["a", "b"], False) == ""


def test_select_option_abort(ui):
    with answers(ui, "a"):
        with pytest.raises(UserAbortedError, match="User aborted."):
            ui.select_option("Title", "", ["a", "b"], False)


def test_select_option_manual_entry(ui):
    with answers(ui, "E", "Children of Dune", "y"):
        assert ui.select_option("Title", "", ["Dune"], False) == "Children of Dune"


def test_select_option_manual_entry_retried(ui):
    with answers(ui, "e", "Wrong", "n", "e", "Right", "yes"):
        with patch.object(ui, "warning") as warning:
            assert ui.select_option("Title", "", ["Dune"], False) == "Right"
    warning.assert_called_once_with(NOT_CONFIRMED)


def test_select_option_empty_manual_entry(ui):
    with answers(ui, "e", "", "y"):
        with patch.object(ui, "warning") as warning:
            assert ui.select_option("Title", "", [], False) == ""
    warning.assert_called_once_with(EMPTY_VALUE)


def test_select_option_long_field_uses_editor(ui):
    options = [ui.tag("first\ndescription", True), ui.tag("second", False)]
    with answers(ui, "E", "y"):
        with patch.object(ui, "edit", return_value="merged") as edit:
            assert ui.select_option("Description", "", options, True) == "merged"
    edit.assert_called_once_with("--- 1 ---\nfirst\ndescription\n--- 2 ---\nsecond\n")


def test_select_option_invalid_then_valid(ui):
    with answers(ui, "0", "3", "x", "2"):
        with patch.object(ui, "warning") as warning:
            assert ui.select_option("Title", "", ["a", "b"], False) == "b"
    assert warning.call_count == 3
    warning.assert_called_with(INVALID_CHOICE)


def test_select_option_too_many_errors(ui):
    with answers(ui, *["x"] * 11):
        with patch.object(ui, "warning") as warning:
            with pytest.raises(InvalidChoiceError, match="Invalid choice."):
                ui.select_option("Title", "", ["a"], False)
    warning.assert_called_with(TOO_MANY_ERRORS)


def test_select_option_declined_edits_count_as_errors(ui):
    with answers(ui, *["e", "value", "n"] * 11):
        with pytest.raises(InvalidChoiceError):
            ui.select_option("Title", "", ["a"], False)


def test_select_option_non_ascii_digits_are_invalid(ui):
    with answers(ui, "²", "³", "+2"):
        with patch.object(ui, "warning") as warning:
            assert ui.select_option("Title", "", ["a", "b"], False) == "b"
    assert warning.call_count == 2
    warning.assert_called_with(INVALID_CHOICE)


def test_select_option_ten_errors_are_tolerated(ui):
    with answers(ui, *(["x"] * 10 + ["1"])):
        assert ui.select_option("Title", "", ["a"], False) == "a"


def test_select_option_end_of_input(ui):
    with answers(ui, "x", EOFError()):
        with pytest.raises(EOFError):
            ui.select_option("Title", "", ["a"], False)


# -------------------------------------------------------------- update_value

def test_update_value_keep(ui, capsys):
    with answers(ui, "K"):
        assert ui.update_value("author", "", " Frank Herbert ", False) == "Frank Herbert"
    out = capsys.readouterr().out
    assert "Modifying author" in out
    assert "Current value:  Frank Herbert " in out


def test_update_value_edit(ui):
    with answers(ui, "e", "  Brian Herbert  ", "y"):
        assert ui.update_value("author", "", "Frank Herbert", False) == "Brian Herbert"


def test_update_value_shows_usage(ui):
    with answers(ui, "k"):
        with patch.object(ui, "info") as info:
            ui.update_value("author", "Full name", "Frank Herbert", False)
    assert "Full name" in info.call_args.args[0]


def test_update_value_long_field_uses_editor(ui):
    with answers(ui, "e", "y"):
        with patch.object(ui, "edit", return_value="new description") as edit:
            assert ui.update_value("description", "", "old description", True) == "new description"
    edit.assert_called_once_with("old description")


def test_update_value_not_confirmed_then_keep(ui):
    with answers(ui, "e", "other", "n", "k"):
        with patch.object(ui, "warning") as warning:
            assert ui.update_value("author", "", "Frank Herbert", False) == "Frank Herbert"
    warning.assert_called_once_with(NOT_CONFIRMED)


def test_update_value_empty_value_warning(ui):
    with answers(ui, "e", "", "y"):
        with patch.object(ui, "warning") as warning:
            assert ui.update_value("author", "", "Frank Herbert", False) == ""
    warning.assert_called_once_with(EMPTY_VALUE)


def test_update_value_too_many_errors(ui):
    with answers(ui, *["?"] * 11):
        with pytest.raises(InvalidChoiceError):
            ui.update_value("author", "", "Frank Herbert", False)


# ---------------------------------------------------------------------- edit

def fake_editor(content, calls):
    def run(cmd, check):
        calls.append(cmd)
        Path(cmd[-1]).write_text(content)
        return subprocess.CompletedProcess(cmd, 0)
    return run


def test_edit_with_editor(ui, monkeypatch):
    monkeypatch.setenv("EDITOR", "vim")
    calls = []
    with patch.object(ui_module.subprocess, "run", side_effect=fake_editor("  edited text \n\n", calls)):
        assert ui.edit("original text") == "edited text"

    cmd = calls[0]
    assert cmd[0] == "vim"
    assert not Path(cmd[-1]).exists()


def test_edit_writes_old_value_to_file(ui, monkeypatch):
    monkeypatch.setenv("EDITOR", "vim")
    seen = []

    def run(cmd, check):
        seen.append(Path(cmd[-1]).read_text())
        return subprocess.CompletedProcess(cmd, 0)

    with patch.object(ui_module.subprocess, "run", side_effect=run):
        assert ui.edit("original text") == "original text"
    assert seen == ["original text"]


def test_edit_editor_with_arguments(ui, monkeypatch):
    monkeypatch.setenv("EDITOR", "code --wait")
    calls = []
    with patch.object(ui_module.subprocess, "run", side_effect=fake_editor("x", calls)):
        ui.edit("")
    assert calls[0][:2] == ["code", "--wait"]


def test_edit_editor_from_config(monkeypatch):
    monkeypatch.delenv("EDITOR", raising=False)
    ui = UI(config={"editor": "emacs"})
    calls = []
    with patch.object(ui_module.subprocess, "run", side_effect=fake_editor("x", calls)):
        ui.edit("")
    assert calls[0][0] == "emacs"


def test_edit_falls_back_to_nano(ui, monkeypatch):
    monkeypatch.delenv("EDITOR", raising=False)
    calls = []
    with patch.object(ui, "warning") as warning:
        with patch.object(ui_module.subprocess, "run", side_effect=fake_editor("x", calls)):
            ui.edit("")
    assert calls[0][0] == "nano"
    warning.assert_called_once()


@pytest.mark.parametrize("failure", [
    subprocess.CalledProcessError(1, ["vim"]),
    FileNotFoundError("vim"),
])
def test_edit_failure(ui, monkeypatch, failure):
    monkeypatch.setenv("EDITOR", "vim")
    with patch.object(ui_module.subprocess, "run", side_effect=failure) as run:
        with pytest.raises(EditorError):
            ui.edit("original")
    assert not Path(run.call_args.args[0][-1]).exists()


# ------------------------------------------------------------------- display

def test_display_pipes_to_less(ui):
    with patch.object(ui_module.subprocess, "Popen") as popen:
        popen.return_value.wait.return_value = 0
        with patch.object(ui, "error") as error:
            ui.display("long text")

    cmd = popen.call_args.args[0]
    assert cmd == ["less", "-e", "-F", "-Q", "-X", "--buffers=-1"]
    popen.return_value.stdin.write.assert_called_once_with(b"long text")
    popen.return_value.stdin.close.assert_called_once()
    error.assert_not_called()


def test_display_user_quits_early(ui):
    with patch.object(ui_module.subprocess, "Popen") as popen:
        popen.return_value.stdin.write.side_effect = BrokenPipeError
        popen.return_value.wait.return_value = 0
        with patch.object(ui, "error") as error:
            ui.display("long text")
    popen.return_value.wait.assert_called_once()
    error.assert_not_called()


def test_display_pager_failure(ui):
    with patch.object(ui_module.subprocess, "Popen") as popen:
        popen.return_value.wait.return_value = 2
        with patch.object(ui, "error") as error:
            ui.display("long text")
    error.assert_called_once()


def test_display_missing_pager_prints_text(ui, capsys):
    with patch.object(ui_module.subprocess, "Popen", side_effect=FileNotFoundError("less")):
        with patch.object(ui, "error") as error:
            ui.display("long text")
    error.assert_called_once()
    assert capsys.readouterr().out == "long text\n"


def test_display_pager_from_config():
    ui = UI(config={"pager": "more -d"})
    with patch.object(ui_module.subprocess, "Popen") as popen:
        popen.return_value.wait.return_value = 0
        ui.display("text")
    assert popen.call_args.args[0] == ["more", "-d"]


# -------------------------------------------------------------------- output

def test_tag_and_untag(ui):
    local = ui.tag("Dune", True)
    online = ui.tag("Dune", False)
    assert local == cyan_bold(LOCAL_TAG) + "Dune"
    assert online == yellow_bold(ONLINE_TAG) + "Dune"
    assert ui.untag(local) == "Dune"
    assert ui.untag(online) == "Dune"
    assert ui.untag(" plain ") == "plain"


def test_headings(ui, capsys):
    ui.title("Library %s", "one")
    ui.sub_title("Books")
    ui.sub_part("Book %d", 3)
    ui.choice("Pick: ")
    out = capsys.readouterr().out
    assert "# Library one" in out
    assert "## Books" in out
    assert "### Book 3" in out
    assert out.endswith(blue_bold("Pick: "))
    assert not out.endswith("\n")

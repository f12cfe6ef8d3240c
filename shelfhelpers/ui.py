"""
UI components for shelfhelpers.
Handles colors, prompts, editing through $EDITOR and paging through less.
"""

import os
import shlex
import subprocess
import sys
import tempfile
from typing import List, Optional

from .errors import EditorError, InvalidChoiceError, UserAbortedError
from .interface import UserInterface
from .logger import get_logger, is_logging_configured, setup_logging, teardown_logging
from .strings import remove_duplicates
from .utils import DEFAULT_EDITOR, DEFAULT_PAGER, get_setting, load_config

EDIT_OR_KEEP = "[E]dit or [K]eep current value: "
ENTER_NEW_VALUE = "Enter new value: "
INVALID_CHOICE = "Invalid choice."
EMPTY_VALUE = "Empty value detected."
NOT_CONFIRMED = "Manual entry not confirmed, trying again."
TOO_MANY_ERRORS = "Too many errors, giving up."
USER_ABORTED = "User aborted."

# Marks an option as the value currently in the database
LOCAL_TAG = "[current] "
# Marks an option as coming from an online source
ONLINE_TAG = "[online/new] "

MAX_ERRORS = 10


# ANSI escape codes for styling
class Colors:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    GREEN = "\033[32m"
    BLUE = "\033[34m"
    CYAN = "\033[36m"
    YELLOW = "\033[33m"
    RED = "\033[31m"
    DIM = "\033[2m"


def colorize(text: str, *codes: str) -> str:
    return f"{''.join(codes)}{text}{Colors.RESET}"


def green(text: str) -> str:
    return colorize(text, Colors.GREEN)


def blue_bold(text: str) -> str:
    return colorize(text, Colors.BOLD, Colors.BLUE)


def cyan_bold(text: str) -> str:
    return colorize(text, Colors.BOLD, Colors.CYAN)


def yellow_bold(text: str) -> str:
    return colorize(text, Colors.BOLD, Colors.YELLOW)


def _format(fmt: str, args: tuple) -> str:
    return fmt % args if args else fmt


def _option_number(answer: str) -> int:
    """Parse a numbered choice, 0 if it is not a number."""
    try:
        return int(answer)
    except ValueError:
        return 0


class UI(UserInterface):
    """Terminal implementation of UserInterface.

    Large texts are shown through a pager and edited with $EDITOR.
    Everything else is plain prompts on stdin/stdout.
    """

    def __init__(self, config: Optional[dict] = None):
        self.config = load_config() if config is None else config
        self._log = get_logger("shelfhelpers.ui")
        if not is_logging_configured():
            setup_logging(console_level=get_setting("console_log_level", "INFO", self.config))

    # ------------------------------------------------------------------ input

    def get_input(self) -> str:
        """Read one line from the user. Raises EOFError at end of input."""
        return input().strip()

    def accept(self, question: str) -> bool:
        """Ask a yes/no question, anything but yes means no."""
        sys.stdout.write(blue_bold(f"{question} Y/N : "))
        sys.stdout.flush()
        try:
            answer = self.get_input()
        except EOFError:
            return False
        return answer in ("y", "Y", "yes")

    def _read_new_value(self, current: str, long_field: bool) -> str:
        if long_field:
            return self.edit(current)
        self.choice(ENTER_NEW_VALUE)
        return self.get_input()

    def select_option(self, title: str, usage: str, options: List[str], long_field: bool) -> str:
        """Select one of several options, or input a new one, and return it.

        Raises UserAbortedError if the user aborts, InvalidChoiceError after
        too many invalid answers.
        """
        self.sub_part(title)
        if usage:
            print(green(usage))

        options = remove_duplicates(options)
        for i, option in enumerate(options, 1):
            print(f"{i}. {option}")

        errors = 0
        while True:
            if not options:
                self.choice("Leave [B]lank, [E]dit manually, or [A]bort: ")
            elif len(options) > 1:
                self.choice("Choose option [1-%d], leave [B]lank, [E]dit manually, or [A]bort: ", len(options))
            else:
                self.choice("Choose [1], leave [B]lank, [E]dit manually, or [A]bort: ")
            answer = self.get_input().upper()

            if answer == "E":
                if long_field:
                    all_versions = "".join(
                        f"--- {i} ---\n{self.untag(option)}\n" for i, option in enumerate(options, 1)
                    )
                    edited = self.edit(all_versions)
                else:
                    edited = self._read_new_value("", long_field=False)
                if edited == "":
                    self.warning(EMPTY_VALUE)
                if self.accept("Confirm: " + edited):
                    return edited
                self.warning(NOT_CONFIRMED)
            elif answer == "A":
                raise UserAbortedError(USER_ABORTED)
            elif answer == "B":
                return ""
            elif 0 < _option_number(answer) <= len(options):
                return self.untag(options[_option_number(answer) - 1])
            else:
                self.warning(INVALID_CHOICE)

            errors += 1
            if errors > MAX_ERRORS:
                self.warning(TOO_MANY_ERRORS)
                raise InvalidChoiceError(INVALID_CHOICE)

    def update_value(self, field: str, usage: str, old_value: str, long_field: bool) -> str:
        """Let the user edit or keep the current value of a field."""
        self.sub_part("Modifying " + field)
        if usage:
            self.info(green(usage))
        print(f"Current value: {old_value}")

        errors = 0
        while True:
            self.choice(EDIT_OR_KEEP)
            answer = self.get_input().lower()
            if answer == "e":
                new_value = self._read_new_value(old_value, long_field)
                if new_value == "":
                    self.warning(EMPTY_VALUE)
                if self.accept("Confirm"):
                    return new_value.strip()
                self.warning(NOT_CONFIRMED)
            elif answer == "k":
                return old_value.strip()
            else:
                self.warning(INVALID_CHOICE)
                errors += 1
                if errors > MAX_ERRORS:
                    self.warning(TOO_MANY_ERRORS)
                    raise InvalidChoiceError(INVALID_CHOICE)

    def _editor_command(self) -> List[str]:
        editor = os.environ.get("EDITOR") or get_setting("editor", config=self.config)
        if not editor:
            self.warning("$EDITOR not set, falling back to %s", DEFAULT_EDITOR)
            editor = DEFAULT_EDITOR
        return shlex.split(editor)

    def edit(self, old_value: str) -> str:
        """Edit a long value with the external editor and return the result."""
        with tempfile.NamedTemporaryFile("w", prefix="edit", suffix=".txt", delete=False) as tmp:
            tmp.write(old_value)
        try:
            cmd = self._editor_command() + [tmp.name]
            try:
                subprocess.run(cmd, check=True)
            except (OSError, subprocess.CalledProcessError) as e:
                raise EditorError(f"Could not edit with {cmd[0]}: {e}") from e
            with open(tmp.name, 'r') as f:
                return f.read().strip()
        finally:
            os.remove(tmp.name)

    # ----------------------------------------------------------------- output

    def title(self, fmt: str, *args) -> None:
        print(colorize(f"# {_format(fmt, args)}", Colors.BOLD, Colors.BLUE))

    def sub_title(self, fmt: str, *args) -> None:
        print(colorize(f"## {_format(fmt, args)}", Colors.BOLD, Colors.CYAN))

    def sub_part(self, fmt: str, *args) -> None:
        print(colorize(f"### {_format(fmt, args)}", Colors.BOLD, Colors.GREEN))

    def choice(self, fmt: str, *args) -> None:
        sys.stdout.write(blue_bold(_format(fmt, args)))
        sys.stdout.flush()

    def display(self, text: str) -> None:
        """Display text through a pager if necessary."""
        # -e exit the second time the end is reached, -F exit if it fits on
        # one screen, -Q never ring the bell, -X do not clear the screen
        cmd = get_setting("pager", DEFAULT_PAGER, self.config)
        if isinstance(cmd, str):
            cmd = shlex.split(cmd)
        try:
            pager = subprocess.Popen(cmd, stdin=subprocess.PIPE)
        except OSError as e:
            self.error("Could not run pager %s: %s", cmd[0], e)
            sys.stdout.write(text if text.endswith("\n") else text + "\n")
            sys.stdout.flush()
            return

        try:
            pager.stdin.write(text.encode())
        except BrokenPipeError:
            # the user quit the pager before everything was written
            pass
        try:
            pager.stdin.close()
        except BrokenPipeError:
            pass
        returncode = pager.wait()
        if returncode != 0:
            self.error("Pager %s exited with status %d", cmd[0], returncode)

    def tag(self, entry: str, is_local: bool) -> str:
        """Tag an entry as local or online."""
        if is_local:
            return cyan_bold(LOCAL_TAG) + entry
        return yellow_bold(ONLINE_TAG) + entry

    def untag(self, option: str) -> str:
        """Remove tags added with tag()."""
        out = option.replace(cyan_bold(LOCAL_TAG), "").replace(yellow_bold(ONLINE_TAG), "")
        return out.strip()

    # -------------------------------------------------------------------- log

    def init_logger(self, log_file: Optional[str] = None, console_level: str = "INFO") -> None:
        setup_logging(log_file, console_level)

    def close_log(self) -> None:
        teardown_logging()

    def error(self, msg: str, *args) -> None:
        self._log.error(msg, *args)

    def warning(self, msg: str, *args) -> None:
        self._log.warning(msg, *args)

    def info(self, msg: str, *args) -> None:
        self._log.info(msg, *args)

    def debug(self, msg: str, *args) -> None:
        self._log.debug(msg, *args)

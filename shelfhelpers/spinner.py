"""
Spinner and time tracking helpers.
Shows that something is happening while a function runs.
"""

import sys
import threading
import time
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional, Sequence, TextIO

from .utils import SPIN_INTERVAL, format_duration

DEFAULT_FRAMES = "|/-\\"
DOTS_FRAMES = "⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏"


class Spinner:
    """Cycles through a sequence of frames."""

    def __init__(self, frames: Sequence[str] = DEFAULT_FRAMES):
        if not frames:
            raise ValueError("Spinner needs at least one frame")
        self.frames = frames
        self.index = 0

    def next(self) -> str:
        frame = self.frames[self.index % len(self.frames)]
        self.index += 1
        return frame

    def reset(self):
        self.index = 0


def _write(stream: TextIO, text: str):
    stream.write(text)
    stream.flush()


def spin_while_things_happen(title: str, func: Callable[..., Any], *args,
                             interval: float = SPIN_INTERVAL,
                             stream: Optional[TextIO] = None,
                             frames: Sequence[str] = DEFAULT_FRAMES,
                             **kwargs) -> Any:
    """Run func in a worker thread and display a spinner until it returns.

    Returns whatever func returns. If func raises, the line ends with KO
    and the exception is re-raised.
    """
    if stream is None:
        stream = sys.stdout
    spinner = Spinner(frames)

    outcome = {}
    finished = threading.Event()

    def work():
        try:
            outcome["result"] = func(*args, **kwargs)
        except BaseException as e:
            outcome["error"] = e
        finally:
            finished.set()

    # daemon worker so that an interrupted call does not wait for it, even at exit
    worker = threading.Thread(target=work, daemon=True)
    worker.start()
    try:
        while True:
            _write(stream, f"\r{title}... {spinner.next()} ")
            if finished.wait(interval):
                break
    except BaseException:
        _write(stream, f"\r{title}... KO.\n")
        raise
    worker.join()

    if "error" in outcome:
        _write(stream, f"\r{title}... KO.\n")
        raise outcome["error"]
    result = outcome["result"]
    _write(stream, f"\r{title}... Done.\n")
    return result


@contextmanager
def spinning(title: str, interval: float = SPIN_INTERVAL,
             stream: Optional[TextIO] = None,
             frames: Sequence[str] = DEFAULT_FRAMES) -> Iterator[Spinner]:
    """Display a spinner while the with-block runs in the calling thread."""
    if stream is None:
        stream = sys.stdout
    spinner = Spinner(frames)
    stop = threading.Event()

    def animate():
        while not stop.is_set():
            _write(stream, f"\r{title}... {spinner.next()} ")
            stop.wait(interval)

    thread = threading.Thread(target=animate, daemon=True)
    thread.start()
    try:
        yield spinner
    except BaseException:
        stop.set()
        thread.join()
        _write(stream, f"\r{title}... KO.\n")
        raise
    stop.set()
    thread.join()
    _write(stream, f"\r{title}... Done.\n")


def time_track(ui, start: float, name: str):
    """Log how long something took, start being a time.monotonic() value."""
    elapsed = time.monotonic() - start
    ui.debug("-- %s in %s", name, format_duration(elapsed))


@contextmanager
def timed(ui, name: str) -> Iterator[None]:
    start = time.monotonic()
    try:
        yield
    finally:
        time_track(ui, start, name)


def check_errors(*errors: Optional[BaseException]) -> Optional[BaseException]:
    """Return the first error that is not None."""
    for err in errors:
        if err is not None:
            return err
    return None

"""
The UserInterface contract: user input, output and logging.
"""

from abc import ABC, abstractmethod
from typing import List, Optional


class UserInterface(ABC):
    """Deals with user input, output and logging."""

    # input

    @abstractmethod
    def get_input(self) -> str: ...

    @abstractmethod
    def accept(self, question: str) -> bool: ...

    @abstractmethod
    def update_value(self, field: str, usage: str, old_value: str, long_field: bool) -> str: ...

    @abstractmethod
    def select_option(self, title: str, usage: str, options: List[str], long_field: bool) -> str: ...

    @abstractmethod
    def edit(self, old_value: str) -> str: ...

    # output

    @abstractmethod
    def title(self, fmt: str, *args) -> None: ...

    @abstractmethod
    def sub_title(self, fmt: str, *args) -> None: ...

    @abstractmethod
    def sub_part(self, fmt: str, *args) -> None: ...

    @abstractmethod
    def choice(self, fmt: str, *args) -> None: ...

    @abstractmethod
    def display(self, text: str) -> None: ...

    @abstractmethod
    def tag(self, entry: str, is_local: bool) -> str: ...

    # log

    @abstractmethod
    def init_logger(self, log_file: Optional[str] = None, console_level: str = "INFO") -> None: ...

    @abstractmethod
    def close_log(self) -> None: ...

    @abstractmethod
    def error(self, msg: str, *args) -> None: ...

    @abstractmethod
    def warning(self, msg: str, *args) -> None: ...

    @abstractmethod
    def info(self, msg: str, *args) -> None: ...

    @abstractmethod
    def debug(self, msg: str, *args) -> None: ...

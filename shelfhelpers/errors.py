"""
Exceptions raised by shelfhelpers.
"""


class HelperError(Exception):
    """Base class for shelfhelpers errors."""


class UserAbortedError(HelperError):
    """The user chose to abort an interactive prompt."""


class InvalidChoiceError(HelperError):
    """Too many invalid answers were given to an interactive prompt."""


class EditorError(HelperError):
    """The external editor could not be run or exited with an error."""


class CopyError(HelperError):
    """A file could not be copied (non-regular source or destination)."""

"""
shelfhelpers - command-line helpers for an e-book library manager

Terminal spinner and time tracking, prompts, editing through $EDITOR,
paging through less, and filesystem utilities.
"""

__version__ = "1.0.0"

from .core import main
from .errors import (
    HelperError,
    UserAbortedError,
    InvalidChoiceError,
    EditorError,
    CopyError,
)
from .filesystem import (
    directory_exists,
    is_directory_empty,
    absolute_file_exists,
    file_exists,
    delete_empty_folders,
    copy_dir,
    copy_file,
    calculate_sha256,
    get_unique_timestamped_filename,
)
from .interface import UserInterface
from .logger import setup_logging, teardown_logging
from .spinner import (
    Spinner,
    spin_while_things_happen,
    spinning,
    time_track,
    timed,
    check_errors,
)
from .strings import (
    string_in_slice,
    string_in_slice_case_insensitive,
    case_insensitive_contains,
    remove_duplicates,
)
from .ui import UI, Colors, LOCAL_TAG, ONLINE_TAG
from .utils import format_size, format_duration, load_config, save_config

__all__ = [
    'main',
    'HelperError',
    'UserAbortedError',
    'InvalidChoiceError',
    'EditorError',
    'CopyError',
    'directory_exists',
    'is_directory_empty',
    'absolute_file_exists',
    'file_exists',
    'delete_empty_folders',
    'copy_dir',
    'copy_file',
    'calculate_sha256',
    'get_unique_timestamped_filename',
    'UserInterface',
    'setup_logging',
    'teardown_logging',
    'Spinner',
    'spin_while_things_happen',
    'spinning',
    'time_track',
    'timed',
    'check_errors',
    'string_in_slice',
    'string_in_slice_case_insensitive',
    'case_insensitive_contains',
    'remove_duplicates',
    'UI',
    'Colors',
    'LOCAL_TAG',
    'ONLINE_TAG',
    'format_size',
    'format_duration',
    'load_config',
    'save_config',
]

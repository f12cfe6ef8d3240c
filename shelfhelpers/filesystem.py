"""
Filesystem helpers for shelfhelpers.
Handles copying, empty directory cleanup, hashing and unique filenames.
"""

import hashlib
import os
import shutil
import stat
from datetime import datetime
from pathlib import Path
from typing import Union

from .errors import CopyError
from .spinner import timed
from .utils import BUFFER_SIZE

PathLike = Union[str, Path]

MAX_UNIQUE_ATTEMPTS = 50
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def directory_exists(path: PathLike) -> bool:
    return Path(path).is_dir()


def is_directory_empty(path: PathLike) -> bool:
    """Check if a directory has no entries. Raises OSError if it cannot be read."""
    with os.scandir(path) as entries:
        return next(entries, None) is None


def absolute_file_exists(path: PathLike) -> bool:
    """Check if path is an existing regular file."""
    return Path(path).is_file()


def file_exists(path: PathLike) -> str:
    """Return the absolute path of an existing file.

    Relative paths are resolved from the current directory.
    Raises FileNotFoundError if there is no regular file there.
    """
    candidate = Path(path)
    if not candidate.is_absolute():
        candidate = Path.cwd() / candidate
    if not absolute_file_exists(candidate):
        raise FileNotFoundError(f"No such file: '{path}'")
    return str(candidate)


def delete_empty_folders(root: PathLike, ui) -> int:
    """Delete all empty directories below root, root itself excluded.

    Passes are repeated until nothing is removed, so directories that only
    contained empty directories go too. Returns the number of removed
    directories.
    """
    root = os.path.abspath(root)
    deleted = 0

    def on_walk_error(err: OSError):
        ui.error("Error scanning %s: %s", err.filename, err)

    with timed(ui, "Removing empty directories"):
        ui.debug("Scanning %s for empty directories.", root)
        while True:
            deleted_this_pass = 0
            # bottom-up so that parents are checked after their children
            for dirpath, _, _ in os.walk(root, topdown=False, onerror=on_walk_error):
                if dirpath == root:
                    continue
                try:
                    if not is_directory_empty(dirpath):
                        continue
                    os.rmdir(dirpath)
                except FileNotFoundError:
                    continue
                except OSError as e:
                    ui.error("Error removing empty directory %s: %s", dirpath, e)
                    continue
                ui.debug("Removed empty directory %s", dirpath)
                deleted_this_pass += 1
            deleted += deleted_this_pass
            if deleted_this_pass == 0:
                break

    ui.debug("Removed %d directories.", deleted)
    return deleted


def copy_dir(src: PathLike, dst: PathLike):
    """Recursively copy a directory tree, keeping directory permissions.

    The source must be a directory and the destination must not exist.
    Symlinks are skipped.
    """
    src_path = Path(os.path.normpath(src))
    dst_path = Path(os.path.normpath(dst))

    src_stat = src_path.stat()
    if not stat.S_ISDIR(src_stat.st_mode):
        raise NotADirectoryError("source is not a directory")
    if dst_path.exists() or dst_path.is_symlink():
        raise FileExistsError("destination already exists")

    dst_path.mkdir(parents=True)

    with os.scandir(src_path) as it:
        entries = sorted(it, key=lambda e: e.name)
    for entry in entries:
        if entry.is_symlink():
            continue
        if entry.is_dir(follow_symlinks=False):
            copy_dir(entry.path, dst_path / entry.name)
        else:
            copy_file(entry.path, dst_path / entry.name)

    # after the contents, the mode may be read-only
    os.chmod(dst_path, stat.S_IMODE(src_stat.st_mode))


def copy_file(src: PathLike, dst: PathLike):
    """Copy a regular file from src to dst, replacing dst's contents.

    Nothing is done if src and dst are already the same file.
    """
    src_stat = os.stat(src)
    if not stat.S_ISREG(src_stat.st_mode):
        raise CopyError(f"non-regular source file {os.path.basename(src)} ({stat.filemode(src_stat.st_mode)})")
    try:
        dst_stat = os.stat(dst)
    except FileNotFoundError:
        pass
    else:
        if not stat.S_ISREG(dst_stat.st_mode):
            raise CopyError(f"non-regular destination file {os.path.basename(dst)} ({stat.filemode(dst_stat.st_mode)})")
        if os.path.samestat(src_stat, dst_stat):
            return
    _copy_file_contents(src, dst)
    shutil.copymode(src, dst)


def _copy_file_contents(src: PathLike, dst: PathLike, buffer_size: int = BUFFER_SIZE):
    with open(src, 'rb') as fsrc:
        with open(dst, 'wb') as fdst:
            while True:
                buf = fsrc.read(buffer_size)
                if not buf:
                    break
                fdst.write(buf)
            fdst.flush()
            os.fsync(fdst.fileno())


def calculate_sha256(filename: PathLike) -> str:
    """Calculate a file's current SHA-256, as a hex string."""
    digest = hashlib.sha256()
    with open(filename, 'rb') as f:
        for chunk in iter(lambda: f.read(BUFFER_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


def get_unique_timestamped_filename(directory: PathLike, filename: str) -> str:
    """Return an unused "<timestamp> - <name>.tar.gz" path in directory.

    The directory is created if necessary. A "_<n>" suffix is added to the
    name when the plain candidate is taken.
    """
    directory = Path(directory)
    if not directory_exists(directory):
        directory.mkdir(mode=0o700, parents=True)

    timestamp = datetime.now().strftime(TIMESTAMP_FORMAT)
    base = Path(filename).stem
    for attempt in range(MAX_UNIQUE_ATTEMPTS + 1):
        suffix = f"_{attempt}" if attempt > 0 else ""
        candidate = directory / f"{timestamp} - {base}{suffix}.tar.gz"
        if not os.path.lexists(candidate):
            return str(candidate)
    raise FileExistsError(f"Could not find a unique filename for {filename} in {directory}")

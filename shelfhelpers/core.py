"""
Core functionality and CLI for shelfhelpers.
Handles command-line argument parsing and dispatches to the helpers.
"""

import argparse
import os
import sys
from pathlib import Path
from typing import List, Optional

from .errors import HelperError
from .filesystem import (
    calculate_sha256, copy_dir, copy_file, delete_empty_folders,
    get_unique_timestamped_filename,
)
from .spinner import spin_while_things_happen
from .ui import UI, Colors
from .utils import format_size, get_setting, load_config


def _tree_size(path: Path) -> int:
    if path.is_file():
        return path.stat().st_size
    total = 0
    for root, _, files in os.walk(path):
        for filename in files:
            filepath = os.path.join(root, filename)
            if not os.path.islink(filepath):
                total += os.path.getsize(filepath)
    return total


def cmd_hash(args, ui: UI) -> int:
    for filename in args.files:
        digest = spin_while_things_happen(f"Hashing {filename}", calculate_sha256, filename)
        print(f"{digest}  {filename}")
    return 0


def cmd_copy(args, ui: UI) -> int:
    src = Path(args.source)
    dst = Path(args.destination)
    if src.is_dir():
        spin_while_things_happen(f"Copying {src}", copy_dir, src, dst)
    else:
        # Handle destination being a directory
        if dst.is_dir():
            dst = dst / src.name
        spin_while_things_happen(f"Copying {src}", copy_file, src, dst)
    print(f"{Colors.GREEN}Copied {format_size(_tree_size(dst))} to {dst}{Colors.RESET}")
    return 0


def cmd_clean(args, ui: UI) -> int:
    deleted = delete_empty_folders(args.root, ui)
    print(f"{Colors.GREEN}Removed {deleted} empty directories.{Colors.RESET}")
    return 0


def cmd_unique(args, ui: UI) -> int:
    print(get_unique_timestamped_filename(args.directory, args.filename))
    return 0


def cmd_show(args, ui: UI) -> int:
    with open(args.file, 'r') as f:
        ui.display(f.read())
    return 0


def cmd_edit(args, ui: UI) -> int:
    path = Path(args.file)
    old_value = path.read_text() if path.exists() else ""
    new_value = ui.update_value(path.name, args.usage, old_value, long_field=True)
    if new_value == old_value.strip():
        ui.info("%s unchanged.", path)
        return 0
    path.write_text(new_value + "\n")
    ui.info("%s saved.", path)
    return 0


COMMANDS = {
    'hash': cmd_hash,
    'copy': cmd_copy,
    'clean': cmd_clean,
    'unique': cmd_unique,
    'show': cmd_show,
    'edit': cmd_edit,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shelfhelpers",
        description="Command-line helpers for managing an e-book library",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  shelfhelpers hash book.epub other.epub
  shelfhelpers copy library/ /backup/library
  shelfhelpers clean library/
  shelfhelpers unique backups/ library.db
  shelfhelpers show notes.txt
  shelfhelpers edit description.txt
        """
    )
    parser.add_argument('--log-file', metavar='PATH',
                        help='also write a debug log to PATH (default: "log_file" from config)')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='show debug messages on the console')

    subparsers = parser.add_subparsers(dest='command', help='Command to execute')

    hash_parser = subparsers.add_parser('hash', help='Print the SHA-256 of files')
    hash_parser.add_argument('files', nargs='+', help='files to hash')

    copy_parser = subparsers.add_parser('copy', help='Copy a file or a directory tree',
                                        description='Copy a file, or recursively copy a directory to a destination that does not exist yet. Symlinks are skipped.')
    copy_parser.add_argument('source', help='source file or directory')
    copy_parser.add_argument('destination', help='destination path')

    clean_parser = subparsers.add_parser('clean', help='Remove empty directories')
    clean_parser.add_argument('root', help='directory to clean (kept even if empty)')

    unique_parser = subparsers.add_parser('unique', help='Print a unique timestamped archive name')
    unique_parser.add_argument('directory', help='directory the archive will go to (created if needed)')
    unique_parser.add_argument('filename', help='file the archive name is based on')

    show_parser = subparsers.add_parser('show', help='Display a file through the pager')
    show_parser.add_argument('file', help='file to display')

    edit_parser = subparsers.add_parser('edit', help='Edit a file with $EDITOR, with confirmation')
    edit_parser.add_argument('file', help='file to edit (created if needed)')
    edit_parser.add_argument('--usage', default='', help='hint displayed before editing')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for shelfhelpers CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    config = load_config()
    ui = UI(config)
    console_level = "DEBUG" if args.verbose else get_setting("console_log_level", "INFO", config)
    ui.init_logger(args.log_file or get_setting("log_file", config=config), console_level)

    try:
        return COMMANDS[args.command](args, ui)
    except KeyboardInterrupt:
        print(f"\n{Colors.YELLOW}⚠ Operation cancelled by user{Colors.RESET}")
        return 130
    except (HelperError, OSError, EOFError) as e:
        print(f"{Colors.RED}Error: {str(e) or type(e).__name__}{Colors.RESET}", file=sys.stderr)
        return 1
    finally:
        ui.close_log()


def run():
    sys.exit(main())


if __name__ == '__main__':
    run()

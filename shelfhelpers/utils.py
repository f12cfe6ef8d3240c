"""
Utility functions for shelfhelpers.
Handles configuration management and formatting functions.
"""

import json
from pathlib import Path
from typing import Any

# Configuration file management
CONFIG_FILE = Path.home() / ".config" / "shelfhelpers" / "config.json"

# Constants
BUFFER_SIZE = 1024 * 1024  # 1MB
DEFAULT_PAGER = ["less", "-e", "-F", "-Q", "-X", "--buffers=-1"]
DEFAULT_EDITOR = "nano"
SPIN_INTERVAL = 0.1  # seconds


def load_config() -> dict:
    """Load configuration from config file."""
    if not CONFIG_FILE.exists():
        return {}
    try:
        with open(CONFIG_FILE, 'r') as f:
            return json.load(f)
    except (json.JSONDecodeError, IOError):
        return {}


def save_config(config: dict):
    """Save configuration to config file."""
    CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    with open(CONFIG_FILE, 'w') as f:
        json.dump(config, f, indent=2)


def get_setting(key: str, default: Any = None, config: dict = None) -> Any:
    """Get a single setting from config, or return default."""
    if config is None:
        config = load_config()
    value = config.get(key)
    return default if value in (None, "", []) else value


def format_size(size: float) -> str:
    """Format bytes to human-readable size."""
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size < 1024:
            return f"{size:.1f}{unit}"
        size /= 1024
    return f"{size:.1f}PB"


def format_duration(seconds: float) -> str:
    """Format seconds to human-readable duration, down to milliseconds."""
    if seconds < 0:
        seconds = 0.0
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    elif seconds < 3600:
        mins = int(seconds / 60)
        secs = int(seconds % 60)
        return f"{mins}m {secs:02d}s"
    else:
        hours = int(seconds / 3600)
        mins = int((seconds % 3600) / 60)
        return f"{hours}h {mins:02d}m"

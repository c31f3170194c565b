"""Settings file management for chanlog.

Settings path resolution (first hit wins):
  1. Explicit path — --config on the command line, or the path argument
  2. Project settings — nearest .chanlog.json walking up from the cwd
  3. Global settings — ~/.chanlog/config.json

A missing or unreadable settings file loads as None, which the channel
registry treats as "no configuration": every channel fails open.
"""

import json
import os
from pathlib import Path

from chanlog.lib.log_lib import LoggerSettings


PROJECT_FILENAME = ".chanlog.json"


# ---------------------------------------------------------------------------
# Config file locations
# ---------------------------------------------------------------------------
def get_global_config_dir():
    """Return the global config directory (~/.chanlog/)."""
    return Path.home() / ".chanlog"


def get_global_config_path():
    """Return path to the global settings file."""
    return get_global_config_dir() / "config.json"


def find_project_config(start_dir=None):
    """Walk up from start_dir looking for .chanlog.json.

    Returns the path if found, None otherwise.
    """
    current = Path(start_dir or os.getcwd()).resolve()
    for _ in range(20):  # safety limit
        candidate = current / PROJECT_FILENAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def resolve_settings_path(path=None, start_dir=None):
    """Pick the settings file to read, or None when none exists.

    An explicit path is returned as-is even if it does not exist yet, so
    callers can create it.
    """
    if path:
        return Path(path)
    project = find_project_config(start_dir)
    if project:
        return project
    global_path = get_global_config_path()
    if global_path.is_file():
        return global_path
    return None


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------
def load_json(path):
    """Load a JSON file, returning empty dict on error."""
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


def load_settings(path=None, start_dir=None):
    """Load LoggerSettings from the resolved settings file.

    Returns None when no file exists or it holds no usable JSON object.
    """
    target = resolve_settings_path(path, start_dir)
    if target is None:
        return None
    data = load_json(target)
    if not data:
        return None
    return LoggerSettings.from_dict(data)


# ---------------------------------------------------------------------------
# Writing
# ---------------------------------------------------------------------------
def save_settings(settings, path=None, start_dir=None):
    """Write settings as JSON.

    Without an explicit path, writes back to the file load_settings() would
    read, or to the global settings file when none exists yet.

    Returns the path written.
    """
    target = resolve_settings_path(path, start_dir) or get_global_config_path()
    target.parent.mkdir(parents=True, exist_ok=True)
    with open(target, "w", encoding="utf-8") as f:
        json.dump(settings.to_dict(), f, indent=2)
        f.write("\n")
    return target
